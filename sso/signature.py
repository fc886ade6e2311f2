from __future__ import annotations

import hashlib
import hmac


def sign_payload(payload: str | bytes, secret: str) -> str:
    """HMAC-SHA256 of the base64 payload as sent on the wire, in lowercase hex."""
    data = payload.encode() if isinstance(payload, str) else payload
    return hmac.new(secret.encode(), data, hashlib.sha256).hexdigest()


def signatures_match(expected: str, provided: str) -> bool:
    return hmac.compare_digest(expected.encode(), provided.encode())
