from __future__ import annotations

from discourse_sso.constants import LOGGER

from .models import ValidationFailure, ValidationResult
from .payload import InvalidEncodingError, InvalidPayloadError, decode_payload
from .signature import sign_payload, signatures_match


def validate_packet(payload: str, signature: str, secret: str) -> ValidationResult:
    """Check a signed payload and extract its nonce.

    The signature is verified over the raw payload string before anything is
    decoded, so tampered content is never parsed. Each failure ends the check
    and is returned, not raised.
    """
    expected = sign_payload(payload, secret)
    if not signatures_match(expected, signature):
        return _fail(ValidationFailure.INVALID_SIGNATURE)

    try:
        fields = decode_payload(payload)
    except InvalidEncodingError:
        return _fail(ValidationFailure.INVALID_ENCODING)
    except InvalidPayloadError:
        return _fail(ValidationFailure.INVALID_PAYLOAD)

    nonce = fields.get("nonce")
    if nonce is None:
        return _fail(ValidationFailure.INVALID_PAYLOAD)

    return ValidationResult(nonce=nonce, fields=fields)


def _fail(error: ValidationFailure) -> ValidationResult:
    LOGGER.info("Discourse SSO: validation failed: %s", error.value)
    return ValidationResult.failure(error)
