from __future__ import annotations

import base64
import binascii
import re
import urllib.parse
from collections.abc import Mapping
from typing import Any

from discourse_sso.constants import LOGGER

from .fields import encode_field, is_known_field

# Keys in the options mapping that configure the call rather than describe the user.
CONFIG_OPTION_KEYS = frozenset({"secret", "url"})

_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class PayloadError(ValueError):
    pass


class InvalidEncodingError(PayloadError):
    pass


class InvalidPayloadError(PayloadError):
    pass


def build_attributes(
    user_id: Any,
    email: str,
    nonce: str,
    options: Mapping[str, Any] | None = None,
) -> list[tuple[str, Any]]:
    """Order the attribute set for encoding.

    The identity fields lead the payload as ``nonce``, ``email``,
    ``external_id`` and always replace any same-named option. Remaining
    options follow in caller order; unknown names are dropped.
    """
    identity = {"nonce": nonce, "email": email, "external_id": user_id}
    attributes = list(identity.items())

    for name, value in (options or {}).items():
        if name in identity or name in CONFIG_OPTION_KEYS:
            continue
        if not is_known_field(name):
            LOGGER.warning("Discourse SSO: Discarding unknown field: %s", name)
            continue
        attributes.append((name, value))

    return attributes


def encode_payload(attributes: list[tuple[str, Any]]) -> str:
    fragments = [encode_field(name, value) for name, value in attributes]
    query = "&".join(fragment for fragment in fragments if fragment is not None)
    return base64.b64encode(query.encode("utf-8")).decode("ascii")


def decode_payload(payload: str) -> dict[str, str]:
    trimmed = payload.strip("\n")
    try:
        raw = base64.b64decode(trimmed, validate=True)
    except (binascii.Error, ValueError) as error:
        raise InvalidEncodingError("Payload is not valid padded base64.") from error

    try:
        query = raw.decode("utf-8")
    except UnicodeDecodeError as error:
        raise InvalidPayloadError("Payload is not UTF-8 text.") from error

    if _BAD_PERCENT_ESCAPE.search(query):
        raise InvalidPayloadError("Payload contains a malformed percent escape.")

    try:
        pairs = urllib.parse.parse_qsl(query, keep_blank_values=True, errors="strict")
    except (UnicodeDecodeError, ValueError) as error:
        raise InvalidPayloadError("Payload is not a valid query string.") from error

    return dict(pairs)
