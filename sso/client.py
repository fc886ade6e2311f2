from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import ConfigurationError, SignedPacket, SSOConfig, ValidationResult
from .payload import build_attributes, encode_payload
from .signature import sign_payload
from .urls import compose_url
from .validator import validate_packet

Options = Mapping[str, Any]


def sign(
    user_id: Any,
    email: str,
    nonce: str,
    options: Options | None = None,
    *,
    config: SSOConfig | None = None,
) -> SignedPacket:
    """Sign the nonce and user data.

    ``user_id`` is the id of the user in your system and becomes
    ``external_id``. ``email`` is assumed to be verified. ``nonce`` is the one
    given at the start of the handshake.

    ``options`` may carry any known profile field (``username``, ``name``,
    ``groups``, ``admin``...) and a ``secret`` that takes priority over
    ``config.secret``. Unknown keys are discarded.
    """
    secret = resolve_secret(options, config)
    attributes = build_attributes(user_id, email, nonce, options)
    payload = encode_payload(attributes)
    return SignedPacket(payload=payload, signature=sign_payload(payload, secret))


def sign_url(
    user_id: Any,
    email: str,
    nonce: str,
    options: Options | None = None,
    *,
    config: SSOConfig | None = None,
) -> str:
    """Create a signed URL to redirect the user back to Discourse.

    The base URL comes from ``options["url"]`` or ``config.url``.
    """
    base_url = resolve_url(options, config)
    return compose_url(base_url, sign(user_id, email, nonce, options, config=config))


def validate(
    payload: str,
    signature: str,
    options: Options | None = None,
    *,
    config: SSOConfig | None = None,
) -> ValidationResult:
    return validate_packet(payload, signature, resolve_secret(options, config))


def resolve_secret(options: Options | None, config: SSOConfig | None) -> str:
    return _setting("secret", options, config)


def resolve_url(options: Options | None, config: SSOConfig | None) -> str:
    return _setting("url", options, config)


def _setting(name: str, options: Options | None, config: SSOConfig | None) -> str:
    value = (options or {}).get(name)
    if value is None and config is not None:
        value = getattr(config, name)
    if value is None:
        raise ConfigurationError(f"Discourse SSO: Need to set `{name}` in config or options.")
    if not isinstance(value, str):
        raise ConfigurationError(f"Discourse SSO: `{name}` must be a string.")
    return value


class DiscourseSSO:
    def __init__(self, config: SSOConfig) -> None:
        self.config = config

    def sign(self, user_id: Any, email: str, nonce: str, options: Options | None = None) -> SignedPacket:
        return sign(user_id, email, nonce, options, config=self.config)

    def sign_url(self, user_id: Any, email: str, nonce: str, options: Options | None = None) -> str:
        return sign_url(user_id, email, nonce, options, config=self.config)

    def validate(
        self,
        payload: str,
        signature: str,
        options: Options | None = None,
    ) -> ValidationResult:
        return validate(payload, signature, options, config=self.config)
