from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import AnyHttpUrl

from sso.models import SSOConfig

from .constants import (
    DEBUG_ENV,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_FILE,
    HOST_ENV,
    LOGGER,
    PORT_ENV,
    SECRET_ENV,
    URL_ENV,
)


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_str(key: str) -> str | None:
    raw = os.getenv(key, "").strip()
    return raw or None


def _get_env_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be an integer value.")


def load_env() -> None:
    if not ENV_FILE.exists():
        return
    load_dotenv(ENV_FILE, override=True)


def load_config() -> SSOConfig:
    """Read the shared secret and Discourse endpoint from the environment.

    Blank values are treated as unset so that a missing value surfaces as a
    ConfigurationError at call time rather than an empty HMAC key.
    """
    return SSOConfig(secret=_get_env_str(SECRET_ENV), url=_get_env_str(URL_ENV))


def validate_env() -> None:
    required = (SECRET_ENV, URL_ENV)
    missing = [key for key in required if not os.getenv(key, "").strip()]
    if missing:
        raise RuntimeError(
            f"Missing required environment variables for Discourse SSO: {', '.join(missing)}"
        )

    url = os.getenv(URL_ENV, "").strip()
    try:
        AnyHttpUrl(url)
    except ValueError:
        raise RuntimeError(
            f"{URL_ENV} must be an absolute http(s) URL (for example: "
            "https://discuss.example.com/session/sso_login)."
        )

    if url.startswith("http://"):
        LOGGER.warning("%s is not HTTPS; signed payloads will travel in clear text.", URL_ENV)


def get_bind_address() -> tuple[str, int]:
    host = os.getenv(HOST_ENV, "").strip() or DEFAULT_HOST
    return host, _get_env_int(PORT_ENV, DEFAULT_PORT)


def setup_logging() -> bool:
    debug_enabled = is_truthy(os.getenv(DEBUG_ENV, "1"))
    if debug_enabled:
        logging.basicConfig(level=logging.INFO)
        LOGGER.setLevel(logging.INFO)
    return debug_enabled
