from __future__ import annotations

import logging
from pathlib import Path

LOGGER = logging.getLogger("discourse_sso")
APP_VERSION = "0.1.0"

SECRET_ENV = "DISCOURSE_SSO_SECRET"
URL_ENV = "DISCOURSE_SSO_URL"
DEBUG_ENV = "DISCOURSE_SSO_DEBUG"
HOST_ENV = "DISCOURSE_SSO_HOST"
PORT_ENV = "DISCOURSE_SSO_PORT"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
