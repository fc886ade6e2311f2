import server
from sso import client

EXPECTED_SERVER_EXPORTS = (
    "APP_VERSION",
    "SSOProvider",
    "create_app",
    "health_route",
    "load_env",
    "main",
    "resolve_user_from_headers",
    "setup_logging",
    "validate_env",
)

EXPECTED_CLIENT_EXPORTS = (
    "DiscourseSSO",
    "sign",
    "sign_url",
    "validate",
)


def test_server_export_surface() -> None:
    missing = [name for name in EXPECTED_SERVER_EXPORTS if not hasattr(server, name)]
    assert missing == []


def test_client_export_surface() -> None:
    missing = [name for name in EXPECTED_CLIENT_EXPORTS if not hasattr(client, name)]
    assert missing == []
