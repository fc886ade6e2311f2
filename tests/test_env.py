import logging

import pytest

from discourse_sso import env
from tests.sso_helpers import SECRET, URL


def test_validate_env_missing_vars(monkeypatch) -> None:
    monkeypatch.delenv("DISCOURSE_SSO_SECRET", raising=False)
    monkeypatch.delenv("DISCOURSE_SSO_URL", raising=False)

    with pytest.raises(RuntimeError) as excinfo:
        env.validate_env()

    message = str(excinfo.value)
    assert "DISCOURSE_SSO_SECRET" in message
    assert "DISCOURSE_SSO_URL" in message


def test_validate_env_blank_is_missing(monkeypatch, sso_env) -> None:
    monkeypatch.setenv("DISCOURSE_SSO_SECRET", "   ")

    with pytest.raises(RuntimeError, match="DISCOURSE_SSO_SECRET"):
        env.validate_env()


@pytest.mark.parametrize("url", ["discuss.example.com", "ftp://discuss.example.com"])
def test_validate_env_rejects_non_http_url(monkeypatch, sso_env, url: str) -> None:
    monkeypatch.setenv("DISCOURSE_SSO_URL", url)

    with pytest.raises(RuntimeError, match="absolute http"):
        env.validate_env()


def test_validate_env_warns_on_plain_http(sso_env, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="discourse_sso"):
        env.validate_env()

    assert "not HTTPS" in caplog.text


def test_validate_env_https_ok(monkeypatch, sso_env, caplog) -> None:
    monkeypatch.setenv("DISCOURSE_SSO_URL", "https://discuss.example.com/session/sso_login")

    with caplog.at_level(logging.WARNING, logger="discourse_sso"):
        env.validate_env()

    assert caplog.records == []


def test_load_config_reads_env(sso_env) -> None:
    config = env.load_config()

    assert config.secret == SECRET
    assert config.url == URL


def test_load_config_blank_values_are_unset(monkeypatch) -> None:
    monkeypatch.setenv("DISCOURSE_SSO_SECRET", "")
    monkeypatch.delenv("DISCOURSE_SSO_URL", raising=False)

    config = env.load_config()

    assert config.secret is None
    assert config.url is None


def test_load_env_reads_dotenv_file(monkeypatch, tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("DISCOURSE_SSO_SECRET=from-dotenv\n", encoding="utf-8")
    monkeypatch.setattr(env, "ENV_FILE", env_file)
    monkeypatch.setenv("DISCOURSE_SSO_SECRET", "from-process")

    env.load_env()

    assert env.load_config().secret == "from-dotenv"


def test_load_env_missing_file_is_noop(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(env, "ENV_FILE", tmp_path / "missing.env")

    env.load_env()


def test_bind_address_defaults(monkeypatch) -> None:
    monkeypatch.delenv("DISCOURSE_SSO_HOST", raising=False)
    monkeypatch.delenv("DISCOURSE_SSO_PORT", raising=False)

    assert env.get_bind_address() == ("127.0.0.1", 8000)


def test_bind_address_from_env(monkeypatch) -> None:
    monkeypatch.setenv("DISCOURSE_SSO_HOST", "0.0.0.0")
    monkeypatch.setenv("DISCOURSE_SSO_PORT", "9100")

    assert env.get_bind_address() == ("0.0.0.0", 9100)


def test_bind_port_must_be_integer(monkeypatch) -> None:
    monkeypatch.setenv("DISCOURSE_SSO_PORT", "eighty")

    with pytest.raises(RuntimeError, match="DISCOURSE_SSO_PORT must be an integer"):
        env.get_bind_address()


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("yes", True), (" On ", True), ("0", False), ("", False), (None, False)],
)
def test_is_truthy(value, expected: bool) -> None:
    assert env.is_truthy(value) is expected


def test_setup_logging_disabled(monkeypatch) -> None:
    monkeypatch.setenv("DISCOURSE_SSO_DEBUG", "0")

    assert env.setup_logging() is False
