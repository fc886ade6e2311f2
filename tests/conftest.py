import pytest

from sso.models import SSOConfig
from tests.sso_helpers import SECRET, URL


@pytest.fixture
def sso_config() -> SSOConfig:
    return SSOConfig(secret=SECRET, url=URL)


@pytest.fixture
def sso_env(monkeypatch) -> None:
    monkeypatch.setenv("DISCOURSE_SSO_SECRET", SECRET)
    monkeypatch.setenv("DISCOURSE_SSO_URL", URL)
