import pytest
import requests

from fakes import ENV_KEYS, make_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def transport_error():
    return requests.ConnectionError("connection refused")
