import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tiktok_marketing import api_client as api_client_module
from tiktok_marketing.api_client import TikTokAPIClient
from tiktok_marketing.domain.models import Advertiser


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set the credential environment variables for every test.

    Optional settings are cleared so a developer's shell cannot leak into
    the assertions.
    """
    monkeypatch.setenv("TIKTOK_APP_ID", "env-app-id")
    monkeypatch.setenv("TIKTOK_SECRET", "env-secret")

    for var in ("TIKTOK_TIMEOUT", "TIKTOK_VERIFY_SSL", "TIKTOK_SANDBOX", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    yield


@pytest.fixture
def make_response():
    """Factory for fake ``requests.Response`` objects."""

    def _make(payload=None, text=None, status_code=200):
        response = MagicMock()
        response.status_code = status_code
        response.text = text if text is not None else json.dumps(payload)
        if status_code >= 400:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(
                f"{status_code} Error", response=response
            )
        return response

    return _make


@pytest.fixture
def session(make_response):
    """Fake HTTP session answering every request with an empty OK envelope."""
    fake = MagicMock()
    fake.request.return_value = make_response({"code": 0, "message": "OK", "data": {}})
    return fake


@pytest.fixture
def client(session):
    return TikTokAPIClient(app_id="app-123", secret="app-secret", session=session)


@pytest.fixture
def advertiser():
    return Advertiser(advertiser_id="7000000000000000001", access_token="act.advertiser-token")


@pytest.fixture
def sleeps(monkeypatch):
    """Record ``time.sleep`` calls made by the API client instead of sleeping."""
    calls = []
    monkeypatch.setattr(api_client_module.time, "sleep", calls.append)
    return calls


@pytest.fixture
def sent_requests(session):
    """Return a function listing ``(method, url, json_body, kwargs)`` for each request sent."""

    def _sent():
        out = []
        for call in session.request.call_args_list:
            method, url = call.args
            out.append((method, url, call.kwargs["json"], call.kwargs))
        return out

    return _sent
