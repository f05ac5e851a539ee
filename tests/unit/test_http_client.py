"""Unit tests for request construction in TikTokHTTPClient."""

from unittest.mock import MagicMock

import pytest
import requests

from tiktok_marketing.core.config import ClientConfig
from tiktok_marketing.core.constants import BASE_URL, SANDBOX_URL
from tiktok_marketing.core.exceptions import ConfigurationError, TransportError
from tiktok_marketing.domain.models import RequestOptions
from tiktok_marketing.endpoints import TikTokEndPoint
from tiktok_marketing.http_client import TikTokHTTPClient


@pytest.fixture
def http(session):
    return TikTokHTTPClient(ClientConfig(app_id="app-123", secret="app-secret"), session=session)


def test_post_is_default_method_and_production_url(http, session):
    http.execute("oauth2/access_token/", {"auth_code": "code"})

    method, url = session.request.call_args.args
    assert method == "POST"
    assert url == "https://ads.tiktok.com/open_api/v1.2/oauth2/access_token/"


def test_endpoint_enum_is_accepted(http, session):
    http.execute(TikTokEndPoint.PAGES, {}, method="GET")

    method, url = session.request.call_args.args
    assert method == "GET"
    assert url == f"{BASE_URL}/pages/get/"


def test_credentials_are_merged_and_override_caller_values(http, session):
    data = {"app_id": "caller-app", "secret": "caller-secret", "page_id": "p1"}
    http.execute("pages/get/", data, method="GET")

    body = session.request.call_args.kwargs["json"]
    assert body == {"app_id": "app-123", "secret": "app-secret", "page_id": "p1"}
    # caller's mapping untouched
    assert data["app_id"] == "caller-app"


def test_content_type_header_always_set(http, session):
    http.execute("subscription/get/", {"object": "LEAD"}, method="GET")

    headers = session.request.call_args.kwargs["headers"]
    assert headers == {"Content-Type": "application/json"}


def test_access_token_is_duplicated_into_header(http, session):
    http.execute("pages/get/", {"access_token": "act.tok", "advertiser_id": "1"}, method="GET")

    kwargs = session.request.call_args.kwargs
    assert kwargs["headers"]["Access-Token"] == "act.tok"
    assert kwargs["json"]["access_token"] == "act.tok"


def test_nested_access_token_does_not_set_header(http, session):
    http.execute("subscription/subscribe/", {"subscription_detail": {"access_token": "x"}})

    assert "Access-Token" not in session.request.call_args.kwargs["headers"]


def test_sandbox_option_routes_to_sandbox_host(http, session):
    http.execute("pages/get/", {}, method="GET", options=RequestOptions(sandbox=True))

    assert session.request.call_args.args[1] == f"{SANDBOX_URL}/pages/get/"


@pytest.mark.parametrize("data", [{}, {"sandbox": False}])
def test_sandbox_omitted_or_false_routes_to_production(http, session, data):
    http.execute("pages/get/", data, method="GET")

    assert session.request.call_args.args[1] == f"{BASE_URL}/pages/get/"


def test_legacy_payload_keys_are_consumed(http, session):
    http.execute("pages/get/", {"sandbox": True, "verifyssl": False, "page_id": "p"}, method="GET")

    kwargs = session.request.call_args.kwargs
    assert session.request.call_args.args[1].startswith(SANDBOX_URL)
    assert kwargs["verify"] is False
    assert "sandbox" not in kwargs["json"]
    assert "verifyssl" not in kwargs["json"]


def test_legacy_string_verifyssl_disables_verification(http, session):
    http.execute("pages/get/", {"verifyssl": "false"}, method="GET")

    assert session.request.call_args.kwargs["verify"] is False


def test_unparseable_legacy_flag_is_rejected_before_sending(http, session):
    with pytest.raises(ConfigurationError):
        http.execute("pages/get/", {"verifyssl": "sometimes"}, method="GET")

    session.request.assert_not_called()


def test_explicit_options_win_over_legacy_keys(http, session):
    http.execute(
        "pages/get/",
        {"sandbox": True},
        method="GET",
        options=RequestOptions(sandbox=False, verify_ssl=True),
    )

    kwargs = session.request.call_args.kwargs
    assert session.request.call_args.args[1].startswith(BASE_URL)
    assert "sandbox" not in kwargs["json"]


def test_tls_verification_defaults_to_true(http, session):
    http.execute("pages/get/", {}, method="GET")

    assert session.request.call_args.kwargs["verify"] is True


def test_timeout_comes_from_config(session):
    http = TikTokHTTPClient(ClientConfig(app_id="a", secret="s", timeout=12.5), session=session)
    http.execute("pages/get/", {}, method="GET")

    assert session.request.call_args.kwargs["timeout"] == 12.5


def test_default_timeout_is_transport_default(http, session):
    http.execute("pages/get/", {}, method="GET")

    assert session.request.call_args.kwargs["timeout"] is None


def test_response_data_is_unwrapped(http, session, make_response):
    session.request.return_value = make_response({"code": 0, "data": {"task_id": "t1"}})

    assert http.execute("pages/leads/task/", {}, method="GET") == {"task_id": "t1"}


def test_response_without_data_is_returned_whole(http, session, make_response):
    session.request.return_value = make_response({"code": 0, "message": "OK"})

    assert http.execute("subscription/unsubscribe/", {}) == {"code": 0, "message": "OK"}


def test_non_json_response_is_returned_as_text(http, session, make_response):
    csv = "lead_id,email\n1,a@b.com\n"
    session.request.return_value = make_response(text=csv, status_code=200)

    assert http.execute("pages/leads/task/download/", {}, method="GET") == csv


@pytest.mark.parametrize(
    "status_code, response_kwargs",
    [
        (401, {"payload": {"code": 40105, "message": "Access token is invalid", "data": {}}}),
        (404, {"payload": {"code": 40400, "message": "Not found"}}),
        (500, {"payload": {"code": 50000, "message": "System error"}}),
        (502, {"text": "<html>Bad Gateway</html>"}),
    ],
)
def test_error_status_raises_http_error(http, session, make_response, status_code, response_kwargs):
    session.request.return_value = make_response(status_code=status_code, **response_kwargs)

    with pytest.raises(requests.exceptions.HTTPError) as excinfo:
        http.execute("pages/get/", {}, method="GET")

    assert excinfo.value.response.status_code == status_code
    assert session.request.call_count == 1


def test_error_status_is_a_transport_error(http, session, make_response):
    session.request.return_value = make_response(text="<html>Bad Gateway</html>", status_code=502)

    with pytest.raises(TransportError):
        http.execute("subscription/get/", {"object": "LEAD"}, method="GET")


def test_transport_errors_propagate_unchanged(http, session):
    error = requests.exceptions.ConnectionError("dns failure")
    session.request.side_effect = error

    with pytest.raises(requests.exceptions.ConnectionError) as excinfo:
        http.execute("pages/get/", {}, method="GET")

    assert excinfo.value is error
    assert session.request.call_count == 1


def test_sanitize_masks_nested_credentials():
    body = {
        "app_id": "a",
        "secret": "s",
        "subscription_detail": {"access_token": "tok", "page_id": "p"},
    }

    sanitized = TikTokHTTPClient._sanitize_log_data(body)

    assert sanitized["secret"] == "***REDACTED***"
    assert sanitized["subscription_detail"]["access_token"] == "***REDACTED***"
    assert sanitized["subscription_detail"]["page_id"] == "p"
    assert body["secret"] == "s"


def test_close_only_closes_owned_session(session):
    http = TikTokHTTPClient(ClientConfig(), session=session)
    http.close()
    session.close.assert_not_called()


def test_owned_session_is_created_and_closed(monkeypatch):
    created = MagicMock()
    monkeypatch.setattr(requests, "Session", lambda: created)

    http = TikTokHTTPClient(ClientConfig())
    http.close()

    assert http.session is created
    created.close.assert_called_once()
