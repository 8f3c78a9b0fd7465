"""Tests for the booking-system token cache (requests mocked)."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from agency_bridge.clients.booking_auth import BookingTokenCache, SiteCredentials, load_credentials
from agency_bridge.errors import NoCredentials, TokenFetchFailed

BASE_URL = "https://booking.example/resources"


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _cache(clock: _Clock | None = None) -> BookingTokenCache:
    return BookingTokenCache(
        BASE_URL,
        {"AER360": SiteCredentials(username="api-user", password="pw")},
        ttl_seconds=1800,
        clock=clock or _Clock(),
    )


def _token_response(token: str = "tok-1") -> MagicMock:
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = {"token": token}
    return resp


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_token_request_body_and_url(mock_post):
    mock_post.return_value = _token_response()

    assert _cache().get_token("aer360") == "tok-1"

    assert mock_post.call_args.args[0] == f"{BASE_URL}/authentication/authenticate"
    assert mock_post.call_args.kwargs["json"] == {
        "username": "api-user",
        "password": "pw",
        "micrositeId": "aer360",
    }
    assert mock_post.call_args.kwargs["timeout"] == (10.0, 30.0)


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_token_is_reused_until_ttl_elapses(mock_post):
    mock_post.side_effect = [_token_response("tok-1"), _token_response("tok-2")]
    clock = _Clock(1000.0)
    cache = _cache(clock)

    assert cache.get_token("aer360") == "tok-1"
    clock.now = 1000.0 + 1799.9
    assert cache.get_token("AER360") == "tok-1"
    assert mock_post.call_count == 1

    clock.now = 1000.0 + 1800.0
    assert cache.get_token("aer360") == "tok-2"
    assert cache.get_token("aer360") == "tok-2"
    assert mock_post.call_count == 2


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_refresh_fetches_new_token(mock_post):
    mock_post.side_effect = [_token_response("tok-1"), _token_response("tok-2")]
    cache = _cache()

    cache.get_token("aer360")
    assert cache.refresh("aer360") == "tok-2"
    assert mock_post.call_count == 2


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_clear_drops_tokens(mock_post):
    mock_post.side_effect = [_token_response("tok-1"), _token_response("tok-2")]
    cache = _cache()

    cache.get_token("aer360")
    cache.clear()
    assert cache.get_token("aer360") == "tok-2"


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_unknown_site_has_no_credentials(mock_post):
    cache = _cache()
    assert cache.has_credentials("aer360") is True
    assert cache.has_credentials("other") is False

    with pytest.raises(NoCredentials):
        cache.get_token("other")
    with pytest.raises(NoCredentials):
        cache.get_token("")
    mock_post.assert_not_called()


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_non_200_raises_token_fetch_failed(mock_post):
    mock_post.return_value.status_code = 401
    with pytest.raises(TokenFetchFailed):
        _cache().get_token("aer360")


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_missing_token_field_raises(mock_post):
    mock_post.return_value.status_code = 200
    mock_post.return_value.json.return_value = {"status": "ok"}
    with pytest.raises(TokenFetchFailed):
        _cache().get_token("aer360")


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_non_json_response_raises(mock_post):
    mock_post.return_value.status_code = 200
    mock_post.return_value.json.side_effect = ValueError("no json")
    with pytest.raises(TokenFetchFailed):
        _cache().get_token("aer360")


@patch("agency_bridge.clients.booking_auth.requests.post")
def test_network_error_raises_and_is_not_cached(mock_post):
    mock_post.side_effect = [requests.Timeout("slow"), _token_response("tok-1")]
    cache = _cache()

    with pytest.raises(TokenFetchFailed):
        cache.get_token("aer360")
    assert cache.get_token("aer360") == "tok-1"


def test_load_credentials_from_yaml(tmp_path):
    path = tmp_path / "creds.yaml"
    path.write_text(
        "booking_credentials:\n"
        "  sites:\n"
        "    AER360:\n"
        "      username: api-user\n"
        "      password: pw\n",
        encoding="utf-8",
    )

    creds = load_credentials(path)

    assert set(creds) == {"aer360"}
    assert creds["aer360"].username == "api-user"


def test_load_credentials_requires_top_level_key(tmp_path):
    path = tmp_path / "creds.yaml"
    path.write_text("sites: {}\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_credentials(path)


def test_load_credentials_allows_empty_table(tmp_path):
    path = tmp_path / "creds.yaml"
    path.write_text("booking_credentials:\n", encoding="utf-8")
    assert load_credentials(path) == {}
