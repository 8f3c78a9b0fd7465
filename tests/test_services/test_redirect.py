"""Tests for microsite redirect URL construction."""

from urllib.parse import parse_qsl, urlsplit

from agency_bridge.services.redirect import build_redirect_url


def test_redirect_url_layout():
    url = build_redirect_url("https://de.aer360.travel/", "DE", "roundtrip", "123", "abc", "AG1")
    assert url == (
        "https://de.aer360.travel/DE/home"
        "?tripType=roundtrip&submit=true&user=123&password=abc&agency=AG1"
    )


def test_redirect_url_without_trailing_slash():
    url = build_redirect_url("https://site.example/shop", "FR", "", "1", "p", "A")
    parts = urlsplit(url)
    assert parts.path == "/shop/FR/home"
    assert dict(parse_qsl(parts.query, keep_blank_values=True))["tripType"] == ""


def test_redirect_url_encodes_values():
    url = build_redirect_url("https://site.example/", "DE", "a b", "job&1", "p=w", "AG 1")
    params = dict(parse_qsl(urlsplit(url).query, keep_blank_values=True))
    assert params == {
        "tripType": "a b",
        "submit": "true",
        "user": "job&1",
        "password": "p=w",
        "agency": "AG 1",
    }


def test_redirect_url_keeps_existing_query():
    url = build_redirect_url("https://site.example/?partner=x", "DE", "t", "1", "p", "A")
    parts = urlsplit(url)
    assert parts.path == "/DE/home"
    assert parts.query.startswith("partner=x&tripType=t")
