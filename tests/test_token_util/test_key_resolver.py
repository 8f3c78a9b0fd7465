"""Tests for issuer/kid -> key URL resolution."""

import pytest

from agency_bridge.token_util.config import KeyEndpointConfig
from agency_bridge.token_util.key_resolver import KeyResolver


def _resolver() -> KeyResolver:
    return KeyResolver(
        KeyEndpointConfig(
            qa_key_url="https://qa.example/keys/{kid}.pub",
            stg_key_url="https://stg.example/keys/{kid}.pub",
            prod_key_url="https://prod.example/keys/{kid}.pub",
        )
    )


@pytest.mark.parametrize(
    ("issuer", "expected"),
    [
        ("qa-cockpit", "https://qa.example/keys/k1.pub"),
        ("stg-cockpit", "https://stg.example/keys/k1.pub"),
        ("cockpit", "https://prod.example/keys/k1.pub"),
        ("prod-qa-cockpit", "https://prod.example/keys/k1.pub"),
    ],
)
def test_issuer_prefix_selects_environment(issuer, expected):
    assert _resolver().resolve(issuer, "k1") == expected


@pytest.mark.parametrize(("issuer", "kid"), [(None, "k1"), ("qa-cockpit", None), ("", "k1"), ("cockpit", "")])
def test_missing_issuer_or_kid_resolves_to_none(issuer, kid):
    assert _resolver().resolve(issuer, kid) is None


def test_template_without_placeholder_resolves_to_none():
    resolver = KeyResolver(KeyEndpointConfig(prod_key_url="https://prod.example/key.pub"))
    assert resolver.resolve("cockpit", "k1") is None
