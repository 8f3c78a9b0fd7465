"""Tests for KeyEndpointConfig from environment."""

import os

from agency_bridge.token_util.config import (
    DEFAULT_PROD_KEY_URL,
    DEFAULT_QA_KEY_URL,
    DEFAULT_STG_KEY_URL,
    KeyEndpointConfig,
)


def test_config_defaults_without_env():
    with _env({}):
        cfg = KeyEndpointConfig.from_environ()
    assert cfg.qa_key_url == DEFAULT_QA_KEY_URL
    assert cfg.stg_key_url == DEFAULT_STG_KEY_URL
    assert cfg.prod_key_url == DEFAULT_PROD_KEY_URL
    assert cfg.timeout == (5.0, 10.0)


def test_config_from_environ():
    env = {
        "JWT_QA_PUBLIC_KEY_URL": "https://qa.example/keys/{kid}.pub",
        "JWT_STG_PUBLIC_KEY_URL": "https://stg.example/keys/{kid}.pub",
        "JWT_PROD_PUBLIC_KEY_URL": "https://prod.example/keys/{kid}.pub",
        "JWT_KEY_CONNECT_TIMEOUT_SECONDS": "2",
        "JWT_KEY_READ_TIMEOUT_SECONDS": "3.5",
    }
    with _env(env):
        cfg = KeyEndpointConfig.from_environ()
    assert cfg.qa_key_url == "https://qa.example/keys/{kid}.pub"
    assert cfg.stg_key_url == "https://stg.example/keys/{kid}.pub"
    assert cfg.prod_key_url == "https://prod.example/keys/{kid}.pub"
    assert cfg.timeout == (2.0, 3.5)


def test_config_ignores_unparseable_timeouts():
    with _env({"JWT_KEY_CONNECT_TIMEOUT_SECONDS": "soon"}):
        cfg = KeyEndpointConfig.from_environ()
    assert cfg.connect_timeout_seconds == 5.0


def _env(env: dict):
    class _Env:
        def __enter__(self):
            self._saved = os.environ.copy()
            os.environ.clear()
            os.environ.update(env)
            return self

        def __exit__(self, *args):
            os.environ.clear()
            os.environ.update(self._saved)
            return False

    return _Env()
