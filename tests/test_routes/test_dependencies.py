"""Tests for wiring the service graph at startup."""

import logging

from sqlalchemy.orm import sessionmaker

from agency_bridge.dependencies import build_authentication_service
from agency_bridge.services.authentication import AuthenticationService
from agency_bridge.settings import Settings


def _credentials_file(tmp_path, site: str):
    path = tmp_path / "creds.yaml"
    path.write_text(
        f"booking_credentials:\n  sites:\n    {site}:\n      username: u\n      password: p\n",
        encoding="utf-8",
    )
    return path


def test_build_service_with_fallback_credentials(tmp_path, engine, caplog):
    settings = Settings(credentials_config_path=str(_credentials_file(tmp_path, "aer360")))

    with caplog.at_level(logging.INFO, logger="agency_bridge"):
        service = build_authentication_service(settings, sessionmaker(bind=engine))

    assert isinstance(service, AuthenticationService)
    assert "Booking credentials configured for 1 site(s)" in caplog.text
    assert "No booking credentials for fallback site" not in caplog.text


def test_build_service_warns_without_fallback_credentials(tmp_path, engine, caplog):
    settings = Settings(credentials_config_path=str(_credentials_file(tmp_path, "other")))

    with caplog.at_level(logging.INFO, logger="agency_bridge"):
        build_authentication_service(settings, sessionmaker(bind=engine))

    assert "No booking credentials for fallback site=aer360" in caplog.text
