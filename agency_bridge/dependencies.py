from __future__ import annotations

import logging

from fastapi import Request

from agency_bridge.clients.booking import BookingClient
from agency_bridge.clients.booking_auth import BookingTokenCache, load_credentials
from agency_bridge.clients.directory import DirectoryClient
from agency_bridge.services.authentication import AuthenticationService
from agency_bridge.services.domain import MicrositeTarget
from agency_bridge.services.microsites import MicrositeRepository
from agency_bridge.settings import Settings
from agency_bridge.token_util import EcTokenValidator, KeyEndpointConfig

logger = logging.getLogger(__name__)


def build_authentication_service(settings: Settings, session_factory) -> AuthenticationService:
    """Wire the service graph once per process; the caches inside are shared by all requests."""

    credentials = load_credentials(settings.resolved_credentials_config_path())
    tokens = BookingTokenCache(
        settings.booking_base_url,
        credentials,
        ttl_seconds=settings.booking_token_ttl_seconds,
        timeout=settings.booking_timeout,
    )
    logger.info("Booking credentials configured for %d site(s)", len(credentials))
    if not tokens.has_credentials(settings.fallback_microsite):
        logger.warning("No booking credentials for fallback site=%s", settings.fallback_microsite)

    return AuthenticationService(
        validator=EcTokenValidator(KeyEndpointConfig.from_environ()),
        microsites=MicrositeRepository(session_factory),
        booking=BookingClient(settings.booking_base_url, tokens, timeout=settings.booking_timeout),
        directory=DirectoryClient(
            settings.directory_base_url,
            secret=settings.directory_secret,
            audience=settings.directory_audience,
            key_id=settings.directory_key_id,
            token_lifetime_seconds=settings.directory_token_lifetime_seconds,
            timeout=settings.booking_timeout,
        ),
        fallback=MicrositeTarget(
            url=settings.fallback_url,
            name=None,
            site_key=settings.fallback_microsite,
            api_key=settings.fallback_microsite_api,
        ),
        default_language=settings.default_language,
    )


def get_authentication_service(request: Request) -> AuthenticationService:
    service = getattr(request.app.state, "authentication_service", None)
    if service is None:
        raise RuntimeError("Authentication service not built. Did app startup run?")
    return service
