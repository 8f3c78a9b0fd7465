"""
Standalone utility to validate ES256 agent tokens and extract claims.

This package has no dependency on other app packages (services, clients, db).
Use ``EcTokenValidator.validate()`` with a raw token string to get
``TokenClaims``.
"""

from .claims import TokenClaims
from .config import KeyEndpointConfig
from .errors import (
    KeyResolutionFailed,
    KeyUnavailable,
    MalformedToken,
    SignatureInvalid,
    TokenNotYetValid,
    TokenValidationError,
    UnsupportedAlgorithm,
)
from .key_cache import KeyCache, KeyFetcher
from .key_resolver import KeyResolver
from .validator import EcTokenValidator

__all__ = [
    "EcTokenValidator",
    "KeyCache",
    "KeyEndpointConfig",
    "KeyFetcher",
    "KeyResolutionFailed",
    "KeyResolver",
    "KeyUnavailable",
    "MalformedToken",
    "SignatureInvalid",
    "TokenClaims",
    "TokenNotYetValid",
    "TokenValidationError",
    "UnsupportedAlgorithm",
]
