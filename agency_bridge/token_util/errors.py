"""Token validation errors.

Every failure raised by the validator derives from ``TokenValidationError``
so callers can treat them as one hard failure. Messages never include the
token itself.
"""

from __future__ import annotations


class TokenValidationError(Exception):
    """Base class for all token validation failures."""


class MalformedToken(TokenValidationError):  # noqa: N818
    """Not three dot-separated segments, or a segment is not base64url JSON."""


class UnsupportedAlgorithm(TokenValidationError):  # noqa: N818
    """The header declares an algorithm other than ES256."""


class KeyResolutionFailed(TokenValidationError):  # noqa: N818
    """Issuer or key id is missing, so no key URL can be derived."""


class KeyUnavailable(TokenValidationError):  # noqa: N818
    """The public key could not be fetched or was empty."""


class SignatureInvalid(TokenValidationError):  # noqa: N818
    """ECDSA signature verification failed."""


class TokenNotYetValid(TokenValidationError):  # noqa: N818
    """The ``nbf`` claim lies in the future."""
