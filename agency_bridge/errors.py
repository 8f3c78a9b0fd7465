"""
Error taxonomy for the authentication flow.

Two families:

- ``AuthenticationError``: hard failures. The flow stops and the caller gets
  a failure outcome carrying the message.
- ``UpstreamError``: a remote system misbehaved. These never abort the flow;
  the orchestrator turns them into status values and flags.
"""

from __future__ import annotations


class AuthenticationError(Exception):
    """Base class for failures that abort an authentication request."""


class InputError(AuthenticationError):
    """A request field is missing or unusable."""


class EmptyToken(InputError):  # noqa: N818
    """No token was supplied."""


class AuthenticationFailed(AuthenticationError):  # noqa: N818
    """Token validation failed; the original error is chained as ``__cause__``."""


class CredentialDerivationFailed(AuthenticationError):  # noqa: N818
    """The redirect password could not be derived from the claims."""


class UpstreamError(Exception):
    """Base class for booking-system and directory-system failures."""


class BookingSystemError(UpstreamError):
    """The booking system returned an unexpected response or was unreachable."""


class DirectoryError(UpstreamError):
    """The directory system returned an unexpected response or was unreachable."""


class BookingAuthError(UpstreamError):
    """A bearer token for the booking system could not be obtained."""


class NoCredentials(BookingAuthError):  # noqa: N818
    """No credentials are configured for the requested site key."""


class TokenFetchFailed(BookingAuthError):  # noqa: N818
    """The booking system's authentication endpoint did not return a token."""
