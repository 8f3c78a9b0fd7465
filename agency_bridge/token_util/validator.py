"""
Validate an ES256-signed agent token and extract its claims.

Background for newcomers:
    The directory system redirects an agent to us with a compact JWT in the
    query string. Before we trust anything in it we:

    1. Split it into header, body and signature and decode the JSON.
    2. Reject any algorithm other than ES256, before touching the network.
    3. Derive the public key URL from the issuer and key id and fetch the key
       (cached per URL for the life of the process).
    4. Verify the ECDSA signature with PyJWT.
    5. Reject tokens whose ``nbf`` lies in the future.

    The ``exp`` claim is not enforced. It is still parsed and exposed on the
    claims.
"""

from __future__ import annotations

import base64
import json
import logging
import textwrap
from typing import Any

import jwt

from .claims import TokenClaims, claims_from_payload
from .config import KeyEndpointConfig
from .errors import (
    KeyResolutionFailed,
    KeyUnavailable,
    MalformedToken,
    SignatureInvalid,
    TokenNotYetValid,
    UnsupportedAlgorithm,
)
from .key_cache import KeyCache, KeyFetcher
from .key_resolver import KeyResolver

logger = logging.getLogger(__name__)

SUPPORTED_ALGORITHM = "ES256"

_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": True,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
}


def _decode_segment(segment: str) -> dict[str, Any]:
    """Decode one base64url segment into a JSON object."""
    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        value = json.loads(raw.decode("utf-8"))
    except (ValueError, UnicodeError) as e:
        raise MalformedToken("Invalid token: segment is not base64url JSON") from e
    if not isinstance(value, dict):
        raise MalformedToken("Invalid token: segment is not a JSON object")
    return value


def _split_token(token: str) -> tuple[dict[str, Any], dict[str, Any]]:
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedToken("Invalid token: expected three segments")
    return _decode_segment(parts[0]), _decode_segment(parts[1])


def _to_pem(material: str) -> str:
    """Accept either a PEM document or the bare base64 body of one."""
    if "-----BEGIN" in material:
        return material
    body = "".join(material.split())
    lines = "\n".join(textwrap.wrap(body, 64))
    return f"-----BEGIN PUBLIC KEY-----\n{lines}\n-----END PUBLIC KEY-----\n"


class EcTokenValidator:
    """
    Validates agent tokens against the issuer's published EC public keys.

    The key cache is injected so one cache can be shared by every request in
    the process; it is only emptied explicitly.
    """

    def __init__(
        self,
        config: KeyEndpointConfig | None = None,
        *,
        key_cache: KeyCache | None = None,
        resolver: KeyResolver | None = None,
    ) -> None:
        self._config = config or KeyEndpointConfig.from_environ()
        self._resolver = resolver or KeyResolver(self._config)
        self._keys = key_cache if key_cache is not None else KeyCache(KeyFetcher(self._config.timeout).fetch)

    def validate(self, token: str) -> TokenClaims:
        """
        Validate ``token`` and return its claims.

        Raises a ``TokenValidationError`` subclass describing the first check
        that failed.
        """
        header, body = _split_token(token)

        algorithm = header.get("alg")
        # Case-sensitive: "es256" is rejected here rather than accepted as ES256.
        if algorithm != SUPPORTED_ALGORITHM:
            logger.warning("Unsupported token algorithm alg=%s", algorithm)
            raise UnsupportedAlgorithm(f"Unsupported token algorithm: {algorithm}")

        kid = header.get("kid")
        issuer = body.get("iss")
        logger.debug("Token alg=%s kid=%s iss=%s", algorithm, kid, issuer)

        key_url = self._resolver.resolve(
            issuer if isinstance(issuer, str) else None,
            kid if isinstance(kid, str) else None,
        )
        if key_url is None:
            logger.warning("Could not resolve key URL iss=%s kid=%s", issuer, kid)
            raise KeyResolutionFailed("Invalid token: unable to resolve public key URL")

        key_material = self._keys.get(key_url)
        if not key_material:
            logger.error("Public key unavailable url=%s", key_url)
            raise KeyUnavailable("Public key retrieval failed")

        try:
            payload = jwt.decode(
                token,
                _to_pem(key_material),
                algorithms=[SUPPORTED_ALGORITHM],
                options=_DECODE_OPTIONS,
            )
        except jwt.ImmatureSignatureError as e:
            logger.info("Token not yet valid")
            raise TokenNotYetValid("Token is not yet valid") from e
        except jwt.InvalidSignatureError as e:
            logger.warning("Token signature verification failed")
            raise SignatureInvalid("Invalid token signature") from e
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.warning("Token verification failed: %s", type(e).__name__)
            raise SignatureInvalid("Invalid token") from e

        logger.info("Token signature verified iss=%s kid=%s", issuer, kid)
        return claims_from_payload(payload)
