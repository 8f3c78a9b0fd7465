"""Map an issuer / key id pair to the URL its public key is published at."""

from __future__ import annotations

import logging

from .config import KeyEndpointConfig

logger = logging.getLogger(__name__)


class KeyResolver:
    """
    Picks the environment from the issuer prefix and fills in the key id.

    ``qa-...`` and ``stg-...`` issuers map to their own key hosts; every other
    issuer is treated as production.
    """

    def __init__(self, config: KeyEndpointConfig) -> None:
        self._config = config

    def resolve(self, issuer: str | None, kid: str | None) -> str | None:
        """Return the key URL, or None when issuer or kid is missing."""
        if not issuer or not kid:
            return None

        template = self._config.prod_key_url
        for prefix, candidate in self._config.environment_templates():
            if issuer.startswith(prefix):
                template = candidate
                break

        if "{kid}" not in template:
            logger.error("Key URL template has no {kid} placeholder template=%s", template)
            return None
        return template.replace("{kid}", kid)
