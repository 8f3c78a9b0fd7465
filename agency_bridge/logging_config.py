from __future__ import annotations

import logging

# Outbound HTTP libraries log every connection at DEBUG.
_NOISY_LOGGERS = ("urllib3", "requests")


def configure_app_logging(level: str = "INFO", *, verbose_http: bool = False) -> None:
    """
    Set log levels for the bridge.

    Notes:
    - Stdlib logging; uvicorn installs the handlers, we only set levels.
    - `BRIDGE_LOG_LEVEL=DEBUG` turns on per-step logs of the reconciliation flow.
    - Connection-level logs from urllib3 stay at WARNING unless `verbose_http`.
    - Raw tokens and derived passwords are never logged at any level.
    """

    normalized = level.upper()
    bridge = logging.getLogger("agency_bridge")
    bridge.setLevel(normalized)
    bridge.propagate = True

    http_level = normalized if verbose_http else "WARNING"
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
