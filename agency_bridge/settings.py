from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    App settings.

    Notes:
    - Defaults point at the production booking and directory systems; override
      via ``BRIDGE_*`` env vars for other environments.
    - Secrets (directory signing secret, booking credentials) have no defaults
      in code. Booking credentials live in a YAML file, see
      ``resolved_credentials_config_path``.
    """

    model_config = SettingsConfigDict(env_prefix="BRIDGE_", extra="ignore")

    db_url: str | None = None
    log_level: str = "INFO"
    log_http_connections: bool = False
    credentials_config_path: str | None = None

    booking_base_url: str = "https://kombireisen.suntrips.de/resources"
    booking_connect_timeout_seconds: float = 10.0
    booking_read_timeout_seconds: float = 30.0
    booking_token_ttl_seconds: int = 30 * 60

    directory_base_url: str = "https://cockpit.aerticket.fr/api/aer360/agencies/"
    directory_audience: str = "cockpit.aerticket.fr"
    directory_key_id: str = "aer360"
    directory_secret: str | None = None
    directory_token_lifetime_seconds: int = 60

    fallback_url: str = "https://de.aer360.travel/"
    fallback_microsite: str = "aer360"
    fallback_microsite_api: str = "aer360"
    default_language: str = "DE"

    @property
    def booking_timeout(self) -> tuple[float, float]:
        return (self.booking_connect_timeout_seconds, self.booking_read_timeout_seconds)

    def resolved_db_url(self) -> str:
        if self.db_url:
            return self.db_url

        repo_root = Path(__file__).resolve().parents[1]
        db_path = repo_root / "agency_bridge.db"
        return f"sqlite:///{db_path}"

    def resolved_credentials_config_path(self) -> Path:
        if self.credentials_config_path:
            return Path(self.credentials_config_path)

        repo_root = Path(__file__).resolve().parents[1]
        return repo_root / "config" / "booking_credentials.yaml"


@lru_cache
def get_settings() -> Settings:
    return Settings()
