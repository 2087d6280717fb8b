"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults for the custody rules and the production event

Collaborators:
  - container.py: builds the administrator identity, clock and use cases
  - crosscutting/logger.py: reads log level and format

Constraints:
  - Lives in the crosscutting layer, NOT in domain/application
  - No business logic — pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache; tests call get_settings.cache_clear()
  - Optional rules (manufacturer cross-check, admin recall, reinstatement)
    are disabled by default
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_APP_ENVS = {"development", "test", "testing", "ci", "production"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        admin_identity: Principal allowed to approve/revoke manufacturers
        app_env: Application environment (development/test/production)
        log_level: Root level for the pharmatrace logger (default: INFO)
        log_json: Emit JSON lines instead of plain text (default: True)
        require_approved_manufacturer: Reject batches whose manufacturer is
            not approved in the registry (default: False)
        allow_admin_recall: Let the administrator recall any batch (default: False)
        allow_manufacturer_reinstatement: Let a revoked manufacturer be
            approved again (default: False)
        production_location: Location recorded on event 0
        production_notes: Notes recorded on event 0
    """

    # Required (no defaults)
    admin_identity: str

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Custody rules
    require_approved_manufacturer: bool = False
    allow_admin_recall: bool = False
    allow_manufacturer_reinstatement: bool = False

    # Production event defaults
    production_location: str = "Production Facility"
    production_notes: str = "Batch produced"

    @field_validator("admin_identity")
    @classmethod
    def admin_identity_must_not_be_blank(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("admin_identity must not be blank")
        return value

    @field_validator("app_env")
    @classmethod
    def app_env_valid(cls, v: str) -> str:
        env = (v or "development").strip().lower()
        if env not in _APP_ENVS:
            raise ValueError(f"app_env must be one of {sorted(_APP_ENVS)}")
        return env

    @field_validator("log_level")
    @classmethod
    def log_level_valid(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    def is_production(self) -> bool:
        return self.app_env == "production"

    def is_test(self) -> bool:
        return self.app_env in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
