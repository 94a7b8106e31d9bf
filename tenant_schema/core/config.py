"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Firestore credentials are validated at load time.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tenant_schema.application.dtos.cleanup import DEFAULT_BATCH_SIZE, MAX_BATCH_SIZE


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Firestore needs either a service account (FIREBASE_SERVICE_ACCOUNT_KEY or
    FIREBASE_SERVICE_ACCOUNT_PATH) or an emulator (FIRESTORE_EMULATOR_HOST
    plus FIRESTORE_PROJECT_ID).
    """

    # App
    app_name: str = "tenant-schema"
    debug: bool = False

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    # Overrides the service account's project_id; required with the emulator.
    firestore_project_id: str | None = None
    # host:port of a local Firestore emulator; no credentials are sent to it.
    firestore_emulator_host: str | None = None
    firestore_timeout_seconds: float = 30.0

    # Legacy cleanup defaults (scripts may override per run)
    cleanup_batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1, le=MAX_BATCH_SIZE)
    cleanup_dry_run: bool = False
    cleanup_preserve_legacy: bool = True
    cleanup_lease_ttl_seconds: int = Field(default=900, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_firestore_source(self) -> "Settings":
        """Require credentials, or an emulator with an explicit project id."""
        if self.firestore_emulator_host:
            if not self.firestore_project_id:
                raise ValueError(
                    "FIRESTORE_PROJECT_ID is required when FIRESTORE_EMULATOR_HOST is set."
                )
            return self
        has_key = (
            self.firebase_service_account_key
            and self.firebase_service_account_key.get_secret_value()
        )
        if not has_key and not self.firebase_service_account_path:
            raise ValueError(
                "Set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string), "
                "FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file), "
                "or FIRESTORE_EMULATOR_HOST for a local emulator."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
