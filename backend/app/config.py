"""Application configuration."""

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

from core.exceptions import MissingStoreCredentialsError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App Settings
    APP_NAME: str = "Workflow Template Ingestion"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # Database Settings
    # No default: the templates store is required and must be configured explicitly
    DATABASE_URL: str = ""
    SQLALCHEMY_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5

    # Corpus Settings
    CORPUS_DIR: str = "/tmp/n8n-templates-zengfr"
    SOURCE_ID: str = "github:zengfr/n8n-workflow-all-templates"
    SOURCE_REPO: str = "github.com/zengfr/n8n-workflow-all-templates"
    # Older source keys for the same corpus, cleared alongside SOURCE_ID
    LEGACY_SOURCE_IDS: str = "zengfr-mega"
    PLATFORM: str = "n8n"

    # Ingestion Settings
    MAX_WORKFLOWS: Optional[int] = None  # cap for sample runs; unlimited when unset
    BATCH_SIZE: int = 50
    MAX_JSON_BYTES: int = 400_000
    BATCH_DELAY_SECONDS: float = 0.03

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or text

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def legacy_source_ids_list(self) -> list[str]:
        """Parse LEGACY_SOURCE_IDS string into a list."""
        return [src.strip() for src in self.LEGACY_SOURCE_IDS.split(",") if src.strip()]

    def validate_store_credentials(self) -> None:
        """Validate that the templates store is configured.

        Raises:
            MissingStoreCredentialsError: If DATABASE_URL is empty
        """
        if not self.DATABASE_URL.strip():
            raise MissingStoreCredentialsError(
                "DATABASE_URL environment variable must be set. "
                "Make sure the .env file exists and contains it."
            )

    def ingestion_options(self):
        """Build the run parameters for a corpus ingestion from these settings."""
        from ingestion.pipeline import IngestionOptions

        return IngestionOptions(
            root=self.CORPUS_DIR,
            source=self.SOURCE_ID,
            source_repo=self.SOURCE_REPO,
            platform=self.PLATFORM,
            legacy_sources=tuple(self.legacy_source_ids_list),
            max_records=self.MAX_WORKFLOWS,
            batch_size=self.BATCH_SIZE,
            max_json_bytes=self.MAX_JSON_BYTES,
            batch_delay=self.BATCH_DELAY_SECONDS,
        )

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.

    Uses caching to ensure settings are loaded only once.

    Returns:
        Settings object with all configuration values
    """
    return Settings()
