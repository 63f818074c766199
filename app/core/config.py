import logging
from pathlib import Path
from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be configured via .env file or environment variables.
    """

    # =============================================================================
    # APPLICATION
    # =============================================================================
    PROJECT_NAME: str = "Student Records"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # =============================================================================
    # SERVER
    # =============================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # =============================================================================
    # STORAGE
    # =============================================================================
    DATA_FILE: Path = Path("data/students.json")
    UPLOAD_DIR: Path = Path("data/uploads")
    UPLOAD_URL_PREFIX: str = "/uploads"

    # Shown for records without an avatar
    PLACEHOLDER_IMAGE_URL: str = "https://placehold.co/150x150?text=No+Photo"

    # =============================================================================
    # ORPHAN SWEEP
    # =============================================================================
    ORPHAN_SWEEP_ENABLED: bool = True
    ORPHAN_SWEEP_INTERVAL_SECONDS: float = 3600.0
    ORPHAN_MIN_AGE_SECONDS: float = 24 * 60 * 60

    # =============================================================================
    # LOGGING
    # =============================================================================
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Optional[str]) -> str:
        """Accept lowercase level names from the environment."""
        if not v:
            return "INFO"
        return str(v).strip().upper()

    @field_validator("ORPHAN_SWEEP_INTERVAL_SECONDS")
    @classmethod
    def check_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("sweep interval must be positive")
        return v

    @model_validator(mode="after")
    def check_data_file_outside_uploads(self) -> "Settings":
        """The orphan sweep owns UPLOAD_DIR, so the record document must live elsewhere."""
        data_file = self.DATA_FILE.resolve()
        upload_dir = self.UPLOAD_DIR.resolve()
        if data_file == upload_dir or upload_dir in data_file.parents:
            raise ValueError(
                f"DATA_FILE ({self.DATA_FILE}) must not be inside UPLOAD_DIR ({self.UPLOAD_DIR})"
            )
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Create global settings instance
settings = Settings()


def describe_config(current: Settings) -> None:
    """Log the effective configuration once at startup."""
    logger.info("=" * 60)
    logger.info(f"Project Name: {current.PROJECT_NAME} v{current.APP_VERSION}")
    logger.info(f"Debug Mode: {current.DEBUG}")
    logger.info(f"Listening on: {current.HOST}:{current.PORT}")
    logger.info(f"Data File: {current.DATA_FILE}")
    logger.info(f"Upload Dir: {current.UPLOAD_DIR}")
    logger.info(
        f"Orphan Sweep: enabled={current.ORPHAN_SWEEP_ENABLED} "
        f"interval={current.ORPHAN_SWEEP_INTERVAL_SECONDS}s "
        f"min_age={current.ORPHAN_MIN_AGE_SECONDS}s"
    )
    logger.info("=" * 60)
