"""Application configuration."""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        """Initialize settings from environment variables."""
        # API Settings
        self.api_title: str = os.getenv("API_TITLE", "Slot Reservations")
        self.api_version: str = os.getenv("API_VERSION", "0.1.0")
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.environment: str = os.getenv("ENVIRONMENT", "development").lower()
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Server Settings
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "8000"))

        # Local file storage
        self.data_file: str = os.getenv("DATA_FILE", "reservations.json")

        # Google Sheets storage (used when GOOGLE_SHEET_ID is set)
        self.google_sheet_id: Optional[str] = os.getenv("GOOGLE_SHEET_ID") or None
        self.google_credentials_file: Optional[str] = (
            os.getenv("GOOGLE_CREDENTIALS_FILE") or None
        )
        self.google_service_account_email: Optional[str] = (
            os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL") or None
        )
        self.google_private_key: Optional[str] = (
            os.getenv("GOOGLE_PRIVATE_KEY") or None
        )

        # Bounds for remote storage calls
        self.storage_timeout: float = float(os.getenv("STORAGE_TIMEOUT", "10"))
        self.storage_retries: int = int(os.getenv("STORAGE_RETRIES", "3"))

    @property
    def is_production(self) -> bool:
        """Check whether the app runs in production."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check whether the app runs in development."""
        return self.environment == "development"

    @property
    def use_remote_storage(self) -> bool:
        """Check whether the Google Sheets backend should be attempted."""
        return self.google_sheet_id is not None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
