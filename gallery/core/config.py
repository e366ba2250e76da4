# gallery/core/config.py
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Google Cloud
    PROJECT_ID: str
    GOOGLE_APPLICATION_CREDENTIALS: str = "storage-key-file.json"

    # Storage backend used by the albums collection
    STORAGE_TYPE: str = "google"

    # Scratch directory for uploads staged before they reach the bucket
    TEMP_DIR: str = "temp"

    # Metadata attached to every uploaded image
    UPLOAD_DESCRIPTION: str = "Some description"

    # API configuration
    API_TITLE: str = "Gallery API"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    # Load .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Global instance shared across the app
settings = Settings()

os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = settings.GOOGLE_APPLICATION_CREDENTIALS
