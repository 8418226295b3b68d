"""
Configuration Settings
Environment variables and application settings
"""

from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # MongoDB
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "wa_storefront"

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Environment
    ENVIRONMENT: str = "development"

    # Cloudinary (image CDN)
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_UPLOAD_PRESET: Optional[str] = None
    CLOUDINARY_ROOT_FOLDER: str = "mycms"

    # Storage quota
    STORAGE_CAPACITY_BYTES: int = 25 * 1024 * 1024 * 1024  # 25GB
    STORAGE_WARNING_PERCENT: int = 85
    STORAGE_CRITICAL_PERCENT: int = 95

    # Periodic quota check
    QUOTA_CHECK_ENABLED: bool = True
    QUOTA_CHECK_INTERVAL_SECONDS: int = 60 * 60

    # Timeout for every upstream round-trip (seconds)
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0

    # Click analytics
    TOP_CLICKED_WINDOW_DAYS: int = 7
    TOP_CLICKED_LIMIT: int = 8
    CLICK_SCAN_LIMIT: int = 5000

    # Storefront
    PRODUCTS_PER_PAGE: int = 12

    class Config:
        env_file = ".env"

settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process settings"""
    return settings
