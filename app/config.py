"""Application settings loaded from environment variables."""
from typing import List
from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Absolute path to the .env file
ENV_FILE = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Zeina Real Estate"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:8000"]
    # Database
    database_url: str = "sqlite+aiosqlite:///./zeina.db"
    database_url_sync: str = "sqlite:///./zeina.db"
    create_tables_on_startup: bool = False
    api_key: str = ""

    # Language
    default_language: str = "en"
    language_store_path: str = "./data/language.json"

    # Media
    media_root: str = "./media"
    media_base_url: str = "/media"
    placeholder_image: str = "/placeholder-house.jpg"
    max_images: int = 20
    max_videos: int = 5

    # Contact form
    contact_rate_limit_attempts: int = 5
    contact_rate_limit_window: int = 900   # seconds
    office_phones: List[str] = ["+961 76 340 101", "+961 1 340 101"]
    office_email: str = "zeinasleiman@hotmail.com"

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v):
        if not v.startswith(('postgresql+asyncpg://', 'sqlite+aiosqlite://')):
            raise ValueError('database_url must use async driver')
        return v

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("en", "ar"):
            raise ValueError("default_language must be 'en' or 'ar'")
        return v

    @field_validator("cors_origins", "office_phones", mode="before")
    @classmethod
    def parse_list(cls, v):
        if isinstance(v, str):
            import json
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [item.strip() for item in v.split(",")]
        return v

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v:
            import warnings
            warnings.warn(
                "API_KEY not configured: admin endpoints will refuse every request.",
                stacklevel=2,
            )
        return v


settings = Settings()
