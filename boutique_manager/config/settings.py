# boutique_manager/config/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os


class Settings(BaseSettings):
    # App Info
    app_name: str = "Gestion Commerce API"
    version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./boutique_manager.db")
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Security
    secret_key: str = os.getenv("SECRET_KEY", "change-in-production")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # HTTP
    cors_origins: List[str] = ["http://localhost:3000"]
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 8000))

    # Logging
    log_level: str = "INFO"

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
