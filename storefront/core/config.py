"""Storefront Client Configuration"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment"""

    # Application
    app_name: str = "XONIGHT"
    app_version: str = "1.0.0"
    debug: bool = False

    # Remote API
    api_base_url: str = "http://localhost:3000"
    request_timeout: float = 10.0

    # Device storage
    storage_backend: str = "sqlite"  # "sqlite" or "memory"
    storage_path: str = "data/storefront.sqlite"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STOREFRONT_",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def uses_sqlite(self) -> bool:
        """Check if the persistent sqlite store is selected"""
        return self.storage_backend.lower() == "sqlite"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
