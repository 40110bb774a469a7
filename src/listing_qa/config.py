"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "listing-qa"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Frontend
    frontend_url: str = "http://localhost:3000"

    # API
    api_prefix: str = "/api"

    # Marketplace enablement (MARKETPLACE_ENABLED_<ID>)
    marketplace_enabled_amazon: bool = True
    marketplace_enabled_ebay: bool = True
    marketplace_enabled_walmart: bool = False
    marketplace_enabled_shopify: bool = False

    def enabled_marketplaces(self) -> set[str]:
        """Marketplace ids switched on for traffic."""
        flags = {
            "amazon": self.marketplace_enabled_amazon,
            "ebay": self.marketplace_enabled_ebay,
            "walmart": self.marketplace_enabled_walmart,
            "shopify": self.marketplace_enabled_shopify,
        }
        return {marketplace for marketplace, enabled in flags.items() if enabled}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
