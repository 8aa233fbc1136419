"""
Configuration management for the Study Materials Bot.
Loads settings from environment variables with validation.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = Path(__file__).parent.parent / "data"

    # Telegram
    telegram_bot_token: str = Field(..., description="Telegram Bot API token")
    admin_id: int = Field(default=6930703214, description="Telegram ID of the bot admin")
    bot_username: str = Field(
        default="EduhubKMR_bot", description="Username of this bot (without @)"
    )
    delivery_bot_username: str = Field(
        default="Material_eduhubkmrbot",
        description="Bot that hands out materials via /start deep links",
    )

    # Cashfree payment gateway
    cashfree_client_id: str = Field(default="", description="Cashfree client id")
    cashfree_client_secret: str = Field(default="", description="Cashfree client secret")
    cashfree_environment: Literal["production", "sandbox"] = Field(
        default="sandbox", description="Which Cashfree host to talk to"
    )
    cashfree_api_version: str = Field(
        default="2022-09-01", description="Value of the x-api-version header"
    )
    public_base_url: str = Field(
        default="http://localhost:8080",
        description="Public URL of the HTTP server (return and notify URLs)",
    )
    payment_amount: float = Field(default=100, description="Price of one item in INR")

    # Link shortener
    shortener_api_key: Optional[str] = Field(
        default=None, description="Shortener API key; shortening is skipped when unset"
    )
    shortener_base_url: str = Field(
        default="https://adrinolinks.in", description="Shortener service URL"
    )

    # Telegraph
    telegraph_enabled: bool = Field(
        default=True, description="Publish long result lists as Telegraph pages"
    )
    telegraph_api_url: str = Field(
        default="https://api.telegra.ph", description="Telegraph API URL"
    )
    telegraph_short_name: str = Field(default="studybot")
    telegraph_author_name: str = Field(default="Study Bot")

    # Translation
    translate_api_url: str = Field(
        default="https://ftapi.pythonanywhere.com", description="Translate API URL"
    )

    # Search / dialogue
    inline_results_limit: int = Field(
        default=8, description="Max results listed inline before publishing a page"
    )
    max_pending_results: int = Field(
        default=10, description="Max results that can be bought in one dialogue"
    )

    # HTTP
    http_timeout: float = Field(default=15.0, description="Outbound HTTP timeout, seconds")
    webhook_host: str = Field(default="0.0.0.0", description="HTTP server bind host")
    webhook_port: int = Field(default=8080, description="HTTP server port")

    # Database
    database_url: Optional[str] = Field(
        default=None,
        description="Database connection URL",
    )

    # Debug
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def db_url(self) -> str:
        """Get database URL with absolute path."""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / 'studybot.db'}"

    @property
    def catalog_path(self) -> Path:
        """Static catalog JSON."""
        return self.data_dir / "material.json"

    @property
    def exports_dir(self) -> Path:
        """Directory for generated XLSX exports."""
        return self.data_dir / "exports"

    @property
    def is_production(self) -> bool:
        return self.cashfree_environment == "production"

    @property
    def cashfree_api_base(self) -> str:
        """Cashfree PG API base for the active environment."""
        if self.is_production:
            return "https://api.cashfree.com/pg"
        return "https://sandbox.cashfree.com/pg"

    @property
    def cashfree_checkout_base(self) -> str:
        """Hosted checkout prefix; the payment session id is appended."""
        if self.is_production:
            return "https://payments.cashfree.com/order/#"
        return "https://payments-test.cashfree.com/order/#"


# Global settings instance
settings = Settings()
