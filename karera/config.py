"""Engine configuration using Pydantic settings."""

import logging
from datetime import date, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

MANILA_TZ = ZoneInfo("Asia/Manila")


def manila_now() -> datetime:
    """Current time in Manila (no DST, always UTC+8)."""
    return datetime.now(MANILA_TZ)


def manila_today() -> date:
    """Today's date in Manila timezone."""
    return manila_now().date()


class Settings(BaseSettings):
    """Engine defaults loaded from environment variables.

    The host application owns the real values (the promo banner comes from a
    remote settings table); these only seed the explicit objects handed to the
    engine, e.g. ``PromoConfig.from_settings``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="KARERA_",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Receipts
    currency_symbol: str = "₱"
    receipt_website: str = "www.sabong192.live"

    # Promo banner
    promo_enabled: bool = False
    promo_percent: float = 0.0
    promo_banner_text: str = "BOOKIS +{percent}% PER BET"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging the same way for every host entry point."""
    level = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
