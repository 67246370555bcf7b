"""Parser configuration using Pydantic settings."""

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Parser settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # Extraction limits
    MAX_TRANSACTIONS: int = 50
    MAX_AMOUNT: Decimal = Decimal("100000000")  # 10 crores
    DATE_MAX_AGE_YEARS: int = 10
    DATE_MAX_FUTURE_YEARS: int = 1

    # Layout reconstruction (PDF points)
    LAYOUT_GAP_THRESHOLD: float = 50.0
    LINE_Y_TOLERANCE: float = 5.0
    ROW_Y_TOLERANCE: float = 2.0
    WORD_X_TOLERANCE: float = 1.5

    # First-page regions as (left, top, right, bottom) fractions of the page
    HEADER_REGION: tuple[float, float, float, float] = (0.0, 0.0, 1.0, 0.19)
    ACCOUNT_REGION: tuple[float, float, float, float] = (0.0, 0.19, 1.0, 0.57)
    TRANSACTIONS_REGION: tuple[float, float, float, float] = (0.0, 0.38, 1.0, 1.0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
