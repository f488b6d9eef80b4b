"""
Engine Configuration

All settings loaded from environment variables (prefix CHARTSENSE_).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings from environment variables."""

    # Application
    app_name: str = "chartsense"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Candlestick detector
    candlestick_lookback: int = 10
    candlestick_min_bars: int = 3

    # Classical pattern detector
    classical_lookback: int = 30
    classical_min_bars: int = 20

    # Heikin-Ashi
    heikin_ashi_trend_window: int = 5

    # Renko (brick size = factor * mean high-low range over the lookback)
    renko_range_lookback: int = 20
    renko_brick_factor: float = 0.5
    renko_fallback_brick: float = 1.0

    # Kagi
    kagi_reversal_percent: float = 4.0

    # Point & Figure
    pnf_box_size: float = 0.5
    pnf_reversal_amount: int = 3

    # Levels
    fibonacci_lookback: int = 30
    pivot_type: str = "standard"  # Options: standard, fibonacci, camarilla

    class Config:
        env_prefix = "CHARTSENSE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
