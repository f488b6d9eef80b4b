"""
Mock Data Generator

Generates synthetic daily bars for demos and testing.
"""

import random
from datetime import date, timedelta
from typing import Optional

from chartsense.schemas.market import Bar, BarSeries

DAILY_VOLATILITY = 0.025
DRIFT_CENTER = 0.48  # Slightly below 0.5 for a mild upward drift
WICK_SPREAD = 0.015


def generate_bars(
    base_price: float,
    days: int = 60,
    seed: Optional[int] = None,
    end_date: Optional[date] = None,
) -> list[Bar]:
    """
    Generate `days + 1` daily bars ending on end_date (today by default).

    Each bar opens at the previous close; the same seed and end_date give
    the same bars.
    """
    rng = random.Random(seed)
    if end_date is None:
        end_date = date.today()

    bars = []
    price = base_price

    for offset in range(days, -1, -1):
        day = end_date - timedelta(days=offset)

        open_price = price
        change = (rng.random() - DRIFT_CENTER) * DAILY_VOLATILITY * price
        close_price = open_price + change
        high_price = max(open_price, close_price) * (1 + rng.random() * WICK_SPREAD)
        low_price = min(open_price, close_price) * (1 - rng.random() * WICK_SPREAD)

        bars.append(
            Bar(
                date=day.isoformat(),
                open=round(open_price, 2),
                high=round(high_price, 2),
                low=round(low_price, 2),
                close=round(close_price, 2),
                volume=rng.randint(50_000, 250_000),
            )
        )

        price = close_price

    return bars


def generate_bar_series(
    base_price: float,
    days: int = 60,
    seed: Optional[int] = None,
    symbol: Optional[str] = None,
    end_date: Optional[date] = None,
) -> BarSeries:
    """Generate a mock BarSeries."""
    return BarSeries(
        symbol=symbol,
        bars=generate_bars(base_price, days=days, seed=seed, end_date=end_date),
    )
