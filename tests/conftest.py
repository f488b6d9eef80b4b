"""
Pytest configuration and fixtures for chartsense tests.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

import pytest

from chartsense.core.config import Settings
from chartsense.schemas.market import Bar
from chartsense.services.data.mock_data import generate_bars

FIXED_TIME = datetime(2024, 2, 4, 10, 30, tzinfo=timezone.utc)
START_DATE = date(2024, 1, 1)


def day(index: int) -> str:
    """ISO date `index` days after the first test day."""
    return (START_DATE + timedelta(days=index)).isoformat()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns the same instant."""
    return lambda: FIXED_TIME


@pytest.fixture
def flat_bar_factory() -> Callable[[Sequence[float]], list[Bar]]:
    """Build bars with open == high == low == close from a list of closes."""

    def _make(closes: Sequence[float], volume: int = 1000) -> list[Bar]:
        return [
            Bar(date=day(i), open=c, high=c, low=c, close=c, volume=volume)
            for i, c in enumerate(closes)
        ]

    return _make


@pytest.fixture
def rising_bar_factory() -> Callable[..., list[Bar]]:
    """
    Bars whose close is 1% above their open, each opening at the previous close.

    high = close * 1.005, low = open * 0.995
    """

    def _make(
        count: int = 60,
        start: float = 100.0,
        volumes: Optional[Sequence[int]] = None,
    ) -> list[Bar]:
        bars = []
        price = start
        for i in range(count):
            close = price * 1.01
            bars.append(
                Bar(
                    date=day(i),
                    open=price,
                    high=close * 1.005,
                    low=price * 0.995,
                    close=close,
                    volume=volumes[i] if volumes is not None else 1000,
                )
            )
            price = close
        return bars

    return _make


@pytest.fixture
def falling_bars() -> list[Bar]:
    """60 bars, each closing 1% below its open."""
    bars = []
    price = 100.0
    for i in range(60):
        close = price * 0.99
        bars.append(
            Bar(
                date=day(i),
                open=price,
                high=price * 1.005,
                low=close * 0.995,
                close=close,
                volume=1000,
            )
        )
        price = close
    return bars


@pytest.fixture
def rising_bars(rising_bar_factory) -> list[Bar]:
    """60 strictly rising bars."""
    return rising_bar_factory(60)


@pytest.fixture
def flat_bars(flat_bar_factory) -> list[Bar]:
    """20 bars with open == high == low == close."""
    return flat_bar_factory([100.0] * 20)


@pytest.fixture
def mock_bars() -> list[Bar]:
    """Seeded random-walk bars."""
    return generate_bars(250.0, days=120, seed=42, end_date=date(2024, 6, 30))
