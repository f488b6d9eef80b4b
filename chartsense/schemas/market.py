"""
CONTRACT 1: Bar Series

Input shared by every indicator, chart transform and pattern detector.

Bars are supplied by an external collaborator (quote scraper, mock generator)
and are immutable once built. A series is ordered oldest first.
"""

from typing import Optional, Sequence, Union
import numpy as np
from pydantic import BaseModel, Field, model_validator


class Bar(BaseModel):
    """Single daily OHLCV bar."""

    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    open: float = Field(..., gt=0)
    high: float = Field(..., gt=0)
    low: float = Field(..., gt=0)
    close: float = Field(..., gt=0)
    volume: int = Field(default=0, ge=0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_price_ordering(self) -> "Bar":
        body_low = min(self.open, self.close)
        body_high = max(self.open, self.close)
        if not (self.low <= body_low and body_high <= self.high):
            raise ValueError(
                f"Bar {self.date}: expected low <= open/close <= high, got "
                f"O={self.open} H={self.high} L={self.low} C={self.close}"
            )
        return self

    @property
    def body(self) -> float:
        return abs(self.close - self.open)

    @property
    def upper_wick(self) -> float:
        return self.high - max(self.open, self.close)

    @property
    def lower_wick(self) -> float:
        return min(self.open, self.close) - self.low

    @property
    def range(self) -> float:
        return self.high - self.low

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open


class BarSeries(BaseModel):
    """
    Ordered bar sequence for one instrument.

    last_price is the latest quote from the live feed when the caller has one;
    otherwise the last close stands in for it.
    """

    symbol: Optional[str] = None
    last_price: Optional[float] = Field(default=None, gt=0)
    bars: list[Bar] = Field(default_factory=list)

    class Config:
        frozen = True

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def opens(self) -> np.ndarray:
        return np.array([b.open for b in self.bars], dtype=float)

    @property
    def highs(self) -> np.ndarray:
        return np.array([b.high for b in self.bars], dtype=float)

    @property
    def lows(self) -> np.ndarray:
        return np.array([b.low for b in self.bars], dtype=float)

    @property
    def closes(self) -> np.ndarray:
        return np.array([b.close for b in self.bars], dtype=float)

    @property
    def volumes(self) -> np.ndarray:
        return np.array([b.volume for b in self.bars], dtype=float)

    @property
    def latest_price(self) -> Optional[float]:
        if self.last_price is not None:
            return self.last_price
        return self.bars[-1].close if self.bars else None


BarInput = Union[BarSeries, Sequence[Union[Bar, dict]]]


def as_bars(data: BarInput) -> list[Bar]:
    """Accept a BarSeries or a plain sequence of bars or bar dicts."""
    if isinstance(data, BarSeries):
        return list(data.bars)
    return [b if isinstance(b, Bar) else Bar.model_validate(b) for b in data]


def bars_to_arrays(bars: Sequence[Bar]) -> tuple:
    """Convert a bar list to numpy arrays (opens, highs, lows, closes, volumes)."""
    opens = np.array([b.open for b in bars], dtype=float)
    highs = np.array([b.high for b in bars], dtype=float)
    lows = np.array([b.low for b in bars], dtype=float)
    closes = np.array([b.close for b in bars], dtype=float)
    volumes = np.array([b.volume for b in bars], dtype=float)
    return opens, highs, lows, closes, volumes
