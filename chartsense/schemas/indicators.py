"""
CONTRACT 2: Indicator Results

Input: Bar Series
Output: one result model per indicator analysis

All values are computed by chartsense.services.indicators.calculations.
Pure Python/NumPy - deterministic and reproducible.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from chartsense.schemas.analysis import Signal


# =============================================================================
# ENUMS
# =============================================================================


class TrendDirection(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class OscillatorZone(str, Enum):
    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    NEUTRAL = "neutral"


class CrossoverType(str, Enum):
    GOLDEN_CROSS = "golden-cross"
    DEATH_CROSS = "death-cross"


class FlowTrend(str, Enum):
    ACCUMULATION = "accumulation"
    DISTRIBUTION = "distribution"
    NEUTRAL = "neutral"


class VolumeConfirmation(str, Enum):
    CONFIRMED = "confirmed"
    DIVERGENCE = "divergence"
    NEUTRAL = "neutral"


class BarTrend(str, Enum):
    UPTREND = "uptrend"
    DOWNTREND = "downtrend"
    SIDEWAYS = "sideways"


class VolatilityZone(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# MOVING AVERAGES
# =============================================================================


class Crossover(BaseModel):
    """SMA50 / SMA200 crossover event."""

    type: CrossoverType
    date: str


class MovingAverageAnalysis(BaseModel):
    """Moving average levels, recent crossovers and trend."""

    sma20: float
    sma50: float
    sma200: float
    ema12: float
    ema26: float
    crossovers: list[Crossover] = Field(default_factory=list)
    trend: TrendDirection
    interpretation: str


# =============================================================================
# OSCILLATORS
# =============================================================================


class RSIData(BaseModel):
    """RSI value, zone and price divergence flag."""

    value: float = Field(..., ge=0, le=100)
    signal: OscillatorZone
    divergence: bool


class MACDData(BaseModel):
    """
    MACD values.

    signal_line is 0.9 x MACD rather than an EMA of the MACD line.
    """

    value: float
    signal_line: float
    histogram: float
    trend: TrendDirection


class StochasticData(BaseModel):
    """
    Stochastic oscillator values.

    d is a linear transform of k (0.8k + 20), not a 3-bar SMA.
    """

    k: float
    d: float
    signal: OscillatorZone


class OscillatorAnalysis(BaseModel):
    """RSI + MACD + Stochastic with a combined vote."""

    rsi: RSIData
    macd: MACDData
    stochastic: StochasticData
    votes: int = Field(..., ge=-3, le=3, description="Bullish minus bearish votes")
    overall_signal: str


class BollingerBandsData(BaseModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float
    width: float = Field(..., ge=0, description="Band width as % of middle")


# =============================================================================
# VOLUME
# =============================================================================


class VolumeAnalysis(BaseModel):
    """On-balance volume, volume price trend and price/volume confirmation."""

    obv: float
    obv_trend: FlowTrend
    vpt: float
    vpt_trend: FlowTrend
    avg_volume: int = Field(..., ge=0)
    volume_spike: bool
    confirmation: VolumeConfirmation
    interpretation: str


# =============================================================================
# LEVELS
# =============================================================================


class FibonacciLevel(BaseModel):
    """Single retracement level."""

    level: str
    ratio: float = Field(..., ge=0, le=1)
    price: float


class PivotPoints(BaseModel):
    """Pivot point levels."""

    pivot: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float
    type: str = Field(default="standard", description="standard/fibonacci/camarilla")


class FibonacciAnalysis(BaseModel):
    """Retracement levels over the trailing range plus pivot points."""

    swing_high: float
    swing_low: float
    levels: list[FibonacciLevel]
    pivot_points: PivotPoints
    current_position: str


# =============================================================================
# BAR CHART
# =============================================================================


class BarChartAnalysis(BaseModel):
    """Trend and volatility read from plain OHLC bars."""

    trend: BarTrend
    volatility: VolatilityZone
    bar_patterns: list[str] = Field(default_factory=list)
    interpretation: str


# =============================================================================
# SNAPSHOT + SCORE
# =============================================================================


class TechnicalSnapshot(BaseModel):
    """Headline indicator values for a single instrument."""

    rsi: float = Field(..., ge=0, le=100)
    rsi_signal: OscillatorZone
    macd: MACDData
    sma20: float
    sma50: float
    ema12: float
    ema26: float
    bollinger_bands: BollingerBandsData
    volatility: float = Field(..., ge=0, description="Std of daily returns, %")
    support: Optional[float] = None
    resistance: Optional[float] = None


class ConfidenceScore(BaseModel):
    """Rule-based score derived from a TechnicalSnapshot."""

    score: float = Field(..., ge=0, le=100)
    signal: Signal
    reasons: list[str] = Field(default_factory=list)
