"""
CONTRACT 5: Analysis Verdict

Input: AnalysisRequest (bar series + method id)
Output: AnalysisVerdict

Produced by the Analysis Service; consumed by display code.
"""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

from chartsense.schemas.market import Bar
from chartsense.schemas.patterns import PatternFinding


# =============================================================================
# ENUMS
# =============================================================================


class AnalysisMethod(str, Enum):
    CANDLESTICK = "candlestick"
    BAR = "bar"
    POINT_FIGURE = "point-figure"
    HEIKIN_ASHI = "heikin-ashi"
    RENKO = "renko"
    KAGI = "kagi"
    PATTERNS = "patterns"
    MOVING_AVERAGE = "moving-average"
    OSCILLATOR = "oscillator"
    FIBONACCI = "fibonacci"
    VOLUME = "volume"


class MethodCategory(str, Enum):
    CHART = "chart"
    INDICATOR = "indicator"
    PATTERN = "pattern"


class Signal(str, Enum):
    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    HOLD = "Hold"
    SELL = "Sell"
    STRONG_SELL = "Strong Sell"


# =============================================================================
# INPUT: AnalysisRequest
# =============================================================================


class AnalysisRequest(BaseModel):
    """
    Request for a single-method analysis.

    method is a plain string so unknown ids reach the service and come back
    as a neutral verdict instead of a validation error.
    """

    bars: list[Bar] = Field(default_factory=list, description="Oldest first")
    method: str = Field(..., description="One of AnalysisMethod values")


# =============================================================================
# OUTPUT
# =============================================================================


class MethodProfile(BaseModel):
    """Static description of an analysis method."""

    id: AnalysisMethod
    name: str
    description: str
    category: MethodCategory
    psychology: str
    use_case: str

    class Config:
        frozen = True


class AnalysisVerdict(BaseModel):
    """
    Normalized result of one analysis method.
    Returned by: Analysis Service
    """

    method: str
    signal: Signal
    confidence: float = Field(..., ge=0, le=100)
    findings: list[PatternFinding] = Field(default_factory=list)
    interpretation: str
    psychology: str = ""
    use_case: str = ""
    support_levels: list[float] = Field(default_factory=list)
    resistance_levels: list[float] = Field(default_factory=list)
    timestamp: datetime

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "method": "moving-average",
                "signal": "Buy",
                "confidence": 65,
                "findings": [],
                "interpretation": "Price is above 50 SMA. Uptrend intact.",
                "psychology": "Moving averages smooth price data to reveal trend momentum.",
                "use_case": "Trend confirmation, entry/exit timing.",
                "support_levels": [272.4, 265.1],
                "resistance_levels": [],
                "timestamp": "2024-02-04T10:30:00+00:00",
            }
        }
