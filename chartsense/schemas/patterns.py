"""
CONTRACT 4: Pattern Findings

Input: Bar Series
Output: CandlestickAnalysis / ClassicalPatternAnalysis

Both detectors emit the same PatternFinding shape; `kind` says which detector
produced it and `details` carries the pattern-specific measurements.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class PatternKind(str, Enum):
    CANDLESTICK = "candlestick"
    CLASSICAL = "classical"


class PatternBias(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class PatternCategory(str, Enum):
    REVERSAL = "reversal"
    CONTINUATION = "continuation"


class PatternFinding(BaseModel):
    """A named formation found in the bar series."""

    name: str
    kind: PatternKind
    bias: PatternBias
    category: Optional[PatternCategory] = None
    description: str
    psychology: str
    confidence: float = Field(..., ge=0, le=100)
    start_index: int = Field(..., ge=0, description="First bar of the formation")
    end_index: int = Field(..., ge=0, description="Last bar of the formation")
    details: dict[str, Any] = Field(default_factory=dict)

    class Config:
        frozen = True


class CandlestickAnalysis(BaseModel):
    """Candlestick findings over the most recent bars."""

    patterns: list[PatternFinding] = Field(default_factory=list)
    overall_signal: PatternBias = PatternBias.NEUTRAL
    interpretation: str


class ClassicalPatternAnalysis(BaseModel):
    """Classical chart formations over the trailing window."""

    patterns: list[PatternFinding] = Field(default_factory=list)
    peaks: list[int] = Field(default_factory=list, description="Peak indices")
    troughs: list[int] = Field(default_factory=list, description="Trough indices")
