"""
CONTRACT 3: Derived Charts

Input: Bar Series
Output: one of HeikinAshiChart / RenkoChart / KagiChart / PointFigureChart

Every variant carries a `kind` tag and a coarse `trend`, so callers can treat
them uniformly through the ChartResult union.
"""

from enum import Enum
from typing import Annotated, Literal, Union
from pydantic import BaseModel, Field

from chartsense.schemas.market import Bar


class ChartKind(str, Enum):
    HEIKIN_ASHI = "heikin-ashi"
    RENKO = "renko"
    KAGI = "kagi"
    POINT_FIGURE = "point-figure"


class HeikinAshiTrend(str, Enum):
    STRONG_BULLISH = "strong-bullish"
    BULLISH = "bullish"
    NEUTRAL = "neutral"
    BEARISH = "bearish"
    STRONG_BEARISH = "strong-bearish"


class ChartTrend(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


# =============================================================================
# SERIES ELEMENTS
# =============================================================================


class RenkoBrick(BaseModel):
    """Fixed-size brick; price is the boundary after the move."""

    type: Literal["up", "down"]
    price: float
    date: str

    class Config:
        frozen = True


class KagiLine(BaseModel):
    """Closed Kagi segment. yang = thick (demand), yin = thin (supply)."""

    type: Literal["yang", "yin"]
    start_price: float
    end_price: float
    date: str

    class Config:
        frozen = True


class PointFigureColumn(BaseModel):
    """Column of X (rising) or O (falling) boxes."""

    type: Literal["X", "O"]
    start_price: float
    end_price: float
    count: int = Field(..., ge=0)

    class Config:
        frozen = True


# =============================================================================
# CHART RESULTS
# =============================================================================


class HeikinAshiChart(BaseModel):
    kind: Literal["heikin-ashi"] = "heikin-ashi"
    candles: list[Bar] = Field(default_factory=list)
    trend: HeikinAshiTrend = HeikinAshiTrend.NEUTRAL
    trend_strength: float = Field(default=0.0, ge=0, le=100)


class RenkoChart(BaseModel):
    kind: Literal["renko"] = "renko"
    bricks: list[RenkoBrick] = Field(default_factory=list)
    trend: ChartTrend = ChartTrend.NEUTRAL
    brick_size: float = Field(..., gt=0)


class KagiChart(BaseModel):
    kind: Literal["kagi"] = "kagi"
    lines: list[KagiLine] = Field(default_factory=list)
    trend: ChartTrend = ChartTrend.NEUTRAL
    reversal_percent: float = Field(..., gt=0)


class PointFigureChart(BaseModel):
    kind: Literal["point-figure"] = "point-figure"
    columns: list[PointFigureColumn] = Field(default_factory=list)
    trend: ChartTrend = ChartTrend.NEUTRAL
    box_size: float = Field(..., gt=0)
    reversal_amount: int = Field(..., ge=1)
    patterns: list[str] = Field(default_factory=list)


ChartResult = Annotated[
    Union[HeikinAshiChart, RenkoChart, KagiChart, PointFigureChart],
    Field(discriminator="kind"),
]
