"""
Chart Transforms

Derived chart representations built bar-by-bar from a price series:
Heikin-Ashi, Renko, Kagi and Point & Figure.

Each transform carries its accumulator (previous candle, brick boundary,
pivot price, open column) only for the length of one call.
"""

import logging
import math
from typing import Optional, Sequence

from chartsense.core.config import Settings, get_settings
from chartsense.schemas.charts import (
    ChartTrend,
    HeikinAshiChart,
    HeikinAshiTrend,
    KagiChart,
    KagiLine,
    PointFigureChart,
    PointFigureColumn,
    RenkoBrick,
    RenkoChart,
)
from chartsense.schemas.market import Bar
from chartsense.services.indicators.calculations import mean_range

logger = logging.getLogger(__name__)

MIN_HEIKIN_ASHI_BARS = 2
MIN_BARS = 5


# =============================================================================
# HEIKIN-ASHI
# =============================================================================


def heikin_ashi(bars: Sequence[Bar], settings: Optional[Settings] = None) -> HeikinAshiChart:
    """
    Smoothed candles.

    open  = midpoint of the previous derived candle's open/close
    close = average of the raw bar's O/H/L/C
    high/low are widened to include the derived open/close.
    """
    settings = settings or get_settings()
    if len(bars) < MIN_HEIKIN_ASHI_BARS:
        return HeikinAshiChart()

    first = bars[0]
    candles = [
        Bar(
            date=first.date,
            open=(first.open + first.close) / 2,
            high=first.high,
            low=first.low,
            close=(first.open + first.high + first.low + first.close) / 4,
            volume=first.volume,
        )
    ]

    for bar in bars[1:]:
        prev = candles[-1]
        ha_open = (prev.open + prev.close) / 2
        ha_close = (bar.open + bar.high + bar.low + bar.close) / 4
        candles.append(
            Bar(
                date=bar.date,
                open=ha_open,
                high=max(bar.high, ha_open, ha_close),
                low=min(bar.low, ha_open, ha_close),
                close=ha_close,
                volume=bar.volume,
            )
        )

    window = settings.heikin_ashi_trend_window
    recent = candles[-window:]
    bullish_count = sum(1 for c in recent if c.is_bullish)
    # Bullish candle with no lower shadow
    no_lower_wick_count = sum(
        1 for c in recent if c.is_bullish and c.low == min(c.open, c.close)
    )

    trend_strength = no_lower_wick_count / window * 100

    if bullish_count >= 4 and no_lower_wick_count >= 3:
        trend = HeikinAshiTrend.STRONG_BULLISH
    elif bullish_count >= 3:
        trend = HeikinAshiTrend.BULLISH
    elif bullish_count <= 1 and no_lower_wick_count == 0:
        trend = HeikinAshiTrend.STRONG_BEARISH
    else:
        trend = HeikinAshiTrend.BEARISH

    return HeikinAshiChart(candles=candles, trend=trend, trend_strength=trend_strength)


# =============================================================================
# RENKO
# =============================================================================


def renko_brick_size(bars: Sequence[Bar], settings: Optional[Settings] = None) -> float:
    """Half the mean high-low range of the trailing bars, never zero."""
    settings = settings or get_settings()
    highs = [b.high for b in bars]
    lows = [b.low for b in bars]
    size = round(mean_range(highs, lows, settings.renko_range_lookback) * settings.renko_brick_factor, 2)
    return size if size > 0 else settings.renko_fallback_brick


def renko(
    bars: Sequence[Bar],
    brick_size: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> RenkoChart:
    """
    Fixed-size bricks on closes.

    A brick is emitted for every full brick_size the close moves away from
    the last boundary; a single bar can emit several bricks.
    """
    settings = settings or get_settings()
    if len(bars) < MIN_BARS:
        size = brick_size if brick_size and brick_size > 0 else settings.renko_fallback_brick
        return RenkoChart(brick_size=size)

    if not brick_size or brick_size <= 0:
        brick_size = renko_brick_size(bars, settings)

    bricks = []
    boundary = math.floor(bars[0].close / brick_size) * brick_size

    for bar in bars:
        price = bar.close

        while price >= boundary + brick_size:
            boundary += brick_size
            bricks.append(RenkoBrick(type="up", price=boundary, date=bar.date))

        while price <= boundary - brick_size:
            boundary -= brick_size
            bricks.append(RenkoBrick(type="down", price=boundary, date=bar.date))

    logger.debug(f"Renko: {len(bricks)} bricks of {brick_size}")

    if not bricks:
        trend = ChartTrend.NEUTRAL
    else:
        up_count = sum(1 for b in bricks[-5:] if b.type == "up")
        if up_count >= 4:
            trend = ChartTrend.BULLISH
        elif up_count <= 1:
            trend = ChartTrend.BEARISH
        else:
            trend = ChartTrend.NEUTRAL

    return RenkoChart(bricks=bricks, trend=trend, brick_size=brick_size)


# =============================================================================
# KAGI
# =============================================================================


def kagi(
    bars: Sequence[Bar],
    reversal_percent: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> KagiChart:
    """
    Reversal-threshold line chart on closes.

    A line closes when the close reverses by reversal_percent of the last
    pivot price. Thickness turns yang on a new high and yin on a new low.
    """
    settings = settings or get_settings()
    if reversal_percent is None:
        reversal_percent = settings.kagi_reversal_percent

    if len(bars) < MIN_BARS:
        return KagiChart(reversal_percent=reversal_percent)

    lines = []
    rising = bars[1].close > bars[0].close
    pivot = bars[0].close
    last_high = bars[0].high
    last_low = bars[0].low
    line_type = "yang" if rising else "yin"

    for bar in bars[1:]:
        price = bar.close
        reversal = pivot * reversal_percent / 100

        if rising:
            if price > pivot:
                pivot = price
                if price > last_high:
                    line_type = "yang"
                    last_high = price
            elif price <= pivot - reversal:
                lines.append(KagiLine(type=line_type, start_price=pivot, end_price=price, date=bar.date))
                rising = False
                pivot = price
                if price < last_low:
                    line_type = "yin"
                    last_low = price
        else:
            if price < pivot:
                pivot = price
                if price < last_low:
                    line_type = "yin"
                    last_low = price
            elif price >= pivot + reversal:
                lines.append(KagiLine(type=line_type, start_price=pivot, end_price=price, date=bar.date))
                rising = True
                pivot = price
                if price > last_high:
                    line_type = "yang"
                    last_high = price

    logger.debug(f"Kagi: {len(lines)} lines at {reversal_percent}% reversal")

    if not lines:
        trend = ChartTrend.NEUTRAL
    else:
        yang_count = sum(1 for line in lines[-3:] if line.type == "yang")
        if yang_count >= 2:
            trend = ChartTrend.BULLISH
        elif yang_count == 0:
            trend = ChartTrend.BEARISH
        else:
            trend = ChartTrend.NEUTRAL

    return KagiChart(lines=lines, trend=trend, reversal_percent=reversal_percent)


# =============================================================================
# POINT & FIGURE
# =============================================================================


def _column(kind: str, start: float, end: float, box_size: float) -> PointFigureColumn:
    span = end - start if kind == "X" else start - end
    return PointFigureColumn(
        type=kind,
        start_price=start,
        end_price=end,
        count=max(0, math.floor(span / box_size)),
    )


def point_figure(
    bars: Sequence[Bar],
    box_size: Optional[float] = None,
    reversal_amount: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> PointFigureChart:
    """
    X/O columns on closes snapped to the box grid.

    A column extends one box at a time and reverses only after a move of
    reversal_amount boxes against it.
    """
    settings = settings or get_settings()
    if not box_size or box_size <= 0:
        box_size = settings.pnf_box_size
    if reversal_amount is None:
        reversal_amount = settings.pnf_reversal_amount

    if len(bars) < MIN_BARS:
        return PointFigureChart(box_size=box_size, reversal_amount=reversal_amount)

    columns = []
    kind = "X" if bars[1].close > bars[0].close else "O"
    start = math.floor(bars[0].close / box_size) * box_size
    end = start

    for bar in bars[1:]:
        level = math.floor(bar.close / box_size) * box_size

        if kind == "X":
            if level >= end + box_size:
                end = level
            elif level <= end - box_size * reversal_amount:
                columns.append(_column("X", start, end, box_size))
                kind = "O"
                start = end - box_size
                end = level
        else:
            if level <= end - box_size:
                end = level
            elif level >= end + box_size * reversal_amount:
                columns.append(_column("O", start, end, box_size))
                kind = "X"
                start = end + box_size
                end = level

    # Open column
    columns.append(_column(kind, start, end, box_size))

    patterns = []
    if len(columns) >= 3:
        first, _, last = columns[-3:]
        if last.type == "X" and last.end_price > first.end_price:
            patterns.append("Double Top Breakout (Bullish)")
        if last.type == "O" and last.end_price < first.end_price:
            patterns.append("Double Bottom Breakdown (Bearish)")

    if any("Bullish" in p for p in patterns):
        trend = ChartTrend.BULLISH
    elif any("Bearish" in p for p in patterns):
        trend = ChartTrend.BEARISH
    else:
        trend = ChartTrend.NEUTRAL

    logger.debug(f"Point & Figure: {len(columns)} columns, box {box_size}")

    return PointFigureChart(
        columns=columns,
        trend=trend,
        box_size=box_size,
        reversal_amount=reversal_amount,
        patterns=patterns,
    )
