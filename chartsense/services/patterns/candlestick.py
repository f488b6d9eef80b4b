"""
Candlestick Pattern Detection

Single, two and three bar shapes scanned over the most recent bars.
Confidence values are fixed per pattern.
"""

import logging
from typing import Optional, Sequence

from chartsense.core.config import Settings, get_settings
from chartsense.schemas.market import Bar
from chartsense.schemas.patterns import (
    CandlestickAnalysis,
    PatternBias,
    PatternFinding,
    PatternKind,
)

logger = logging.getLogger(__name__)


def _finding(
    name: str,
    bias: PatternBias,
    description: str,
    psychology: str,
    confidence: float,
    start_index: int,
    end_index: int,
) -> PatternFinding:
    return PatternFinding(
        name=name,
        kind=PatternKind.CANDLESTICK,
        bias=bias,
        description=description,
        psychology=psychology,
        confidence=confidence,
        start_index=start_index,
        end_index=end_index,
    )


def is_doji(bar: Bar) -> bool:
    """Body under 10% of range. A bar with no range at all counts."""
    if bar.range == 0:
        return True
    return bar.body / bar.range < 0.1


def is_hammer(bar: Bar, prev: Bar) -> bool:
    return bar.lower_wick > bar.body * 2 and bar.upper_wick < bar.body * 0.5 and prev.is_bearish


def is_shooting_star(bar: Bar, prev: Bar) -> bool:
    return bar.upper_wick > bar.body * 2 and bar.lower_wick < bar.body * 0.5 and prev.is_bullish


def is_bullish_engulfing(bar: Bar, prev: Bar) -> bool:
    return (
        prev.is_bearish
        and bar.is_bullish
        and bar.open < prev.close
        and bar.close > prev.open
    )


def is_bearish_engulfing(bar: Bar, prev: Bar) -> bool:
    return (
        prev.is_bullish
        and bar.is_bearish
        and bar.open > prev.close
        and bar.close < prev.open
    )


def is_morning_star(bar: Bar, prev: Bar, prev2: Bar) -> bool:
    return prev2.is_bearish and prev.body < prev2.body * 0.3 and bar.is_bullish


def is_evening_star(bar: Bar, prev: Bar, prev2: Bar) -> bool:
    return prev2.is_bullish and prev.body < prev2.body * 0.3 and bar.is_bearish


def detect_candlestick_patterns(
    bars: Sequence[Bar], settings: Optional[Settings] = None
) -> CandlestickAnalysis:
    """
    Scan the last `candlestick_lookback` bars for candlestick shapes.

    Findings are reported oldest first; indices address the full series.
    Overall bias needs a lead of more than one finding.
    """
    settings = settings or get_settings()

    if len(bars) < settings.candlestick_min_bars:
        logger.debug(f"Candlestick scan skipped: {len(bars)} bars")
        return CandlestickAnalysis(interpretation="Insufficient data for pattern analysis")

    patterns = []
    lookback = min(settings.candlestick_lookback, len(bars))

    for i in range(len(bars) - lookback, len(bars)):
        bar = bars[i]
        prev = bars[i - 1] if i > 0 else None
        prev2 = bars[i - 2] if i > 1 else None

        if is_doji(bar):
            patterns.append(_finding(
                "Doji", PatternBias.NEUTRAL,
                "Open and close are nearly equal, indicating indecision.",
                "Neither buyers nor sellers are in control. Market is at equilibrium.",
                75, i, i,
            ))

        if prev is None:
            continue

        if is_hammer(bar, prev):
            patterns.append(_finding(
                "Hammer", PatternBias.BULLISH,
                "Small body with long lower wick after downtrend.",
                "Sellers pushed prices down but buyers recovered. Potential reversal.",
                72, i, i,
            ))

        if is_shooting_star(bar, prev):
            patterns.append(_finding(
                "Shooting Star", PatternBias.BEARISH,
                "Small body with long upper wick after uptrend.",
                "Buyers pushed prices up but sellers rejected. Potential reversal.",
                70, i, i,
            ))

        if is_bullish_engulfing(bar, prev):
            patterns.append(_finding(
                "Bullish Engulfing", PatternBias.BULLISH,
                "Green candle completely engulfs previous red candle.",
                "Strong buyer takeover after selling pressure. High reversal probability.",
                80, i - 1, i,
            ))

        if is_bearish_engulfing(bar, prev):
            patterns.append(_finding(
                "Bearish Engulfing", PatternBias.BEARISH,
                "Red candle completely engulfs previous green candle.",
                "Strong seller takeover after buying pressure. High reversal probability.",
                80, i - 1, i,
            ))

        if prev2 is None:
            continue

        if is_morning_star(bar, prev, prev2):
            patterns.append(_finding(
                "Morning Star", PatternBias.BULLISH,
                "Three-candle bullish reversal pattern.",
                "Bearish momentum exhausted, bulls taking control. Strong reversal signal.",
                85, i - 2, i,
            ))

        if is_evening_star(bar, prev, prev2):
            patterns.append(_finding(
                "Evening Star", PatternBias.BEARISH,
                "Three-candle bearish reversal pattern.",
                "Bullish momentum exhausted, bears taking control. Strong reversal signal.",
                85, i - 2, i,
            ))

    bullish_count = sum(1 for p in patterns if p.bias == PatternBias.BULLISH)
    bearish_count = sum(1 for p in patterns if p.bias == PatternBias.BEARISH)

    if bullish_count > bearish_count + 1:
        overall = PatternBias.BULLISH
    elif bearish_count > bullish_count + 1:
        overall = PatternBias.BEARISH
    else:
        overall = PatternBias.NEUTRAL

    if patterns:
        outlook = {
            PatternBias.BULLISH: "Bullish bias suggests buying pressure.",
            PatternBias.BEARISH: "Bearish bias suggests selling pressure.",
            PatternBias.NEUTRAL: "Mixed signals - wait for confirmation.",
        }[overall]
        interpretation = f"Detected {len(patterns)} candlestick patterns. {outlook}"
    else:
        interpretation = "No significant candlestick patterns detected in recent data."

    return CandlestickAnalysis(
        patterns=patterns,
        overall_signal=overall,
        interpretation=interpretation,
    )
