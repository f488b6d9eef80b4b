"""
Classical Chart Pattern Detection

Multi-bar formations built from local peaks and troughs:
head and shoulders, triangles, double tops and bottoms.
"""

import logging
from typing import Optional, Sequence

from chartsense.core.config import Settings, get_settings
from chartsense.schemas.market import Bar
from chartsense.schemas.patterns import (
    ClassicalPatternAnalysis,
    PatternBias,
    PatternCategory,
    PatternFinding,
    PatternKind,
)
from chartsense.services.indicators.calculations import find_extrema

logger = logging.getLogger(__name__)

SHOULDER_TOLERANCE = 0.05
DOUBLE_TOLERANCE = 0.02
STEEP_SLOPE = 0.1
FLAT_SLOPE = 0.05

PSYCHOLOGY = {
    PatternCategory.REVERSAL: "Pattern indicates market psychology shift.",
    PatternCategory.CONTINUATION: "Pattern suggests trend continuation.",
}


def _finding(
    name: str,
    category: PatternCategory,
    bias: PatternBias,
    confidence: float,
    description: str,
    start_index: int,
    end_index: int,
    details: dict,
) -> PatternFinding:
    return PatternFinding(
        name=name,
        kind=PatternKind.CLASSICAL,
        bias=bias,
        category=category,
        description=description,
        psychology=PSYCHOLOGY[category],
        confidence=confidence,
        start_index=start_index,
        end_index=end_index,
        details=details,
    )


def _slope(values: Sequence[float], first: int, second: int) -> float:
    return (values[second] - values[first]) / (second - first)


def detect_classical_patterns(
    bars: Sequence[Bar], settings: Optional[Settings] = None
) -> ClassicalPatternAnalysis:
    """
    Detect classical formations in the trailing `classical_lookback` bars.

    Each rule runs independently, so several findings may coexist.
    Reported indices (findings, peaks, troughs) address the full series.
    """
    settings = settings or get_settings()

    if len(bars) < settings.classical_min_bars:
        logger.debug(f"Classical scan skipped: {len(bars)} bars")
        return ClassicalPatternAnalysis()

    offset = max(0, len(bars) - settings.classical_lookback)
    recent = bars[offset:]
    highs = [b.high for b in recent]
    lows = [b.low for b in recent]

    peaks, troughs = find_extrema(highs, lows, window=2)
    patterns = []

    # Head and Shoulders
    if len(peaks) >= 3:
        left, head, right = peaks[-3:]
        if (
            highs[head] > highs[left]
            and highs[head] > highs[right]
            and abs(highs[left] - highs[right]) / highs[left] < SHOULDER_TOLERANCE
        ):
            patterns.append(_finding(
                "Head and Shoulders", PatternCategory.REVERSAL, PatternBias.BEARISH, 75,
                "Classic reversal pattern with center peak higher than shoulders. "
                "Suggests trend reversal from bullish to bearish.",
                offset + left, offset + right,
                {
                    "left_shoulder": highs[left],
                    "head": highs[head],
                    "right_shoulder": highs[right],
                },
            ))

    # Inverse Head and Shoulders
    if len(troughs) >= 3:
        left, head, right = troughs[-3:]
        if (
            lows[head] < lows[left]
            and lows[head] < lows[right]
            and abs(lows[left] - lows[right]) / lows[left] < SHOULDER_TOLERANCE
        ):
            patterns.append(_finding(
                "Inverse Head and Shoulders", PatternCategory.REVERSAL, PatternBias.BULLISH, 75,
                "Bullish reversal pattern with center trough lower than shoulders. "
                "Suggests trend reversal from bearish to bullish.",
                offset + left, offset + right,
                {
                    "left_shoulder": lows[left],
                    "head": lows[head],
                    "right_shoulder": lows[right],
                },
            ))

    # Triangles
    if len(peaks) >= 2 and len(troughs) >= 2:
        high_slope = _slope(highs, peaks[-2], peaks[-1])
        low_slope = _slope(lows, troughs[-2], troughs[-1])
        start = offset + min(peaks[-2], troughs[-2])
        end = offset + max(peaks[-1], troughs[-1])
        slopes = {"high_slope": round(high_slope, 4), "low_slope": round(low_slope, 4)}

        if high_slope < -STEEP_SLOPE and low_slope > STEEP_SLOPE:
            # Direction depends on the breakout
            patterns.append(_finding(
                "Symmetrical Triangle", PatternCategory.CONTINUATION, PatternBias.BULLISH, 65,
                "Converging trendlines suggest consolidation before breakout. "
                "Direction depends on breakout.",
                start, end, slopes,
            ))
        elif abs(high_slope) < FLAT_SLOPE and low_slope > STEEP_SLOPE:
            patterns.append(_finding(
                "Ascending Triangle", PatternCategory.CONTINUATION, PatternBias.BULLISH, 70,
                "Flat resistance with rising support suggests bullish breakout.",
                start, end, slopes,
            ))
        elif high_slope < -STEEP_SLOPE and abs(low_slope) < FLAT_SLOPE:
            patterns.append(_finding(
                "Descending Triangle", PatternCategory.CONTINUATION, PatternBias.BEARISH, 70,
                "Falling resistance with flat support suggests bearish breakdown.",
                start, end, slopes,
            ))

    # Double Top / Double Bottom
    if len(peaks) >= 2:
        first, second = peaks[-2:]
        if abs(highs[first] - highs[second]) / highs[first] < DOUBLE_TOLERANCE:
            patterns.append(_finding(
                "Double Top", PatternCategory.REVERSAL, PatternBias.BEARISH, 72,
                "Two peaks at similar levels indicate resistance and potential bearish reversal.",
                offset + first, offset + second,
                {"first_peak": highs[first], "second_peak": highs[second]},
            ))

    if len(troughs) >= 2:
        first, second = troughs[-2:]
        if abs(lows[first] - lows[second]) / lows[first] < DOUBLE_TOLERANCE:
            patterns.append(_finding(
                "Double Bottom", PatternCategory.REVERSAL, PatternBias.BULLISH, 72,
                "Two troughs at similar levels indicate support and potential bullish reversal.",
                offset + first, offset + second,
                {"first_trough": lows[first], "second_trough": lows[second]},
            ))

    return ClassicalPatternAnalysis(
        patterns=patterns,
        peaks=[offset + p for p in peaks],
        troughs=[offset + t for t in troughs],
    )
