"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic.

Every function is total: a series shorter than the lookback yields a
degenerate-but-defined value rather than an exception.
"""

import math
from typing import Optional, Sequence
import numpy as np


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _last(values: np.ndarray) -> float:
    return float(values[-1]) if len(values) > 0 else 0.0


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: Sequence[float], period: int) -> float:
    """Simple Moving Average of the last `period` values."""
    data = _as_array(data)
    if period <= 0 or len(data) < period:
        return _last(data)
    return float(np.mean(data[-period:]))


def ema(data: Sequence[float], period: int) -> float:
    """Exponential Moving Average, seeded with the SMA of the first `period` values."""
    data = _as_array(data)
    if period <= 0 or len(data) < period:
        return _last(data)

    multiplier = 2 / (period + 1)

    # Start with SMA
    result = float(np.mean(data[:period]))

    for price in data[period:]:
        result = (float(price) - result) * multiplier + result

    return result


def detect_crossovers(
    closes: Sequence[float],
    dates: Sequence[str],
    lookback: int = 10,
    min_bars: int = 52,
    fast_period: int = 50,
    slow_period: int = 200,
) -> list[tuple[str, str]]:
    """
    Detect SMA50 / SMA200 crosses over the last `lookback` bars.

    The slow average uses min(200, bars so far) so shorter histories still
    produce a comparison line.

    Returns: list of ("golden-cross" | "death-cross", date)
    """
    closes = _as_array(closes)
    if len(closes) < min_bars:
        return []

    crossovers = []
    for i in range(len(closes) - lookback, len(closes)):
        prev_fast = sma(closes[:i], fast_period)
        curr_fast = sma(closes[: i + 1], fast_period)
        prev_slow = sma(closes[:i], min(slow_period, i))
        curr_slow = sma(closes[: i + 1], min(slow_period, i + 1))

        if prev_fast < prev_slow and curr_fast > curr_slow:
            crossovers.append(("golden-cross", dates[i]))
        elif prev_fast > prev_slow and curr_fast < curr_slow:
            crossovers.append(("death-cross", dates[i]))

    return crossovers


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """
    Relative Strength Index over the trailing `period` price changes.

    Gains and losses are summed over at most `period` changes and divided by
    `period`. Zero average loss reads as 100.
    """
    closes = _as_array(closes)
    if len(closes) < 2:
        return 50.0

    window = min(period, len(closes) - 1)
    deltas = np.diff(closes[-(window + 1):])

    avg_gain = float(np.sum(deltas[deltas > 0])) / period
    avg_loss = float(-np.sum(deltas[deltas < 0])) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def rsi_signal(value: float) -> str:
    """Classify RSI: >70 overbought, <30 oversold."""
    if value > 70:
        return "overbought"
    if value < 30:
        return "oversold"
    return "neutral"


def rsi_divergence(closes: Sequence[float], rsi_value: float, lookback: int = 10) -> bool:
    """Price direction over `lookback` bars disagrees with RSI being above 50."""
    closes = _as_array(closes)
    if len(closes) < lookback:
        return False

    price_up = closes[-1] > closes[-lookback]
    rsi_up = rsi_value > 50
    return bool(price_up != rsi_up)


def macd(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_factor: float = 0.9,
) -> tuple[float, float, float]:
    """
    MACD (Moving Average Convergence Divergence).

    The signal line is approximated as signal_factor x MACD; no EMA of the
    MACD line is tracked.

    Returns: (macd_line, signal_line, histogram)
    """
    macd_line = ema(closes, fast_period) - ema(closes, slow_period)
    signal_line = macd_line * signal_factor
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


def stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    k_period: int = 14,
) -> tuple[float, float]:
    """
    Stochastic Oscillator.

    %D is approximated as 0.8 x %K + 20.

    Returns: (k, d)
    """
    highs, lows, closes = _as_array(highs), _as_array(lows), _as_array(closes)
    if len(closes) == 0:
        return 50.0, 60.0

    window = min(k_period, len(closes))
    highest_high = float(np.max(highs[-window:]))
    lowest_low = float(np.min(lows[-window:]))

    if highest_high == lowest_low:
        k = 50.0
    else:
        k = ((float(closes[-1]) - lowest_low) / (highest_high - lowest_low)) * 100

    d = k * 0.8 + 20
    return k, d


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def mean_range(highs: Sequence[float], lows: Sequence[float], lookback: int = 20) -> float:
    """Mean high-low range over the last `lookback` bars (ATR-like)."""
    highs, lows = _as_array(highs), _as_array(lows)
    if len(highs) == 0:
        return 0.0
    return float(np.mean(highs[-lookback:] - lows[-lookback:]))


def bollinger_bands(
    closes: Sequence[float], period: int = 20, std_dev: float = 2.0
) -> tuple[float, float, float, float]:
    """
    Bollinger Bands.

    Sigma is the population deviation of the trailing window around the
    middle band, so lower <= middle <= upper always holds.

    Returns: (upper, middle, lower, width_percent)
    """
    closes = _as_array(closes)
    if len(closes) == 0:
        return 0.0, 0.0, 0.0, 0.0

    middle = sma(closes, period)
    window = closes[-period:]
    std = float(np.sqrt(np.mean((window - middle) ** 2)))

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)

    width = (upper - lower) / middle * 100 if middle != 0 else 0.0

    return upper, middle, lower, width


def volatility(closes: Sequence[float]) -> float:
    """Population standard deviation of simple returns, in percent."""
    closes = _as_array(closes)
    if len(closes) < 2:
        return 0.0

    previous = closes[:-1]
    with np.errstate(divide="ignore", invalid="ignore"):
        returns = np.diff(closes) / previous
    returns = returns[np.isfinite(returns)]
    if len(returns) == 0:
        return 0.0

    return float(np.std(returns) * 100)


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def obv(closes: Sequence[float], volumes: Sequence[float]) -> np.ndarray:
    """On-Balance Volume, starting at 0 on the first bar."""
    closes, volumes = _as_array(closes), _as_array(volumes)
    result = np.zeros(len(closes))

    for i in range(1, len(closes)):
        if closes[i] > closes[i - 1]:
            result[i] = result[i - 1] + volumes[i]
        elif closes[i] < closes[i - 1]:
            result[i] = result[i - 1] - volumes[i]
        else:
            result[i] = result[i - 1]

    return result


def vpt(closes: Sequence[float], volumes: Sequence[float]) -> np.ndarray:
    """Volume Price Trend: cumulative (price change ratio x volume)."""
    closes, volumes = _as_array(closes), _as_array(volumes)
    result = np.zeros(len(closes))

    for i in range(1, len(closes)):
        previous = closes[i - 1]
        step = 0.0 if previous == 0 else (closes[i] - previous) / previous * volumes[i]
        result[i] = result[i - 1] + step

    return result


def flow_trend(series: Sequence[float], lookback: int = 10) -> int:
    """Sign (+1 / -1 / 0) of the change over the last `lookback` points."""
    series = _as_array(series)
    if len(series) < 2:
        return 0

    start = series[-lookback] if len(series) >= lookback else series[0]
    return int(np.sign(series[-1] - start))


# =============================================================================
# SUPPORT/RESISTANCE
# =============================================================================


FIBONACCI_RATIOS = [
    ("0% (Low)", 0.0),
    ("23.6%", 0.236),
    ("38.2%", 0.382),
    ("50%", 0.5),
    ("61.8%", 0.618),
    ("78.6%", 0.786),
    ("100% (High)", 1.0),
]


def fibonacci_levels(high: float, low: float) -> list[tuple[str, float, float]]:
    """
    Retracement levels measured up from `low`.

    Returns: list of (label, ratio, price), lowest first
    """
    price_range = high - low
    levels = []
    for label, ratio in FIBONACCI_RATIOS:
        price = high if ratio == 1.0 else low + price_range * ratio
        levels.append((label, ratio, price))
    return levels


def find_pivot_points(
    high: float, low: float, close: float, pivot_type: str = "standard"
) -> dict:
    """
    Calculate pivot points.

    Types: standard, fibonacci, camarilla
    """
    if pivot_type == "standard":
        pivot = (high + low + close) / 3
        r1 = (2 * pivot) - low
        r2 = pivot + (high - low)
        r3 = high + 2 * (pivot - low)
        s1 = (2 * pivot) - high
        s2 = pivot - (high - low)
        s3 = low - 2 * (high - pivot)

    elif pivot_type == "fibonacci":
        pivot = (high + low + close) / 3
        diff = high - low
        r1 = pivot + (0.382 * diff)
        r2 = pivot + (0.618 * diff)
        r3 = pivot + diff
        s1 = pivot - (0.382 * diff)
        s2 = pivot - (0.618 * diff)
        s3 = pivot - diff

    elif pivot_type == "camarilla":
        pivot = (high + low + close) / 3
        diff = high - low
        r1 = close + (diff * 1.1 / 12)
        r2 = close + (diff * 1.1 / 6)
        r3 = close + (diff * 1.1 / 4)
        s1 = close - (diff * 1.1 / 12)
        s2 = close - (diff * 1.1 / 6)
        s3 = close - (diff * 1.1 / 4)

    else:
        raise ValueError(f"Unknown pivot type: {pivot_type}")

    return {
        "pivot": round(pivot, 2),
        "r1": round(r1, 2),
        "r2": round(r2, 2),
        "r3": round(r3, 2),
        "s1": round(s1, 2),
        "s2": round(s2, 2),
        "s3": round(s3, 2),
        "type": pivot_type,
    }


def find_extrema(
    highs: Sequence[float], lows: Sequence[float], window: int = 2
) -> tuple[list[int], list[int]]:
    """
    Find local maxima of highs and minima of lows.

    A bar qualifies only if it is strictly beyond every neighbour within
    `window` bars on both sides.

    Returns: (peak_indices, trough_indices)
    """
    highs, lows = _as_array(highs), _as_array(lows)
    peaks = []
    troughs = []

    for i in range(window, len(highs) - window):
        neighbours = [j for j in range(i - window, i + window + 1) if j != i]
        if all(highs[i] > highs[j] for j in neighbours):
            peaks.append(i)
        if all(lows[i] < lows[j] for j in neighbours):
            troughs.append(i)

    return peaks, troughs


def find_support_resistance(closes: Sequence[float]) -> tuple[Optional[float], Optional[float]]:
    """
    Support and resistance as the 10th and 90th percentile closes.

    Returns: (support, resistance)
    """
    closes = _as_array(closes)
    if len(closes) == 0:
        return None, None
    if len(closes) < 5:
        return round(float(closes[0]), 2), round(float(closes[-1]), 2)

    ordered = np.sort(closes)
    support = ordered[math.floor(len(ordered) * 0.1)]
    resistance = ordered[math.floor(len(ordered) * 0.9)]

    return round(float(support), 2), round(float(resistance), 2)
