"""
Indicator Service Implementation

Turns a bar series into indicator analyses.
Pure Python/NumPy calculations - no I/O.
"""

import logging
from typing import Optional
import numpy as np

from chartsense.core.config import Settings, get_settings
from chartsense.schemas.analysis import Signal
from chartsense.schemas.market import BarInput, as_bars, bars_to_arrays
from chartsense.schemas.indicators import (
    BarChartAnalysis,
    BarTrend,
    BollingerBandsData,
    ConfidenceScore,
    Crossover,
    CrossoverType,
    FibonacciAnalysis,
    FibonacciLevel,
    FlowTrend,
    MACDData,
    MovingAverageAnalysis,
    OscillatorAnalysis,
    OscillatorZone,
    PivotPoints,
    RSIData,
    StochasticData,
    TechnicalSnapshot,
    TrendDirection,
    VolatilityZone,
    VolumeAnalysis,
    VolumeConfirmation,
)
from chartsense.services.base import BaseService
from chartsense.services.indicators.calculations import (
    sma,
    ema,
    rsi,
    rsi_signal,
    rsi_divergence,
    macd,
    stochastic,
    bollinger_bands,
    volatility,
    obv,
    vpt,
    flow_trend,
    fibonacci_levels,
    find_pivot_points,
    find_support_resistance,
    detect_crossovers,
)

logger = logging.getLogger(__name__)


def _zone(value: float, upper: float, lower: float) -> OscillatorZone:
    if value > upper:
        return OscillatorZone.OVERBOUGHT
    if value < lower:
        return OscillatorZone.OVERSOLD
    return OscillatorZone.NEUTRAL


def _macd_trend(histogram: float, deadband: float) -> TrendDirection:
    if histogram > deadband:
        return TrendDirection.BULLISH
    if histogram < -deadband:
        return TrendDirection.BEARISH
    return TrendDirection.NEUTRAL


def _flow(direction: int) -> FlowTrend:
    if direction > 0:
        return FlowTrend.ACCUMULATION
    if direction < 0:
        return FlowTrend.DISTRIBUTION
    return FlowTrend.NEUTRAL


class IndicatorService(BaseService[BarInput, TechnicalSnapshot]):
    """
    Indicator Service.

    Each analyze_* method reads one family of indicators from the bars and
    classifies it. All calculations are deterministic and reproducible.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "IndicatorService"

    def execute(self, input_data: BarInput) -> TechnicalSnapshot:
        """Calculate the headline indicator snapshot."""
        return self.technical_snapshot(input_data)

    # =========================================================================
    # MOVING AVERAGES
    # =========================================================================

    def analyze_moving_averages(self, data: BarInput) -> MovingAverageAnalysis:
        """SMA 20/50/200, EMA 12/26, SMA50/SMA200 crosses and trend."""
        bars = as_bars(data)
        if not bars:
            return MovingAverageAnalysis(
                sma20=0, sma50=0, sma200=0, ema12=0, ema26=0,
                trend=TrendDirection.NEUTRAL,
                interpretation="No price data available.",
            )

        closes = np.array([b.close for b in bars])

        sma20 = sma(closes, 20)
        sma50 = sma(closes, 50)
        sma200 = sma(closes, min(200, len(closes)))
        ema12 = ema(closes, 12)
        ema26 = ema(closes, 26)

        crossovers = [
            Crossover(type=CrossoverType(kind), date=date)
            for kind, date in detect_crossovers(closes, [b.date for b in bars])
        ]

        current_price = closes[-1]
        if current_price > sma20 and sma20 > sma50:
            trend = TrendDirection.BULLISH
        elif current_price < sma20 and sma20 < sma50:
            trend = TrendDirection.BEARISH
        else:
            trend = TrendDirection.NEUTRAL

        if crossovers:
            if crossovers[-1].type == CrossoverType.GOLDEN_CROSS:
                interpretation = "Golden Cross detected - bullish signal!"
            else:
                interpretation = "Death Cross detected - bearish signal!"
        else:
            position = "above" if current_price > sma50 else "below"
            outlook = {
                TrendDirection.BULLISH: "Uptrend intact.",
                TrendDirection.BEARISH: "Downtrend in progress.",
                TrendDirection.NEUTRAL: "Sideways movement.",
            }[trend]
            interpretation = f"Price is {position} 50 SMA. {outlook}"

        return MovingAverageAnalysis(
            sma20=round(sma20, 2),
            sma50=round(sma50, 2),
            sma200=round(sma200, 2),
            ema12=round(ema12, 2),
            ema26=round(ema26, 2),
            crossovers=crossovers,
            trend=trend,
            interpretation=interpretation,
        )

    # =========================================================================
    # OSCILLATORS
    # =========================================================================

    def analyze_oscillators(self, data: BarInput) -> OscillatorAnalysis:
        """RSI(14), MACD(12, 26) and Stochastic(14) with a combined vote."""
        _, highs, lows, closes, _ = bars_to_arrays(as_bars(data))

        # RSI
        rsi_value = rsi(closes, 14)
        rsi_data = RSIData(
            value=round(rsi_value, 2),
            signal=OscillatorZone(rsi_signal(rsi_value)),
            divergence=rsi_divergence(closes, rsi_value),
        )

        # MACD
        macd_line, signal_line, histogram = macd(closes)
        macd_data = MACDData(
            value=round(macd_line, 2),
            signal_line=round(signal_line, 2),
            histogram=round(histogram, 2),
            trend=_macd_trend(histogram, deadband=0.5),
        )

        # Stochastic
        k, d = stochastic(highs, lows, closes, 14)
        stoch_data = StochasticData(k=round(k, 2), d=round(d, 2), signal=_zone(k, 80, 20))

        # Oversold readings and bullish momentum vote up
        votes = 0
        for zone in (rsi_data.signal, stoch_data.signal):
            if zone == OscillatorZone.OVERSOLD:
                votes += 1
            elif zone == OscillatorZone.OVERBOUGHT:
                votes -= 1
        if macd_data.trend == TrendDirection.BULLISH:
            votes += 1
        elif macd_data.trend == TrendDirection.BEARISH:
            votes -= 1

        if votes >= 2:
            overall = "Strong Buy Signal"
        elif votes <= -2:
            overall = "Strong Sell Signal"
        elif votes == 1:
            overall = "Weak Buy Signal"
        elif votes == -1:
            overall = "Weak Sell Signal"
        else:
            overall = "Neutral - Wait for confirmation"

        return OscillatorAnalysis(
            rsi=rsi_data,
            macd=macd_data,
            stochastic=stoch_data,
            votes=votes,
            overall_signal=overall,
        )

    def bollinger(self, data: BarInput, period: int = 20) -> BollingerBandsData:
        """Bollinger Bands (period, 2 sigma) on closes."""
        closes = np.array([b.close for b in as_bars(data)])
        upper, middle, lower, width = bollinger_bands(closes, period, 2.0)
        return BollingerBandsData(
            upper=round(upper, 2),
            middle=round(middle, 2),
            lower=round(lower, 2),
            width=round(width, 2),
        )

    # =========================================================================
    # VOLUME
    # =========================================================================

    def analyze_volume(self, data: BarInput) -> VolumeAnalysis:
        """OBV / VPT flow, average volume, spikes and price confirmation."""
        bars = as_bars(data)
        if len(bars) < 10:
            logger.debug(f"Volume analysis needs 10 bars, got {len(bars)}")
            return VolumeAnalysis(
                obv=0, obv_trend=FlowTrend.NEUTRAL,
                vpt=0, vpt_trend=FlowTrend.NEUTRAL,
                avg_volume=0, volume_spike=False,
                confirmation=VolumeConfirmation.NEUTRAL,
                interpretation="Insufficient data",
            )

        _, _, _, closes, volumes = bars_to_arrays(bars)

        obv_series = obv(closes, volumes)
        vpt_series = vpt(closes, volumes)
        obv_trend = _flow(flow_trend(obv_series, 10))
        vpt_trend = _flow(flow_trend(vpt_series, 10))

        avg_volume = int(np.mean(volumes[-20:]))
        last_volume = volumes[-1]
        volume_spike = bool(last_volume > avg_volume * 1.5)

        price_up = closes[-1] > closes[-5]
        volume_up = last_volume > avg_volume
        if price_up == volume_up:
            confirmation = VolumeConfirmation.CONFIRMED
        else:
            confirmation = VolumeConfirmation.DIVERGENCE

        if volume_spike:
            if confirmation == VolumeConfirmation.CONFIRMED:
                detail = "Price move is confirmed by volume."
            else:
                detail = "Warning: Price-volume divergence may indicate weak move."
            interpretation = f"Volume spike detected! {detail}"
        else:
            level = "above" if volume_up else "below"
            flow_text = {
                FlowTrend.ACCUMULATION: "OBV shows accumulation (bullish).",
                FlowTrend.DISTRIBUTION: "OBV shows distribution (bearish).",
                FlowTrend.NEUTRAL: "Volume neutral.",
            }[obv_trend]
            interpretation = f"Volume is {level} average. {flow_text}"

        return VolumeAnalysis(
            obv=float(obv_series[-1]),
            obv_trend=obv_trend,
            vpt=float(np.floor(vpt_series[-1])),
            vpt_trend=vpt_trend,
            avg_volume=avg_volume,
            volume_spike=volume_spike,
            confirmation=confirmation,
            interpretation=interpretation,
        )

    # =========================================================================
    # LEVELS
    # =========================================================================

    def analyze_fibonacci(self, data: BarInput) -> FibonacciAnalysis:
        """Retracements over the trailing range and pivots of the latest bar."""
        bars = as_bars(data)
        if not bars:
            zero_pivots = PivotPoints(pivot=0, r1=0, r2=0, r3=0, s1=0, s2=0, s3=0)
            return FibonacciAnalysis(
                swing_high=0, swing_low=0, levels=[],
                pivot_points=zero_pivots, current_position="No price data",
            )

        recent = bars[-self._settings.fibonacci_lookback:]
        high = max(b.high for b in recent)
        low = min(b.low for b in recent)

        levels = [
            FibonacciLevel(level=label, ratio=ratio, price=round(price, 2))
            for label, ratio, price in fibonacci_levels(high, low)
        ]

        last = bars[-1]
        pivots = find_pivot_points(last.high, last.low, last.close, self._settings.pivot_type)

        current_price = last.close
        current_position = ""
        for lower, upper in zip(levels, levels[1:]):
            if lower.price <= current_price < upper.price:
                current_position = f"Between {lower.level} and {upper.level}"
                break
        if not current_position:
            current_position = f"At {levels[-1].level}"

        return FibonacciAnalysis(
            swing_high=high,
            swing_low=low,
            levels=levels,
            pivot_points=PivotPoints(**pivots),
            current_position=current_position,
        )

    # =========================================================================
    # BAR CHART
    # =========================================================================

    def analyze_bar_chart(self, data: BarInput) -> BarChartAnalysis:
        """Half-over-half trend, range volatility and inside/outside bars."""
        bars = as_bars(data)
        if len(bars) < 10:
            return BarChartAnalysis(
                trend=BarTrend.SIDEWAYS,
                volatility=VolatilityZone.LOW,
                interpretation="Insufficient data",
            )

        recent = bars[-20:]
        first_avg = float(np.mean([b.close for b in recent[:10]]))
        second_avg = float(np.mean([b.close for b in recent[-10:]]))

        if second_avg > first_avg * 1.02:
            trend = BarTrend.UPTREND
        elif second_avg < first_avg * 0.98:
            trend = BarTrend.DOWNTREND
        else:
            trend = BarTrend.SIDEWAYS

        avg_range = float(np.mean([(b.high - b.low) / b.low * 100 for b in recent]))
        if avg_range > 3:
            vol_zone = VolatilityZone.HIGH
        elif avg_range > 1.5:
            vol_zone = VolatilityZone.MEDIUM
        else:
            vol_zone = VolatilityZone.LOW

        bar_patterns = []
        last, prev = bars[-1], bars[-2]
        if last.high < prev.high and last.low > prev.low:
            bar_patterns.append("Inside Bar (Consolidation)")
        if last.high > prev.high and last.low < prev.low:
            bar_patterns.append("Outside Bar (Volatility Expansion)")

        detail = ". ".join(bar_patterns) or "No special bar patterns detected."
        return BarChartAnalysis(
            trend=trend,
            volatility=vol_zone,
            bar_patterns=bar_patterns,
            interpretation=f"Market is in {trend.value} with {vol_zone.value} volatility. {detail}",
        )

    # =========================================================================
    # SNAPSHOT + SCORE
    # =========================================================================

    def technical_snapshot(self, data: BarInput) -> TechnicalSnapshot:
        """Headline indicators for a quote panel."""
        closes = np.array([b.close for b in as_bars(data)])

        rsi_value = rsi(closes, 14)
        macd_line, signal_line, histogram = macd(closes)
        support, resistance = find_support_resistance(closes)

        return TechnicalSnapshot(
            rsi=round(rsi_value, 2),
            rsi_signal=OscillatorZone(rsi_signal(rsi_value)),
            macd=MACDData(
                value=round(macd_line, 2),
                signal_line=round(signal_line, 2),
                histogram=round(histogram, 2),
                trend=_macd_trend(histogram, deadband=0.0),
            ),
            sma20=round(sma(closes, 20), 2),
            sma50=round(sma(closes, 50), 2),
            ema12=round(ema(closes, 12), 2),
            ema26=round(ema(closes, 26), 2),
            bollinger_bands=self.bollinger(data),
            volatility=round(volatility(closes), 2),
            support=support,
            resistance=resistance,
        )

    def confidence_score(self, snapshot: TechnicalSnapshot) -> ConfidenceScore:
        """Score a snapshot from 50 with RSI / MACD adjustments."""
        score = 50.0
        reasons = []

        # RSI analysis
        if snapshot.rsi < 30:
            score += 15
            reasons.append("RSI indicates oversold conditions")
        elif snapshot.rsi > 70:
            score -= 15
            reasons.append("RSI indicates overbought conditions")

        # MACD analysis
        if snapshot.macd.histogram > 0 and snapshot.macd.trend == TrendDirection.BULLISH:
            score += 10
            reasons.append("Positive MACD momentum")
        elif snapshot.macd.histogram < 0 and snapshot.macd.trend == TrendDirection.BEARISH:
            score -= 10
            reasons.append("Negative MACD momentum")

        # Bollinger Band analysis
        if snapshot.bollinger_bands.width < 5:
            reasons.append("Low volatility - potential breakout ahead")
        elif snapshot.bollinger_bands.width > 15:
            reasons.append("High volatility detected")

        score = max(0.0, min(100.0, score))

        if score >= 75:
            signal = Signal.STRONG_BUY
        elif score >= 60:
            signal = Signal.BUY
        elif score >= 40:
            signal = Signal.HOLD
        elif score >= 25:
            signal = Signal.SELL
        else:
            signal = Signal.STRONG_SELL

        return ConfidenceScore(score=score, signal=signal, reasons=reasons)


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
