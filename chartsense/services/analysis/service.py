"""
Analysis Service Implementation

Maps one analysis method over a bar series to a normalized verdict.
PURE PYTHON - deterministic given the same bars and clock.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from chartsense.core.config import Settings, get_settings
from chartsense.schemas.analysis import (
    AnalysisMethod,
    AnalysisRequest,
    AnalysisVerdict,
    MethodProfile,
    Signal,
)
from chartsense.schemas.charts import HeikinAshiTrend
from chartsense.schemas.indicators import (
    CrossoverType,
    FlowTrend,
    TrendDirection,
    VolatilityZone,
    VolumeConfirmation,
)
from chartsense.schemas.market import Bar, BarInput, as_bars
from chartsense.schemas.patterns import PatternBias
from chartsense.services.analysis.interface import AnalysisServiceInterface
from chartsense.services.analysis.profiles import METHOD_PROFILES
from chartsense.services.charts.service import ChartService
from chartsense.services.indicators.service import IndicatorService
from chartsense.services.patterns.candlestick import detect_candlestick_patterns
from chartsense.services.patterns.classical import detect_classical_patterns

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _trend_signal(trend: Any) -> Signal:
    """Map a bullish/bearish/neutral read to Buy/Sell/Hold."""
    value = getattr(trend, "value", trend)
    if value in ("bullish", "uptrend"):
        return Signal.BUY
    if value in ("bearish", "downtrend"):
        return Signal.SELL
    return Signal.HOLD


def _vote_signal(votes: int) -> Signal:
    if votes >= 2:
        return Signal.STRONG_BUY
    if votes <= -2:
        return Signal.STRONG_SELL
    if votes == 1:
        return Signal.BUY
    if votes == -1:
        return Signal.SELL
    return Signal.HOLD


class AnalysisService(AnalysisServiceInterface):
    """
    Analysis Dispatcher.

    One handler per AnalysisMethod. Each handler returns the verdict fields
    that depend on data (signal, confidence, findings, interpretation,
    levels); psychology and use case come from METHOD_PROFILES.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ):
        self._settings = settings or get_settings()
        self._clock = clock or _utc_now
        self._indicators = IndicatorService(self._settings)
        self._charts = ChartService(self._settings)

        self._handlers: dict[AnalysisMethod, Callable[[list[Bar]], dict]] = {
            AnalysisMethod.CANDLESTICK: self._candlestick,
            AnalysisMethod.BAR: self._bar,
            AnalysisMethod.POINT_FIGURE: self._point_figure,
            AnalysisMethod.HEIKIN_ASHI: self._heikin_ashi,
            AnalysisMethod.RENKO: self._renko,
            AnalysisMethod.KAGI: self._kagi,
            AnalysisMethod.PATTERNS: self._patterns,
            AnalysisMethod.MOVING_AVERAGE: self._moving_average,
            AnalysisMethod.OSCILLATOR: self._oscillator,
            AnalysisMethod.FIBONACCI: self._fibonacci,
            AnalysisMethod.VOLUME: self._volume,
        }

    @property
    def name(self) -> str:
        return "AnalysisService"

    def execute(self, input_data: AnalysisRequest) -> AnalysisVerdict:
        """Run the analysis described by the request."""
        return self.analyze(input_data.bars, input_data.method)

    def analyze(self, bars: BarInput, method: str) -> AnalysisVerdict:
        """
        Run one analysis method over a bar series.

        Unknown methods and empty series return a Hold verdict with
        confidence 50.
        """
        method_id = getattr(method, "value", method)
        bars = as_bars(bars)

        try:
            analysis_method = AnalysisMethod(method_id)
        except ValueError:
            logger.warning(f"Unknown analysis method: {method_id}")
            return self._neutral_verdict(method_id, "Unknown analysis method selected.")

        profile = METHOD_PROFILES[analysis_method]

        if not bars:
            logger.debug(f"No bars supplied for {method_id}")
            return self._neutral_verdict(
                method_id,
                "No price data available for analysis.",
                profile=profile,
            )

        fields = self._handlers[analysis_method](bars)
        logger.debug(
            f"{method_id}: {fields['signal'].value} ({fields['confidence']}%) over {len(bars)} bars"
        )

        return AnalysisVerdict(
            method=method_id,
            psychology=profile.psychology,
            use_case=profile.use_case,
            timestamp=self._clock(),
            **fields,
        )

    def list_methods(self) -> list[MethodProfile]:
        """Catalogue of supported methods, in display order."""
        return [METHOD_PROFILES[method] for method in AnalysisMethod]

    def _neutral_verdict(
        self,
        method: str,
        interpretation: str,
        profile: Optional[MethodProfile] = None,
    ) -> AnalysisVerdict:
        return AnalysisVerdict(
            method=method,
            signal=Signal.HOLD,
            confidence=50,
            interpretation=interpretation,
            psychology=profile.psychology if profile else "",
            use_case=profile.use_case if profile else "",
            timestamp=self._clock(),
        )

    # =========================================================================
    # CHART METHODS
    # =========================================================================

    def _candlestick(self, bars: list[Bar]) -> dict:
        result = detect_candlestick_patterns(bars, self._settings)
        patterns = result.patterns

        return {
            "signal": _trend_signal(result.overall_signal),
            "confidence": max((p.confidence for p in patterns), default=50),
            "findings": patterns,
            "interpretation": result.interpretation,
        }

    def _bar(self, bars: list[Bar]) -> dict:
        result = self._indicators.analyze_bar_chart(bars)

        return {
            "signal": _trend_signal(result.trend),
            "confidence": 60 if result.volatility == VolatilityZone.HIGH else 70,
            "interpretation": result.interpretation,
        }

    def _point_figure(self, bars: list[Bar]) -> dict:
        result = self._charts.point_figure(bars)
        detail = ". ".join(result.patterns) or "Focus on X/O column reversals for signals."

        return {
            "signal": _trend_signal(result.trend),
            "confidence": 72 if result.patterns else 50,
            "interpretation": f"Generated {len(result.columns)} columns. {detail}",
        }

    def _heikin_ashi(self, bars: list[Bar]) -> dict:
        result = self._charts.heikin_ashi(bars)

        if result.trend == HeikinAshiTrend.STRONG_BULLISH:
            signal = Signal.STRONG_BUY
        elif result.trend == HeikinAshiTrend.BULLISH:
            signal = Signal.BUY
        elif result.trend == HeikinAshiTrend.STRONG_BEARISH:
            signal = Signal.STRONG_SELL
        elif result.trend == HeikinAshiTrend.BEARISH:
            signal = Signal.SELL
        else:
            signal = Signal.HOLD

        return {
            "signal": signal,
            "confidence": result.trend_strength,
            "interpretation": (
                f"Trend: {result.trend.value}. Trend strength: {result.trend_strength:.0f}%. "
                "Smooth candles reduce noise for clearer trend identification."
            ),
        }

    def _renko(self, bars: list[Bar]) -> dict:
        result = self._charts.renko(bars)

        return {
            "signal": _trend_signal(result.trend),
            "confidence": 70 if len(result.bricks) > 10 else 55,
            "interpretation": (
                f"{len(result.bricks)} bricks generated with size {result.brick_size}. "
                f"Trend: {result.trend.value}. Focus on brick color changes for reversal signals."
            ),
        }

    def _kagi(self, bars: list[Bar]) -> dict:
        result = self._charts.kagi(bars)

        return {
            "signal": _trend_signal(result.trend),
            "confidence": 68 if len(result.lines) > 5 else 50,
            "interpretation": (
                f"{len(result.lines)} Kagi lines generated. Yang (thick) = demand, "
                f"Yin (thin) = supply. Current trend: {result.trend.value}."
            ),
        }

    # =========================================================================
    # PATTERN METHODS
    # =========================================================================

    def _patterns(self, bars: list[Bar]) -> dict:
        result = detect_classical_patterns(bars, self._settings)
        patterns = result.patterns

        bullish = sum(1 for p in patterns if p.bias == PatternBias.BULLISH)
        bearish = sum(1 for p in patterns if p.bias == PatternBias.BEARISH)
        if bullish > bearish:
            signal = Signal.BUY
        elif bearish > bullish:
            signal = Signal.SELL
        else:
            signal = Signal.HOLD

        if patterns:
            interpretation = f"Detected: {', '.join(p.name for p in patterns)}"
        else:
            interpretation = "No classic chart patterns detected in current data."

        return {
            "signal": signal,
            "confidence": max((p.confidence for p in patterns), default=50),
            "findings": patterns,
            "interpretation": interpretation,
        }

    # =========================================================================
    # INDICATOR METHODS
    # =========================================================================

    def _moving_average(self, bars: list[Bar]) -> dict:
        result = self._indicators.analyze_moving_averages(bars)
        cross_types = {c.type for c in result.crossovers}

        # A cross overrides the trend read
        if CrossoverType.GOLDEN_CROSS in cross_types:
            signal = Signal.STRONG_BUY
        elif CrossoverType.DEATH_CROSS in cross_types:
            signal = Signal.STRONG_SELL
        else:
            signal = _trend_signal(result.trend)

        return {
            "signal": signal,
            "confidence": 82 if result.crossovers else 65,
            "interpretation": result.interpretation,
            "support_levels": [result.sma50, result.sma200],
            "resistance_levels": [result.sma20] if result.trend == TrendDirection.BEARISH else [],
        }

    def _oscillator(self, bars: list[Bar]) -> dict:
        result = self._indicators.analyze_oscillators(bars)
        rsi, macd, stoch = result.rsi, result.macd, result.stochastic

        interpretation = (
            f"RSI: {rsi.value} ({rsi.signal.value}), MACD: {macd.trend.value}, "
            f"Stochastic: {stoch.k:.0f} ({stoch.signal.value})."
        )
        if rsi.divergence:
            interpretation += " DIVERGENCE DETECTED!"

        return {
            "signal": _vote_signal(result.votes),
            "confidence": 78 if rsi.divergence else 68,
            "interpretation": interpretation,
        }

    def _fibonacci(self, bars: list[Bar]) -> dict:
        result = self._indicators.analyze_fibonacci(bars)
        current_price = bars[-1].close
        retrace_382 = result.levels[2]
        retrace_618 = result.levels[4]
        pivots = result.pivot_points

        if current_price < retrace_382.price:
            signal = Signal.BUY
        elif current_price > retrace_618.price:
            signal = Signal.SELL
        else:
            signal = Signal.HOLD

        return {
            "signal": signal,
            "confidence": 70,
            "interpretation": (
                f"Price is {result.current_position}. Key levels: "
                f"38.2% ({retrace_382.price}), 61.8% ({retrace_618.price}). "
                f"Pivot: {pivots.pivot}"
            ),
            "support_levels": [pivots.s1, pivots.s2, retrace_382.price],
            "resistance_levels": [pivots.r1, pivots.r2, retrace_618.price],
        }

    def _volume(self, bars: list[Bar]) -> dict:
        result = self._indicators.analyze_volume(bars)
        confirmed = result.confirmation == VolumeConfirmation.CONFIRMED

        if result.obv_trend == FlowTrend.ACCUMULATION and confirmed:
            signal = Signal.BUY
        elif result.obv_trend == FlowTrend.DISTRIBUTION and confirmed:
            signal = Signal.SELL
        else:
            signal = Signal.HOLD

        if result.volume_spike:
            confidence = 75
        elif confirmed:
            confidence = 70
        else:
            confidence = 55

        return {
            "signal": signal,
            "confidence": confidence,
            "interpretation": result.interpretation,
        }


# Singleton instance
_service_instance: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AnalysisService()
    return _service_instance
