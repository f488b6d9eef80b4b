"""
Unit tests for the indicator service analyses.
"""

import pytest

from chartsense.schemas.analysis import Signal
from chartsense.schemas.indicators import (
    BarTrend,
    BollingerBandsData,
    CrossoverType,
    FlowTrend,
    MACDData,
    OscillatorZone,
    TechnicalSnapshot,
    TrendDirection,
    VolatilityZone,
    VolumeConfirmation,
)
from chartsense.schemas.market import Bar, BarSeries
from chartsense.services.indicators.service import IndicatorService, get_indicator_service


def create_bar(index: int, open_price: float, high: float, low: float, close: float) -> Bar:
    return Bar(
        date=f"2024-{1 + index // 28:02d}-{1 + index % 28:02d}",
        open=open_price,
        high=high,
        low=low,
        close=close,
        volume=1000,
    )


def create_snapshot(rsi: float, histogram: float, trend: TrendDirection, width: float = 8.0) -> TechnicalSnapshot:
    return TechnicalSnapshot(
        rsi=rsi,
        rsi_signal=OscillatorZone.NEUTRAL,
        macd=MACDData(value=histogram * 10, signal_line=histogram * 9, histogram=histogram, trend=trend),
        sma20=100.0,
        sma50=100.0,
        ema12=100.0,
        ema26=100.0,
        bollinger_bands=BollingerBandsData(upper=104.0, middle=100.0, lower=96.0, width=width),
        volatility=1.0,
    )


@pytest.fixture
def service(settings) -> IndicatorService:
    return IndicatorService(settings)


class TestMovingAverageAnalysis:
    """Test moving average trend and crossovers."""

    def test_uptrend(self, service, rising_bars):
        result = service.analyze_moving_averages(rising_bars)

        assert result.trend == TrendDirection.BULLISH
        assert result.crossovers == []
        assert result.sma20 > result.sma50
        assert result.interpretation == "Price is above 50 SMA. Uptrend intact."

    def test_downtrend(self, service, falling_bars):
        result = service.analyze_moving_averages(falling_bars)

        assert result.trend == TrendDirection.BEARISH
        assert result.interpretation == "Price is below 50 SMA. Downtrend in progress."

    def test_golden_cross(self, service, flat_bar_factory):
        bars = flat_bar_factory([150.0, 40.0] + [100.0] * 58)
        result = service.analyze_moving_averages(bars)

        assert len(result.crossovers) == 1
        assert result.crossovers[0].type == CrossoverType.GOLDEN_CROSS
        assert result.crossovers[0].date == bars[51].date
        assert result.interpretation == "Golden Cross detected - bullish signal!"

    def test_short_series(self, service, flat_bar_factory):
        result = service.analyze_moving_averages(flat_bar_factory([100.0]))

        assert result.sma20 == result.sma200 == result.ema26 == 100.0
        assert result.trend == TrendDirection.NEUTRAL

    def test_empty(self, service):
        result = service.analyze_moving_averages([])

        assert result.trend == TrendDirection.NEUTRAL
        assert result.interpretation == "No price data available."


class TestOscillatorAnalysis:
    """Test RSI / MACD / Stochastic votes."""

    def test_uptrend(self, service, rising_bars):
        result = service.analyze_oscillators(rising_bars)

        assert result.rsi.value == 100.0
        assert result.rsi.signal == OscillatorZone.OVERBOUGHT
        assert result.rsi.divergence is False
        assert result.macd.trend == TrendDirection.BULLISH
        assert result.stochastic.signal == OscillatorZone.OVERBOUGHT
        assert result.votes == -1
        assert result.overall_signal == "Weak Sell Signal"

    def test_single_flat_bar(self, service, flat_bar_factory):
        result = service.analyze_oscillators(flat_bar_factory([100.0]))

        assert result.rsi.value == 50.0
        assert result.stochastic.k == 50.0
        assert result.stochastic.d == 60.0
        assert result.macd.trend == TrendDirection.NEUTRAL
        assert result.votes == 0
        assert result.overall_signal == "Neutral - Wait for confirmation"

    def test_empty(self, service):
        result = service.analyze_oscillators([])
        assert result.votes == 0


class TestVolumeAnalysis:
    """Test OBV flow and price/volume confirmation."""

    def test_insufficient_data(self, service, flat_bar_factory):
        result = service.analyze_volume(flat_bar_factory([100.0] * 9))

        assert result.obv_trend == FlowTrend.NEUTRAL
        assert result.confirmation == VolumeConfirmation.NEUTRAL
        assert result.interpretation == "Insufficient data"

    def test_spike_confirms_rise(self, service, rising_bar_factory):
        bars = rising_bar_factory(20, volumes=[1000] * 19 + [5000])
        result = service.analyze_volume(bars)

        assert result.obv == 23000
        assert result.obv_trend == FlowTrend.ACCUMULATION
        assert result.vpt_trend == FlowTrend.ACCUMULATION
        assert result.avg_volume == 1200
        assert result.volume_spike is True
        assert result.confirmation == VolumeConfirmation.CONFIRMED
        assert result.interpretation == "Volume spike detected! Price move is confirmed by volume."

    def test_rise_on_average_volume_diverges(self, service, rising_bar_factory):
        result = service.analyze_volume(rising_bar_factory(30))

        assert result.volume_spike is False
        assert result.confirmation == VolumeConfirmation.DIVERGENCE
        assert result.interpretation == "Volume is below average. OBV shows accumulation (bullish)."

    def test_short_history_average(self, service, rising_bar_factory):
        result = service.analyze_volume(rising_bar_factory(12))
        assert result.avg_volume == 1000


class TestFibonacciAnalysis:
    """Test retracement levels and pivots."""

    @staticmethod
    def range_bars(last_close: float) -> list[Bar]:
        bars = [create_bar(i, 70.0, 70.0, 70.0, 70.0) for i in range(29)]
        bars[5] = create_bar(5, 70.0, 100.0, 70.0, 70.0)
        bars[10] = create_bar(10, 70.0, 70.0, 50.0, 70.0)
        bars.append(create_bar(29, last_close, last_close, last_close, last_close))
        return bars

    def test_levels(self, service):
        result = service.analyze_fibonacci(self.range_bars(60.0))
        prices = {level.level: level.price for level in result.levels}

        assert result.swing_high == 100.0
        assert result.swing_low == 50.0
        assert prices["50%"] == 75.0
        assert prices["0% (Low)"] == 50.0
        assert prices["100% (High)"] == 100.0
        assert [level.price for level in result.levels] == pytest.approx(
            [50.0, 61.8, 69.1, 75.0, 80.9, 89.3, 100.0]
        )

    def test_position(self, service):
        result = service.analyze_fibonacci(self.range_bars(60.0))
        assert result.current_position == "Between 0% (Low) and 23.6%"

    def test_position_at_high(self, service):
        result = service.analyze_fibonacci(self.range_bars(100.0))
        assert result.current_position == "At 100% (High)"

    def test_pivots_from_last_bar(self, service):
        result = service.analyze_fibonacci(self.range_bars(60.0))

        assert result.pivot_points.pivot == 60.0
        assert result.pivot_points.r1 == 60.0
        assert result.pivot_points.type == "standard"

    def test_pivot_type_from_settings(self, settings):
        service = IndicatorService(settings.model_copy(update={"pivot_type": "camarilla"}))
        result = service.analyze_fibonacci(self.range_bars(60.0))

        assert result.pivot_points.type == "camarilla"

    def test_empty(self, service):
        result = service.analyze_fibonacci([])

        assert result.levels == []
        assert result.current_position == "No price data"


class TestBarChartAnalysis:
    """Test OHLC bar trend and volatility."""

    def test_uptrend(self, service, rising_bar_factory):
        result = service.analyze_bar_chart(rising_bar_factory(20))

        assert result.trend == BarTrend.UPTREND
        assert result.volatility == VolatilityZone.MEDIUM
        assert result.bar_patterns == []
        assert result.interpretation == (
            "Market is in uptrend with medium volatility. No special bar patterns detected."
        )

    def test_inside_bar(self, service):
        bars = [create_bar(i, 100.0, 102.0, 98.0, 100.0) for i in range(11)]
        bars.append(create_bar(11, 100.0, 101.0, 99.0, 100.0))
        result = service.analyze_bar_chart(bars)

        assert result.trend == BarTrend.SIDEWAYS
        assert result.volatility == VolatilityZone.HIGH
        assert result.bar_patterns == ["Inside Bar (Consolidation)"]

    def test_outside_bar(self, service):
        bars = [create_bar(i, 100.0, 100.5, 99.5, 100.0) for i in range(11)]
        bars.append(create_bar(11, 100.0, 101.0, 99.0, 100.0))
        result = service.analyze_bar_chart(bars)

        assert result.bar_patterns == ["Outside Bar (Volatility Expansion)"]
        assert result.volatility == VolatilityZone.LOW

    def test_insufficient_data(self, service, flat_bar_factory):
        result = service.analyze_bar_chart(flat_bar_factory([100.0] * 5))

        assert result.trend == BarTrend.SIDEWAYS
        assert result.volatility == VolatilityZone.LOW
        assert result.interpretation == "Insufficient data"


class TestSnapshotAndScore:
    """Test the technical snapshot and confidence score."""

    def test_snapshot(self, service, mock_bars):
        snapshot = service.technical_snapshot(mock_bars)

        assert 0 <= snapshot.rsi <= 100
        assert snapshot.bollinger_bands.lower <= snapshot.bollinger_bands.upper
        assert snapshot.support <= snapshot.resistance
        assert snapshot.volatility > 0

    def test_execute_returns_snapshot(self, service, mock_bars):
        assert service.execute(BarSeries(bars=mock_bars)) == service.technical_snapshot(mock_bars)

    def test_snapshot_empty(self, service):
        snapshot = service.technical_snapshot([])

        assert snapshot.rsi == 50.0
        assert snapshot.support is None
        assert snapshot.bollinger_bands.width == 0

    def test_oversold_with_momentum(self, service):
        score = service.confidence_score(create_snapshot(25.0, 1.2, TrendDirection.BULLISH))

        assert score.score == 75
        assert score.signal == Signal.STRONG_BUY
        assert score.reasons == [
            "RSI indicates oversold conditions",
            "Positive MACD momentum",
        ]

    def test_overbought_with_negative_momentum(self, service):
        score = service.confidence_score(create_snapshot(80.0, -1.2, TrendDirection.BEARISH))

        assert score.score == 25
        assert score.signal == Signal.SELL

    def test_neutral_with_squeeze(self, service):
        score = service.confidence_score(create_snapshot(50.0, 0.0, TrendDirection.NEUTRAL, width=3.0))

        assert score.score == 50
        assert score.signal == Signal.HOLD
        assert score.reasons == ["Low volatility - potential breakout ahead"]

    def test_wide_bands(self, service):
        score = service.confidence_score(create_snapshot(65.0, 0.0, TrendDirection.NEUTRAL, width=20.0))
        assert score.reasons == ["High volatility detected"]


class TestServiceContract:
    """Test service metadata."""

    def test_name_and_health(self, service):
        assert service.name == "IndicatorService"
        assert service.health_check() is True

    def test_singleton(self):
        assert get_indicator_service() is get_indicator_service()
