"""
Unit tests for the derived chart transforms and the chart service.
"""

import pytest

from chartsense.schemas.charts import (
    ChartKind,
    ChartTrend,
    HeikinAshiChart,
    HeikinAshiTrend,
    KagiChart,
    PointFigureChart,
    RenkoChart,
)
from chartsense.schemas.market import Bar, BarSeries
from chartsense.services.charts.service import ChartService
from chartsense.services.charts.transforms import (
    heikin_ashi,
    kagi,
    point_figure,
    renko,
    renko_brick_size,
)


class TestHeikinAshi:
    """Test Heikin-Ashi candles and trend read."""

    def test_too_short(self, flat_bar_factory, settings):
        chart = heikin_ashi(flat_bar_factory([100.0]), settings)

        assert chart.candles == []
        assert chart.trend == HeikinAshiTrend.NEUTRAL
        assert chart.trend_strength == 0

    def test_one_candle_per_bar(self, mock_bars, settings):
        chart = heikin_ashi(mock_bars, settings)

        assert len(chart.candles) == len(mock_bars)
        assert [c.date for c in chart.candles] == [b.date for b in mock_bars]

    def test_first_candle(self, mock_bars, settings):
        first = mock_bars[0]
        candle = heikin_ashi(mock_bars, settings).candles[0]

        assert candle.open == (first.open + first.close) / 2
        assert candle.close == (first.open + first.high + first.low + first.close) / 4
        assert candle.high == first.high
        assert candle.low == first.low

    def test_open_recurrence_is_exact(self, mock_bars, settings):
        candles = heikin_ashi(mock_bars, settings).candles

        for prev, candle in zip(candles, candles[1:]):
            assert candle.open == (prev.open + prev.close) / 2

    def test_close_and_range(self, mock_bars, settings):
        candles = heikin_ashi(mock_bars, settings).candles

        for raw, candle in zip(mock_bars[1:], candles[1:]):
            assert candle.close == (raw.open + raw.high + raw.low + raw.close) / 4
            assert candle.high == max(raw.high, candle.open, candle.close)
            assert candle.low == min(raw.low, candle.open, candle.close)

    def test_strong_bullish_uptrend(self, rising_bars, settings):
        chart = heikin_ashi(rising_bars, settings)

        assert chart.trend == HeikinAshiTrend.STRONG_BULLISH
        assert chart.trend_strength == 100.0

    def test_strong_bearish_downtrend(self, falling_bars, settings):
        chart = heikin_ashi(falling_bars, settings)

        assert chart.trend == HeikinAshiTrend.STRONG_BEARISH
        assert chart.trend_strength == 0.0


class TestRenko:
    """Test Renko bricks."""

    def test_too_short(self, flat_bar_factory, settings):
        chart = renko(flat_bar_factory([100.0] * 4), settings=settings)

        assert chart.bricks == []
        assert chart.trend == ChartTrend.NEUTRAL
        assert chart.brick_size == settings.renko_fallback_brick

    def test_explicit_brick_size(self, flat_bar_factory, settings):
        bars = flat_bar_factory([100.0, 102.5, 105.0, 103.0, 99.0, 98.0])
        chart = renko(bars, brick_size=2.0, settings=settings)

        assert [b.type for b in chart.bricks] == ["up", "up", "down", "down", "down"]
        assert [b.price for b in chart.bricks] == [102.0, 104.0, 102.0, 100.0, 98.0]
        assert [b.date for b in chart.bricks] == [
            bars[1].date, bars[2].date, bars[4].date, bars[4].date, bars[5].date,
        ]
        assert chart.trend == ChartTrend.NEUTRAL

    def test_brick_spacing(self, mock_bars, settings):
        chart = renko(mock_bars, settings=settings)

        assert len(chart.bricks) > 1
        for prev, brick in zip(chart.bricks, chart.bricks[1:]):
            assert abs(brick.price - prev.price) == pytest.approx(chart.brick_size)

    def test_auto_brick_size(self, settings):
        bars = [
            Bar(date=f"2024-01-{i + 1:02d}", open=100, high=101, low=99, close=100)
            for i in range(10)
        ]
        # Half of the mean 2.0 range
        assert renko_brick_size(bars, settings) == 1.0

    def test_zero_range_falls_back(self, flat_bar_factory, settings):
        bars = flat_bar_factory([100.0] * 10)

        assert renko_brick_size(bars, settings) == settings.renko_fallback_brick

    def test_non_positive_brick_size_ignored(self, flat_bar_factory, settings):
        bars = flat_bar_factory([100.0] * 10)
        chart = renko(bars, brick_size=0, settings=settings)

        assert chart.brick_size == settings.renko_fallback_brick

    def test_no_bricks_is_neutral(self, flat_bar_factory, settings):
        chart = renko(flat_bar_factory([100.0] * 10), settings=settings)

        assert chart.bricks == []
        assert chart.trend == ChartTrend.NEUTRAL

    def test_uptrend(self, rising_bars, settings):
        chart = renko(rising_bars, settings=settings)

        assert len(chart.bricks) > 10
        assert all(b.type == "up" for b in chart.bricks)
        assert chart.trend == ChartTrend.BULLISH


class TestKagi:
    """Test Kagi lines."""

    def test_too_short(self, flat_bar_factory, settings):
        chart = kagi(flat_bar_factory([100.0, 110.0]), settings=settings)

        assert chart.lines == []
        assert chart.trend == ChartTrend.NEUTRAL
        assert chart.reversal_percent == 4.0

    def test_reversals(self, flat_bar_factory, settings):
        bars = flat_bar_factory([100.0, 105.0, 110.0, 104.0, 100.0, 95.0, 101.0, 108.0])
        chart = kagi(bars, settings=settings)

        assert [line.type for line in chart.lines] == ["yang", "yin"]
        assert chart.lines[0].start_price == 110.0
        assert chart.lines[0].end_price == 104.0
        assert chart.lines[0].date == bars[3].date
        assert chart.lines[1].start_price == 95.0
        assert chart.lines[1].end_price == 101.0
        assert chart.trend == ChartTrend.NEUTRAL

    def test_small_moves_do_not_reverse(self, flat_bar_factory, settings):
        bars = flat_bar_factory([100.0, 101.0, 102.0, 99.0, 100.0, 98.5])
        chart = kagi(bars, settings=settings)

        assert chart.lines == []
        assert chart.trend == ChartTrend.NEUTRAL

    def test_custom_reversal_percent(self, flat_bar_factory, settings):
        bars = flat_bar_factory([100.0, 101.0, 102.0, 99.0, 100.0, 98.5])
        chart = kagi(bars, reversal_percent=2.0, settings=settings)

        assert chart.reversal_percent == 2.0
        assert len(chart.lines) == 1
        assert chart.lines[0].start_price == 102.0


class TestPointFigure:
    """Test Point & Figure columns."""

    def test_too_short(self, flat_bar_factory, settings):
        chart = point_figure(flat_bar_factory([10.0, 11.0]), settings=settings)

        assert chart.columns == []
        assert chart.trend == ChartTrend.NEUTRAL
        assert chart.box_size == 0.5
        assert chart.reversal_amount == 3

    def test_columns_and_breakout(self, flat_bar_factory, settings):
        bars = flat_bar_factory([10.0, 11.0, 12.0, 13.0, 14.0, 10.0, 9.0, 13.0, 15.0])
        chart = point_figure(bars, box_size=1.0, settings=settings)

        assert [(c.type, c.start_price, c.end_price, c.count) for c in chart.columns] == [
            ("X", 10.0, 14.0, 4),
            ("O", 13.0, 9.0, 4),
            ("X", 10.0, 15.0, 5),
        ]
        assert chart.patterns == ["Double Top Breakout (Bullish)"]
        assert chart.trend == ChartTrend.BULLISH

    def test_breakdown(self, flat_bar_factory, settings):
        bars = flat_bar_factory([15.0, 14.0, 13.0, 12.0, 11.0, 15.0, 16.0, 12.0, 10.0])
        chart = point_figure(bars, box_size=1.0, settings=settings)

        assert [c.type for c in chart.columns] == ["O", "X", "O"]
        assert chart.patterns == ["Double Bottom Breakdown (Bearish)"]
        assert chart.trend == ChartTrend.BEARISH

    def test_single_column(self, rising_bars, settings):
        chart = point_figure(rising_bars, settings=settings)

        assert len(chart.columns) == 1
        assert chart.columns[0].type == "X"
        assert chart.patterns == []
        assert chart.trend == ChartTrend.NEUTRAL


class TestChartService:
    """Test chart dispatch by kind."""

    @pytest.mark.parametrize(
        "kind,expected",
        [
            ("heikin-ashi", HeikinAshiChart),
            ("renko", RenkoChart),
            ("kagi", KagiChart),
            ("point-figure", PointFigureChart),
            (ChartKind.RENKO, RenkoChart),
        ],
    )
    def test_transform(self, kind, expected, mock_bars, settings):
        chart = ChartService(settings).transform(kind, mock_bars)

        assert isinstance(chart, expected)
        assert chart.kind == ChartKind(kind).value

    def test_accepts_bar_series(self, mock_bars, settings):
        chart = ChartService(settings).transform("kagi", BarSeries(bars=mock_bars))
        assert isinstance(chart, KagiChart)

    def test_unknown_kind(self, mock_bars, settings):
        with pytest.raises(ValueError, match="Unknown chart kind"):
            ChartService(settings).transform("line-break", mock_bars)

    def test_execute(self, mock_bars, settings):
        service = ChartService(settings)

        assert service.name == "ChartService"
        assert service.health_check() is True
        assert service.execute(("renko", mock_bars)) == service.renko(mock_bars)
