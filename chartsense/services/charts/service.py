"""
Chart Service Implementation

Dispatches a bar series to one of the chart transforms by kind.
"""

import logging
from typing import Callable, Optional, Union

from chartsense.core.config import Settings, get_settings
from chartsense.schemas.charts import (
    ChartKind,
    ChartResult,
    HeikinAshiChart,
    KagiChart,
    PointFigureChart,
    RenkoChart,
)
from chartsense.schemas.market import BarInput, as_bars
from chartsense.services.base import BaseService
from chartsense.services.charts.transforms import heikin_ashi, renko, kagi, point_figure

logger = logging.getLogger(__name__)


TRANSFORMS: dict[ChartKind, Callable[..., ChartResult]] = {
    ChartKind.HEIKIN_ASHI: heikin_ashi,
    ChartKind.RENKO: renko,
    ChartKind.KAGI: kagi,
    ChartKind.POINT_FIGURE: point_figure,
}


class ChartService(BaseService[tuple, ChartResult]):
    """
    Chart Transform Service.

    INPUT: (kind, bars)
    OUTPUT: the matching chart result, tagged by `kind`
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "ChartService"

    def execute(self, input_data: tuple) -> ChartResult:
        kind, bars = input_data
        return self.transform(kind, bars)

    def transform(self, kind: Union[ChartKind, str], bars: BarInput) -> ChartResult:
        """
        Build a derived chart.

        Raises:
            ValueError: if kind is not a known chart kind
        """
        try:
            chart_kind = ChartKind(kind)
        except ValueError:
            raise ValueError(f"Unknown chart kind: {kind}") from None

        bars = as_bars(bars)
        logger.debug(f"Transforming {len(bars)} bars to {chart_kind.value}")
        return TRANSFORMS[chart_kind](bars, settings=self._settings)

    def heikin_ashi(self, bars: BarInput) -> HeikinAshiChart:
        return heikin_ashi(as_bars(bars), settings=self._settings)

    def renko(self, bars: BarInput, brick_size: Optional[float] = None) -> RenkoChart:
        return renko(as_bars(bars), brick_size=brick_size, settings=self._settings)

    def kagi(self, bars: BarInput, reversal_percent: Optional[float] = None) -> KagiChart:
        return kagi(as_bars(bars), reversal_percent=reversal_percent, settings=self._settings)

    def point_figure(
        self,
        bars: BarInput,
        box_size: Optional[float] = None,
        reversal_amount: Optional[int] = None,
    ) -> PointFigureChart:
        return point_figure(
            as_bars(bars),
            box_size=box_size,
            reversal_amount=reversal_amount,
            settings=self._settings,
        )


# Singleton instance
_service_instance: Optional[ChartService] = None


def get_chart_service() -> ChartService:
    """Get or create chart service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = ChartService()
    return _service_instance
