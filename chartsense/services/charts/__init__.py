"""
Chart Transform Service

CONTRACT:
    Input:  Bar Series + chart kind
    Output: HeikinAshiChart | RenkoChart | KagiChart | PointFigureChart

RESPONSIBILITIES:
    - Smooth candles (Heikin-Ashi)
    - Fixed-size bricks (Renko)
    - Reversal-threshold lines (Kagi)
    - X/O box columns (Point & Figure)
    - Coarse trend read for each derived chart

PURE PYTHON - deterministic, no I/O.
"""

from chartsense.services.charts.service import ChartService, get_chart_service
from chartsense.services.charts.transforms import heikin_ashi, renko, kagi, point_figure

__all__ = [
    "ChartService",
    "get_chart_service",
    "heikin_ashi",
    "renko",
    "kagi",
    "point_figure",
]
