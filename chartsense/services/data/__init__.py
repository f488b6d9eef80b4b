"""
Synthetic bar data for demos and tests. Never called by the engine itself.
"""

from chartsense.services.data.mock_data import generate_bars, generate_bar_series

__all__ = [
    "generate_bars",
    "generate_bar_series",
]
