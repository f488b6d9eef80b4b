"""
Indicator Service

CONTRACT:
    Input:  Bar Series
    Output: indicator analyses (moving averages, oscillators, volume,
            Fibonacci / pivots, bar chart, snapshot, confidence score)

RESPONSIBILITIES:
    - Calculate SMA, EMA, RSI, MACD, Bollinger Bands, Stochastic
    - Track volume flow (OBV, VPT)
    - Derive retracement and pivot levels
    - Classify each indicator family

PURE PYTHON - No I/O.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from chartsense.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorService",
    "get_indicator_service",
]
