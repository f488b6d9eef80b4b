"""
chartsense

Price-bar transform and classify engine: technical indicators, derived
charts (Heikin-Ashi, Renko, Kagi, Point & Figure), candlestick and classical
pattern detection, and a single-method analysis dispatcher.
"""

from chartsense.schemas.analysis import AnalysisMethod, AnalysisVerdict, Signal
from chartsense.schemas.market import Bar, BarSeries
from chartsense.services.analysis import AnalysisService, get_analysis_service

__version__ = "0.1.0"

__all__ = [
    "AnalysisMethod",
    "AnalysisVerdict",
    "Signal",
    "Bar",
    "BarSeries",
    "AnalysisService",
    "get_analysis_service",
]
