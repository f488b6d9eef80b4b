"""
chartsense Schema Contracts

This module defines the data contracts between engine components.
Every model is a plain pydantic structure with no I/O attached.
"""

from chartsense.schemas.market import Bar, BarSeries
from chartsense.schemas.indicators import (
    MovingAverageAnalysis,
    OscillatorAnalysis,
    BollingerBandsData,
    VolumeAnalysis,
    FibonacciAnalysis,
    BarChartAnalysis,
    TechnicalSnapshot,
    ConfidenceScore,
)
from chartsense.schemas.charts import (
    ChartKind,
    ChartResult,
    HeikinAshiChart,
    RenkoChart,
    KagiChart,
    PointFigureChart,
)
from chartsense.schemas.patterns import (
    PatternFinding,
    CandlestickAnalysis,
    ClassicalPatternAnalysis,
)
from chartsense.schemas.analysis import (
    AnalysisMethod,
    AnalysisRequest,
    AnalysisVerdict,
    MethodProfile,
    Signal,
)

__all__ = [
    # Market
    "Bar",
    "BarSeries",
    # Indicators
    "MovingAverageAnalysis",
    "OscillatorAnalysis",
    "BollingerBandsData",
    "VolumeAnalysis",
    "FibonacciAnalysis",
    "BarChartAnalysis",
    "TechnicalSnapshot",
    "ConfidenceScore",
    # Charts
    "ChartKind",
    "ChartResult",
    "HeikinAshiChart",
    "RenkoChart",
    "KagiChart",
    "PointFigureChart",
    # Patterns
    "PatternFinding",
    "CandlestickAnalysis",
    "ClassicalPatternAnalysis",
    # Analysis
    "AnalysisMethod",
    "AnalysisRequest",
    "AnalysisVerdict",
    "MethodProfile",
    "Signal",
]
