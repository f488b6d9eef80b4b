"""
Pattern Detection

CONTRACT:
    Input:  Bar Series
    Output: CandlestickAnalysis / ClassicalPatternAnalysis

Both detectors emit PatternFinding values with fixed confidence scores.
"""

from chartsense.services.patterns.candlestick import detect_candlestick_patterns
from chartsense.services.patterns.classical import detect_classical_patterns

__all__ = [
    "detect_candlestick_patterns",
    "detect_classical_patterns",
]
