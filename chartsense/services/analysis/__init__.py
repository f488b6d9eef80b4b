"""
Analysis Dispatcher

CONTRACT:
    Input:  AnalysisRequest (bars + method id)
    Output: AnalysisVerdict

RESPONSIBILITIES:
    - Route a method id to the matching indicator, chart transform or detector
    - Map its native classification onto the five-level signal scale
    - Attach confidence, display text and support/resistance levels

Unknown methods resolve to a Hold verdict. Never raises on short input.
"""

from chartsense.services.analysis.interface import AnalysisServiceInterface
from chartsense.services.analysis.profiles import METHOD_PROFILES
from chartsense.services.analysis.service import AnalysisService, get_analysis_service

__all__ = [
    "AnalysisServiceInterface",
    "METHOD_PROFILES",
    "AnalysisService",
    "get_analysis_service",
]
