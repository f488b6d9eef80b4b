"""
Analysis Service Interface

Defines the contract for the analysis dispatcher.
"""

from abc import abstractmethod

from chartsense.services.base import BaseService
from chartsense.schemas.analysis import AnalysisRequest, AnalysisVerdict, MethodProfile
from chartsense.schemas.market import BarInput


class AnalysisServiceInterface(BaseService[AnalysisRequest, AnalysisVerdict]):
    """
    Analysis Service Contract.

    INPUT: AnalysisRequest
        - bars: Bar series, oldest first
        - method: One of the AnalysisMethod ids

    OUTPUT: AnalysisVerdict
        - signal: Strong Buy / Buy / Hold / Sell / Strong Sell
        - confidence: 0-100
        - findings: Pattern findings (candlestick / classical methods)
        - interpretation, psychology, use_case: Display text
        - support_levels / resistance_levels: Moving averages and Fibonacci only

    Unknown methods and empty series resolve to a Hold verdict, never an
    exception.
    """

    @property
    def name(self) -> str:
        return "AnalysisService"

    @abstractmethod
    def execute(self, input_data: AnalysisRequest) -> AnalysisVerdict:
        """Run the requested analysis."""
        pass

    @abstractmethod
    def analyze(self, bars: BarInput, method: str) -> AnalysisVerdict:
        """
        Run one analysis method over a bar series.

        Args:
            bars: BarSeries or sequence of Bar, oldest first
            method: Analysis method id

        Returns:
            Normalized verdict
        """
        pass

    @abstractmethod
    def list_methods(self) -> list[MethodProfile]:
        """Catalogue of supported methods."""
        pass
