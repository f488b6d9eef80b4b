"""
chartsense Services

Service layer containing all analysis logic.
Each service has a defined contract and a pure, synchronous implementation.
"""

from chartsense.services.base import BaseService

__all__ = ["BaseService"]
