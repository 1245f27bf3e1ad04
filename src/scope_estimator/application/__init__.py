"""Application layer - Orchestration and use cases"""

from .estimate_aggregator import EstimateAggregator
from .estimation_service import EstimationService
from .workspace import EstimateWorkspace

__all__ = ["EstimateAggregator", "EstimationService", "EstimateWorkspace"]
