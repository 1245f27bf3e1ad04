"""
Scope Estimator - Estimation Service

Main entry point: questionnaire context in, estimate and budget
reconciliation out.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Sequence

from scope_estimator.domain.interfaces import FeatureExtractor
from scope_estimator.domain.models import (
    BudgetInfo,
    BudgetReconciliation,
    DEFAULT_HOURLY_RATE,
    EstimateContext,
    GeneratedEstimate,
)
from scope_estimator.infrastructure.budget import BudgetParser, BudgetReconciler
from scope_estimator.infrastructure.estimation import FeatureDeduplicator
from .estimate_aggregator import EstimateAggregator

logger = logging.getLogger(__name__)


class EstimationService:
    """
    Estimation orchestrator.

    Coordinates:
    - Optional free-text feature extraction (external collaborator)
    - Feature deduplication
    - Estimate aggregation and edits
    - Budget parsing and reconciliation

    Holds no per-estimate state; every call is independent.
    """

    def __init__(
        self,
        deduplicator: FeatureDeduplicator,
        aggregator: EstimateAggregator,
        budget_parser: BudgetParser,
        reconciler: BudgetReconciler,
        feature_extractor: FeatureExtractor | None = None,
        max_workers: int = 4,
        default_hourly_rate: float = DEFAULT_HOURLY_RATE,
    ):
        """
        Initialize EstimationService.

        Args:
            deduplicator: Feature merger
            aggregator: Estimate builder
            budget_parser: Budget string parser
            reconciler: Budget reconciler
            feature_extractor: Optional prose-to-features collaborator
            max_workers: Maximum parallel workers for batch generation
            default_hourly_rate: Rate applied to questionnaires without one
        """
        self.deduplicator = deduplicator
        self.aggregator = aggregator
        self.budget_parser = budget_parser
        self.reconciler = reconciler
        self.feature_extractor = feature_extractor
        self.max_workers = max_workers
        self.default_hourly_rate = default_hourly_rate

    def context_from_dict(self, data: dict) -> EstimateContext:
        """Build a context from a questionnaire document using the configured default rate."""
        return EstimateContext.from_dict(data, default_hourly_rate=self.default_hourly_rate)

    def resolve_features(self, context: EstimateContext) -> list[str]:
        """Deduplicated feature list for a context (explicit first)."""
        free_text = list(context.free_text_features)
        if self.feature_extractor is not None and context.client_request.strip():
            extracted = self.feature_extractor.extract(context.client_request)
            logger.debug(f"Feature extractor returned {len(extracted)} feature(s)")
            free_text.extend(extracted)
        return self.deduplicator.resolve_features(context.explicit_features, free_text)

    def generate_estimate(self, context: EstimateContext) -> GeneratedEstimate:
        """
        Generate an estimate for one questionnaire snapshot.

        Args:
            context: Questionnaire snapshot

        Returns:
            GeneratedEstimate
        """
        features = self.resolve_features(context)
        return self.aggregator.build(context, features)

    def generate_batch(
        self,
        contexts: Sequence[EstimateContext],
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> list[GeneratedEstimate]:
        """
        Generate estimates for unrelated contexts in parallel.

        Args:
            contexts: Questionnaire snapshots
            progress_callback: Optional callback(completed, total)

        Returns:
            Estimates in the same order as contexts
        """
        total = len(contexts)
        results: list[GeneratedEstimate | None] = [None] * total
        logger.info(f"Starting batch generation: {total} contexts, {self.max_workers} workers")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self.generate_estimate, context): index
                for index, context in enumerate(contexts)
            }
            completed = 0
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                results[index] = future.result()
                completed += 1
                if progress_callback:
                    progress_callback(completed, total)

        logger.info(f"Batch generation complete: {total} estimates")
        return results

    def add_line(self, estimate: GeneratedEstimate, feature: str, hours: float) -> GeneratedEstimate:
        return self.aggregator.with_line_added(estimate, feature, hours)

    def remove_line(self, estimate: GeneratedEstimate, index: int) -> GeneratedEstimate:
        return self.aggregator.with_line_removed(estimate, index)

    def parse_budget(self, budget: str | None) -> BudgetInfo:
        return self.budget_parser.parse(budget)

    def reconcile(self, estimate: GeneratedEstimate, budget: str | BudgetInfo | None) -> BudgetReconciliation:
        """
        Reconcile an estimate against a budget.

        Args:
            estimate: Generated (possibly edited) estimate
            budget: Raw budget string or an already parsed BudgetInfo

        Returns:
            BudgetReconciliation
        """
        budget_info = budget if isinstance(budget, BudgetInfo) else self.budget_parser.parse(budget)
        return self.reconciler.reconcile(estimate, budget_info)

    def get_stats(self) -> dict:
        """Service configuration summary."""
        return {
            "max_workers": self.max_workers,
            "default_hourly_rate": self.default_hourly_rate,
            "feature_extractor": type(self.feature_extractor).__name__ if self.feature_extractor else None,
            "catalog_size": len(self.aggregator.catalog),
        }
