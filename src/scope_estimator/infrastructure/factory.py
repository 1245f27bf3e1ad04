"""
Scope Estimator - Infrastructure Factory

Factory functions for dependency injection and easy setup.
"""
import logging

from scope_estimator.application import EstimateAggregator, EstimateWorkspace, EstimationService
from scope_estimator.domain.interfaces import AnalogyMatcher, FeatureExtractor
from scope_estimator.domain.models.config import AppConfig
from scope_estimator.infrastructure.budget import BudgetParser, BudgetReconciler
from scope_estimator.infrastructure.catalog import (
    EditDistanceMatcher,
    KeywordOverlapMatcher,
    PresetFeatureCatalog,
)
from scope_estimator.infrastructure.estimation import (
    BufferCalculator,
    FeatureDeduplicator,
    PertEstimator,
    RiskAnalyzer,
)

logger = logging.getLogger(__name__)


def create_analogy_matcher(config: AppConfig) -> AnalogyMatcher:
    """
    Create the analogy matcher selected by estimation.analogy_strategy.

    Args:
        config: Application configuration

    Returns:
        EditDistanceMatcher or KeywordOverlapMatcher
    """
    estimation = config.estimation
    if estimation.analogy_strategy == "keyword":
        return KeywordOverlapMatcher(min_score=estimation.analogy_min_score)
    return EditDistanceMatcher(min_score=estimation.analogy_min_score)


def create_feature_catalog(config: AppConfig) -> PresetFeatureCatalog:
    """
    Create feature catalog with default presets.

    Raises:
        ConfigurationError: If the preset table is inconsistent
    """
    estimation = config.estimation
    return PresetFeatureCatalog(
        matcher=create_analogy_matcher(config),
        generic_baseline=(
            estimation.generic_optimistic,
            estimation.generic_most_likely,
            estimation.generic_pessimistic,
        ),
    )


def create_aggregator(config: AppConfig) -> EstimateAggregator:
    """
    Create estimate aggregator with all engine components.

    Args:
        config: Application configuration

    Returns:
        EstimateAggregator instance
    """
    increment = config.estimation.rounding_increment
    return EstimateAggregator(
        catalog=create_feature_catalog(config),
        estimator=PertEstimator(rounding_increment=increment),
        buffer_calculator=BufferCalculator(config.buffers, rounding_increment=increment),
        risk_analyzer=RiskAnalyzer(config.risk),
        default_hourly_rate=config.estimation.default_hourly_rate,
    )


def create_estimation_service(
    config: AppConfig | None = None,
    feature_extractor: FeatureExtractor | None = None,
) -> EstimationService:
    """
    Create estimation service.

    Args:
        config: Application configuration (loaded from env when omitted)
        feature_extractor: Optional prose-to-features collaborator

    Returns:
        EstimationService instance
    """
    config = config or AppConfig.from_env()
    service = EstimationService(
        deduplicator=FeatureDeduplicator(),
        aggregator=create_aggregator(config),
        budget_parser=BudgetParser(),
        reconciler=BudgetReconciler(),
        feature_extractor=feature_extractor,
        max_workers=config.runtime.max_workers,
        default_hourly_rate=config.estimation.default_hourly_rate,
    )
    logger.info(
        f"EstimationService ready: analogy={config.estimation.analogy_strategy}, "
        f"default rate ${config.estimation.default_hourly_rate:g}/h"
    )
    return service


def create_workspace(config: AppConfig | None = None) -> EstimateWorkspace:
    """Create an edit-serializing estimate workspace."""
    return EstimateWorkspace(create_aggregator(config or AppConfig.from_env()))
