"""
Integration tests for the estimation service.

These tests verify that all components work together correctly.
"""

import pytest

from scope_estimator.application import EstimationService
from scope_estimator.domain.models import EstimateContext, GeneratedEstimate
from scope_estimator.domain.models.config import AppConfig, EstimationConfig
from scope_estimator.infrastructure.factory import create_estimation_service


class FakeFeatureExtractor:
    """Stands in for the external prose-understanding collaborator"""

    def __init__(self, features):
        self.features = features
        self.calls = []

    def extract(self, client_request: str) -> list[str]:
        self.calls.append(client_request)
        return list(self.features)


@pytest.fixture
def config():
    return AppConfig.for_testing()


@pytest.fixture
def service(config):
    return create_estimation_service(config)


@pytest.fixture
def questionnaire():
    return {
        "clientRequest": "Clinic booking portal with reminders",
        "projectType": "Web Application",
        "features": ["User Authentication", "Admin Dashboard"],
        "freeTextFeatures": ["admin dashboard", "Notifications"],
        "timeline": "4-6 weeks",
        "budget": "$2,000 - $5,000",
        "notes": "",
    }


class TestEstimationServiceIntegration:
    """Integration tests for estimation service"""

    def test_create_service(self, service):
        assert isinstance(service, EstimationService)
        stats = service.get_stats()
        assert stats["max_workers"] == 2
        assert stats["catalog_size"] == 8
        assert stats["default_hourly_rate"] == 100.0
        assert stats["feature_extractor"] is None

    def test_generate_estimate(self, service, questionnaire):
        context = service.context_from_dict(questionnaire)
        estimate = service.generate_estimate(context)

        features = [line.feature for line in estimate.feature_lines]
        assert features == ["User Authentication", "Admin Dashboard", "Notifications"]
        # 15.5 + 21 + 8.5 = 45 feature hours; buffers 9 + 4.5 + 8 + 4.5
        assert estimate.total_hours == 71.0
        assert estimate.total_cost == 7100.0

    def test_reconcile_over_budget(self, service, questionnaire):
        estimate = service.generate_estimate(service.context_from_dict(questionnaire))
        report = service.reconcile(estimate, questionnaire["budget"])

        assert report.budget.range.max == 5000
        assert report.total_over_budget is True
        assert report.overage_amount == 2100.0
        assert report.lines[0].over_budget is False
        assert report.first_over_budget_index == 3

    def test_reconcile_after_edits(self, service, questionnaire):
        estimate = service.generate_estimate(service.context_from_dict(questionnaire))
        budget = service.parse_budget("$5,000 - $15,000")

        trimmed = service.remove_line(estimate, 1)
        extended = service.add_line(trimmed, "Reports", 12)

        assert service.reconcile(extended, budget).total_over_budget is False
        assert extended.total_hours == estimate.total_hours - 21 + 12

    def test_feature_extractor_merged(self, config, questionnaire):
        extractor = FakeFeatureExtractor(["Notifications", "Calendar Integration"])
        service = create_estimation_service(config, feature_extractor=extractor)

        estimate = service.generate_estimate(service.context_from_dict(questionnaire))

        assert extractor.calls == ["Clinic booking portal with reminders"]
        assert [line.feature for line in estimate.feature_lines] == [
            "User Authentication",
            "Admin Dashboard",
            "Notifications",
            "Calendar Integration",
        ]

    def test_configured_default_rate(self, questionnaire):
        config = AppConfig(_env_file=None, estimation=EstimationConfig(default_hourly_rate=150))
        service = create_estimation_service(config)

        estimate = service.generate_estimate(service.context_from_dict(questionnaire))

        assert estimate.hourly_rate == 150
        assert estimate.total_cost == estimate.total_hours * 150

    def test_configured_default_rate_for_direct_context(self):
        config = AppConfig(_env_file=None, estimation=EstimationConfig(default_hourly_rate=150))
        service = create_estimation_service(config)

        estimate = service.generate_estimate(EstimateContext(explicit_features=("Notifications",)))

        assert estimate.hourly_rate == 150
        assert estimate.breakdown[0].cost == estimate.breakdown[0].hours * 150

    def test_generate_batch_keeps_order(self, service, questionnaire):
        contexts = [
            service.context_from_dict({**questionnaire, "features": [name], "freeTextFeatures": []})
            for name in ("Notifications", "Admin Dashboard", "Onboarding Flow", "Xyzzy")
        ]
        progress = []

        results = service.generate_batch(contexts, progress_callback=lambda done, total: progress.append(done))

        assert [r.breakdown[0].feature for r in results] == [
            "Notifications",
            "Admin Dashboard",
            "Onboarding Flow",
            "Xyzzy",
        ]
        assert results == [service.generate_estimate(c) for c in contexts]
        assert sorted(progress) == [1, 2, 3, 4]

    def test_round_trip_through_storage_document(self, service, questionnaire):
        estimate = service.generate_estimate(service.context_from_dict(questionnaire))
        assert GeneratedEstimate.from_dict(estimate.to_dict()) == estimate
