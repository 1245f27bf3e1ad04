"""
Usage examples for Scope Estimator

This file demonstrates how to generate, edit and reconcile an estimate.
"""

import logging

from scope_estimator.domain.models import EstimateContext
from scope_estimator.domain.models.config import AppConfig, EstimationConfig
from scope_estimator.infrastructure.budget import format_currency
from scope_estimator.infrastructure.factory import create_estimation_service, create_workspace


# === EXAMPLE 1: Quick Start ===

def example_quick_start():
    """Questionnaire in, estimate out"""

    service = create_estimation_service()

    context = service.context_from_dict({
        "clientRequest": "Booking portal for a chain of clinics",
        "projectType": "Web Application",
        "features": ["User Authentication", "Admin Dashboard", "Notifications"],
        "timeline": "4-6 weeks",
        "budget": "$5,000 - $15,000",
        "notes": "Payment provider still TBD",
    })
    estimate = service.generate_estimate(context)

    for line in estimate.breakdown:
        print(f"{line.feature:<28} {line.hours:>6}h  {format_currency(line.cost)}")
    print(f"Total: {estimate.total_hours}h, {format_currency(estimate.total_cost)}")


# === EXAMPLE 2: Budget Reconciliation ===

def example_budget_warnings():
    """Flag breakdown lines whose running total exceeds the budget"""

    service = create_estimation_service()
    context = EstimateContext(
        explicit_features=("User Authentication", "Admin Dashboard", "Calendar Integration"),
        timeline="2-3 weeks",
        budget="$2,000 - $5,000",
    )
    estimate = service.generate_estimate(context)
    report = service.reconcile(estimate, context.budget)

    for status in report.lines:
        marker = "OVER" if status.over_budget else "ok"
        print(f"[{marker}] {status.feature}: running total {format_currency(status.cumulative_cost)}")

    if report.total_over_budget:
        print(f"Over budget by {format_currency(report.overage_amount)}")


# === EXAMPLE 3: Editing an Estimate ===

def example_edits():
    """Add/remove lines; one writer per estimate id"""

    config = AppConfig.from_env()
    service = create_estimation_service(config)
    workspace = create_workspace(config)

    estimate = service.generate_estimate(EstimateContext(explicit_features=("Onboarding Flow",)))
    workspace.put("client-42", estimate)

    workspace.add_line("client-42", "Custom Reports", 14)
    updated = workspace.remove_line("client-42", 0)

    print(updated.to_dict())


# === EXAMPLE 4: Custom Configuration ===

def example_custom_config():
    """Keyword-overlap analogies and a different default rate"""

    config = AppConfig(
        estimation=EstimationConfig(
            default_hourly_rate=120,
            analogy_strategy="keyword",
            analogy_min_score=70,
        )
    )
    service = create_estimation_service(config)

    context = service.context_from_dict({"features": ["Calendar Sync Integration", "Referral Program"]})
    estimate = service.generate_estimate(context)
    print(estimate.to_dict())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    example_quick_start()
    example_budget_warnings()
    example_edits()
    example_custom_config()
