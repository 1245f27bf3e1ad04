"""Scope Estimator - deterministic project effort, cost and budget reconciliation."""

__version__ = "0.1.0"
