"""
Scope Estimator - Feature Catalog Protocol Interface
"""
from typing import Protocol

from scope_estimator.domain.models import FeaturePreset, PresetResolution


class FeatureCatalog(Protocol):
    """Protocol for baseline preset lookup."""

    def __len__(self) -> int:
        """Number of presets in the table."""
        ...

    def lookup(self, name: str) -> FeaturePreset | None:
        """
        Look up a preset by name (case-insensitive, trimmed).

        Returns:
            FeaturePreset, or None when the name is not in the catalog
        """
        ...

    def resolve(self, name: str) -> PresetResolution:
        """
        Resolve a name to a preset, falling back to analogy or a generic baseline.

        Never fails: an estimate is always produced.
        """
        ...
