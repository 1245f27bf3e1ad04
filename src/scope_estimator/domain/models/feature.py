"""
Scope Estimator - Feature Domain Model

Feature presets (three-point baselines) and complexity levels.
"""
from dataclasses import dataclass
from enum import Enum


def normalize_feature_name(name: str) -> str:
    """Normalized lookup key: trimmed, lowercased, inner whitespace collapsed."""
    return " ".join(name.split()).lower()


class ComplexityLevel(str, Enum):
    """Per-feature complexity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_value(cls, value: "str | ComplexityLevel | None") -> "ComplexityLevel":
        """
        Parse complexity from loose user input.

        Unknown or missing values fall back to LOW.
        """
        if isinstance(value, ComplexityLevel):
            return value
        text = (value or "").strip().lower()
        if text.startswith("high"):
            return cls.HIGH
        if text.startswith("med"):
            return cls.MEDIUM
        return cls.LOW


@dataclass(frozen=True)
class FeaturePreset:
    """
    Baseline three-point estimate for a known feature.

    Immutable value object keyed by normalized name.
    """

    name: str
    optimistic: float
    most_likely: float
    pessimistic: float

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Feature preset name cannot be empty")
        if self.optimistic < 0:
            raise ValueError(f"Optimistic hours cannot be negative: {self.optimistic}")
        if not (self.optimistic <= self.most_likely <= self.pessimistic):
            raise ValueError(
                f"Preset '{self.name}' must satisfy optimistic <= most_likely <= pessimistic, "
                f"got ({self.optimistic}, {self.most_likely}, {self.pessimistic})"
            )

    @property
    def key(self) -> str:
        """Normalized catalog key."""
        return normalize_feature_name(self.name)

    def as_triple(self) -> tuple[float, float, float]:
        return (self.optimistic, self.most_likely, self.pessimistic)

    def to_dict(self) -> dict[str, float | str]:
        """Convert to dict (for JSON serialization)."""
        return {
            "name": self.name,
            "optimistic": self.optimistic,
            "mostLikely": self.most_likely,
            "pessimistic": self.pessimistic,
        }


class ResolutionSource(str, Enum):
    """How a feature name was mapped onto a preset."""

    EXACT = "exact"
    ALIAS = "alias"
    ANALOGY = "analogy"
    GENERIC = "generic"


@dataclass(frozen=True)
class PresetResolution:
    """Result of resolving a feature name against the catalog."""

    requested_name: str
    preset: FeaturePreset
    source: ResolutionSource
    matched_name: str | None = None
    score: float | None = None

    @property
    def is_fallback(self) -> bool:
        """True when the preset did not come from the catalog table itself."""
        return self.source in (ResolutionSource.ANALOGY, ResolutionSource.GENERIC)
