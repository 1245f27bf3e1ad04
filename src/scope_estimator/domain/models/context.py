"""
Scope Estimator - Estimate Context Domain Model

Questionnaire snapshot passed explicitly into every generation pass.
"""
import math
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import InvalidInputError
from .feature import ComplexityLevel, normalize_feature_name

DEFAULT_HOURLY_RATE = 100.0

RISK_OVERRIDE_KEYS = (
    "ambiguous_requirements",
    "new_technology",
    "external_dependencies",
    "low_client_availability",
)


def _coerce_rate(value: Any) -> float | None:
    """Positive float rate, or None when missing or non-positive."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        rate = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(
            f"Hourly rate must be a number, got {value!r}", field_name="hourly_rate", value=value
        ) from None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


@dataclass(frozen=True)
class EstimateContext:
    """
    Questionnaire snapshot for one estimate request.

    Immutable for the duration of a generation pass. A missing or
    non-positive hourly rate is stored as None and resolved against the
    configured default at build time (see rate_or).
    """

    explicit_features: tuple[str, ...] = field(default_factory=tuple)
    free_text_features: tuple[str, ...] = field(default_factory=tuple)
    timeline: str = ""
    budget: str = ""
    notes: str = ""
    hourly_rate: float | None = None
    client_request: str = ""
    project_type: str = ""
    feature_complexity: dict[str, ComplexityLevel] = field(default_factory=dict)
    risk_overrides: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.explicit_features, tuple):
            object.__setattr__(self, "explicit_features", tuple(self.explicit_features))
        if not isinstance(self.free_text_features, tuple):
            object.__setattr__(self, "free_text_features", tuple(self.free_text_features))

        object.__setattr__(self, "hourly_rate", _coerce_rate(self.hourly_rate))

        # Own copy, keyed by normalized feature name
        complexity = {
            normalize_feature_name(name): ComplexityLevel.from_value(level)
            for name, level in self.feature_complexity.items()
        }
        object.__setattr__(self, "feature_complexity", complexity)

        unknown = set(self.risk_overrides) - set(RISK_OVERRIDE_KEYS)
        if unknown:
            raise ValueError(f"Unknown risk override(s): {', '.join(sorted(unknown))}")
        object.__setattr__(
            self, "risk_overrides", {k: bool(v) for k, v in self.risk_overrides.items()}
        )

    def rate_or(self, default: float = DEFAULT_HOURLY_RATE) -> float:
        """Hourly rate for pricing, falling back to default when unset."""
        return self.hourly_rate if self.hourly_rate is not None else float(default)

    def complexity_for(self, feature: str) -> ComplexityLevel:
        """Complexity attached to a feature (LOW when unspecified)."""
        return self.feature_complexity.get(normalize_feature_name(feature), ComplexityLevel.LOW)

    @property
    def free_text(self) -> str:
        """Client request and notes joined, for keyword scanning."""
        return "\n".join(part for part in (self.client_request, self.notes) if part)

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_hourly_rate: float = DEFAULT_HOURLY_RATE) -> "EstimateContext":
        """
        Create context from a questionnaire document.

        Args:
            data: Dict with keys clientRequest, projectType, features,
                freeTextFeatures, timeline, budget, notes, hourlyRate,
                featureComplexity, riskOverrides (all optional)
            default_hourly_rate: Rate used when hourlyRate is missing or non-positive

        Returns:
            EstimateContext instance

        Raises:
            InvalidInputError: If hourlyRate is present but not numeric
        """
        rate = _coerce_rate(data.get("hourlyRate"))
        if rate is None:
            rate = default_hourly_rate

        return cls(
            explicit_features=tuple(data.get("features") or ()),
            free_text_features=tuple(data.get("freeTextFeatures") or ()),
            timeline=data.get("timeline") or "",
            budget=data.get("budget") or "",
            notes=data.get("notes") or "",
            hourly_rate=rate,
            client_request=data.get("clientRequest") or "",
            project_type=data.get("projectType") or "",
            feature_complexity=dict(data.get("featureComplexity") or {}),
            risk_overrides=dict(data.get("riskOverrides") or {}),
        )
