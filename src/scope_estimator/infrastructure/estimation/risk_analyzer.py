"""
Scope Estimator - Risk Analyzer

Derives RiskSignals from an estimate context once per generation pass.
"""
import logging
import re
from functools import lru_cache

from scope_estimator.domain.models import EstimateContext, RiskSignals, TimelinePressure
from scope_estimator.domain.models.config import RiskConfig

logger = logging.getLogger(__name__)

# Weeks per unit
_UNIT_WEEKS = {
    "day": 1 / 7,
    "week": 1.0,
    "wk": 1.0,
    "month": 52 / 12,
    "mo": 52 / 12,
}

_DURATION_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:(?:-|–|to)\s*(\d+(?:\.\d+)?))?\s*(day|week|wk|month|mo)s?\b",
    re.IGNORECASE,
)


@lru_cache(maxsize=256)
def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern | None:
    if not keywords:
        return None
    alternatives = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)


def _mentions(text: str, keywords: tuple[str, ...]) -> bool:
    pattern = _keyword_pattern(keywords)
    return bool(pattern and pattern.search(text))


def parse_duration_weeks(timeline: str) -> tuple[float, float] | None:
    """
    Parse "N days|weeks|months" or "N-M ..." into (low, high) weeks.

    Returns:
        (low, high) in weeks, or None when no duration is present
    """
    match = _DURATION_RE.search(timeline or "")
    if not match:
        return None
    low = float(match.group(1))
    high = float(match.group(2)) if match.group(2) else low
    unit = match.group(3).lower()
    factor = _UNIT_WEEKS[unit]
    low, high = sorted((low * factor, high * factor))
    return low, high


class RiskAnalyzer:
    """
    Keyword-driven risk derivation.

    Scans the client request and notes for configured cue words; explicit
    overrides on the context take precedence.
    """

    def __init__(self, config: RiskConfig | None = None):
        self.config = config or RiskConfig()

    def classify_timeline(self, timeline: str) -> TimelinePressure:
        """
        Classify a timeline string.

        "2-3 weeks" -> TIGHT, "4-6 weeks" -> NORMAL, "2-3 months" and
        "flexible" -> FLEXIBLE. Empty or unparseable -> NORMAL.
        """
        text = (timeline or "").strip()
        if not text:
            return TimelinePressure.NORMAL

        if _mentions(text, self.config.rush_keywords):
            return TimelinePressure.TIGHT
        if _mentions(text, self.config.flexible_keywords):
            return TimelinePressure.FLEXIBLE

        weeks = parse_duration_weeks(text)
        if weeks is None:
            return TimelinePressure.NORMAL

        low, high = weeks
        if high <= self.config.tight_max_weeks:
            return TimelinePressure.TIGHT
        if low >= self.config.flexible_min_weeks:
            return TimelinePressure.FLEXIBLE
        return TimelinePressure.NORMAL

    def analyze(self, context: EstimateContext) -> RiskSignals:
        """
        Compute risk signals for a context.

        Args:
            context: Questionnaire snapshot

        Returns:
            RiskSignals (read-only for the rest of the pass)
        """
        text = context.free_text
        detected = {
            "ambiguous_requirements": _mentions(text, self.config.ambiguity_keywords),
            "new_technology": _mentions(text, self.config.new_technology_keywords),
            "external_dependencies": _mentions(text, self.config.external_dependency_keywords),
            "low_client_availability": _mentions(text, self.config.low_availability_keywords),
        }
        detected.update(context.risk_overrides)

        signals = RiskSignals(
            timeline_pressure=self.classify_timeline(context.timeline),
            **detected,
        )
        logger.debug(
            f"Risk signals: flags={signals.active_flags}, "
            f"timeline={signals.timeline_pressure.value}"
        )
        return signals
