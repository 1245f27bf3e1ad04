"""
Scope Estimator - Feature Deduplicator

Merges explicit and free-text-derived features into one ordered unique list.
"""
import logging
from typing import Iterable

from scope_estimator.domain.models import normalize_feature_name

logger = logging.getLogger(__name__)


class FeatureDeduplicator:
    """
    Case-insensitive feature merge.

    Keeps a normalized-key -> display-name map; the first spelling seen
    wins. Explicit features come first in their original order.
    """

    def resolve_features(self, explicit: Iterable[str], free_text: Iterable[str]) -> list[str]:
        """
        Merge two feature sources.

        Args:
            explicit: Features selected in the questionnaire
            free_text: Features inferred from the client's description

        Returns:
            Ordered list with no name appearing twice (compared trimmed, case-insensitive)
        """
        seen: dict[str, str] = {}
        dropped = 0

        for source in (explicit, free_text):
            for raw in source:
                name = (raw or "").strip()
                key = normalize_feature_name(name)
                if not key:
                    continue
                if key in seen:
                    dropped += 1
                    continue
                seen[key] = name

        if dropped:
            logger.debug(f"Deduplicated {dropped} repeated feature name(s)")
        return list(seen.values())
