"""
Scope Estimator - Analogy Matchers

rapidfuzz-backed implementations of the AnalogyMatcher protocol.
"""
import logging
from typing import Sequence

from rapidfuzz import fuzz, process, utils
from rapidfuzz.distance import Levenshtein

logger = logging.getLogger(__name__)


class EditDistanceMatcher:
    """
    Closest preset by normalized Levenshtein similarity.

    Similarity is 1 - distance / max(len), so a short name is not favoured
    just for being short. Ties keep catalog order.
    """

    def __init__(self, min_score: float = 60.0):
        self.min_score = min_score

    def best_match(self, name: str, candidates: Sequence[str]) -> tuple[str, float] | None:
        if not candidates or not name.strip():
            return None

        result = process.extractOne(
            name,
            list(candidates),
            scorer=Levenshtein.normalized_similarity,
            processor=utils.default_process,
            score_cutoff=self.min_score / 100.0,
        )
        if result is None:
            logger.debug(f"No edit-distance analogy for '{name}' (min score {self.min_score})")
            return None

        match, score, _ = result
        return match, round(score * 100.0, 2)


class KeywordOverlapMatcher:
    """Closest preset by shared words (rapidfuzz token_set_ratio)."""

    def __init__(self, min_score: float = 60.0):
        self.min_score = min_score

    def best_match(self, name: str, candidates: Sequence[str]) -> tuple[str, float] | None:
        if not candidates or not name.strip():
            return None

        result = process.extractOne(
            name,
            list(candidates),
            scorer=fuzz.token_set_ratio,
            processor=utils.default_process,
            score_cutoff=self.min_score,
        )
        if result is None:
            logger.debug(f"No keyword analogy for '{name}' (min score {self.min_score})")
            return None

        match, score, _ = result
        return match, round(float(score), 2)
