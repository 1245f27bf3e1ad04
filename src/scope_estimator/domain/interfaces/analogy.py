"""
Scope Estimator - Analogy Matcher Protocol Interface

Strategy for mapping an unknown feature name onto the closest known preset.
"""
from typing import Protocol, Sequence


class AnalogyMatcher(Protocol):
    """
    Protocol for closest-analogy matching.

    Implementations may use edit distance, keyword overlap or embeddings;
    the estimator only depends on this contract.
    """

    def best_match(self, name: str, candidates: Sequence[str]) -> tuple[str, float] | None:
        """
        Find the candidate most similar to name.

        Args:
            name: Unknown feature name
            candidates: Known preset names

        Returns:
            (candidate, score 0-100) or None when nothing is close enough
        """
        ...
