"""
Scope Estimator - Feature Extractor Protocol Interface

Port for the external prose-understanding capability.
"""
from typing import Protocol


class FeatureExtractor(Protocol):
    """
    Protocol for extracting feature names from free-text client requests.

    Implemented outside this package (e.g. by an LLM client). Must complete
    before the engine runs; the engine itself never blocks on it.
    """

    def extract(self, client_request: str) -> list[str]:
        """
        Extract feature names mentioned in a client request.

        Args:
            client_request: Free-text description from the client

        Returns:
            Feature names (may contain duplicates; deduplicated downstream)
        """
        ...
