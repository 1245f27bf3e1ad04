"""
Scope Estimator - Estimate Workspace

Holds estimates by identifier and serializes edits per identifier, so two
concurrent add/remove operations cannot overwrite each other's result.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from scope_estimator.domain.exceptions import InvalidInputError
from scope_estimator.domain.models import GeneratedEstimate
from .estimate_aggregator import EstimateAggregator

logger = logging.getLogger(__name__)


class EstimateWorkspace:
    """
    At-most-one writer per estimate identifier.

    Reads return the latest snapshot; edits run the aggregator's pure
    operations under the identifier's lock and store the result. An
    identifier keeps the same lock until it is discarded, and discard
    waits for the edit in flight.
    """

    def __init__(self, aggregator: EstimateAggregator):
        self.aggregator = aggregator
        self._estimates: dict[str, GeneratedEstimate] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def __contains__(self, estimate_id: str) -> bool:
        return estimate_id in self._estimates

    def __len__(self) -> int:
        return len(self._estimates)

    def _unknown(self, estimate_id: str) -> InvalidInputError:
        return InvalidInputError(
            f"Unknown estimate '{estimate_id}'", field_name="estimate_id", value=estimate_id
        )

    @contextmanager
    def _holding(self, estimate_id: str) -> Iterator[None]:
        """Hold the identifier's lock; fails if it was discarded or replaced meanwhile."""
        with self._registry_lock:
            lock = self._locks.get(estimate_id)
        if lock is None:
            raise self._unknown(estimate_id)
        with lock:
            if estimate_id not in self._estimates or self._locks.get(estimate_id) is not lock:
                raise self._unknown(estimate_id)
            yield

    def put(self, estimate_id: str, estimate: GeneratedEstimate) -> None:
        """Store (or replace) the estimate for an identifier."""
        while True:
            with self._registry_lock:
                lock = self._locks.setdefault(estimate_id, threading.Lock())
            with lock:
                # Discarded while waiting: retry with the identifier's current lock
                if self._locks.get(estimate_id) is not lock:
                    continue
                self._estimates[estimate_id] = estimate
                return

    def get(self, estimate_id: str) -> GeneratedEstimate:
        with self._holding(estimate_id):
            return self._estimates[estimate_id]

    def add_line(self, estimate_id: str, feature: str, hours: float) -> GeneratedEstimate:
        """Append a line to the stored estimate; returns the new snapshot."""
        with self._holding(estimate_id):
            updated = self.aggregator.with_line_added(self._estimates[estimate_id], feature, hours)
            self._estimates[estimate_id] = updated
            return updated

    def remove_line(self, estimate_id: str, index: int) -> GeneratedEstimate:
        """Remove a line from the stored estimate; returns the new snapshot."""
        with self._holding(estimate_id):
            updated = self.aggregator.with_line_removed(self._estimates[estimate_id], index)
            self._estimates[estimate_id] = updated
            return updated

    def discard(self, estimate_id: str) -> None:
        """Forget an estimate (no-op when unknown)."""
        with self._registry_lock:
            lock = self._locks.get(estimate_id)
        if lock is None:
            return
        with lock:
            with self._registry_lock:
                if self._locks.get(estimate_id) is lock:
                    del self._locks[estimate_id]
                    self._estimates.pop(estimate_id, None)
        logger.debug(f"Discarded estimate '{estimate_id}'")
