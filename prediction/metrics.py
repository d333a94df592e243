"""
EvaluatorMetrics: Tracks simple statistics for junction evaluations.
"""

import threading

COUNTERS = ("evaluated", "skipped", "shortcut", "inferred", "mismatched", "logged")


class EvaluatorMetrics:
    """
    Tracks how evaluations ended.

    One instance may be shared by threads evaluating different obstacles;
    updates go through :meth:`increment`, which holds an internal lock.

    Attributes:
        evaluated (int): Obstacles that received a sector probability list.
        skipped (int): Obstacles left unannotated (missing data, no exits).
        shortcut (int): Single-exit evaluations that bypassed the network.
        inferred (int): Multi-exit evaluations that ran the network.
        mismatched (int): Inferences rejected for a feature-size mismatch.
        logged (int): Feature vectors forwarded to the offline feature logger.
    """

    def __init__(self):
        """Initialize all counters to zero."""
        self._lock = threading.Lock()
        self.evaluated = 0
        self.skipped = 0
        self.shortcut = 0
        self.inferred = 0
        self.mismatched = 0
        self.logged = 0

    def increment(self, counter: str, amount: int = 1) -> None:
        """Add *amount* to *counter*.

        Raises:
            ValueError: If *counter* is not one of :data:`COUNTERS`.
        """
        if counter not in COUNTERS:
            raise ValueError(f"Unknown evaluator counter: {counter!r}")
        with self._lock:
            setattr(self, counter, getattr(self, counter) + amount)

    def report(self) -> dict:
        """
        Return a consistent snapshot of current metrics.

        Returns:
            dict: Counter name to value.
        """
        with self._lock:
            return {name: getattr(self, name) for name in COUNTERS}
