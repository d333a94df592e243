"""
prediction/feature_output.py
============================
Offline capture of extracted feature vectors for model training.

In feature-logging mode the evaluator hands every feature vector to a
:class:`FeatureLogger`.  :class:`FeatureOutput` buffers them in memory and
writes a CSV through pandas; each row holds the obstacle id, timestamp,
junction id, category tag and ``feature_0 … feature_N``.
"""

import logging
import os
from typing import Any, Dict, List, Protocol, Sequence

import pandas as pd

from prediction.entities.obstacle import Feature

log = logging.getLogger(__name__)


class FeatureLogger(Protocol):
    def insert(self, feature: Feature, values: Sequence[float], category: str) -> None:
        ...


class FeatureOutput:
    """In-memory buffer of learning samples."""

    def __init__(self) -> None:
        self._rows: List[Dict[str, Any]] = []

    def insert(self, feature: Feature, values: Sequence[float], category: str) -> None:
        """Buffer one sample tagged with *category* (e.g. ``"junction"``)."""
        row: Dict[str, Any] = {
            "id": feature.id,
            "timestamp": feature.timestamp,
            "junction_id": (
                feature.junction_feature.junction_id
                if feature.junction_feature is not None else ""
            ),
            "category": category,
        }
        for i, value in enumerate(values):
            row[f"feature_{i}"] = float(value)
        self._rows.append(row)

    def size(self) -> int:
        return len(self._rows)

    def clear(self) -> None:
        self._rows.clear()

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self._rows)

    def write_csv(self, file_path: str) -> None:
        """Write the buffered samples to *file_path* and empty the buffer."""
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        df = self.to_dataframe()
        df.to_csv(file_path, index=False)
        log.info("Saved %d learning samples to '%s'.", len(df), os.path.basename(file_path))
        self.clear()
