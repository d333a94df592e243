"""
prediction/entities/lane.py
===========================
Candidate paths of an obstacle: a :class:`LaneGraph` holds ordered
:class:`LaneSequence` hypotheses, each made of :class:`LaneSegment` items.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class LaneSegment:
    lane_id: str


@dataclass
class LaneSequence:
    """One path hypothesis.  ``probability`` is mutable prediction output."""

    lane_sequence_id: int
    lane_segments: List[LaneSegment] = field(default_factory=list)
    probability: float = 0.0

    def lane_ids(self) -> List[str]:
        return [segment.lane_id for segment in self.lane_segments]


@dataclass
class LaneGraph:
    lane_sequences: List[LaneSequence] = field(default_factory=list)

    def lane_sequence_size(self) -> int:
        return len(self.lane_sequences)
