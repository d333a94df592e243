"""
prediction/entities/junction.py
===============================
Junction exits as seen from an approaching obstacle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from prediction.entities.obstacle import Point


@dataclass(frozen=True)
class JunctionExit:
    """One lane through which an obstacle may leave the junction.

    Parameters
    ----------
    exit_position : Point
        World-space point where the exit lane leaves the junction.
    exit_heading : float
        Lane heading at that point (radians).
    exit_lane_id : str
        Identifier of the exit lane, matched against lane segments.
    """

    exit_position: "Point"
    exit_heading: float
    exit_lane_id: str


@dataclass
class JunctionFeature:
    """Junction context attached to a :class:`Feature`.

    ``junction_mlp_probability`` is the output record: the evaluator appends
    the 12 per-sector values to it.  An empty list means no prediction is
    available for this cycle, not zero probability.
    """

    junction_id: str
    junction_range: float
    junction_exits: List[JunctionExit] = field(default_factory=list)
    junction_mlp_probability: List[float] = field(default_factory=list)

    def junction_exit_size(self) -> int:
        return len(self.junction_exits)
