"""
prediction/entities/ego.py
==========================
Ego-vehicle pose as consumed by the ego-relative feature extractor.

The evaluator receives an :class:`EgoPoseProvider` at construction instead
of looking the localization source up globally.  Any object with a
``get_pose()`` method returning an :class:`EgoPose` or ``None`` qualifies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from prediction.entities.obstacle import Point


@dataclass(frozen=True)
class EgoPose:
    """Ego position and velocity in world coordinates."""

    position: Point
    velocity: Point


class EgoPoseProvider(Protocol):
    def get_pose(self) -> Optional[EgoPose]:
        """Return the current pose, or ``None`` when localization is unavailable."""
        ...


class StaticEgoPoseProvider:
    """Provider returning a fixed pose, updated explicitly by the caller.

    Parameters
    ----------
    pose : EgoPose or None
        Initial pose; ``None`` reports localization as unavailable.
    """

    def __init__(self, pose: Optional[EgoPose] = None) -> None:
        self._pose = pose

    def update(self, pose: Optional[EgoPose]) -> None:
        self._pose = pose

    def get_pose(self) -> Optional[EgoPose]:
        return self._pose
