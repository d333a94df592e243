"""
prediction/entities — Domain data classes
=========================================

Classes
-------
Obstacle, Feature, Point
    Tracked obstacle, its per-cycle snapshot and a 2-D vector.
JunctionFeature, JunctionExit
    Junction context and candidate exits.
LaneGraph, LaneSequence, LaneSegment
    Candidate path hypotheses carrying a mutable probability.
EgoPose, EgoPoseProvider, StaticEgoPoseProvider
    Injected ego-vehicle localization source.
"""

from .junction import JunctionExit, JunctionFeature
from .lane import LaneGraph, LaneSegment, LaneSequence
from .obstacle import Feature, Obstacle, Point
from .ego import EgoPose, EgoPoseProvider, StaticEgoPoseProvider

__all__ = [
    "JunctionExit",
    "JunctionFeature",
    "LaneGraph",
    "LaneSegment",
    "LaneSequence",
    "Feature",
    "Obstacle",
    "Point",
    "EgoPose",
    "EgoPoseProvider",
    "StaticEgoPoseProvider",
]
