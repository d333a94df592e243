"""
prediction/common — Shared helpers
==================================

Modules
-------
geometry
    Angle normalisation, frame rotation, sector binning and cubic
    Hermite polynomials.
errors
    :class:`PredictionError` hierarchy.
"""

from .errors import ModelLoadError, ObstacleContractError, PredictionError

__all__ = ["ModelLoadError", "ObstacleContractError", "PredictionError"]
