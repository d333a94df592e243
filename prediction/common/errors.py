"""
prediction/common/errors.py
===========================
Exceptions raised by the prediction pipeline.

Only unrecoverable conditions are raised.  Recoverable ones (missing
position, missing junction feature, feature-size mismatch …) are logged
and the obstacle is left unannotated.
"""


class PredictionError(Exception):
    """Base class for prediction pipeline errors."""


class ModelLoadError(PredictionError):
    """The model file is missing, unreadable or structurally inconsistent."""


class ObstacleContractError(PredictionError):
    """An obstacle violated a caller contract, e.g. it has no history."""
