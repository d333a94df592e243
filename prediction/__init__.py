"""
prediction — Junction exit prediction pipeline
==============================================

Sub-packages
------------
entities
    Lightweight data classes (:class:`Obstacle`, :class:`Feature`,
    :class:`JunctionFeature`, :class:`LaneGraph`, ego pose providers)
    shared by every stage.
common
    Angle / polynomial helpers and the exception hierarchy.
features
    Obstacle, ego-vehicle and junction-exit feature extractors plus the
    assembler producing the 79-value feature vector.
model
    Multi-layer perceptron definition, joblib loader and the numpy
    inference engine.
evaluator
    :class:`JunctionMLPEvaluator` and the exit probability blender.

Modules
-------
container
    :class:`ObstaclesContainer` obstacle store.
feature_output
    :class:`FeatureOutput` offline feature logger (pandas).
metrics
    :class:`EvaluatorMetrics` counter snapshot.
settings
    :class:`EvaluatorSettings` built from :mod:`config`.
api
    Optional FastAPI server exposing the evaluator.
"""
