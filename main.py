#!/usr/bin/env python3
"""
main.py
=======
Run the junction MLP evaluator on a sample four-way junction and log the
predicted probabilities.

Usage::

    JUNCTION_MLP_DEMO_MODEL=1 python main.py

With ``JUNCTION_MLP_DEMO_MODEL=1`` a seeded random model is written to
``JUNCTION_MLP_MODEL_FILE`` when that file does not exist yet.
"""

import logging
import math
import os

import config
from logging_setup import setup_logging
from prediction.container import ObstaclesContainer
from prediction.entities import (
    EgoPose,
    Feature,
    JunctionExit,
    JunctionFeature,
    LaneGraph,
    LaneSegment,
    LaneSequence,
    Point,
    StaticEgoPoseProvider,
)
from prediction.evaluator import JunctionMLPEvaluator
from prediction.feature_output import FeatureOutput
from prediction.model.export import random_model
from prediction.model.loader import save_model
from prediction.settings import EvaluatorSettings, PredictionMode


def sample_feature() -> Feature:
    """An eastbound vehicle 12 m before a junction with three exits."""
    exits = [
        JunctionExit(Point(30.0, 0.0), 0.0, "lane_straight"),
        JunctionExit(Point(18.0, 14.0), math.pi / 2, "lane_left"),
        JunctionExit(Point(16.0, -10.0), -math.pi / 2, "lane_right"),
    ]
    sequences = [
        LaneSequence(0, [LaneSegment("lane_in"), LaneSegment("lane_straight")]),
        LaneSequence(1, [LaneSegment("lane_in"), LaneSegment("lane_left")]),
        LaneSequence(2, [LaneSegment("lane_in"), LaneSegment("lane_right")]),
        LaneSequence(3, [LaneSegment("lane_in"), LaneSegment("lane_u_turn")], 0.05),
    ]
    return Feature(
        position=Point(0.0, 0.0),
        raw_velocity=Point(8.0, 0.0),
        heading=0.0,
        speed=8.0,
        acc=-0.5,
        junction_feature=JunctionFeature("junction_1", 30.0, exits),
        lane_graph=LaneGraph(sequences),
    )


def main():
    setup_logging(logging.INFO)
    log = logging.getLogger("main")

    settings = EvaluatorSettings.from_config()
    if config.JUNCTION_MLP_DEMO_MODEL and not os.path.exists(settings.model_file):
        log.info("Writing demo model to %s", settings.model_file)
        save_model(random_model(), settings.model_file)

    pose_provider = StaticEgoPoseProvider(
        EgoPose(position=Point(-20.0, -3.5), velocity=Point(10.0, 0.0))
    )
    feature_output = FeatureOutput()
    evaluator = JunctionMLPEvaluator(
        pose_provider, settings=settings, feature_logger=feature_output,
    )

    container = ObstaclesContainer()
    obstacle = container.insert_feature(1, sample_feature())

    annotation = evaluator.evaluate(obstacle)
    if settings.mode is PredictionMode.FEATURE_LOGGING:
        feature_output.write_csv(config.FEATURE_OUTPUT_FILE)
    elif annotation is None:
        log.warning("Obstacle [%s] received no prediction.", obstacle.id)
    else:
        log.info("Sector probabilities: %s",
                 ", ".join("%.3f" % p for p in annotation.sector_probabilities))
        for sequence in obstacle.latest_feature.lane_graph.lane_sequences:
            log.info("Lane sequence %d %s → %.3f",
                     sequence.lane_sequence_id, sequence.lane_ids(), sequence.probability)

    log.info("Evaluator metrics: %s", evaluator.metrics.report())


if __name__ == "__main__":
    main()
