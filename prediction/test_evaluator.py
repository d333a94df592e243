#!/usr/bin/env python3
"""
Tests for the junction MLP evaluator, probability blending and the
offline feature output.
"""

from __future__ import annotations

import math
import os
import tempfile
import threading
import unittest
from unittest import mock

import joblib
import numpy as np
import pandas as pd

from prediction.common.errors import ModelLoadError
from prediction.container import ObstaclesContainer
from prediction.entities import (
    EgoPose,
    Feature,
    JunctionExit,
    JunctionFeature,
    LaneGraph,
    LaneSegment,
    LaneSequence,
    Obstacle,
    Point,
    StaticEgoPoseProvider,
)
from prediction.evaluator import (
    JunctionMLPEvaluator,
    assign_lane_sequence_probabilities,
    smooth_sector_probability,
)
from prediction.feature_output import FeatureOutput
from prediction.model import Activation, Layer, Model, clear_model_cache
from prediction.settings import EvaluatorSettings, PredictionMode

_ONE_HOT = [1.0] + [0.0] * 11

# Exits around an eastbound obstacle at the origin.
_EXIT_AHEAD = JunctionExit(Point(20.0, 0.0), 0.0, "ahead")              # sector 0
_EXIT_LEFT = JunctionExit(Point(10.0, 10.0), math.pi / 2, "left")       # sector 1
_EXIT_RIGHT = JunctionExit(                                             # sector 11
    Point(20.0 * math.cos(math.radians(15.0)), -20.0 * math.sin(math.radians(15.0))),
    -math.pi / 2,
    "right",
)


def _constant_model(output, dim_input: int = 79) -> Model:
    """Network that ignores its input and returns *output* through a RELU."""
    return Model(
        dim_input=dim_input,
        layers=(Layer(
            weights=np.zeros((dim_input, 12)),
            bias=np.asarray(output, dtype=np.float64),
            activation=Activation.RELU,
        ),),
    )


def _lane_graph() -> LaneGraph:
    return LaneGraph([
        LaneSequence(0, [LaneSegment("in"), LaneSegment("ahead")]),
        LaneSequence(1, [LaneSegment("in"), LaneSegment("left")]),
        LaneSequence(2, [LaneSegment("in"), LaneSegment("right")]),
        LaneSequence(3, [LaneSegment("in"), LaneSegment("elsewhere")], 0.7),
        LaneSequence(4, [LaneSegment("ahead"), LaneSegment("left")]),
    ])


def _obstacle(exits, lane_graph=None) -> Obstacle:
    feature = Feature(
        id=1,
        position=Point(0.0, 0.0),
        raw_velocity=Point(5.0, 0.0),
        speed=5.0,
        junction_feature=JunctionFeature("J1", 40.0, list(exits)),
        lane_graph=lane_graph if lane_graph is not None else _lane_graph(),
    )
    return Obstacle(id=1, history=[feature])


def _evaluator(model: Model, **kwargs) -> JunctionMLPEvaluator:
    settings = kwargs.pop("settings", EvaluatorSettings(model_file="unused.pkl"))
    pose = EgoPose(Point(-10.0, 2.0), Point(4.0, 0.0))
    return JunctionMLPEvaluator(
        StaticEgoPoseProvider(pose), settings=settings, model=model, **kwargs,
    )


class SmoothingTests(unittest.TestCase):
    def test_one_hot_neighbourhood(self) -> None:
        self.assertEqual(smooth_sector_probability(_ONE_HOT, 0), 0.5)
        self.assertEqual(smooth_sector_probability(_ONE_HOT, 1), 0.25)
        self.assertEqual(smooth_sector_probability(_ONE_HOT, 11), 0.25)
        self.assertEqual(smooth_sector_probability(_ONE_HOT, 6), 0.0)

    def test_last_matching_segment_wins(self) -> None:
        assigned = assign_lane_sequence_probabilities(
            _lane_graph(), {"ahead": 0.5, "left": 0.25},
        )
        self.assertEqual(assigned, {0: 0.5, 1: 0.25, 4: 0.25})


class EvaluatorTests(unittest.TestCase):
    def test_multi_exit_blending(self) -> None:
        evaluator = _evaluator(_constant_model(_ONE_HOT))
        obstacle = _obstacle([_EXIT_AHEAD, _EXIT_LEFT, _EXIT_RIGHT])

        annotation = evaluator.evaluate(obstacle)

        self.assertIsNotNone(annotation)
        feature = obstacle.latest_feature
        self.assertEqual(feature.junction_feature.junction_mlp_probability, _ONE_HOT)
        self.assertEqual(annotation.exit_probabilities,
                         {"ahead": 0.5, "left": 0.25, "right": 0.25})
        probabilities = [s.probability for s in feature.lane_graph.lane_sequences]
        self.assertEqual(probabilities, [0.5, 0.25, 0.25, 0.7, 0.25])
        self.assertEqual(evaluator.metrics.inferred, 1)
        self.assertEqual(evaluator.metrics.evaluated, 1)

    def test_unmatched_sequence_survives_repeated_evaluation(self) -> None:
        evaluator = _evaluator(_constant_model(_ONE_HOT))
        obstacle = _obstacle([_EXIT_AHEAD, _EXIT_LEFT])
        evaluator.evaluate(obstacle)
        evaluator.evaluate(obstacle)
        sequences = obstacle.latest_feature.lane_graph.lane_sequences
        self.assertEqual(sequences[3].probability, 0.7)
        self.assertEqual(sequences[2].probability, 0.0)

    def test_blended_values_are_not_renormalised(self) -> None:
        evaluator = _evaluator(_constant_model([0.5] * 12))
        obstacle = _obstacle([_EXIT_AHEAD, _EXIT_LEFT, _EXIT_RIGHT])
        annotation = evaluator.evaluate(obstacle)
        self.assertAlmostEqual(sum(annotation.exit_probabilities.values()), 1.5)

    def test_single_exit_skips_inference(self) -> None:
        evaluator = _evaluator(_constant_model(_ONE_HOT))
        obstacle = _obstacle([_EXIT_AHEAD])

        with mock.patch.object(evaluator.engine, "forward") as forward:
            annotation = evaluator.evaluate(obstacle)
            forward.assert_not_called()

        expected = [0.5] + [1.0] * 11  # norm_dist of every sector
        self.assertEqual(annotation.sector_probabilities, expected)
        sequences = obstacle.latest_feature.lane_graph.lane_sequences
        self.assertAlmostEqual(sequences[0].probability, 0.75)
        self.assertEqual(sequences[1].probability, 0.0)
        self.assertEqual(evaluator.metrics.shortcut, 1)

    def test_dimension_mismatch_leaves_obstacle_untouched(self) -> None:
        evaluator = _evaluator(_constant_model(_ONE_HOT, dim_input=10))
        obstacle = _obstacle([_EXIT_AHEAD, _EXIT_LEFT])

        self.assertIsNone(evaluator.evaluate(obstacle))

        feature = obstacle.latest_feature
        self.assertEqual(feature.junction_feature.junction_mlp_probability, [])
        probabilities = [s.probability for s in feature.lane_graph.lane_sequences]
        self.assertEqual(probabilities, [0.0, 0.0, 0.0, 0.7, 0.0])
        self.assertEqual(evaluator.metrics.mismatched, 1)

    def test_no_lane_sequences_still_attaches_sector_probabilities(self) -> None:
        evaluator = _evaluator(_constant_model(_ONE_HOT))
        obstacle = _obstacle([_EXIT_AHEAD, _EXIT_LEFT], lane_graph=LaneGraph())
        annotation = evaluator.evaluate(obstacle)
        self.assertEqual(annotation.lane_sequence_probabilities, {})
        self.assertEqual(
            obstacle.latest_feature.junction_feature.junction_mlp_probability, _ONE_HOT,
        )

    def test_recoverable_conditions_return_none(self) -> None:
        evaluator = _evaluator(_constant_model(_ONE_HOT))

        self.assertIsNone(evaluator.evaluate(Obstacle(id=9)))

        no_exits = _obstacle([])
        self.assertIsNone(evaluator.evaluate(no_exits))

        no_junction = _obstacle([_EXIT_AHEAD])
        no_junction.latest_feature.junction_feature = None
        self.assertIsNone(evaluator.evaluate(no_junction))

        no_position = _obstacle([_EXIT_AHEAD, _EXIT_LEFT])
        no_position.latest_feature.position = None
        self.assertIsNone(evaluator.evaluate(no_position))
        self.assertEqual(
            no_position.latest_feature.junction_feature.junction_mlp_probability, [],
        )

        self.assertEqual(evaluator.metrics.skipped, 4)

    def test_compute_does_not_mutate(self) -> None:
        evaluator = _evaluator(_constant_model(_ONE_HOT))
        obstacle = _obstacle([_EXIT_AHEAD, _EXIT_LEFT])
        annotation = evaluator.compute(obstacle)
        self.assertEqual(annotation.lane_sequence_probabilities[0], 0.5)
        self.assertEqual(obstacle.latest_feature.lane_graph.lane_sequences[0].probability, 0.0)

    def test_model_must_output_twelve_sectors(self) -> None:
        model = Model(
            dim_input=79,
            layers=(Layer(np.zeros((79, 3)), np.zeros(3), Activation.SOFTMAX),),
        )
        with self.assertRaises(ModelLoadError):
            _evaluator(model)

    def test_malformed_model_is_fatal_at_construction(self) -> None:
        model = Model(
            dim_input=79,
            layers=(Layer(np.zeros((5, 12)), np.zeros(12), Activation.SOFTMAX),),
        )
        with self.assertRaises(ModelLoadError):
            _evaluator(model)

    def test_malformed_model_file_is_fatal_at_construction(self) -> None:
        model = Model(
            dim_input=79,
            layers=(Layer(np.zeros((5, 12)), np.zeros(12), Activation.SOFTMAX),),
        )
        clear_model_cache()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "junction.pkl")
            joblib.dump(model, path)
            settings = EvaluatorSettings(model_file=path)
            with self.assertRaises(ModelLoadError):
                JunctionMLPEvaluator(StaticEgoPoseProvider(None), settings=settings)

    def test_missing_model_file_is_fatal(self) -> None:
        settings = EvaluatorSettings(model_file="/nonexistent/junction.pkl")
        with self.assertRaises(ModelLoadError):
            JunctionMLPEvaluator(StaticEgoPoseProvider(None), settings=settings)


class FeatureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = EvaluatorSettings(
            model_file="unused.pkl", mode=PredictionMode.FEATURE_LOGGING,
        )

    def test_requires_a_logger(self) -> None:
        with self.assertRaises(ValueError):
            _evaluator(_constant_model(_ONE_HOT), settings=self.settings)

    def test_features_are_logged_instead_of_predicted(self) -> None:
        output = FeatureOutput()
        evaluator = _evaluator(
            _constant_model(_ONE_HOT), settings=self.settings, feature_logger=output,
        )
        obstacle = _obstacle([_EXIT_AHEAD, _EXIT_LEFT])

        with mock.patch.object(evaluator.engine, "forward") as forward:
            self.assertIsNone(evaluator.evaluate(obstacle))
            forward.assert_not_called()

        self.assertEqual(output.size(), 1)
        df = output.to_dataframe()
        self.assertEqual(df.loc[0, "category"], "junction")
        self.assertEqual(df.loc[0, "junction_id"], "J1")
        self.assertIn("feature_78", df.columns)
        self.assertNotIn("feature_79", df.columns)
        self.assertEqual(obstacle.latest_feature.junction_feature.junction_mlp_probability, [])
        self.assertEqual(evaluator.metrics.logged, 1)

    def test_write_csv(self) -> None:
        output = FeatureOutput()
        obstacle = _obstacle([_EXIT_AHEAD])
        output.insert(obstacle.latest_feature, [0.5, 1.5], "junction")
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out", "features.csv")
            output.write_csv(path)
            df = pd.read_csv(path)
        self.assertEqual(list(df.columns),
                         ["id", "timestamp", "junction_id", "category",
                          "feature_0", "feature_1"])
        self.assertEqual(df.loc[0, "feature_1"], 1.5)
        self.assertEqual(output.size(), 0)


class MetricsTests(unittest.TestCase):
    def test_shared_evaluator_counts_every_thread(self) -> None:
        evaluator = _evaluator(_constant_model(_ONE_HOT))
        obstacles = [_obstacle([_EXIT_AHEAD, _EXIT_LEFT]) for _ in range(8)]

        def run(obstacle: Obstacle) -> None:
            for _ in range(50):
                evaluator.evaluate(obstacle)

        threads = [threading.Thread(target=run, args=(o,)) for o in obstacles]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        report = evaluator.metrics.report()
        self.assertEqual(report["evaluated"], 400)
        self.assertEqual(report["inferred"], 400)
        self.assertEqual(report["skipped"], 0)

    def test_unknown_counter_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            _evaluator(_constant_model(_ONE_HOT)).metrics.increment("dropped")


class ContainerTests(unittest.TestCase):
    def test_history_is_newest_first_and_bounded(self) -> None:
        container = ObstaclesContainer(max_history_size=2)
        for t in range(3):
            container.insert_feature(5, Feature(timestamp=float(t)))
        obstacle = container.get_obstacle(5)
        self.assertEqual([f.timestamp for f in obstacle.history], [2.0, 1.0])
        self.assertEqual(obstacle.latest_feature.id, 5)
        self.assertIsNone(container.get_obstacle(6))
        self.assertEqual(container.obstacle_ids(), [5])


if __name__ == "__main__":
    unittest.main()
