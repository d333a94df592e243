#!/usr/bin/env python3
"""
Tests for the optional REST endpoint.
"""

from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from prediction.api import create_app
from prediction.model.export import random_model
from prediction.settings import EvaluatorSettings


def _payload(**overrides) -> dict:
    payload = {
        "id": 3,
        "position": {"x": 0.0, "y": 0.0},
        "velocity": {"x": 6.0, "y": 0.0},
        "speed": 6.0,
        "junction_id": "J7",
        "junction_range": 30.0,
        "junction_exits": [
            {"exit_position": {"x": 25.0, "y": 0.0}, "exit_heading": 0.0,
             "exit_lane_id": "straight"},
            {"exit_position": {"x": 12.0, "y": 12.0}, "exit_heading": 1.57,
             "exit_lane_id": "left"},
        ],
        "lane_sequences": [
            {"lane_sequence_id": 10, "lane_ids": ["in", "straight"]},
            {"lane_sequence_id": 11, "lane_ids": ["in", "left"]},
            {"lane_sequence_id": 12, "lane_ids": ["in", "other"], "probability": 0.3},
        ],
        "ego_pose": {"position": {"x": -5.0, "y": 3.0}, "velocity": {"x": 2.0, "y": 0.0}},
    }
    payload.update(overrides)
    return payload


class EvaluateEndpointTests(unittest.TestCase):
    def setUp(self) -> None:
        settings = EvaluatorSettings(model_file="unused.pkl")
        self.client = TestClient(create_app(random_model(seed=3), settings))

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "dim_input": 79})

    def test_evaluate_returns_probabilities(self) -> None:
        response = self.client.post("/evaluate", json=_payload())
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "success")
        self.assertEqual(len(body["sector_probabilities"]), 12)
        self.assertAlmostEqual(sum(body["sector_probabilities"]), 1.0, places=6)
        self.assertEqual(set(body["exit_probabilities"]), {"straight", "left"})
        self.assertEqual(body["lane_sequence_probabilities"]["12"], 0.3)
        self.assertEqual(
            body["lane_sequence_probabilities"]["10"],
            body["exit_probabilities"]["straight"],
        )

    def test_missing_position_is_skipped(self) -> None:
        response = self.client.post("/evaluate", json=_payload(position=None))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "skipped"})

    def test_invalid_payload_is_rejected(self) -> None:
        response = self.client.post("/evaluate", json={"id": 1})
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
