"""
prediction/api.py
=================
Optional FastAPI server that exposes the junction evaluator as a REST
endpoint.

Start the server::

    python -m prediction.api          # → http://localhost:8000/evaluate

``POST /evaluate`` accepts one obstacle snapshot (position, velocity,
junction exits, lane sequences and an optional ego pose) and returns the
sector and lane-sequence probabilities.

.. note::

   This server is **not** required by the evaluator.  It exists for
   external integrations and testing.
"""

import dataclasses
from typing import List, Optional

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

import config
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
from prediction.evaluator import JunctionMLPEvaluator
from prediction.model import Model, load_model
from prediction.settings import EvaluatorSettings, PredictionMode

# ── Pydantic request schemas ─────────────────────────────────────────────────


class PointModel(BaseModel):
    x: float
    y: float


class JunctionExitModel(BaseModel):
    """Single exit of the junction."""
    exit_position: PointModel
    exit_heading: float
    exit_lane_id: str


class LaneSequenceModel(BaseModel):
    """Candidate path as an ordered list of lane ids."""
    lane_sequence_id: int
    lane_ids: List[str]
    probability: float = 0.0


class EgoPoseModel(BaseModel):
    position: PointModel
    velocity: PointModel


class ObstacleRequest(BaseModel):
    """Obstacle snapshot submitted to ``/evaluate``."""
    id: int
    position: Optional[PointModel] = None
    velocity: PointModel
    heading: float = 0.0
    speed: float
    acc: float = 0.0
    timestamp: float = 0.0
    junction_id: str
    junction_range: float
    junction_exits: List[JunctionExitModel]
    lane_sequences: List[LaneSequenceModel] = []
    ego_pose: Optional[EgoPoseModel] = None


def _point(model: Optional[PointModel]) -> Optional[Point]:
    return None if model is None else Point(model.x, model.y)


def to_obstacle(request: ObstacleRequest) -> Obstacle:
    """Build an :class:`Obstacle` with a single observation from *request*."""
    feature = Feature(
        id=request.id,
        position=_point(request.position),
        raw_velocity=_point(request.velocity),
        heading=request.heading,
        speed=request.speed,
        acc=request.acc,
        timestamp=request.timestamp,
        junction_feature=JunctionFeature(
            junction_id=request.junction_id,
            junction_range=request.junction_range,
            junction_exits=[
                JunctionExit(
                    exit_position=_point(e.exit_position),
                    exit_heading=e.exit_heading,
                    exit_lane_id=e.exit_lane_id,
                )
                for e in request.junction_exits
            ],
        ),
        lane_graph=LaneGraph(lane_sequences=[
            LaneSequence(
                lane_sequence_id=s.lane_sequence_id,
                lane_segments=[LaneSegment(lane_id) for lane_id in s.lane_ids],
                probability=s.probability,
            )
            for s in request.lane_sequences
        ]),
    )
    return Obstacle(id=request.id, history=[feature])


def create_app(model: Model, settings: Optional[EvaluatorSettings] = None) -> FastAPI:
    """Build the FastAPI application around a loaded *model*.

    Every request gets its own evaluator (the model is shared read-only),
    so concurrent requests with different ego poses do not interfere.
    Feature-logging mode is not served over HTTP.
    """
    settings = dataclasses.replace(
        settings or EvaluatorSettings.from_config(), mode=PredictionMode.NORMAL,
    )
    app = FastAPI(
        title="Junction MLP Evaluator API",
        description="Predicts junction exit probabilities for an obstacle.",
        version="1.0",
    )

    @app.get("/health")
    def health():
        return {"status": "ok", "dim_input": model.dim_input}

    @app.post("/evaluate")
    def evaluate(request: ObstacleRequest):
        """Run the junction evaluator on the provided obstacle snapshot."""
        pose = None
        if request.ego_pose is not None:
            pose = EgoPose(
                position=_point(request.ego_pose.position),
                velocity=_point(request.ego_pose.velocity),
            )
        evaluator = JunctionMLPEvaluator(
            StaticEgoPoseProvider(pose), settings=settings, model=model,
        )
        obstacle = to_obstacle(request)
        annotation = evaluator.evaluate(obstacle)
        if annotation is None:
            return {"status": "skipped"}
        sequences = obstacle.latest_feature.lane_graph.lane_sequences
        return {
            "status": "success",
            "sector_probabilities": annotation.sector_probabilities,
            "exit_probabilities": annotation.exit_probabilities,
            "lane_sequence_probabilities": {
                str(s.lane_sequence_id): s.probability for s in sequences
            },
        }

    return app


# ── Standalone entry point ───────────────────────────────────────────────────

if __name__ == "__main__":
    _settings = EvaluatorSettings.from_config()
    _app = create_app(load_model(_settings.model_file), _settings)
    print(f"Starting junction evaluator on http://{config.API_HOST}:{config.API_PORT} …")
    uvicorn.run(_app, host=config.API_HOST, port=config.API_PORT)
