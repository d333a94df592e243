#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Every value can be overridden through an environment variable of the same
name.  This module is a thin, import-safe leaf — it never imports from
other project packages.
"""

import os

# ── Model ────────────────────────────────────────────────────────────────────
JUNCTION_MLP_MODEL_FILE: str = os.environ.get(
    "JUNCTION_MLP_MODEL_FILE", "models/junction_mlp_vehicle_model.pkl"
)
JUNCTION_MLP_DEMO_MODEL: bool = os.environ.get("JUNCTION_MLP_DEMO_MODEL", "0") == "1"

# ── Evaluation mode: "normal" or "feature_logging" ───────────────────────────
PREDICTION_MODE: str = os.environ.get("PREDICTION_MODE", "normal")

# ── Trajectory cost model ────────────────────────────────────────────────────
TRAJECTORY_TIME_RESOLUTION: float = float(
    os.environ.get("TRAJECTORY_TIME_RESOLUTION", "0.1")
)
MAX_TRAJECTORY_SAMPLES: int = int(os.environ.get("MAX_TRAJECTORY_SAMPLES", "2000"))

# ── Obstacle container ───────────────────────────────────────────────────────
MAX_HISTORY_SIZE: int = int(os.environ.get("MAX_HISTORY_SIZE", "10"))

# ── Offline feature output ───────────────────────────────────────────────────
FEATURE_OUTPUT_FILE: str = os.environ.get(
    "FEATURE_OUTPUT_FILE", "generated/junction_features.csv"
)

# ── REST endpoint ────────────────────────────────────────────────────────────
API_HOST: str = os.environ.get("API_HOST", "0.0.0.0")
API_PORT: int = int(os.environ.get("API_PORT", "8000"))

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_DIR: str = os.environ.get("LOG_DIR", ".")
LOG_FILE: str = os.environ.get("LOG_FILE", "junction_mlp.log")
EVALUATOR_DEBUG_LOG: str = os.environ.get("EVALUATOR_DEBUG_LOG", "evaluator_debug.log")
