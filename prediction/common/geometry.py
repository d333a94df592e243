#!/usr/bin/env python3
"""
prediction/common/geometry.py
=============================
Low-level angle, frame and polynomial helpers used by the feature
extractors and the exit probability blender.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

import math
from typing import Tuple

NUM_SECTORS: int = 12
"""Angular sectors around the obstacle; each covers 30°."""

_TWO_PI = 2.0 * math.pi


def normalize_angle(angle: float) -> float:
    """Wrap *angle* (radians) into the half-open interval (−π, π]."""
    a = math.fmod(angle + math.pi, _TWO_PI)
    if a < 0.0:
        a += _TWO_PI
    a -= math.pi
    # fmod maps +π onto −π; the interval keeps +π instead.
    return math.pi if a == -math.pi else a


def angle_diff(from_angle: float, to_angle: float) -> float:
    """Signed smallest rotation taking *from_angle* onto *to_angle*."""
    return normalize_angle(to_angle - from_angle)


def rotate(x: float, y: float, angle: float) -> Tuple[float, float]:
    """Rotate the vector *(x, y)* counter-clockwise by *angle* radians."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return cos_a * x - sin_a * y, sin_a * x + cos_a * y


def sector_index(angle: float, num_sectors: int = NUM_SECTORS) -> int:
    """Map a bearing (radians, any range) onto its sector in ``[0, num_sectors)``.

    Sector *k* covers bearings ``[k, k + 1) × 2π / num_sectors``; negative
    bearings wrap around, so ``0`` and ``2π`` share sector 0.
    """
    d_idx = angle / _TWO_PI * num_sectors
    return int(math.floor(d_idx)) % num_sectors


def relative_sector(
    dx: float, dy: float, heading: float, num_sectors: int = NUM_SECTORS,
) -> Tuple[int, float, float]:
    """Sector of the world displacement *(dx, dy)* seen from *heading*.

    Returns
    -------
    tuple
        ``(sector, local_dx, local_dy)`` where the local components are the
        displacement expressed in the heading-aligned frame.
    """
    local_dx, local_dy = rotate(dx, dy, -heading)
    return sector_index(math.atan2(local_dy, local_dx), num_sectors), local_dx, local_dy


# ── Cubic Hermite polynomials ────────────────────────────────────────────────

def compute_cubic_polynomial(
    start: Tuple[float, float], end: Tuple[float, float], duration: float,
) -> Tuple[float, float, float, float]:
    """Fit ``p(t) = c0 + c1·t + c2·t² + c3·t³`` to two boundary states.

    Parameters
    ----------
    start, end : tuple
        ``(position, velocity)`` at ``t = 0`` and ``t = duration``.
    duration : float
        Strictly positive time span in seconds.

    Returns
    -------
    tuple
        Coefficients ``(c0, c1, c2, c3)``.
    """
    if duration <= 0.0:
        raise ValueError(f"duration must be positive, got {duration}")
    c0, c1 = start
    t2 = duration * duration
    t3 = duration * t2
    b0 = end[0] - c0 - c1 * duration
    b1 = end[1] - c1
    c2 = (3.0 / t2) * b0 - (1.0 / duration) * b1
    c3 = (-2.0 / t3) * b0 + (1.0 / t2) * b1
    return c0, c1, c2, c3


def evaluate_cubic_polynomial(
    coefs: Tuple[float, float, float, float], t: float, order: int,
) -> float:
    """Value (order 0) or derivative (order 1–3) of a cubic at time *t*."""
    c0, c1, c2, c3 = coefs
    if order == 0:
        return ((c3 * t + c2) * t + c1) * t + c0
    if order == 1:
        return (3.0 * c3 * t + 2.0 * c2) * t + c1
    if order == 2:
        return 6.0 * c3 * t + 2.0 * c2
    if order == 3:
        return 6.0 * c3
    return 0.0
