"""Utility helpers shared across wayfinder modules.

Purpose:
- Euclidean geometry on building-local `(x, y, z)` tuples.
- Convert positions to JSON-safe payload types.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from wayfinder.models import NavigationNode, Vector3


def distance(a: Vector3, b: Vector3) -> float:
    """Euclidean distance between two points in meters."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    dz = a[2] - b[2]
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def positions_array(nodes: Iterable[NavigationNode]) -> np.ndarray:
    """Stack node positions into an `(N, 3)` float array."""
    points = [node.position for node in nodes]
    if not points:
        return np.zeros((0, 3), dtype=np.float64)
    return np.asarray(points, dtype=np.float64)


def world_point(position: Vector3) -> dict[str, float]:
    """Map an `(x, y, z)` tuple to a JSON-friendly dictionary."""
    return {"x": float(position[0]), "y": float(position[1]), "z": float(position[2])}
