"""Route distance and travel-time estimation."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from wayfinder.models import InvalidPreferencesError, NavigationNode
from wayfinder.utils import positions_array

# Buffer for turns, doors and short stops along indoor routes.
TIME_BUFFER_MULTIPLIER = 1.2


def total_distance(nodes: Sequence[NavigationNode]) -> float:
    """Sum of straight segment lengths between consecutive nodes, in meters."""
    if len(nodes) < 2:
        return 0.0
    segments = np.diff(positions_array(nodes), axis=0)
    return float(np.linalg.norm(segments, axis=1).sum())


def estimated_time(distance_m: float, walking_speed: float) -> float:
    """Estimate walking time in seconds for a route length.

    Raises:
        InvalidPreferencesError: If `walking_speed` is not strictly positive.
    """
    if not walking_speed > 0:
        raise InvalidPreferencesError("walking_speed must be > 0")
    return (float(distance_m) / float(walking_speed)) * TIME_BUFFER_MULTIPLIER
