"""Route composition entry point.

`compute_route` is the single call used by tracking, rendering and UI collaborators:
resolve endpoints to graph nodes, search, measure, and narrate.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from wayfinder.graph import NavigationGraph
from wayfinder.instructions import generate_instructions
from wayfinder.metrics import estimated_time, total_distance
from wayfinder.models import (
    NavigationNode,
    NavigationPreferences,
    NavigationRoute,
    PointOfInterest,
    Vector3,
    as_vector3,
)
from wayfinder.pathfinding import astar_nodes

logger = logging.getLogger(__name__)


def compute_route(
    start_position: Vector3,
    destination: PointOfInterest,
    nodes: Iterable[NavigationNode] | NavigationGraph,
    preferences: NavigationPreferences | None = None,
    cancel_event: threading.Event | None = None,
) -> NavigationRoute | None:
    """Plan a route from a live position to a destination POI.

    Args:
        start_position: Current user position `(x, y, z)` in meters.
        destination: Target point of interest.
        nodes: Node snapshot or prebuilt graph for the active building.
        preferences: Routing policy; defaults to `NavigationPreferences()`.
        cancel_event: Optional event that aborts a long search.

    Returns:
        NavigationRoute, or None when the node set is empty or the destination
        is unreachable.

    Raises:
        InvalidGraphError: If `nodes` contains duplicate ids or dangling connections.
        SearchCancelledError: If `cancel_event` is set during the search.
    """
    prefs = preferences or NavigationPreferences()
    graph = NavigationGraph.from_nodes(nodes)
    start_position = as_vector3(start_position)

    start_node = graph.nearest_node(start_position)
    end_node = graph.nearest_node(destination.position)
    if start_node is None or end_node is None:
        logger.info("No route to '%s': navigation graph is empty", destination.name)
        return None

    path = astar_nodes(graph, start_node, end_node, preferences=prefs, cancel_event=cancel_event)
    if not path:
        logger.info(
            "No route to '%s': node %s unreachable from %s",
            destination.name,
            end_node.id,
            start_node.id,
        )
        return None

    distance_m = total_distance(path)
    route = NavigationRoute(
        destination=destination,
        nodes=tuple(path),
        total_distance=distance_m,
        estimated_time=estimated_time(distance_m, prefs.walking_speed),
        instructions=tuple(generate_instructions(path)),
    )
    logger.info(
        "Route to '%s': %d nodes, %.1f m, %.0f s",
        destination.name,
        len(route.nodes),
        route.total_distance,
        route.estimated_time,
    )
    return route


find_path = compute_route
