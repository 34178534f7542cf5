"""A* route search over indoor navigation graphs.

Purpose:
- Compute minimum-cost node sequences between graph nodes.
- Weight edges by accessibility, vertical transport and user preference.

The heuristic is the straight-line distance to the goal. Edge costs are not bounded
below by that distance once a discount applies (preferred elevators), so the search
is best-effort: it may settle the goal before a cheaper discounted route is expanded.

Usage example:
    >>> from wayfinder.graph import NavigationGraph
    >>> from wayfinder.pathfinding import astar_nodes
    >>> graph = NavigationGraph(nodes)
    >>> astar_nodes(graph, graph.get("entrance"), graph.get("lobby"))
"""

from __future__ import annotations

import heapq
import logging
import threading

from wayfinder.graph import NavigationGraph
from wayfinder.models import NavigationNode, NavigationPreferences, NodeType
from wayfinder.utils import distance

logger = logging.getLogger(__name__)

INACCESSIBLE_MULTIPLIER = 10.0
AVOIDED_STAIRS_MULTIPLIER = 5.0
PREFERRED_ELEVATOR_MULTIPLIER = 0.8
UNPREFERRED_ELEVATOR_MULTIPLIER = 1.2
EMERGENCY_MULTIPLIER = 2.0


class SearchCancelledError(RuntimeError):
    """Raised when a caller cancels a running search."""


def heuristic(node: NavigationNode, goal: NavigationNode) -> float:
    """Euclidean distance estimate from `node` to `goal`."""
    return distance(node.position, goal.position)


def movement_cost(
    source: NavigationNode,
    target: NavigationNode,
    preferences: NavigationPreferences,
) -> float:
    """Cost of stepping from `source` to `target` under a preference policy.

    Args:
        source: Node being expanded.
        target: Connected node being entered.
        preferences: Accessibility and routing preferences.

    Returns:
        Base Euclidean distance scaled by the accessibility multiplier, then by at most
        one node-type multiplier, plus the floor change penalty when floors differ.
    """
    cost = distance(source.position, target.position)

    if preferences.require_wheelchair_access and not target.accessibility.wheelchair_accessible:
        cost *= INACCESSIBLE_MULTIPLIER

    if target.node_type is NodeType.STAIRWAY:
        if preferences.avoid_stairs:
            cost *= AVOIDED_STAIRS_MULTIPLIER
    elif target.node_type is NodeType.ELEVATOR:
        if preferences.prefer_elevators:
            cost *= PREFERRED_ELEVATOR_MULTIPLIER
        else:
            cost *= UNPREFERRED_ELEVATOR_MULTIPLIER
    elif target.node_type is NodeType.EMERGENCY:
        cost *= EMERGENCY_MULTIPLIER

    if source.floor != target.floor:
        cost += preferences.floor_change_penalty

    return cost


def _reconstruct(came_from: dict[str, str], current: str, graph: NavigationGraph) -> list[NavigationNode]:
    path_ids = [current]
    while current in came_from:
        current = came_from[current]
        path_ids.append(current)
    path_ids.reverse()
    return [graph.get(node_id) for node_id in path_ids]


def astar_nodes(
    graph: NavigationGraph,
    start: NavigationNode,
    goal: NavigationNode,
    preferences: NavigationPreferences | None = None,
    cancel_event: threading.Event | None = None,
) -> list[NavigationNode]:
    """Run A* between two nodes of a graph snapshot.

    Open nodes are popped by lowest f-score, ties broken by lowest node id. A node
    leaves the open set when popped and may re-enter it if a strictly cheaper path
    to it is found later.

    Args:
        graph: Read-only node snapshot.
        start: Start node (must belong to `graph`).
        goal: Goal node (must belong to `graph`).
        preferences: Routing policy; defaults to `NavigationPreferences()`.
        cancel_event: Optional event checked once per expansion.

    Returns:
        Ordered node list from start to goal. Empty list if no path exists.

    Raises:
        ValueError: If start or goal is not part of the graph.
        SearchCancelledError: If `cancel_event` is set during the search.
    """
    if start.id not in graph:
        raise ValueError("Start node is not part of the graph")
    if goal.id not in graph:
        raise ValueError("Goal node is not part of the graph")

    prefs = preferences or NavigationPreferences()

    start_f = heuristic(start, goal)
    open_heap: list[tuple[float, str]] = [(start_f, start.id)]
    open_set: set[str] = {start.id}

    came_from: dict[str, str] = {}
    g_score: dict[str, float] = {start.id: 0.0}
    f_score: dict[str, float] = {start.id: start_f}
    expansions = 0

    while open_heap:
        if cancel_event is not None and cancel_event.is_set():
            raise SearchCancelledError("Route search was cancelled")

        f, current = heapq.heappop(open_heap)

        # Skip stale heap entries superseded by a cheaper push.
        if current not in open_set or f > f_score.get(current, float("inf")):
            continue

        if current == goal.id:
            logger.debug("A* reached goal %s after %d expansions", goal.id, expansions)
            return _reconstruct(came_from, current, graph)

        open_set.discard(current)
        expansions += 1
        current_node = graph.get(current)

        for neighbor_id in current_node.connections:
            neighbor = graph.get(neighbor_id)
            tentative = g_score[current] + movement_cost(current_node, neighbor, prefs)
            if tentative < g_score.get(neighbor_id, float("inf")):
                came_from[neighbor_id] = current
                g_score[neighbor_id] = tentative
                f_score[neighbor_id] = tentative + heuristic(neighbor, goal)
                open_set.add(neighbor_id)
                heapq.heappush(open_heap, (f_score[neighbor_id], neighbor_id))

    logger.debug("A* exhausted open set after %d expansions without reaching %s", expansions, goal.id)
    return []
