"""Unit tests for wayfinder.pathfinding."""

from __future__ import annotations

import threading

import pytest

from wayfinder.graph import NavigationGraph
from wayfinder.models import AccessibilityInfo, NavigationNode, NavigationPreferences, NodeType
from wayfinder.pathfinding import SearchCancelledError, astar_nodes, movement_cost

ORIGIN = NavigationNode(id="origin", position=(0, 0, 0), node_type=NodeType.CORRIDOR)


def _target(node_type: NodeType, accessible: bool = True, floor: int = 1) -> NavigationNode:
    return NavigationNode(
        id="target",
        position=(3, 0, 4),
        node_type=node_type,
        accessibility=AccessibilityInfo(wheelchair_accessible=accessible),
        floor=floor,
    )


def _linked(rows: list[tuple[str, tuple, NodeType, int]], edges: list[tuple[str, str]]) -> NavigationGraph:
    adjacency: dict[str, list[str]] = {row[0]: [] for row in rows}
    for a, b in edges:
        adjacency[a].append(b)
        adjacency[b].append(a)
    return NavigationGraph(
        NavigationNode(id=i, position=p, node_type=t, floor=f, connections=tuple(adjacency[i]))
        for i, p, t, f in rows
    )


def test_movement_cost_is_euclidean_by_default() -> None:
    """Without preferences the edge cost is plain distance."""
    assert movement_cost(ORIGIN, _target(NodeType.CORRIDOR), NavigationPreferences()) == pytest.approx(5.0)


def test_movement_cost_wheelchair_penalty_only_when_required() -> None:
    """Inaccessible nodes only cost more when wheelchair access is required."""
    target = _target(NodeType.CORRIDOR, accessible=False)

    assert movement_cost(ORIGIN, target, NavigationPreferences()) == pytest.approx(5.0)
    required = NavigationPreferences(require_wheelchair_access=True)
    assert movement_cost(ORIGIN, target, required) == pytest.approx(50.0)


def test_movement_cost_node_type_multipliers() -> None:
    """Stairway, elevator and emergency multipliers follow the preferences."""
    prefs = NavigationPreferences()
    avoid = NavigationPreferences(avoid_stairs=True)
    prefer = NavigationPreferences(prefer_elevators=True)

    assert movement_cost(ORIGIN, _target(NodeType.STAIRWAY), prefs) == pytest.approx(5.0)
    assert movement_cost(ORIGIN, _target(NodeType.STAIRWAY), avoid) == pytest.approx(25.0)
    assert movement_cost(ORIGIN, _target(NodeType.ELEVATOR), prefer) == pytest.approx(4.0)
    assert movement_cost(ORIGIN, _target(NodeType.ELEVATOR), prefs) == pytest.approx(6.0)
    assert movement_cost(ORIGIN, _target(NodeType.EMERGENCY), prefs) == pytest.approx(10.0)
    assert movement_cost(ORIGIN, _target(NodeType.EMERGENCY), prefer) == pytest.approx(10.0)


def test_movement_cost_composes_multipliers_then_adds_floor_penalty() -> None:
    """Floor penalty is added after all multipliers."""
    prefs = NavigationPreferences(require_wheelchair_access=True, avoid_stairs=True, floor_change_penalty=7.0)
    target = _target(NodeType.STAIRWAY, accessible=False, floor=2)

    assert movement_cost(ORIGIN, target, prefs) == pytest.approx(5.0 * 10 * 5 + 7.0)
    assert movement_cost(ORIGIN, _target(NodeType.CORRIDOR, floor=2), NavigationPreferences()) == pytest.approx(15.0)


def test_astar_returns_spine_path(spine_nodes) -> None:
    """A* should follow the only corridor to the goal."""
    graph = NavigationGraph(spine_nodes)
    path = astar_nodes(graph, graph.get("e"), graph.get("d"))

    assert [n.id for n in path] == ["e", "c", "j", "d"]


def test_astar_same_start_and_goal() -> None:
    graph = NavigationGraph([ORIGIN])
    assert astar_nodes(graph, ORIGIN, ORIGIN) == [ORIGIN]


def test_astar_no_path_returns_empty_list() -> None:
    """Unreachable goals yield an empty path."""
    graph = _linked(
        [
            ("a", (0, 0, 0), NodeType.CORRIDOR, 1),
            ("b", (1, 0, 0), NodeType.CORRIDOR, 1),
            ("c", (5, 0, 0), NodeType.CORRIDOR, 1),
        ],
        [("a", "b")],
    )
    assert astar_nodes(graph, graph.get("a"), graph.get("c")) == []


def test_astar_respects_directed_edges() -> None:
    """One-way connections are only traversed in their own direction."""
    graph = NavigationGraph(
        [
            NavigationNode(id="a", position=(0, 0, 0), node_type=NodeType.CORRIDOR, connections=("b",)),
            NavigationNode(id="b", position=(1, 0, 0), node_type=NodeType.CORRIDOR),
        ]
    )
    assert [n.id for n in astar_nodes(graph, graph.get("a"), graph.get("b"))] == ["a", "b"]
    assert astar_nodes(graph, graph.get("b"), graph.get("a")) == []


@pytest.mark.parametrize("m1_z, m2_z", [(1.0, -1.0), (-1.0, 1.0)])
def test_astar_equal_cost_ties_prefer_lowest_node_id(m1_z: float, m2_z: float) -> None:
    """Equal-cost branches resolve to the lowest node id."""
    graph = _linked(
        [
            ("start", (0, 0, 0), NodeType.CORRIDOR, 1),
            ("m1", (1, 0, m1_z), NodeType.CORRIDOR, 1),
            ("m2", (1, 0, m2_z), NodeType.CORRIDOR, 1),
            ("z-goal", (2, 0, 0), NodeType.DESTINATION, 1),
        ],
        [("start", "m2"), ("start", "m1"), ("m1", "z-goal"), ("m2", "z-goal")],
    )
    path = astar_nodes(graph, graph.get("start"), graph.get("z-goal"))

    assert [n.id for n in path] == ["start", "m1", "z-goal"]


def test_astar_prefers_accessible_alternative_when_required() -> None:
    """Requiring wheelchair access should divert around inaccessible nodes."""
    graph = NavigationGraph(
        [
            NavigationNode(id="s", position=(0, 0, 0), node_type=NodeType.ENTRANCE, connections=("x", "y")),
            NavigationNode(
                id="x",
                position=(5, 0, 1),
                node_type=NodeType.CORRIDOR,
                connections=("s", "g"),
                accessibility=AccessibilityInfo(wheelchair_accessible=False),
            ),
            NavigationNode(id="y", position=(5, 0, 6), node_type=NodeType.CORRIDOR, connections=("s", "g")),
            NavigationNode(id="g", position=(10, 0, 0), node_type=NodeType.DESTINATION, connections=("x", "y")),
        ]
    )
    start, goal = graph.get("s"), graph.get("g")

    assert [n.id for n in astar_nodes(graph, start, goal)] == ["s", "x", "g"]

    required = NavigationPreferences(require_wheelchair_access=True)
    path = astar_nodes(graph, start, goal, preferences=required)
    assert [n.id for n in path] == ["s", "y", "g"]
    assert all(n.accessibility.wheelchair_accessible for n in path)


def test_astar_floor_penalty_never_increases_floor_changes() -> None:
    """Raising the floor penalty never adds floor changes."""
    graph = _linked(
        [
            ("s", (0, 0, 0), NodeType.CORRIDOR, 1),
            ("same-floor", (10, 0, 5), NodeType.CORRIDOR, 1),
            ("upper", (10, 4, 0), NodeType.CORRIDOR, 2),
            ("g", (20, 0, 0), NodeType.DESTINATION, 1),
        ],
        [("s", "same-floor"), ("same-floor", "g"), ("s", "upper"), ("upper", "g")],
    )

    changes = []
    for penalty in [0.0, 0.5, 1.0, 10.0, 50.0]:
        prefs = NavigationPreferences(floor_change_penalty=penalty)
        path = astar_nodes(graph, graph.get("s"), graph.get("g"), preferences=prefs)
        changes.append(sum(1 for a, b in zip(path, path[1:]) if a.floor != b.floor))

    assert changes[0] == 2
    assert changes[-1] == 0
    assert all(later <= earlier for earlier, later in zip(changes, changes[1:]))


def test_astar_preferred_elevators_can_miss_cheaper_route() -> None:
    """Discounted elevator edges make the distance heuristic inadmissible.

    The goal is popped via the direct edge (cost 10.0) before the elevator chain
    (cost 0.4 + 8.0 + 0.5 = 8.9) is expanded. This known limitation is kept.
    """
    graph = _linked(
        [
            ("s", (0, 0, 0), NodeType.CORRIDOR, 1),
            ("lift-a", (0, 0, 0.5), NodeType.ELEVATOR, 1),
            ("lift-b", (10, 0, 0.5), NodeType.ELEVATOR, 1),
            ("g", (10, 0, 0), NodeType.DESTINATION, 1),
        ],
        [("s", "g"), ("s", "lift-a"), ("lift-a", "lift-b"), ("lift-b", "g")],
    )
    prefs = NavigationPreferences(prefer_elevators=True)
    path = astar_nodes(graph, graph.get("s"), graph.get("g"), preferences=prefs)

    assert [n.id for n in path] == ["s", "g"]


def test_astar_cancel_event_aborts_search(spine_nodes) -> None:
    """A set cancel event should stop the search."""
    graph = NavigationGraph(spine_nodes)
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(SearchCancelledError):
        astar_nodes(graph, graph.get("e"), graph.get("d"), cancel_event=cancel)


def test_astar_unknown_start_raises(spine_nodes) -> None:
    """Start nodes from outside the graph are rejected."""
    graph = NavigationGraph(spine_nodes)

    with pytest.raises(ValueError, match="Start node is not part of the graph"):
        astar_nodes(graph, ORIGIN, graph.get("d"))
