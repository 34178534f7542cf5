"""Bundled two-floor demo building used by the API demo mode and tests."""

from __future__ import annotations

from wayfinder.catalog import DEFAULT_CATEGORIES, Building
from wayfinder.models import AccessibilityInfo, NavigationNode, NodeType, PointOfInterest

FLOOR_HEIGHT_M = 4.0

_NO_WHEELCHAIR = AccessibilityInfo(wheelchair_accessible=False)
_ELEVATOR_ACCESS = AccessibilityInfo(has_elevator_access=True)

# (id, (x, y, z), type, floor, accessibility)
_NODES = [
    ("entrance", (0.0, 0.0, 0.0), NodeType.ENTRANCE, 1, None),
    ("corridor-west", (5.0, 0.0, 0.0), NodeType.CORRIDOR, 1, None),
    ("junction-main", (10.0, 0.0, 0.0), NodeType.JUNCTION, 1, None),
    ("corridor-east", (15.0, 0.0, 2.0), NodeType.CORRIDOR, 1, None),
    ("lobby", (20.0, 0.0, 5.0), NodeType.DESTINATION, 1, None),
    ("restroom-hall", (10.0, 0.0, 8.0), NodeType.DESTINATION, 1, None),
    ("junction-south", (10.0, 0.0, -5.0), NodeType.JUNCTION, 1, None),
    ("cafe", (15.0, 0.0, -10.0), NodeType.DESTINATION, 1, None),
    ("store", (25.0, 0.0, -5.0), NodeType.DESTINATION, 1, None),
    ("fire-exit", (0.0, 0.0, -5.0), NodeType.EMERGENCY, 1, None),
    ("stairs-1", (16.0, 0.0, 6.0), NodeType.STAIRWAY, 1, _NO_WHEELCHAIR),
    ("elevator-1", (8.0, 0.0, 2.0), NodeType.ELEVATOR, 1, _ELEVATOR_ACCESS),
    ("stairs-2", (16.0, FLOOR_HEIGHT_M, 6.0), NodeType.STAIRWAY, 2, _NO_WHEELCHAIR),
    ("elevator-2", (8.0, FLOOR_HEIGHT_M, 2.0), NodeType.ELEVATOR, 2, _ELEVATOR_ACCESS),
    ("landing-2", (12.0, FLOOR_HEIGHT_M, 4.0), NodeType.JUNCTION, 2, None),
    ("meeting-a", (18.0, FLOOR_HEIGHT_M, 3.0), NodeType.DESTINATION, 2, None),
    ("meeting-b", (20.0, FLOOR_HEIGHT_M, 5.0), NodeType.DESTINATION, 2, None),
]

_EDGES = [
    ("entrance", "corridor-west"),
    ("corridor-west", "junction-main"),
    ("junction-main", "corridor-east"),
    ("junction-main", "restroom-hall"),
    ("junction-main", "junction-south"),
    ("junction-main", "elevator-1"),
    ("corridor-east", "lobby"),
    ("corridor-east", "stairs-1"),
    ("junction-south", "cafe"),
    ("junction-south", "store"),
    ("junction-south", "fire-exit"),
    ("stairs-1", "stairs-2"),
    ("elevator-1", "elevator-2"),
    ("stairs-2", "landing-2"),
    ("elevator-2", "landing-2"),
    ("landing-2", "meeting-a"),
    ("meeting-a", "meeting-b"),
]


def sample_nodes() -> list[NavigationNode]:
    """Demo navigation graph with symmetric connections."""
    adjacency: dict[str, list[str]] = {node_id: [] for node_id, *_ in _NODES}
    for a, b in _EDGES:
        adjacency[a].append(b)
        adjacency[b].append(a)

    return [
        NavigationNode(
            id=node_id,
            position=position,
            node_type=node_type,
            connections=tuple(adjacency[node_id]),
            accessibility=access or AccessibilityInfo(),
            floor=floor,
        )
        for node_id, position, node_type, floor, access in _NODES
    ]


def sample_pois() -> list[PointOfInterest]:
    return [
        PointOfInterest(
            id="poi-meeting-a",
            name="Meeting Room A",
            category="Conference Rooms",
            floor=2,
            description="Small meeting room for up to 6 people",
            position=(18.0, FLOOR_HEIGHT_M, 3.0),
        ),
        PointOfInterest(
            id="poi-meeting-b",
            name="Meeting Room B",
            category="Conference Rooms",
            floor=2,
            description="Large conference room with video conferencing",
            position=(20.0, FLOOR_HEIGHT_M, 5.0),
        ),
        PointOfInterest(
            id="poi-starbucks",
            name="Starbucks Coffee",
            category="Restaurants",
            floor=1,
            description="Coffee shop on the main floor",
            position=(15.0, 0.0, -10.0),
        ),
        PointOfInterest(
            id="poi-apple-store",
            name="Apple Store",
            category="Stores",
            floor=1,
            description="Electronics and accessories",
            position=(25.0, 0.0, -5.0),
        ),
        PointOfInterest(
            id="poi-restroom",
            name="Restroom",
            category="Services",
            floor=1,
            description="Public restroom facilities",
            position=(10.0, 0.0, 8.0),
        ),
    ]


def sample_building() -> Building:
    return Building(
        building_id="demo-building",
        name="Demo Office Building",
        address="1 Sample Plaza",
        nodes=tuple(sample_nodes()),
        pois=tuple(sample_pois()),
        categories=DEFAULT_CATEGORIES,
    )
