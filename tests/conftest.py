"""Pytest global fixtures and test isolation hooks."""

from __future__ import annotations

import pytest

from wayfinder.api import STATE
from wayfinder.models import NavigationNode, NodeType, PointOfInterest


@pytest.fixture(autouse=True)
def reset_navigation_state() -> None:
    """Reset in-memory API building state before each test."""
    STATE.building = None


@pytest.fixture()
def spine_nodes() -> list[NavigationNode]:
    """Entrance -> corridor -> junction -> destination on a single floor."""
    return [
        NavigationNode(id="e", position=(0, 0, 0), node_type=NodeType.ENTRANCE, connections=("c",)),
        NavigationNode(id="c", position=(5, 0, 0), node_type=NodeType.CORRIDOR, connections=("e", "j")),
        NavigationNode(id="j", position=(10, 0, 0), node_type=NodeType.JUNCTION, connections=("c", "d")),
        NavigationNode(id="d", position=(10, 0, 5), node_type=NodeType.DESTINATION, connections=("j",)),
    ]


@pytest.fixture()
def spine_poi() -> PointOfInterest:
    return PointOfInterest(
        id="poi-d",
        name="Lab",
        category="Services",
        floor=1,
        description="Research lab",
        position=(10, 0, 5),
    )
