"""Core navigation data model.

Purpose:
- Describe navigable graph nodes, points of interest and route results.
- Validate per-call preference configuration at construction time.

All positions are building-local `(x, y, z)` tuples in meters, with `y` vertical.

Usage example:
    >>> from wayfinder.models import NavigationNode, NodeType
    >>> NavigationNode(id="n1", position=(0.0, 0.0, 0.0), node_type=NodeType.ENTRANCE, connections=("n2",))
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

Vector3 = tuple[float, float, float]


def _new_id() -> str:
    return str(uuid.uuid4())


def as_vector3(value) -> Vector3:
    """Coerce any 3-item sequence into a float `(x, y, z)` tuple."""
    if len(value) != 3:
        raise ValueError("position must have exactly three components (x, y, z)")
    return float(value[0]), float(value[1]), float(value[2])


class InvalidPreferencesError(ValueError):
    """Raised when a preference configuration cannot produce a meaningful route."""


class InvalidGraphError(ValueError):
    """Raised when a node snapshot violates graph invariants."""


class NodeType(str, Enum):
    ENTRANCE = "entrance"
    CORRIDOR = "corridor"
    JUNCTION = "junction"
    STAIRWAY = "stairway"
    ELEVATOR = "elevator"
    DESTINATION = "destination"
    EMERGENCY = "emergency"


class InstructionType(str, Enum):
    START = "start"
    STRAIGHT = "straight"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    UPSTAIRS = "upstairs"
    DOWNSTAIRS = "downstairs"
    ELEVATOR = "elevator"
    DESTINATION = "destination"


class TurnDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    STRAIGHT = "straight"


@dataclass(frozen=True, slots=True)
class AccessibilityInfo:
    """Accessibility descriptor attached to every navigation node."""

    wheelchair_accessible: bool = True
    has_elevator_access: bool = False
    has_ramp_access: bool = False
    visual_aid_support: bool = True
    audio_aid_support: bool = True


@dataclass(frozen=True, slots=True, eq=False)
class NavigationNode:
    """Immutable navigable point. Connections reference other node ids (directed)."""

    position: Vector3
    node_type: NodeType
    connections: tuple[str, ...] = ()
    accessibility: AccessibilityInfo = field(default_factory=AccessibilityInfo)
    floor: int = 1
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vector3(self.position))
        object.__setattr__(self, "node_type", NodeType(self.node_type))
        object.__setattr__(self, "connections", tuple(str(c) for c in self.connections))
        object.__setattr__(self, "floor", int(self.floor))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NavigationNode):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True, slots=True, eq=False)
class PointOfInterest:
    """Routable destination. Two POIs are equal when their ids match."""

    name: str
    category: str
    floor: int
    position: Vector3
    description: str = ""
    tags: tuple[str, ...] = ()
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vector3(self.position))
        object.__setattr__(self, "tags", tuple(self.tags))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointOfInterest):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(frozen=True, slots=True)
class ColorData:
    red: float
    green: float
    blue: float
    alpha: float = 1.0


@dataclass(frozen=True, slots=True)
class POICategory:
    """Browsable POI grouping shown by destination pickers."""

    name: str
    icon: str
    color: ColorData
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True, slots=True)
class NavigationPreferences:
    """Per-call routing policy.

    Raises:
        InvalidPreferencesError: If walking speed is not strictly positive or the
            floor change penalty is negative.
    """

    require_wheelchair_access: bool = False
    avoid_stairs: bool = False
    prefer_elevators: bool = False
    walking_speed: float = 1.4
    floor_change_penalty: float = 10.0

    def __post_init__(self) -> None:
        if not self.walking_speed > 0:
            raise InvalidPreferencesError("walking_speed must be > 0")
        if not self.floor_change_penalty >= 0:
            raise InvalidPreferencesError("floor_change_penalty must be >= 0")


@dataclass(frozen=True, slots=True)
class NavigationInstruction:
    type: InstructionType
    description: str
    distance: float
    position: Vector3
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True, slots=True)
class NavigationRoute:
    """Successful planning result, owned by the caller and replaced on replanning."""

    destination: PointOfInterest
    nodes: tuple[NavigationNode, ...]
    total_distance: float
    estimated_time: float
    instructions: tuple[NavigationInstruction, ...]
    id: str = field(default_factory=_new_id)

    @property
    def floor_changes(self) -> int:
        """Number of consecutive node pairs that sit on different floors."""
        return sum(1 for a, b in zip(self.nodes, self.nodes[1:]) if a.floor != b.floor)

    @property
    def floors(self) -> list[int]:
        """Distinct floors visited, in traversal order."""
        visited: list[int] = []
        for node in self.nodes:
            if node.floor not in visited:
                visited.append(node.floor)
        return visited
