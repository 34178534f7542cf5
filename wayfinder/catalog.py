"""Building snapshots, POI catalog search and payload parsing.

Purpose:
- Bundle one building's navigation nodes, POIs and categories into a snapshot.
- Answer destination-picker queries (text search, category, floor).
- Parse JSON-style building payloads supplied by the data layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from wayfinder.graph import NavigationGraph
from wayfinder.models import (
    AccessibilityInfo,
    ColorData,
    NavigationNode,
    NodeType,
    POICategory,
    PointOfInterest,
    as_vector3,
)

DEFAULT_CATEGORIES: tuple[POICategory, ...] = (
    POICategory(name="Stores", icon="bag", color=ColorData(0.0, 0.478, 1.0)),
    POICategory(name="Restaurants", icon="fork.knife", color=ColorData(1.0, 0.584, 0.0)),
    POICategory(name="Services", icon="wrench", color=ColorData(0.204, 0.780, 0.349)),
    POICategory(name="Restrooms", icon="figure.walk", color=ColorData(0.686, 0.322, 0.871)),
    POICategory(name="Exits", icon="arrow.right.square", color=ColorData(1.0, 0.231, 0.188)),
    POICategory(name="Information", icon="info.circle", color=ColorData(0.557, 0.557, 0.576)),
)


@dataclass
class Building:
    """Read-only building snapshot. The graph is validated on construction."""

    building_id: str
    name: str
    nodes: tuple[NavigationNode, ...]
    pois: tuple[PointOfInterest, ...] = ()
    categories: tuple[POICategory, ...] = DEFAULT_CATEGORIES
    address: str = ""
    graph: NavigationGraph = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.nodes = tuple(self.nodes)
        self.pois = tuple(self.pois)
        self.categories = tuple(self.categories)
        self.graph = NavigationGraph(self.nodes)

    def floors(self) -> list[int]:
        return sorted({node.floor for node in self.nodes} | {poi.floor for poi in self.pois})


def search_pois(pois: Iterable[PointOfInterest], query: str | None) -> list[PointOfInterest]:
    """Case-insensitive substring search over name, category and description.

    A blank query matches nothing.
    """
    needle = (query or "").strip().casefold()
    if not needle:
        return []
    return [
        poi
        for poi in pois
        if needle in poi.name.casefold()
        or needle in poi.category.casefold()
        or needle in poi.description.casefold()
    ]


def filter_by_category(pois: Iterable[PointOfInterest], category: POICategory | str) -> list[PointOfInterest]:
    """Search POIs using a category name as the query text."""
    name = category.name if isinstance(category, POICategory) else str(category)
    return search_pois(pois, name)


def pois_on_floor(pois: Iterable[PointOfInterest], floor: int) -> list[PointOfInterest]:
    return [poi for poi in pois if poi.floor == int(floor)]


def find_poi(pois: Iterable[PointOfInterest], poi_id: str) -> PointOfInterest | None:
    for poi in pois:
        if poi.id == poi_id:
            return poi
    return None


def _require(item: Any, keys: set[str], label: str) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise ValueError(f"{label} must be an object")
    missing = keys - item.keys()
    if missing:
        raise ValueError(f"{label} is missing {', '.join(sorted(missing))}")
    return item


def _optional_object(data: dict[str, Any], key: str, label: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{label}.{key} must be an object")
    return value


def _string_list(data: dict[str, Any], key: str, label: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, (str, int)) for v in value):
        raise ValueError(f"{label}.{key} must be a list of ids")
    return tuple(str(v) for v in value)


def _int_field(data: dict[str, Any], key: str, default: int, label: str) -> int:
    value = data.get(key, default)
    # bool is an int subclass; a JSON true/false is never a floor number.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label}.{key} must be an integer")
    return value


def _float_field(data: dict[str, Any], key: str, default: float, label: str) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label}.{key} must be a number")
    return float(value)


def _bool_field(data: dict[str, Any], key: str, default: bool, label: str) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{label}.{key} must be a boolean")
    return value


def _text_field(data: dict[str, Any], key: str, default: str | None, label: str) -> str:
    """Read a string field; a `None` default marks the field as required."""
    value = data.get(key, default)
    if value is None:
        if default is None:
            raise ValueError(f"{label}.{key} must be a string")
        return default
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise ValueError(f"{label}.{key} must be a string")
    return str(value)


def _parse_position(raw: Any, label: str) -> tuple[float, float, float]:
    if isinstance(raw, dict):
        raw = [raw.get("x"), raw.get("y"), raw.get("z")]
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise ValueError(f"{label}.position must be [x,y,z]")
    if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in raw):
        raise ValueError(f"{label}.position must contain numbers")
    return as_vector3(raw)


def _parse_node(item: Any, idx: int) -> NavigationNode:
    label = f"nodes[{idx}]"
    data = _require(item, {"id", "position", "node_type"}, label)

    try:
        node_type = NodeType(str(data["node_type"]).lower())
    except ValueError as exc:
        allowed = ", ".join(t.value for t in NodeType)
        raise ValueError(f"{label}.node_type must be one of: {allowed}") from exc

    access = _optional_object(data, "accessibility", label)
    access_label = f"{label}.accessibility"

    return NavigationNode(
        id=_text_field(data, "id", None, label),
        position=_parse_position(data["position"], label),
        node_type=node_type,
        connections=_string_list(data, "connections", label),
        accessibility=AccessibilityInfo(
            wheelchair_accessible=_bool_field(access, "wheelchair_accessible", True, access_label),
            has_elevator_access=_bool_field(access, "has_elevator_access", False, access_label),
            has_ramp_access=_bool_field(access, "has_ramp_access", False, access_label),
            visual_aid_support=_bool_field(access, "visual_aid_support", True, access_label),
            audio_aid_support=_bool_field(access, "audio_aid_support", True, access_label),
        ),
        floor=_int_field(data, "floor", 1, label),
    )


def _parse_poi(item: Any, idx: int) -> PointOfInterest:
    label = f"pois[{idx}]"
    data = _require(item, {"id", "name", "position"}, label)
    return PointOfInterest(
        id=_text_field(data, "id", None, label),
        name=_text_field(data, "name", None, label),
        category=_text_field(data, "category", "", label),
        floor=_int_field(data, "floor", 1, label),
        description=_text_field(data, "description", "", label),
        position=_parse_position(data["position"], label),
        tags=_string_list(data, "tags", label),
    )


def _parse_category(item: Any, idx: int) -> POICategory:
    label = f"categories[{idx}]"
    data = _require(item, {"name"}, label)
    color = _optional_object(data, "color", label)
    color_label = f"{label}.color"
    kwargs: dict[str, Any] = {}
    if data.get("id"):
        kwargs["id"] = _text_field(data, "id", None, label)
    return POICategory(
        name=_text_field(data, "name", None, label),
        icon=_text_field(data, "icon", "", label),
        color=ColorData(
            red=_float_field(color, "red", 0.0, color_label),
            green=_float_field(color, "green", 0.0, color_label),
            blue=_float_field(color, "blue", 0.0, color_label),
            alpha=_float_field(color, "alpha", 1.0, color_label),
        ),
        **kwargs,
    )


def parse_building_payload(payload: dict[str, Any]) -> Building:
    """Convert a JSON-style building payload into a validated snapshot.

    Expected schema:
      {
        "building_id": "hq",
        "name": "Headquarters",
        "nodes": [{"id": "n1", "position": [x, y, z], "node_type": "corridor",
                   "connections": ["n2"], "floor": 1, "accessibility": {...}}],
        "pois": [{"id": "p1", "name": "Cafe", "category": "Restaurants",
                  "floor": 1, "position": [x, y, z]}],
        "categories": [{"name": "Stores", "icon": "bag", "color": {...}}]
      }

    Raises:
        ValueError: If any item is malformed or the graph has dangling connections.
    """
    if not isinstance(payload, dict):
        raise ValueError("Building payload must be an object")

    raw_nodes = payload.get("nodes", [])
    raw_pois = payload.get("pois", [])
    if not isinstance(raw_nodes, list):
        raise ValueError("nodes must be a JSON list")
    if not isinstance(raw_pois, list):
        raise ValueError("pois must be a JSON list")

    nodes = [_parse_node(item, idx) for idx, item in enumerate(raw_nodes)]
    pois = [_parse_poi(item, idx) for idx, item in enumerate(raw_pois)]

    raw_categories = payload.get("categories")
    if raw_categories is None:
        categories: tuple[POICategory, ...] = DEFAULT_CATEGORIES
    elif isinstance(raw_categories, list):
        categories = tuple(_parse_category(item, idx) for idx, item in enumerate(raw_categories))
    else:
        raise ValueError("categories must be a JSON list")

    return Building(
        building_id=_text_field(payload, "building_id", "building-1", "building"),
        name=_text_field(payload, "name", "", "building"),
        address=_text_field(payload, "address", "", "building"),
        nodes=tuple(nodes),
        pois=tuple(pois),
        categories=categories,
    )
