"""FastAPI routes for building loading, destination search and route planning.

Flow:
- Load a building snapshot (`POST /building`) or start in demo mode.
- Browse destinations (`/pois`, `/categories`).
- Plan a route from a live position to a POI (`POST /route`).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from wayfinder.catalog import Building, filter_by_category, find_poi, parse_building_payload, pois_on_floor, search_pois
from wayfinder.instructions import format_distance
from wayfinder.models import (
    InvalidPreferencesError,
    NavigationInstruction,
    NavigationNode,
    NavigationPreferences,
    NavigationRoute,
    POICategory,
    PointOfInterest,
)
from wayfinder.routing import compute_route
from wayfinder.sample_data import sample_building
from wayfinder.utils import world_point

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@dataclass
class NavigationState:
    """In-memory holder for the latest loaded building snapshot."""

    building: Building | None = None


STATE = NavigationState()


class WorldPoint(BaseModel):
    """World coordinate in meters."""

    x: float
    y: float
    z: float


class PreferencesPayload(BaseModel):
    """Routing preferences. Values are validated when converted to NavigationPreferences."""

    require_wheelchair_access: bool = False
    avoid_stairs: bool = False
    prefer_elevators: bool = False
    walking_speed: float = 1.4
    floor_change_penalty: float = 10.0


class RouteRequest(BaseModel):
    """Request payload for route planning."""

    start: WorldPoint
    destination_poi_id: str
    preferences: PreferencesPayload | None = None


def _serialize_poi(poi: PointOfInterest) -> dict[str, Any]:
    return {
        "id": poi.id,
        "name": poi.name,
        "category": poi.category,
        "floor": poi.floor,
        "description": poi.description,
        "position": world_point(poi.position),
        "tags": list(poi.tags),
    }


def _serialize_category(category: POICategory) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "icon": category.icon,
        "color": {
            "red": category.color.red,
            "green": category.color.green,
            "blue": category.color.blue,
            "alpha": category.color.alpha,
        },
    }


def _serialize_node(node: NavigationNode) -> dict[str, Any]:
    return {
        "id": node.id,
        "node_type": node.node_type.value,
        "floor": node.floor,
        "position": world_point(node.position),
        "wheelchair_accessible": node.accessibility.wheelchair_accessible,
    }


def _serialize_instruction(instruction: NavigationInstruction) -> dict[str, Any]:
    return {
        "id": instruction.id,
        "type": instruction.type.value,
        "description": instruction.description,
        "distance_m": float(instruction.distance),
        "distance_text": format_distance(instruction.distance),
        "position": world_point(instruction.position),
    }


def serialize_route(route: NavigationRoute) -> dict[str, Any]:
    """Convert a route into the payload consumed by rendering and UI clients."""
    return {
        "route_id": route.id,
        "destination": _serialize_poi(route.destination),
        "nodes": [_serialize_node(node) for node in route.nodes],
        "total_distance_m": float(route.total_distance),
        "estimated_time_s": float(route.estimated_time),
        "floor_changes": route.floor_changes,
        "floors": route.floors,
        "instructions": [_serialize_instruction(step) for step in route.instructions],
    }


def _latest_building_or_400() -> Building:
    """Get latest loaded building or raise 400."""
    if STATE.building is None:
        raise HTTPException(status_code=400, detail="No building loaded yet")
    return STATE.building


def _building_summary(building: Building) -> dict[str, Any]:
    return {
        "building_id": building.building_id,
        "name": building.name,
        "address": building.address,
        "floors": building.floors(),
        "node_count": len(building.nodes),
        "poi_count": len(building.pois),
    }


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Wayfinder API", version=API_VERSION)

    raw_origins = os.getenv("WAYFINDER_CORS_ORIGINS", "*").strip()
    if raw_origins == "*":
        cors_origins = ["*"]
        allow_credentials = False
    else:
        cors_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        allow_credentials = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if os.getenv("WAYFINDER_DEMO_BUILDING", "false").lower() == "true" and STATE.building is None:
        STATE.building = sample_building()
        logger.info("Loaded demo building '%s'", STATE.building.building_id)

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Health endpoint with loaded-building metadata."""
        building = STATE.building
        return {
            "status": "ok",
            "version": app.version,
            "building_loaded": building is not None,
            "node_count": len(building.nodes) if building else 0,
            "poi_count": len(building.pois) if building else 0,
        }

    @app.post("/building")
    async def load_building(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        """Replace the active building snapshot with a new payload."""
        try:
            building = parse_building_payload(payload)
        except ValueError as exc:
            logger.warning("Rejected building payload: %s", exc)
            raise HTTPException(status_code=400, detail=f"Building loading failed: {exc}") from exc

        STATE.building = building
        logger.info(
            "Loaded building '%s' with %d nodes and %d POIs",
            building.building_id,
            len(building.nodes),
            len(building.pois),
        )
        return {"message": "Building loaded successfully", **_building_summary(building)}

    @app.get("/building")
    async def get_building() -> dict[str, Any]:
        """Return summary metadata for the active building."""
        return _building_summary(_latest_building_or_400())

    @app.get("/pois")
    async def get_pois(
        query: str | None = Query(default=None),
        category: str | None = Query(default=None),
        floor: int | None = Query(default=None),
    ) -> dict[str, Any]:
        """Search or list points of interest for the active building."""
        building = _latest_building_or_400()

        pois: list[PointOfInterest] = list(building.pois)
        if query is not None:
            pois = search_pois(pois, query)
        if category is not None:
            pois = filter_by_category(pois, category)
        if floor is not None:
            pois = pois_on_floor(pois, floor)

        return {
            "building_id": building.building_id,
            "pois": [_serialize_poi(poi) for poi in pois],
        }

    @app.get("/categories")
    async def get_categories() -> dict[str, Any]:
        """Return browsable POI categories for the active building."""
        building = _latest_building_or_400()
        return {
            "building_id": building.building_id,
            "categories": [_serialize_category(c) for c in building.categories],
        }

    @app.post("/route")
    async def plan_route(payload: RouteRequest) -> dict[str, Any]:
        """Compute an accessibility-aware route from a world position to a POI."""
        building = _latest_building_or_400()

        destination = find_poi(building.pois, payload.destination_poi_id)
        if destination is None:
            raise HTTPException(
                status_code=404,
                detail=f"destination_poi_id '{payload.destination_poi_id}' was not found",
            )

        raw_prefs = payload.preferences or PreferencesPayload()
        try:
            preferences = NavigationPreferences(**raw_prefs.model_dump())
        except InvalidPreferencesError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid preferences: {exc}") from exc

        start = (payload.start.x, payload.start.y, payload.start.z)
        try:
            route = compute_route(start, destination, building.graph, preferences)
        except Exception as exc:  # pragma: no cover - safety net
            logger.exception("Route planning failed")
            raise HTTPException(status_code=500, detail=f"Unexpected route planning error: {exc}") from exc

        if route is None:
            raise HTTPException(status_code=404, detail="No navigable route found")

        return serialize_route(route)

    return app
