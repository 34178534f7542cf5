"""Navigation graph snapshot and nearest-node resolution.

Graph convention:
- Nodes live in one ordered collection; connections are node ids (directed edges).
- A snapshot is built once per planning request and never mutated afterwards.
"""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np

from wayfinder.models import InvalidGraphError, NavigationNode, Vector3
from wayfinder.utils import positions_array


def nearest_node(position: Vector3, nodes: Iterable[NavigationNode]) -> NavigationNode | None:
    """Return the node closest to `position`, or None for an empty node set.

    Ties resolve to the first node in input order.
    """
    ordered = list(nodes)
    if not ordered:
        return None

    deltas = positions_array(ordered) - np.asarray(position, dtype=np.float64)
    dists = np.sqrt(np.einsum("ij,ij->i", deltas, deltas))
    return ordered[int(np.argmin(dists))]


class NavigationGraph:
    """Read-only id-indexed view over a node snapshot."""

    __slots__ = ("_nodes", "_lookup")

    def __init__(self, nodes: Iterable[NavigationNode]) -> None:
        self._nodes: tuple[NavigationNode, ...] = tuple(nodes)
        self._lookup: dict[str, NavigationNode] = {}
        for node in self._nodes:
            if node.id in self._lookup:
                raise InvalidGraphError(f"Duplicate node id '{node.id}'")
            self._lookup[node.id] = node

        for node in self._nodes:
            for target in node.connections:
                if target not in self._lookup:
                    raise InvalidGraphError(f"Node '{node.id}' connects to unknown node '{target}'")

    @classmethod
    def from_nodes(cls, nodes: Iterable[NavigationNode] | "NavigationGraph") -> "NavigationGraph":
        """Build a validated graph, passing existing graphs through unchanged."""
        if isinstance(nodes, NavigationGraph):
            return nodes
        return cls(nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[NavigationNode]:
        return iter(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._lookup

    @property
    def nodes(self) -> tuple[NavigationNode, ...]:
        return self._nodes

    def get(self, node_id: str) -> NavigationNode | None:
        return self._lookup.get(node_id)

    def neighbors(self, node_id: str) -> list[NavigationNode]:
        """Resolve the outgoing connections of one node."""
        node = self._lookup.get(node_id)
        if node is None:
            raise KeyError(f"Node '{node_id}' not found")
        return [self._lookup[target] for target in node.connections]

    def nearest_node(self, position: Vector3) -> NavigationNode | None:
        return nearest_node(position, self._nodes)

    def floors(self) -> list[int]:
        return sorted({node.floor for node in self._nodes})

    def nodes_on_floor(self, floor: int) -> list[NavigationNode]:
        return [node for node in self._nodes if node.floor == int(floor)]
