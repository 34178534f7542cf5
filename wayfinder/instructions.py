"""Turn-by-turn instruction synthesis from resolved node paths.

Purpose:
- Classify turns at junctions from the horizontal (X-Z plane) path geometry.
- Phrase stair and elevator transitions between floors.
- Render segment distances for display.

Usage example:
    >>> from wayfinder.instructions import generate_instructions
    >>> [step.description for step in generate_instructions(route_nodes)]
"""

from __future__ import annotations

from typing import Sequence

from wayfinder.models import (
    InstructionType,
    NavigationInstruction,
    NavigationNode,
    NodeType,
    TurnDirection,
    Vector3,
)
from wayfinder.utils import distance

# Cross-product magnitude (m^2) below which a junction counts as straight.
TURN_THRESHOLD = 0.1

_TURN_PHRASES: dict[TurnDirection, tuple[InstructionType, str]] = {
    TurnDirection.LEFT: (InstructionType.TURN_LEFT, "Turn left and continue for {}"),
    TurnDirection.RIGHT: (InstructionType.TURN_RIGHT, "Turn right and continue for {}"),
    TurnDirection.STRAIGHT: (InstructionType.STRAIGHT, "Continue straight for {}"),
}


def format_distance(distance_m: float) -> str:
    """Format a distance as `"42 cm"`, `"5.0 m"` or `"120 m"`."""
    if distance_m < 1.0:
        return f"{distance_m * 100:.0f} cm"
    if distance_m < 100.0:
        return f"{distance_m:.1f} m"
    return f"{distance_m:.0f} m"


def classify_turn(
    start: Vector3,
    middle: Vector3,
    end: Vector3,
    threshold: float = TURN_THRESHOLD,
) -> TurnDirection:
    """Classify the turn taken at `middle` when walking `start -> middle -> end`.

    Uses the 2D cross product of the incoming and outgoing vectors on the X-Z plane.
    Positive values beyond `threshold` are left turns, negative values right turns.
    """
    in_x = middle[0] - start[0]
    in_z = middle[2] - start[2]
    out_x = end[0] - middle[0]
    out_z = end[2] - middle[2]

    cross = in_x * out_z - in_z * out_x
    if cross > threshold:
        return TurnDirection.LEFT
    if cross < -threshold:
        return TurnDirection.RIGHT
    return TurnDirection.STRAIGHT


def _step_instruction(
    previous: NavigationNode,
    current: NavigationNode,
    following: NavigationNode | None,
) -> NavigationInstruction:
    segment = distance(previous.position, current.position)
    text = format_distance(segment)

    if current.node_type is NodeType.STAIRWAY:
        if current.floor > previous.floor:
            kind, description = InstructionType.UPSTAIRS, f"Go upstairs for {text}"
        else:
            kind, description = InstructionType.DOWNSTAIRS, f"Go downstairs for {text}"
    elif current.node_type is NodeType.ELEVATOR:
        kind, description = InstructionType.ELEVATOR, f"Take elevator to floor {current.floor}"
    elif current.node_type is NodeType.JUNCTION and following is not None:
        turn = classify_turn(previous.position, current.position, following.position)
        kind, template = _TURN_PHRASES[turn]
        description = template.format(text)
    else:
        kind, description = InstructionType.STRAIGHT, f"Continue for {text}"

    return NavigationInstruction(
        type=kind,
        description=description,
        distance=segment,
        position=current.position,
    )


def generate_instructions(nodes: Sequence[NavigationNode]) -> list[NavigationInstruction]:
    """Build the narrated instruction list for an ordered node path.

    Args:
        nodes: Path nodes, start first and destination last.

    Returns:
        A `start` instruction, one instruction per path segment, then a
        `destination` instruction. Paths with fewer than two nodes need no
        guidance and produce an empty list.
    """
    if len(nodes) < 2:
        return []

    steps = [
        NavigationInstruction(
            type=InstructionType.START,
            description="Start navigation",
            distance=0.0,
            position=nodes[0].position,
        )
    ]

    for idx in range(1, len(nodes)):
        following = nodes[idx + 1] if idx < len(nodes) - 1 else None
        steps.append(_step_instruction(nodes[idx - 1], nodes[idx], following))

    steps.append(
        NavigationInstruction(
            type=InstructionType.DESTINATION,
            description="You have arrived at your destination",
            distance=0.0,
            position=nodes[-1].position,
        )
    )
    return steps
