"""
Decoration overlays - icon and text markers placed on top of a scene.

Decorations are opt-in. When enabled, each one resolves to a single text
element appended after the base scene, so it always renders on top.
"""

import logging
import math
from typing import TYPE_CHECKING, Optional

from .elements import TextElement
from .identity import stable_seed

if TYPE_CHECKING:
    from .elements import Scene
    from .models import Decoration, Graph, Node

logger = logging.getLogger(__name__)


PIN_GLYPH = "\U0001F4CC"

# Builtin icon names (lower-case) -> glyph
BUILTIN_GLYPHS: dict[str, str] = {
    "salesperson": "\U0001F9D1\u200d\U0001F4BC",
    "sales": "\U0001F9D1\u200d\U0001F4BC",
    "email": "\U0001F4E8",
    "database": "\U0001F5C4\ufe0f",
    "db": "\U0001F5C4\ufe0f",
    "model": "\U0001F9E0",
    "search": "\U0001F50E",
}

DEFAULT_DECORATION_SIZE = (20.0, 20.0)


def builtin_glyph(name: str) -> str:
    """Glyph for a builtin icon name; unknown names get a pin."""
    return BUILTIN_GLYPHS.get(name.strip().lower(), PIN_GLYPH)


def resolve_glyph(decoration: "Decoration") -> str:
    """Text a decoration displays; empty when there is nothing to show."""
    if decoration.builtin is not None:
        return builtin_glyph(decoration.builtin)
    return decoration.text or ""


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (10.5 -> 11, -10.5 -> -10)."""
    return math.floor(value + 0.5)


def resolve_anchor(
    decoration: "Decoration",
    graph: "Graph",
    nodes_by_id: Optional[dict[str, "Node"]] = None
) -> tuple[float, float]:
    """
    Center point of a decoration.

    A target naming a node anchors at the node center; a target naming an
    edge with both endpoints present anchors halfway between their centers.
    Otherwise the absolute (at_x, at_y) is used, defaulting to the origin.
    The offset is applied last.
    """
    x = decoration.at_x or 0.0
    y = decoration.at_y or 0.0

    if decoration.target:
        if nodes_by_id is None:
            nodes_by_id = graph.node_index()
        node = nodes_by_id.get(decoration.target)
        edge = None if node is not None else graph.get_edge(decoration.target)
        if node is not None:
            x, y = node.center()
        elif edge is not None and edge.source in nodes_by_id and edge.target in nodes_by_id:
            sx, sy = nodes_by_id[edge.source].center()
            tx, ty = nodes_by_id[edge.target].center()
            x, y = (sx + tx) / 2, (sy + ty) / 2

    if decoration.offset is not None:
        x += decoration.offset.dx
        y += decoration.offset.dy
    return x, y


def decoration_element(
    decoration: "Decoration",
    graph: "Graph",
    nodes_by_id: Optional[dict[str, "Node"]] = None
) -> Optional[TextElement]:
    """Text element for a decoration, or None when it resolves to no text."""
    label = resolve_glyph(decoration)
    if not label:
        return None

    cx, cy = resolve_anchor(decoration, graph, nodes_by_id)
    if decoration.size is not None:
        w, h = decoration.size.w, decoration.size.h
    else:
        w, h = DEFAULT_DECORATION_SIZE

    seed = stable_seed(label, round_half_up(cx), round_half_up(cy))
    return TextElement(
        id=f"decor-{label}-{seed}",
        seed=seed,
        version_nonce=seed,
        x=cx - w / 2,
        y=cy - h / 2,
        width=w,
        height=h,
        text=label,
        baseline=16,
    )


def apply_decorations(
    scene: "Scene",
    graph: "Graph",
    allow_decorations: bool = False
) -> "Scene":
    """
    Overlay the graph's decorations on a composed scene.

    Args:
        scene: Base scene from the composer
        graph: The positioned graph the scene was built from
        allow_decorations: Opt-in switch; when False the scene is returned as is

    Returns:
        The scene with one text element per non-empty decoration appended
    """
    if not allow_decorations or not graph.decorations:
        return scene

    nodes_by_id = graph.node_index()
    extra: list[TextElement] = []
    for decoration in graph.decorations:
        element = decoration_element(decoration, graph, nodes_by_id)
        if element is None:
            logger.debug("Dropping decoration with empty text (target=%s)", decoration.target)
            continue
        extra.append(element)

    return scene.with_elements(extra)
