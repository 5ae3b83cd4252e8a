"""
Scene composition - turn a positioned graph into drawable elements.

Elements are emitted in a fixed paint order so later layers draw on top:
1. Container backgrounds
2. Connectors (arrows)
3. Node boxes
4. Text: node labels, then connector labels, then container tags

Every element gets a seed hashed from a canonical identity key, so the same
graph always yields the same scene.
"""

import logging
from typing import TYPE_CHECKING

from .elements import (
    ArrowElement,
    RectangleElement,
    Scene,
    AppState,
    TextElement,
    TRANSPARENT,
)
from .geometry import (
    RoutingPolicy,
    boundary_point,
    label_anchor,
    node_size,
    points_extent,
    route_connector,
    union_bounds,
)
from .identity import stable_seed

if TYPE_CHECKING:
    from .models import Container, Edge, Graph, Node

logger = logging.getLogger(__name__)


DEFAULT_NODE_FILL = "#FFFFFF"
CONTAINER_FILL = "#F8FAFC"
CONTAINER_STROKE = "#94A3B8"
CONTAINER_TAG_COLOR = "#334155"
CONTAINER_PADDING = 40.0

LABEL_HEIGHT = 24.0
EDGE_LABEL_HEIGHT = 20.0
TAG_HEIGHT = 20.0


def _color_or(default_hex: str, color: str) -> str:
    return color if color.strip() else default_hex


def node_box(node: "Node") -> tuple[float, float, float, float]:
    """Bounding box (left, top, right, bottom) of a node's rectangle."""
    w, h = node_size(node.label)
    return (node.x - w / 2, node.y - h / 2, node.x + w / 2, node.y + h / 2)


def _node_rect(node: "Node") -> RectangleElement:
    seed = stable_seed(node.id)
    w, h = node_size(node.label)
    return RectangleElement(
        id=f"node-{node.id}",
        seed=seed,
        version_nonce=seed,
        x=node.x - w / 2,
        y=node.y - h / 2,
        width=w,
        height=h,
        background_color=_color_or(DEFAULT_NODE_FILL, node.style.color),
    )


def _node_label(node: "Node") -> TextElement:
    seed = stable_seed(node.id, "text")
    w, _ = node_size(node.label)
    text_w = max(min(len(node.label) * 9.0, w - 16.0), 24.0)
    return TextElement(
        id=f"node-label-{node.id}",
        seed=seed,
        version_nonce=seed,
        x=node.x - text_w / 2,
        y=node.y - LABEL_HEIGHT / 2,
        width=text_w,
        height=LABEL_HEIGHT,
        text=node.label,
    )


def _connector(
    edge: "Edge",
    source: "Node",
    target: "Node",
    routing: RoutingPolicy
) -> tuple[ArrowElement, TextElement | None]:
    """Arrow for an edge, plus its label text when the edge has one."""
    sw, sh = node_size(source.label)
    tw, th = node_size(target.label)
    start = boundary_point(source.x, source.y, sw, sh, target.x, target.y)
    end = boundary_point(target.x, target.y, tw, th, source.x, source.y)

    points = route_connector(start, end, routing)
    width, height = points_extent(points)
    seed = stable_seed(edge.id, "arrow")
    arrow = ArrowElement(
        id=f"edge-{edge.id}",
        seed=seed,
        version_nonce=seed,
        x=start[0],
        y=start[1],
        width=width,
        height=height,
        points=points,
    )

    if not edge.label:
        return arrow, None

    lx, ly = label_anchor(start, end, routing)
    lw = max(len(edge.label) * 9.0 + 8.0, 24.0)
    lseed = stable_seed(edge.id, "label")
    label = TextElement(
        id=f"edge-label-{edge.id}",
        seed=lseed,
        version_nonce=lseed,
        x=lx - lw / 2,
        y=ly - EDGE_LABEL_HEIGHT / 2,
        width=lw,
        height=EDGE_LABEL_HEIGHT,
        text=edge.label,
        font_size=14,
        baseline=16,
    )
    return arrow, label


def container_bounds(
    container: "Container",
    nodes_by_id: dict[str, "Node"],
    padding: float = CONTAINER_PADDING
) -> tuple[float, float, float, float] | None:
    """
    Padded union of the boxes of a container's resolvable children.

    Returns:
        (left, top, right, bottom), or None when no child resolves
    """
    boxes = [node_box(nodes_by_id[c]) for c in container.children if c in nodes_by_id]
    if not boxes:
        return None
    return union_bounds(boxes, padding)


def _container_elements(
    container: "Container",
    bounds: tuple[float, float, float, float]
) -> tuple[RectangleElement, TextElement]:
    left, top, right, bottom = bounds
    seed = stable_seed(container.id, "container")
    background = RectangleElement(
        id=f"container-{container.id}",
        seed=seed,
        version_nonce=seed,
        x=left,
        y=top,
        width=right - left,
        height=bottom - top,
        stroke_color=CONTAINER_STROKE,
        stroke_width=1,
        stroke_style="dashed",
        fill_style="solid",
        roughness=0,
        background_color=_color_or(CONTAINER_FILL, container.style.bg),
    )

    tag_text = container.label or container.id
    tag_w = max(len(tag_text) * 8.0 + 8.0, 24.0)
    tag_seed = stable_seed(container.id, "tag")
    tag = TextElement(
        id=f"container-tag-{container.id}",
        seed=tag_seed,
        version_nonce=tag_seed,
        x=left + 8.0,
        y=top + 6.0,
        width=tag_w,
        height=TAG_HEIGHT,
        text=tag_text,
        stroke_color=_color_or(CONTAINER_TAG_COLOR, container.style.label_tag),
        background_color=TRANSPARENT,
        font_size=14,
        text_align="left",
        vertical_align="top",
        baseline=16,
    )
    return background, tag


def compose_scene(
    graph: "Graph",
    routing: RoutingPolicy = RoutingPolicy.ORTHOGONAL
) -> Scene:
    """
    Build the scene for a positioned graph.

    Edges whose source or target does not resolve are left out, as are
    containers with no resolvable child.

    Args:
        graph: Graph whose nodes already carry coordinates
        routing: Connector routing policy

    Returns:
        Scene with elements in paint order
    """
    nodes_by_id = graph.node_index()

    backgrounds: list[RectangleElement] = []
    arrows: list[ArrowElement] = []
    rects: list[RectangleElement] = []
    node_labels: list[TextElement] = []
    edge_labels: list[TextElement] = []
    tags: list[TextElement] = []

    for container in graph.containers:
        bounds = container_bounds(container, nodes_by_id)
        if bounds is None:
            logger.debug("Skipping container %s: no resolvable children", container.id)
            continue
        background, tag = _container_elements(container, bounds)
        backgrounds.append(background)
        tags.append(tag)

    for node in graph.nodes:
        rects.append(_node_rect(node))
        node_labels.append(_node_label(node))

    for edge in graph.edges:
        source = nodes_by_id.get(edge.source)
        target = nodes_by_id.get(edge.target)
        if source is None or target is None:
            logger.debug(
                "Dropping edge %s: unknown endpoint (%s -> %s)",
                edge.id, edge.source, edge.target
            )
            continue
        arrow, label = _connector(edge, source, target, routing)
        arrows.append(arrow)
        if label is not None:
            edge_labels.append(label)

    elements = [*backgrounds, *arrows, *rects, *node_labels, *edge_labels, *tags]
    return Scene(
        elements=elements,
        app_state=AppState(view_background_color=graph.background()),
    )
