"""
Connector geometry: node sizing, boundary clipping and routing.

Nodes are axis-aligned boxes centered on their (x, y). Connectors start and
end where the line between two centers leaves each box, so arrowheads do
not disappear under the node fill.
"""

import math
from enum import Enum

Point = tuple[float, float]

NODE_HEIGHT = 48.0
NODE_MIN_WIDTH = 100.0
BOUNDARY_INSET = 2.0
LABEL_GAP = 12.0


class RoutingPolicy(str, Enum):
    """How a connector travels between its two endpoints."""
    STRAIGHT = "straight"      # One direct segment
    ORTHOGONAL = "orthogonal"  # Horizontal, then vertical


def node_size(label: str) -> tuple[float, float]:
    """Box size for a node label; longer labels get wider boxes."""
    return max(len(label) * 10.0 + 30.0, NODE_MIN_WIDTH), NODE_HEIGHT


def boundary_point(
    cx: float,
    cy: float,
    width: float,
    height: float,
    tx: float,
    ty: float,
    inset: float = BOUNDARY_INSET
) -> Point:
    """
    Point where the ray from a box center toward (tx, ty) leaves the box.

    The first edge reached decides: the scale needed to reach the vertical
    sides is (width/2)/|dx|, the horizontal sides (height/2)/|dy|. The
    result is pulled back by `inset` along the ray so the connector end
    stays off the box stroke.

    Args:
        cx, cy: Box center
        width, height: Box size
        tx, ty: Point the ray heads toward
        inset: Pull-back distance along the ray

    Returns:
        The clipped point; the center itself when (tx, ty) is the center
    """
    dx = tx - cx
    dy = ty - cy
    if dx == 0 and dy == 0:
        return (cx, cy)

    scales: list[float] = []
    if dx != 0:
        scales.append((width / 2) / abs(dx))
    if dy != 0:
        scales.append((height / 2) / abs(dy))
    t = min(scales)

    norm = max(math.hypot(dx, dy), 1.0)
    ux = dx / norm
    uy = dy / norm
    return (cx + dx * t - ux * inset, cy + dy * t - uy * inset)


def route_connector(start: Point, end: Point, policy: RoutingPolicy) -> list[Point]:
    """
    Connector path as points relative to `start`.

    Straight connectors are one segment. Orthogonal connectors run
    horizontally to the end's x, then vertically to the end.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if policy == RoutingPolicy.STRAIGHT:
        return [(0.0, 0.0), (dx, dy)]
    return [(0.0, 0.0), (dx, 0.0), (dx, dy)]


def _offset_midpoint(a: Point, b: Point, gap: float) -> Point:
    """Midpoint of a->b pushed `gap` along the segment's left normal."""
    vx = b[0] - a[0]
    vy = b[1] - a[1]
    length = max(math.hypot(vx, vy), 1.0)
    nx = -vy / length
    ny = vx / length
    return ((a[0] + b[0]) / 2 + nx * gap, (a[1] + b[1]) / 2 + ny * gap)


def label_anchor(
    start: Point,
    end: Point,
    policy: RoutingPolicy,
    gap: float = LABEL_GAP
) -> Point:
    """
    Center point for a connector label.

    Straight connectors label the middle of the line. Orthogonal connectors
    label the middle of their longer segment (the horizontal one on ties).
    Either way the label sits `gap` units to the side of the line.
    """
    if policy == RoutingPolicy.STRAIGHT:
        return _offset_midpoint(start, end, gap)

    corner = (end[0], start[1])
    horizontal = abs(end[0] - start[0])
    vertical = abs(end[1] - start[1])
    if horizontal >= vertical:
        return _offset_midpoint(start, corner, gap)
    return _offset_midpoint(corner, end, gap)


def points_extent(points: list[Point]) -> tuple[float, float]:
    """Width and height of the bounding box of a point list."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return max(xs) - min(xs), max(ys) - min(ys)


def union_bounds(
    boxes: list[tuple[float, float, float, float]],
    padding: float = 0.0
) -> tuple[float, float, float, float]:
    """
    Bounding box (left, top, right, bottom) of several boxes, grown by padding.

    Args:
        boxes: Boxes as (left, top, right, bottom); must not be empty
        padding: Distance added on every side
    """
    left = min(b[0] for b in boxes) - padding
    top = min(b[1] for b in boxes) - padding
    right = max(b[2] for b in boxes) + padding
    bottom = max(b[3] for b in boxes) + padding
    return (left, top, right, bottom)
