"""
Layout algorithm for graph nodes.

Assigns center coordinates with a fast, deterministic layered heuristic:
- Topological order (Kahn) over edges whose endpoints exist
- Longest-path ranking along the primary axis
- Row packing of wide ranks, centered on zero

No crossing minimization is attempted. Layout is a pure transform: the
input graph is left untouched and a positioned copy is returned.
"""

import logging
from collections import defaultdict, deque
from typing import TYPE_CHECKING, Optional

from .models import LayoutDirection, normalize_direction

if TYPE_CHECKING:
    from .models import Graph, Node, Edge

logger = logging.getLogger(__name__)


# Default layout parameters
DEFAULT_NODE_GAP = 180
DEFAULT_RANK_GAP = 140
DEFAULT_MAX_PER_RANK = 4


def _adjacency(
    nodes: list["Node"],
    edges: list["Edge"]
) -> tuple[dict[str, list[str]], dict[str, int]]:
    """Build successor lists and in-degrees from edges with both endpoints present."""
    children: dict[str, list[str]] = {n.id: [] for n in nodes}
    in_degree: dict[str, int] = {n.id: 0 for n in nodes}

    for edge in edges:
        if edge.source in children and edge.target in children:
            children[edge.source].append(edge.target)
            in_degree[edge.target] += 1

    return children, in_degree


def _unique_ids(nodes: list["Node"]) -> list[str]:
    seen: set[str] = set()
    ids: list[str] = []
    for node in nodes:
        if node.id not in seen:
            seen.add(node.id)
            ids.append(node.id)
    return ids


def topological_order(
    nodes: list["Node"],
    edges: list["Edge"]
) -> tuple[list[str], bool]:
    """
    Order node ids so every edge points forward, using Kahn's algorithm.

    The queue is seeded with zero in-degree nodes in input order, so ties
    are broken by the original node order.

    Args:
        nodes: Nodes of the graph
        edges: Edges of the graph (dangling edges are ignored)

    Returns:
        (order, complete). `complete` is False when a cycle kept some nodes
        out of the order; the partial order is returned as is.
    """
    children, in_degree = _adjacency(nodes, edges)
    ids = _unique_ids(nodes)

    queue = deque(nid for nid in ids if in_degree[nid] == 0)
    order: list[str] = []

    while queue:
        current = queue.popleft()
        order.append(current)
        for child in children[current]:
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)

    return order, len(order) == len(ids)


def assign_ranks(
    nodes: list["Node"],
    edges: list["Edge"]
) -> tuple[list[str], dict[str, int]]:
    """
    Assign each node its longest-path rank.

    Nodes with no incoming edge start at rank 0. A single pass over the
    processing order propagates `rank[v] = max(rank[v], rank[u] + 1)` from
    every node that already holds a rank. On cyclic input the processing
    order falls back to the input order, and nodes that no source reaches
    stay at rank 0.

    Returns:
        (processing order, rank by node id)
    """
    children, in_degree = _adjacency(nodes, edges)
    order, complete = topological_order(nodes, edges)

    if not complete:
        logger.warning(
            "Graph has a cycle (%d of %d nodes ordered); "
            "falling back to input order for layout",
            len(order), len(in_degree)
        )
        order = _unique_ids(nodes)

    ranks: dict[str, int] = {nid: 0 for nid in order if in_degree[nid] == 0}

    for node_id in order:
        if node_id not in ranks:
            continue
        for child in children[node_id]:
            ranks[child] = max(ranks.get(child, 0), ranks[node_id] + 1)

    for node_id in order:
        ranks.setdefault(node_id, 0)

    return order, ranks


def _center_offset(index: int, count: int, spacing: float) -> float:
    """Offset of item `index` among `count` items spaced evenly around zero."""
    return (index - (count - 1) / 2) * spacing


def layout_graph(
    graph: "Graph",
    direction: Optional[str] = None,
    node_gap: float = DEFAULT_NODE_GAP,
    rank_gap: float = DEFAULT_RANK_GAP,
    max_per_rank: int = DEFAULT_MAX_PER_RANK
) -> "Graph":
    """
    Arrange nodes in ranks based on edge directions.

    Ranks advance along the primary axis. A rank holding more than
    `max_per_rank` nodes is split into rows, stacked along the primary axis
    `rank_gap` apart and centered on the rank; the members of a row are
    spread along the cross axis `node_gap` apart, centered on zero. The
    first row of each rank sits `node_gap` past the last row of the rank
    before it, so ranks never interleave.

    Args:
        graph: The graph to arrange (not modified)
        direction: "TB" or "LR" (case-insensitive); None uses the graph's
            layout hints. Anything other than "TB" lays out left to right.
        node_gap: Distance between ranks and between row members
        rank_gap: Distance between rows of the same rank
        max_per_rank: Maximum number of nodes per row

    Returns:
        A copy of the graph with every node positioned
    """
    positioned = graph.model_copy(deep=True)
    if not positioned.nodes:
        return positioned

    if direction is None:
        direction = positioned.direction()
    else:
        direction = normalize_direction(direction)
    max_per_rank = max(1, int(max_per_rank))

    order, ranks = assign_ranks(positioned.nodes, positioned.edges)

    # Group by rank, keeping processing order inside each rank
    by_rank: dict[int, list[str]] = defaultdict(list)
    for node_id in order:
        by_rank[ranks[node_id]].append(node_id)

    coords: dict[str, tuple[float, float]] = {}
    center = 0.0
    previous_half_span = 0.0
    for rank in sorted(by_rank):
        ids = by_rank[rank]
        rows = [ids[i:i + max_per_rank] for i in range(0, len(ids), max_per_rank)]
        half_span = (len(rows) - 1) / 2 * rank_gap
        # Next rank starts one node_gap past the last row of the previous one
        if rank > 0:
            center += previous_half_span + node_gap + half_span
        previous_half_span = half_span

        for row_idx, row in enumerate(rows):
            main = center + _center_offset(row_idx, len(rows), rank_gap)
            for idx, node_id in enumerate(row):
                cross = _center_offset(idx, len(row), node_gap)
                if direction == LayoutDirection.TB.value:
                    coords[node_id] = (cross, main)
                else:
                    coords[node_id] = (main, cross)

    for node in positioned.nodes:
        node.x, node.y = coords[node.id]

    logger.debug(
        "Laid out %d nodes in %d ranks (direction=%s)",
        len(coords), len(by_rank), direction
    )
    return positioned
