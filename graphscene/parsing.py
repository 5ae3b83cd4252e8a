"""
Graph input - load graph documents and parse plain edge lists.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from .errors import GraphFormatError
from .models import (
    Edge,
    EdgeStyle,
    GlobalStyle,
    Graph,
    LayoutDirection,
    LayoutHints,
    Node,
    NodeStyle,
)

logger = logging.getLogger(__name__)


EDGE_LIST_NODE_COLOR = "#4F46E5"


def load_graph(data: str | bytes | dict[str, Any]) -> Graph:
    """
    Parse a graph document.

    Args:
        data: JSON text, or an already decoded mapping

    Returns:
        The parsed Graph

    Raises:
        GraphFormatError: if the text is not JSON or the document does not
            match the graph schema
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise GraphFormatError(f"Graph document is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise GraphFormatError(
            f"Graph document must be a JSON object, got {type(data).__name__}"
        )

    try:
        return Graph.from_json_dict(data)
    except ValidationError as e:
        raise GraphFormatError(
            f"Graph document does not match the schema ({e.error_count()} errors)",
            details=e.errors(include_url=False)
        ) from e


def parse_edge_list(text: str) -> Graph:
    """
    Build a graph from a plain edge list such as "A -> B -> C, B -> D".

    Entries are separated by commas or newlines; each entry is a chain of
    node names joined by "->". Entries without an arrow are ignored. Node
    ids and labels are the trimmed names, nodes are sorted by id, and edges
    are numbered e0, e1, ... in the order they appear.
    """
    names: set[str] = set()
    edges: list[Edge] = []

    for part in text.replace("\n", ",").split(","):
        entry = part.strip()
        if not entry:
            continue
        tokens = [t.strip() for t in entry.split("->") if t.strip()]
        if len(tokens) < 2:
            logger.debug("Ignoring edge-list entry without a chain: %r", entry)
            continue
        for source, target in zip(tokens, tokens[1:]):
            names.update((source, target))
            edges.append(Edge(
                id=f"e{len(edges)}",
                source=source,
                target=target,
                style=EdgeStyle(line="smooth", arrow="end"),
            ))

    nodes = [
        Node(id=name, label=name, style=NodeStyle(color=EDGE_LIST_NODE_COLOR))
        for name in sorted(names)
    ]
    return Graph(
        nodes=nodes,
        edges=edges,
        layout_hints=LayoutHints(direction=LayoutDirection.TB.value, algorithm="layered"),
        global_style=GlobalStyle(font="Inter", background="#ffffff"),
    )
