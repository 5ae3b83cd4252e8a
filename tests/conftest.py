"""Pytest configuration and fixtures."""

import pytest

from graphscene.models import Container, Decoration, Edge, Graph, LayoutHints, Node


def make_graph(node_ids: list[str], *edges: tuple[str, str], direction: str | None = None) -> Graph:
    """Build a graph from node ids and (source, target) pairs; labels equal ids."""
    return Graph(
        nodes=[Node(id=nid, label=nid) for nid in node_ids],
        edges=[Edge(id=f"e{i}", source=s, target=t) for i, (s, t) in enumerate(edges)],
        layout_hints=LayoutHints(direction=direction) if direction else None,
    )


@pytest.fixture
def chain_graph() -> Graph:
    """A -> B -> C, laid out top to bottom."""
    return make_graph(["A", "B", "C"], ("A", "B"), ("B", "C"), direction="TB")


@pytest.fixture
def rich_graph() -> Graph:
    """Graph exercising every scene feature, including a dangling edge."""
    return Graph(
        nodes=[
            Node(id="api", label="API Gateway", x=0, y=0),
            Node(id="svc", label="Service", x=300, y=0),
            Node(id="db", label="Postgres", x=300, y=200),
        ],
        edges=[
            Edge(id="e1", source="api", target="svc", label="calls"),
            Edge(id="e2", source="svc", target="db"),
            Edge(id="e3", source="svc", target="ghost", label="lost"),
        ],
        containers=[
            Container(id="backend", label="Backend", children=["svc", "db"]),
            Container(id="empty", label="Nothing", children=["ghost"]),
        ],
        decorations=[
            Decoration(target="db", builtin="database"),
            Decoration(at_x=10, at_y=20, text="note"),
            Decoration(target="api", text=""),
        ],
    )
