"""
Core data models for graphs.

These models define the canonical input schema:
- Nodes with a label, a center position and an optional fill colour
- Edges connecting nodes (using source/target naming convention)
- Optional layout hints, global style, containers and decorations

Field Naming Convention:
- JSON field names match the attribute names (snake_case)
- Edges use `source` and `target`; `from`/`to` are accepted on input
- Node `x`/`y` are the node's center, not its top-left corner
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, model_validator


DEFAULT_BACKGROUND = "#FFFFFF"


class LayoutDirection(str, Enum):
    """Primary axis along which ranks advance."""
    TB = "TB"  # top to bottom
    LR = "LR"  # left to right


class NodeShape(str, Enum):
    """Shapes the upstream generator may request (rendered as rectangles)."""
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    DIAMOND = "diamond"


class NodeStyle(BaseModel):
    """Per-node styling."""
    shape: str = NodeShape.RECTANGLE.value
    color: str = ""  # Blank means the composer's default fill


class EdgeStyle(BaseModel):
    """Per-edge styling."""
    line: str = ""
    arrow: str = "end"


class Node(BaseModel):
    """A node in the graph. `x`/`y` are the center and are set by layout."""
    id: str
    label: str = ""
    x: float = 0
    y: float = 0
    style: NodeStyle = Field(default_factory=NodeStyle)

    def center(self) -> tuple[float, float]:
        """Get the center point of the node."""
        return (self.x, self.y)


class Edge(BaseModel):
    """
    An edge connecting two nodes.

    Uses `source` and `target` as canonical field names.
    Accepts `from`/`to` on input for backward compatibility.
    A blank id is filled in by the owning Graph.
    """
    id: str = ""
    source: str
    target: str
    label: str = ""
    style: EdgeStyle = Field(default_factory=EdgeStyle)

    @model_validator(mode='before')
    @classmethod
    def convert_legacy_fields(cls, data: Any) -> Any:
        """Convert legacy 'from'/'to' fields to 'source'/'target'."""
        if isinstance(data, dict):
            data = dict(data)
            if 'from' in data and 'source' not in data:
                data['source'] = data.pop('from')
            if 'to' in data and 'target' not in data:
                data['target'] = data.pop('to')
        return data


class LayoutHints(BaseModel):
    """Hints from the generator about how to lay the graph out."""
    direction: str = LayoutDirection.LR.value
    algorithm: str = ""

    def normalized_direction(self) -> str:
        return normalize_direction(self.direction)


class GlobalStyle(BaseModel):
    """Graph-wide presentation settings."""
    font: str = ""
    background: str = DEFAULT_BACKGROUND


class ContainerStyle(BaseModel):
    """Style overrides for a container."""
    bg: str = ""         # Background fill
    label_tag: str = ""  # Header tag text colour


class Container(BaseModel):
    """A visual grouping drawn behind a set of nodes."""
    id: str
    label: str = ""
    children: list[str] = Field(default_factory=list)
    style: ContainerStyle = Field(default_factory=ContainerStyle)


class DecorationOffset(BaseModel):
    dx: float = 0
    dy: float = 0


class DecorationSize(BaseModel):
    w: float = 20
    h: float = 20


class Decoration(BaseModel):
    """
    An icon or text marker overlaid on the scene.

    Anchored either to a node/edge (`target`) or to an absolute point
    (`at_x`, `at_y`). Shows a builtin glyph when `builtin` is set,
    otherwise the free `text`.
    """
    target: Optional[str] = None
    at_x: Optional[float] = None
    at_y: Optional[float] = None
    offset: Optional[DecorationOffset] = None
    builtin: Optional[str] = None
    text: Optional[str] = None
    size: Optional[DecorationSize] = None


def normalize_direction(direction: Optional[str]) -> str:
    """Upper-case a direction string; blank or missing means LR."""
    value = (direction or "").strip().upper()
    return value or LayoutDirection.LR.value


class Graph(BaseModel):
    """
    The complete graph document.
    This is what the upstream generator produces and the composer consumes.
    """
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    layout_hints: Optional[LayoutHints] = None
    global_style: Optional[GlobalStyle] = None
    containers: list[Container] = Field(default_factory=list)
    decorations: list[Decoration] = Field(default_factory=list)

    @model_validator(mode='after')
    def fill_edge_ids(self) -> "Graph":
        """Give edges without an id a positional one (e0, e1, ...), skipping ids in use."""
        taken = {edge.id for edge in self.edges if edge.id}
        for i, edge in enumerate(self.edges):
            if edge.id:
                continue
            candidate = f"e{i}"
            suffix = 1
            while candidate in taken:
                candidate = f"e{i}_{suffix}"
                suffix += 1
            edge.id = candidate
            taken.add(candidate)
        return self

    def direction(self) -> str:
        """Layout direction from the hints, LR when absent."""
        if self.layout_hints is None:
            return LayoutDirection.LR.value
        return self.layout_hints.normalized_direction()

    def background(self) -> str:
        """Background colour from the global style, white when absent or blank."""
        if self.global_style is None or not self.global_style.background.strip():
            return DEFAULT_BACKGROUND
        return self.global_style.background

    def node_index(self) -> dict[str, Node]:
        """Map node id -> Node. The first node wins when ids repeat."""
        index: dict[str, Node] = {}
        for node in self.nodes:
            index.setdefault(node.id, node)
        return index

    def valid_edges(self) -> list[Edge]:
        """Edges whose source and target both resolve, in input order."""
        index = self.node_index()
        return [e for e in self.edges if e.source in index and e.target in index]

    def to_json_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return self.model_dump(mode="json")

    @classmethod
    def from_json_dict(cls, data: dict) -> "Graph":
        """Create a Graph from a JSON dict (handles legacy edge fields)."""
        return cls.model_validate(data)

    def get_node(self, node_id: str) -> Optional[Node]:
        """Get a node by ID (O(n) - use node_index() for repeated lookups)."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        """Get an edge by ID (O(n))."""
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None
