"""
graphscene - Lay out abstract graphs and compose render-ready scenes.

This package turns a graph of nodes, edges, containers and decorations into
an ordered list of drawable elements (Excalidraw scene format), with
deterministic positions and element seeds.
"""

from .models import (
    # Enums
    LayoutDirection,
    NodeShape,
    # Graph model
    Node,
    NodeStyle,
    Edge,
    EdgeStyle,
    LayoutHints,
    GlobalStyle,
    Container,
    ContainerStyle,
    Decoration,
    DecorationOffset,
    DecorationSize,
    Graph,
)

from .elements import Scene, RectangleElement, TextElement, ArrowElement, AppState
from .errors import GraphSceneError, GraphFormatError, ConfigError
from .config import RenderOptions
from .layout import layout_graph, topological_order, assign_ranks
from .geometry import RoutingPolicy, boundary_point, node_size
from .scene import compose_scene
from .decorations import apply_decorations, builtin_glyph
from .identity import stable_seed
from .validation import validate_graph, validation_summary, has_cycle, ValidationIssue, IssueSeverity
from .parsing import load_graph, parse_edge_list
from .export import build_scene, suggest_filename, save_scene

__all__ = [
    # Enums
    "LayoutDirection",
    "NodeShape",
    "RoutingPolicy",
    # Graph model
    "Node",
    "NodeStyle",
    "Edge",
    "EdgeStyle",
    "LayoutHints",
    "GlobalStyle",
    "Container",
    "ContainerStyle",
    "Decoration",
    "DecorationOffset",
    "DecorationSize",
    "Graph",
    # Scene model
    "Scene",
    "RectangleElement",
    "TextElement",
    "ArrowElement",
    "AppState",
    # Errors
    "GraphSceneError",
    "GraphFormatError",
    "ConfigError",
    # Configuration
    "RenderOptions",
    # Layout
    "layout_graph",
    "topological_order",
    "assign_ranks",
    # Geometry
    "boundary_point",
    "node_size",
    # Composition
    "compose_scene",
    "apply_decorations",
    "builtin_glyph",
    "stable_seed",
    # Validation
    "validate_graph",
    "validation_summary",
    "has_cycle",
    "ValidationIssue",
    "IssueSeverity",
    # Input / output
    "load_graph",
    "parse_edge_list",
    "build_scene",
    "suggest_filename",
    "save_scene",
]
