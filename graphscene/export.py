"""
Scene export - the end-to-end entry point and file helpers.

build_scene() runs layout, composition and decorations in order. The
helpers below name and write the resulting document; rasterizing it is
left to an external renderer that reads the JSON unmodified.
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .config import RenderOptions
from .decorations import apply_decorations
from .layout import layout_graph
from .scene import compose_scene

if TYPE_CHECKING:
    from .elements import Scene
    from .models import Graph

logger = logging.getLogger(__name__)


MAX_FILENAME_LENGTH = 48


def build_scene(graph: "Graph", options: Optional[RenderOptions] = None) -> "Scene":
    """
    Turn a graph into a render-ready scene.

    Args:
        graph: Input graph (not modified)
        options: Render options; defaults apply when None

    Returns:
        The scene document
    """
    if options is None:
        options = RenderOptions()

    positioned = graph
    if options.auto_layout:
        positioned = layout_graph(
            graph,
            direction=options.direction,
            node_gap=options.node_gap,
            rank_gap=options.rank_gap,
            max_per_rank=options.max_per_rank,
        )

    scene = compose_scene(positioned, routing=options.routing)
    scene = apply_decorations(scene, positioned, allow_decorations=options.allow_decorations)
    logger.debug("Built scene with %d elements", len(scene.elements))
    return scene


def suggest_filename(text: str) -> str:
    """
    Derive a short file-name stem from free text.

    Keeps lower-cased ASCII letters and digits, turns runs of whitespace,
    '-' and '_' into a single '-', and stops at 48 characters.
    """
    stem = ""
    for ch in text:
        if ch.isascii() and ch.isalnum():
            stem += ch.lower()
        elif (ch.isspace() or ch in "-_") and not stem.endswith("-"):
            stem += "-"
        if len(stem) >= MAX_FILENAME_LENGTH:
            break
    stem = stem.strip("-")
    return stem or "graph"


def save_scene(scene: "Scene", file_path: str | Path) -> Path:
    """
    Write a scene document as indented JSON.

    Parent directories are created as needed.

    Returns:
        The path written
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(scene.to_json_dict(), f, indent=2, ensure_ascii=False)

    logger.info("Wrote scene to %s", path)
    return path
