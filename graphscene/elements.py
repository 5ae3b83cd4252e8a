"""
Typed scene elements and the scene document.

The composer builds a closed set of element kinds (rectangle, text, arrow)
and serializes them once, in `Scene.to_json_dict()`, to the Excalidraw
wire format. Attribute names are snake_case here and camelCase on the
wire (`stroke_color` -> `strokeColor`).
"""

from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


STROKE_COLOR = "#111827"
TRANSPARENT = "transparent"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ElementBase(_WireModel):
    """Fields shared by every element kind."""
    id: str
    seed: int
    version: int = 1
    version_nonce: int = 0
    is_deleted: bool = False
    fill_style: str = "hachure"
    stroke_width: int = 2
    stroke_style: str = "solid"
    roughness: int = 1
    opacity: int = 100
    angle: float = 0
    x: float
    y: float
    stroke_color: str = STROKE_COLOR
    background_color: str = TRANSPARENT
    width: float
    height: float
    bound_elements: list[Any] = Field(default_factory=list)
    updated: int = 0


class RectangleElement(ElementBase):
    """A box: node bodies and container backgrounds."""
    type: Literal["rectangle"] = "rectangle"
    roundness: Optional[dict[str, int]] = Field(default_factory=lambda: {"type": 3})


class TextElement(ElementBase):
    """A free-standing text block centered in its box."""
    type: Literal["text"] = "text"
    stroke_width: int = 1
    roughness: int = 0
    text: str
    font_size: int = 16
    font_family: int = 1
    text_align: str = "center"
    vertical_align: str = "middle"
    baseline: int = 18


class ArrowElement(ElementBase):
    """A connector; `points` are relative to (x, y)."""
    type: Literal["arrow"] = "arrow"
    points: list[tuple[float, float]]
    start_binding: Optional[dict[str, Any]] = None
    end_binding: Optional[dict[str, Any]] = None
    last_committed_point: Optional[tuple[float, float]] = None
    start_arrowhead: Optional[str] = None
    end_arrowhead: Optional[str] = "arrow"


SceneElement = Annotated[
    Union[RectangleElement, TextElement, ArrowElement],
    Field(discriminator="type")
]


class AppState(_WireModel):
    view_background_color: str = "#FFFFFF"
    grid_size: int = 0


class Scene(_WireModel):
    """
    A render-ready scene document.

    Elements are in paint order: later elements draw on top.
    """
    type: Literal["excalidraw"] = "excalidraw"
    version: int = 2
    source: str = "graphscene"
    elements: list[SceneElement] = Field(default_factory=list)
    app_state: AppState = Field(default_factory=AppState)
    files: dict[str, Any] = Field(default_factory=dict)

    def with_elements(self, extra: list[SceneElement]) -> "Scene":
        """Copy of the scene with `extra` appended on top."""
        return self.model_copy(update={"elements": [*self.elements, *extra]})

    def get_element(self, element_id: str) -> Optional[ElementBase]:
        """Get an element by ID (O(n))."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def to_json_dict(self) -> dict:
        """Convert to the JSON-serializable wire format."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_json_dict(cls, data: dict) -> "Scene":
        """Create a Scene from a wire-format dict."""
        return cls.model_validate(data)
