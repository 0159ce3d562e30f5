from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnimatableProperty(str, Enum):
    """Element fields that can carry keyframes."""
    X = "x"
    Y = "y"
    ROTATION = "rotation"
    SCALE_X = "scaleX"
    SCALE_Y = "scaleY"
    OPACITY = "opacity"


class EasingKind(str, Enum):
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"


class _EditorModel(BaseModel):
    # Project files use the editor's camelCase keys
    model_config = ConfigDict(populate_by_name=True)


class Keyframe(_EditorModel):
    id: str
    time: float = Field(..., description="Seconds from project start")
    property: AnimatableProperty
    value: float
    easing: str = Field("linear", description="Easing name; unknown names export as linear")
    layer_id: str = Field(..., alias="layerId")


class Transform(_EditorModel):
    x: float = 0.0
    y: float = 0.0
    rotation: float = Field(0.0, description="Rotation in degrees")
    scale_x: float = Field(1.0, alias="scaleX")
    scale_y: float = Field(1.0, alias="scaleY")


class Style(_EditorModel):
    fill: str = "#000000"
    stroke: str = "none"
    stroke_width: float = Field(1.0, alias="strokeWidth")
    opacity: float = Field(1.0, description="Opacity in [0,1]")

    @field_validator("opacity")
    @classmethod
    def _clamp_opacity(cls, value: float) -> float:
        return max(0.0, min(1.0, value))


class ShapeElement(_EditorModel):
    id: Optional[str] = None
    name: Optional[str] = None
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    transform: Transform = Field(default_factory=Transform)
    style: Style = Field(default_factory=Style)

    def center(self) -> List[float]:
        return [self.x + self.width / 2, self.y + self.height / 2]


class RectElement(ShapeElement):
    type: Literal["rect"] = "rect"


class EllipseElement(ShapeElement):
    """Ellipse inscribed in the x/y/width/height bounding box."""
    type: Literal["ellipse"] = "ellipse"


Element = Annotated[Union[RectElement, EllipseElement], Field(discriminator="type")]


class Layer(_EditorModel):
    id: str
    name: str
    element: Element
    visible: bool = True
    locked: bool = False


class Project(_EditorModel):
    name: str = "Untitled Project"
    width: int = Field(800, gt=0)
    height: int = Field(600, gt=0)
    fps: int = Field(30, gt=0)
    duration: float = Field(5.0, ge=0)
    layers: List[Layer] = Field(default_factory=list)
    keyframes: List[Keyframe] = Field(default_factory=list)

    def with_settings(self, **changes) -> "Project":
        """Return a copy with updated project settings; the original is left as is."""
        data = {**self.model_dump(), **changes}
        return Project(**data)
