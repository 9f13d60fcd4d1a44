from typing import Optional

from pydantic import BaseModel, Field

from plantshelf.core.config import settings
from plantshelf.schemas.plant import CAMEL_CONFIG


class Canvas(BaseModel):
    width: float = Field(settings.CANVAS_WIDTH, gt=0)
    height: float = Field(settings.CANVAS_HEIGHT, gt=0)


class PlantPlacement(BaseModel):
    plant_id: int
    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    rotation: float = 0

    model_config = CAMEL_CONFIG


class PlacementRequest(BaseModel):
    plant_id: int
    canvas: Canvas = Field(default_factory=Canvas)
    x: Optional[float] = None
    y: Optional[float] = None

    model_config = CAMEL_CONFIG


class LayoutNormalizeRequest(BaseModel):
    canvas: Canvas = Field(default_factory=Canvas)
    placements: list[PlantPlacement] = Field(default_factory=list)
    rotate_steps: int = Field(0, description="Number of 45 degree turns applied to every placement")

    model_config = CAMEL_CONFIG


class LayoutResponse(BaseModel):
    canvas: Canvas
    placements: list[PlantPlacement]

    model_config = CAMEL_CONFIG
