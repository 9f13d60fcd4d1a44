"""
Garden designer placement rules.

Placements are free-floating squares on a rectangular canvas. The only
invariant is that every placement stays fully inside the canvas; rotation is
kept in [0, 360).
"""
from typing import Optional

from plantshelf.models.plant import Plant
from plantshelf.schemas.layout import Canvas, PlantPlacement

MIN_TILE = 80.0
MAX_TILE = 120.0
PX_PER_NAME_CHAR = 5.0
ROTATION_STEP = 45.0


def tile_size(name: str) -> float:
    """Square tile edge scaled by name length, bounded to [80, 120] px."""
    return max(MIN_TILE, min(MAX_TILE, len(name) * PX_PER_NAME_CHAR))


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(value, max(0.0, upper)))


def clamp_placement(placement: PlantPlacement, canvas: Canvas) -> PlantPlacement:
    """Pull a placement back inside the canvas and normalise its rotation."""
    return placement.model_copy(
        update={
            "x": _clamp(placement.x, canvas.width - placement.width),
            "y": _clamp(placement.y, canvas.height - placement.height),
            "rotation": placement.rotation % 360,
        }
    )


def rotate_placement(placement: PlantPlacement, steps: int = 1) -> PlantPlacement:
    return placement.model_copy(
        update={"rotation": (placement.rotation + steps * ROTATION_STEP) % 360}
    )


def place_plant(
    plant: Plant,
    canvas: Canvas,
    x: Optional[float] = None,
    y: Optional[float] = None,
) -> PlantPlacement:
    """New placement for ``plant``; centred on the canvas unless a position is given."""
    size = tile_size(plant.name)
    placement = PlantPlacement(
        plant_id=plant.id,
        x=(canvas.width - size) / 2 if x is None else x,
        y=(canvas.height - size) / 2 if y is None else y,
        width=size,
        height=size,
    )
    return clamp_placement(placement, canvas)


def normalize_layout(
    placements: list[PlantPlacement], canvas: Canvas, rotate_steps: int = 0
) -> list[PlantPlacement]:
    normalized = []
    for placement in placements:
        if rotate_steps:
            placement = rotate_placement(placement, rotate_steps)
        normalized.append(clamp_placement(placement, canvas))
    return normalized
