from fastapi import APIRouter, HTTPException

from plantshelf.core.deps import PlantStoreDep
from plantshelf.schemas.layout import (
    LayoutNormalizeRequest,
    LayoutResponse,
    PlacementRequest,
    PlantPlacement,
)
from plantshelf.services.garden_layout import normalize_layout, place_plant

router = APIRouter(prefix="/garden-layout", tags=["garden-layout"])


@router.post("/placements", response_model=PlantPlacement, status_code=201)
async def create_placement(data: PlacementRequest, store: PlantStoreDep):
    """Default tile for a plant dropped on the canvas; centred unless x/y are given."""
    plant = await store.get_plant(data.plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return place_plant(plant, data.canvas, data.x, data.y)


@router.post("/normalize", response_model=LayoutResponse)
async def normalize(data: LayoutNormalizeRequest):
    """Clamp every placement inside the canvas and apply optional 45 degree turns."""
    placements = normalize_layout(data.placements, data.canvas, data.rotate_steps)
    return LayoutResponse(canvas=data.canvas, placements=placements)
