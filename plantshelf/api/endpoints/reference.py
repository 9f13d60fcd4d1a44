from fastapi import APIRouter

from plantshelf.core.deps import PlantStoreDep
from plantshelf.schemas.zone import BloomSeasonRead, ZoneRead

router = APIRouter(tags=["reference"])


@router.get("/zones", response_model=list[ZoneRead])
async def list_zones(store: PlantStoreDep):
    """Hardiness zones known to the catalog, ordered by zone number."""
    return await store.list_zones()


@router.get("/bloom-seasons", response_model=list[BloomSeasonRead])
async def list_bloom_seasons(store: PlantStoreDep):
    return await store.list_bloom_seasons()
