from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from plantshelf.db.session import get_db
from plantshelf.services.image_storage import ImageStore, get_image_store
from plantshelf.services.plant_store import PlantStore, SqlPlantStore


async def get_plant_store(db: AsyncSession = Depends(get_db)) -> PlantStore:
    return SqlPlantStore(db)


def get_image_store_dep() -> ImageStore:
    return get_image_store()


PlantStoreDep = Annotated[PlantStore, Depends(get_plant_store)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store_dep)]

__all__ = ["get_db", "get_plant_store", "get_image_store_dep", "PlantStoreDep", "ImageStoreDep"]
