from fastapi import APIRouter

from plantshelf.api.endpoints import garden_layout, plants, reference

api_router = APIRouter()

api_router.include_router(plants.router)
api_router.include_router(reference.router)
api_router.include_router(garden_layout.router)
