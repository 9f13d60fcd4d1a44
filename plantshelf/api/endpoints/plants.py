import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from pydantic import ValidationError

from plantshelf.core.config import settings
from plantshelf.core.deps import ImageStoreDep, PlantStoreDep
from plantshelf.models.plant import Plant
from plantshelf.schemas.plant import (
    PaginatedPlantsResponse,
    PlantCreate,
    PlantFilter,
    PlantImageUploadResponse,
    PlantImageUrl,
    PlantRead,
    PlantUpdate,
)
from plantshelf.services import plant_catalog
from plantshelf.services.image_storage import (
    ImagePayload,
    ImageStorageError,
    attach_plant_image,
    resolve_plant_image,
)
from plantshelf.services.pagination import Page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plants", tags=["plants"])


def _split_csv(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def plant_filter_params(
    search: Optional[str] = Query(None, description="Substring of name, scientific name or description"),
    light_levels: Optional[str] = Query(None, alias="lightLevels", description="Comma-separated: low, medium, bright"),
    water_needs: Optional[str] = Query(None, alias="waterNeeds", description="Comma-separated: low, medium, high"),
    grow_zones: Optional[str] = Query(None, alias="growZones", description="Comma-separated zones, e.g. '5,6a'"),
    bloom_seasons: Optional[str] = Query(None, alias="bloomSeasons", description="Comma-separated seasons"),
    height_texts: Optional[str] = Query(None, alias="heightTexts", description="Comma-separated: Short, Medium, Tall"),
    sort: Optional[str] = Query(None, description="name, light or zone"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> PlantFilter:
    try:
        return PlantFilter(
            search=search,
            light_levels=_split_csv(light_levels),
            water_needs=_split_csv(water_needs),
            grow_zones=_split_csv(grow_zones),
            bloom_seasons=_split_csv(bloom_seasons),
            height_texts=_split_csv(height_texts),
            sort=sort or None,
            page=page,
            limit=limit,
        )
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        raise RequestValidationError(
            [{**err, "loc": ("query", *err["loc"])} for err in errors]
        )


def _page_to_response(page: Page[Plant]) -> PaginatedPlantsResponse:
    return PaginatedPlantsResponse(
        plants=[PlantRead.model_validate(p) for p in page.items],
        total_count=page.total_count,
        current_page=page.current_page,
        total_pages=page.total_pages,
        has_next_page=page.has_next_page,
        has_previous_page=page.has_previous_page,
    )


@router.get("", response_model=PaginatedPlantsResponse)
async def list_plants(store: PlantStoreDep, plant_filter: PlantFilter = Depends(plant_filter_params)):
    page = await plant_catalog.list_plants(store, plant_filter)
    return _page_to_response(page)


@router.post("", response_model=PlantRead, status_code=201)
async def create_plant(data: PlantCreate, store: PlantStoreDep):
    return await store.create_plant(data.plant_values(), data.zones, data.bloom_seasons)


@router.get("/{plant_id}/image", include_in_schema=True)
async def get_plant_image(plant_id: int, store: PlantStoreDep, image_store: ImageStoreDep):
    """Inline images come back as raw bytes; stored or linked ones as ``{"imageUrl": ...}``."""
    plant = await plant_catalog.get_plant(store, plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    resolved = await resolve_plant_image(plant, image_store)
    if resolved is None:
        raise HTTPException(status_code=404, detail="No image found for this plant")
    if isinstance(resolved, ImagePayload):
        return Response(content=resolved.content, media_type=resolved.content_type)
    return PlantImageUrl(image_url=resolved)


@router.post("/{plant_id}/image", response_model=PlantImageUploadResponse)
async def upload_plant_image(
    plant_id: int,
    store: PlantStoreDep,
    image_store: ImageStoreDep,
    image: Optional[UploadFile] = File(None),
):
    if image is None:
        raise HTTPException(status_code=400, detail="No image file provided")
    content_type = (image.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    content = await image.read(settings.MAX_IMAGE_BYTES + 1)
    if len(content) > settings.MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=400,
            detail=f"Image exceeds the {settings.MAX_IMAGE_BYTES // (1024 * 1024)}MB limit",
        )
    if not content:
        raise HTTPException(status_code=400, detail="Image file is empty")

    plant = await attach_plant_image(store, image_store, plant_id, content, content_type)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return PlantImageUploadResponse(
        message="Image uploaded successfully",
        plant=PlantRead.model_validate(plant),
        image_url=plant.image_url,
    )


@router.get("/{plant_id}", response_model=PlantRead)
async def get_plant(plant_id: int, store: PlantStoreDep):
    plant = await plant_catalog.get_plant(store, plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return plant


@router.put("/{plant_id}", response_model=PlantRead)
async def update_plant(plant_id: int, data: PlantUpdate, store: PlantStoreDep):
    plant = await store.update_plant(plant_id, data.plant_values(), data.zones, data.bloom_seasons)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return plant


@router.delete("/{plant_id}", status_code=204)
async def delete_plant(plant_id: int, store: PlantStoreDep, image_store: ImageStoreDep):
    plant = await store.get_plant(plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    storage_path = plant.image_storage_path
    await store.delete_plant(plant_id)

    if storage_path:
        # Row is already gone; a failed blob delete only leaks storage.
        try:
            await image_store.delete(storage_path)
        except ImageStorageError as exc:
            logger.warning("plant %d deleted but image %s was kept: %s", plant_id, storage_path, exc)

    return Response(status_code=204)
