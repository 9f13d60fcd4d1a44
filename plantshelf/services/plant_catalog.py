"""
Plant listing: load, filter, sort, paginate.

This is the single entry point the HTTP layer uses for catalog reads. Each call
does a fresh load from the store and keeps no state between calls, so the same
filter over the same data always yields the same page.
"""
import logging
from typing import Optional

from plantshelf.models.plant import Plant
from plantshelf.schemas.plant import PlantFilter
from plantshelf.services.pagination import Page, paginate
from plantshelf.services.plant_filters import filter_plants
from plantshelf.services.plant_sorting import sort_plants
from plantshelf.services.plant_store import PlantStore

logger = logging.getLogger(__name__)


async def list_plants(store: PlantStore, plant_filter: PlantFilter) -> Page[Plant]:
    plants = await store.list_plants()
    matched = filter_plants(plants, plant_filter)
    ordered = sort_plants(matched, plant_filter.sort)
    page = paginate(ordered, plant_filter.page, plant_filter.limit)
    logger.debug(
        "list_plants: %d loaded, %d matched, page %d/%d",
        len(plants), page.total_count, page.current_page, page.total_pages,
    )
    return page


async def get_plant(store: PlantStore, plant_id: int) -> Optional[Plant]:
    return await store.get_plant(plant_id)
