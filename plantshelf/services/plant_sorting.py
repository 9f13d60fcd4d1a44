"""
Sort keys for plant listings.

Every key ends with the plant id so repeated calls page deterministically.
Plants without a usable zone sort after all zoned plants.
"""
from typing import Callable, Iterable, Optional

from plantshelf.models.plant import LightLevel, Plant
from plantshelf.schemas.plant import SortKey
from plantshelf.services.zones import min_zone_number

LIGHT_ORDER: dict[str, int] = {level.value: rank for rank, level in enumerate(LightLevel)}


def _name_key(plant: Plant) -> tuple:
    return (plant.name.casefold(), plant.name, plant.id)


def _light_key(plant: Plant) -> tuple:
    return (LIGHT_ORDER.get(plant.light_level, len(LIGHT_ORDER)), plant.id)


def _zone_key(plant: Plant) -> tuple:
    lowest = min_zone_number(plant.zone_labels)
    return (lowest is None, lowest or 0, plant.id)


_SORT_KEYS: dict[SortKey, Callable[[Plant], tuple]] = {
    SortKey.NAME: _name_key,
    SortKey.LIGHT: _light_key,
    SortKey.ZONE: _zone_key,
}


def sort_plants(plants: Iterable[Plant], sort: Optional[SortKey]) -> list[Plant]:
    """Return a new list ordered by ``sort``; None keeps the store order."""
    if sort is None:
        return list(plants)
    return sorted(plants, key=_SORT_KEYS[sort])
