"""
Filter predicates over the joined plant dataset.

Categories combine with AND; values inside one category combine with OR.
An empty category list places no constraint. Plants without zones or bloom
seasons never match a non-empty zone or season filter.
"""
from typing import Iterable, Optional

from plantshelf.models.plant import Plant
from plantshelf.schemas.plant import PlantFilter
from plantshelf.services.zones import zone_matches


def matches_search(plant: Plant, search: Optional[str]) -> bool:
    if not search or not search.strip():
        return True
    needle = search.casefold()
    return any(
        needle in (text or "").casefold()
        for text in (plant.name, plant.scientific_name, plant.description)
    )


def _matches_scalar(value: Optional[str], wanted: Iterable[str]) -> bool:
    wanted = {w.casefold() for w in wanted}
    if not wanted:
        return True
    return value is not None and value.casefold() in wanted


def matches_zones(plant: Plant, grow_zones: list[str]) -> bool:
    if not grow_zones:
        return True
    return any(zone_matches(label, wanted) for label in plant.zone_labels for wanted in grow_zones)


def matches_bloom_seasons(plant: Plant, bloom_seasons: list[str]) -> bool:
    if not bloom_seasons:
        return True
    wanted = {s.casefold() for s in bloom_seasons}
    return any(label.casefold() in wanted for label in plant.bloom_season_labels)


def matches_filter(plant: Plant, plant_filter: PlantFilter) -> bool:
    return (
        matches_search(plant, plant_filter.search)
        and _matches_scalar(plant.light_level, (lvl.value for lvl in plant_filter.light_levels))
        and _matches_scalar(plant.water_needs, (w.value for w in plant_filter.water_needs))
        and _matches_scalar(plant.height_text, (h.value for h in plant_filter.height_texts))
        and matches_zones(plant, plant_filter.grow_zones)
        and matches_bloom_seasons(plant, plant_filter.bloom_seasons)
    )


def filter_plants(plants: Iterable[Plant], plant_filter: PlantFilter) -> list[Plant]:
    """Return the plants satisfying every active category, keeping input order."""
    return [plant for plant in plants if matches_filter(plant, plant_filter)]
