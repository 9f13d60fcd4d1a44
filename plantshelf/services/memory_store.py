"""
In-memory ``PlantStore`` used by tests and local fixtures.

Builds transient ``Plant`` objects with their join rows attached, so the
listing engine sees exactly the shape ``SqlPlantStore`` returns. Each
instance owns its data; nothing is shared between instances.
"""
import itertools
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from plantshelf.models.plant import BloomSeason, Plant, PlantBloomSeason, PlantZone, Zone
from plantshelf.services.plant_store import sort_zones
from plantshelf.services.zones import normalize_season, normalize_zone_label


class InMemoryPlantStore:
    def __init__(self) -> None:
        self._plants: dict[int, Plant] = {}
        self._zones: dict[str, Zone] = {}
        self._seasons: dict[str, BloomSeason] = {}
        self._plant_ids = itertools.count(1)
        self._zone_ids = itertools.count(1)
        self._season_ids = itertools.count(1)
        self._link_ids = itertools.count(1)

    async def list_plants(self) -> list[Plant]:
        return [self._plants[pid] for pid in sorted(self._plants)]

    async def get_plant(self, plant_id: int) -> Optional[Plant]:
        return self._plants.get(plant_id)

    async def create_plant(
        self,
        values: dict[str, Any],
        zones: Iterable[str] = (),
        bloom_seasons: Iterable[str] = (),
    ) -> Plant:
        now = datetime.now(timezone.utc)
        plant = Plant(id=next(self._plant_ids), created_at=now, updated_at=now, **values)
        plant.plant_zones = await self._zone_links(plant.id, zones)
        plant.plant_bloom_seasons = await self._season_links(plant.id, bloom_seasons)
        self._plants[plant.id] = plant
        return plant

    async def update_plant(
        self,
        plant_id: int,
        values: dict[str, Any],
        zones: Optional[Iterable[str]] = None,
        bloom_seasons: Optional[Iterable[str]] = None,
    ) -> Optional[Plant]:
        plant = self._plants.get(plant_id)
        if plant is None:
            return None
        for field, value in values.items():
            setattr(plant, field, value)
        if zones is not None:
            plant.plant_zones = await self._zone_links(plant_id, zones)
        if bloom_seasons is not None:
            plant.plant_bloom_seasons = await self._season_links(plant_id, bloom_seasons)
        plant.updated_at = datetime.now(timezone.utc)
        return plant

    async def delete_plant(self, plant_id: int) -> bool:
        return self._plants.pop(plant_id, None) is not None

    async def upsert_zone(self, label: str) -> Zone:
        label = normalize_zone_label(label)
        if label not in self._zones:
            self._zones[label] = Zone(id=next(self._zone_ids), zone=label)
        return self._zones[label]

    async def upsert_bloom_season(self, season: str, description: Optional[str] = None) -> BloomSeason:
        season = normalize_season(season)
        if season not in self._seasons:
            self._seasons[season] = BloomSeason(
                id=next(self._season_ids), season=season, description=description
            )
        return self._seasons[season]

    async def list_zones(self) -> list[Zone]:
        return sort_zones(self._zones.values())

    async def list_bloom_seasons(self) -> list[BloomSeason]:
        return sorted(self._seasons.values(), key=lambda s: s.id)

    async def _zone_links(self, plant_id: int, labels: Iterable[str]) -> list[PlantZone]:
        links = []
        for label in dict.fromkeys(labels):
            zone = await self.upsert_zone(label)
            links.append(PlantZone(id=next(self._link_ids), plant_id=plant_id, zone_id=zone.id, zone=zone))
        return links

    async def _season_links(self, plant_id: int, seasons: Iterable[str]) -> list[PlantBloomSeason]:
        links = []
        for season in dict.fromkeys(seasons):
            bloom_season = await self.upsert_bloom_season(season)
            links.append(
                PlantBloomSeason(
                    id=next(self._link_ids),
                    plant_id=plant_id,
                    bloom_season_id=bloom_season.id,
                    bloom_season=bloom_season,
                )
            )
        return links
