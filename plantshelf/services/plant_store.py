"""
Plant entity store.

``PlantStore`` is the seam the listing orchestrator and the endpoints depend
on. ``SqlPlantStore`` backs it with an ``AsyncSession``; the in-memory variant
lives in ``plantshelf.services.memory_store``.

Zone and bloom season find-or-create goes through ``INSERT ... ON CONFLICT DO
NOTHING`` on the unique label column, so concurrent writers cannot create the
same label twice.
"""
import logging
from typing import Any, Iterable, Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from plantshelf.models.plant import BloomSeason, Plant, PlantBloomSeason, PlantZone, Zone
from plantshelf.services.zones import normalize_season, normalize_zone_label, zone_number

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class PlantStore(Protocol):
    async def list_plants(self) -> list[Plant]: ...

    async def get_plant(self, plant_id: int) -> Optional[Plant]: ...

    async def create_plant(
        self,
        values: dict[str, Any],
        zones: Iterable[str] = (),
        bloom_seasons: Iterable[str] = (),
    ) -> Plant: ...

    async def update_plant(
        self,
        plant_id: int,
        values: dict[str, Any],
        zones: Optional[Iterable[str]] = None,
        bloom_seasons: Optional[Iterable[str]] = None,
    ) -> Optional[Plant]: ...

    async def delete_plant(self, plant_id: int) -> bool: ...

    async def upsert_zone(self, label: str) -> Zone: ...

    async def upsert_bloom_season(self, season: str, description: Optional[str] = None) -> BloomSeason: ...

    async def list_zones(self) -> list[Zone]: ...

    async def list_bloom_seasons(self) -> list[BloomSeason]: ...


def sort_zones(zones: Iterable[Zone]) -> list[Zone]:
    return sorted(zones, key=lambda z: (zone_number(z.zone) or 0, z.zone))


def _with_relations(query):
    return query.options(
        selectinload(Plant.plant_zones).selectinload(PlantZone.zone),
        selectinload(Plant.plant_bloom_seasons).selectinload(PlantBloomSeason.bloom_season),
    )


class SqlPlantStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _insert(self, model):
        dialect = self.db.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"upsert not supported for dialect {dialect!r}")
        return insert(model)

    # ── Plants ────────────────────────────────────────────────────────────────

    async def list_plants(self) -> list[Plant]:
        """All plants with zones and bloom seasons loaded, in id order."""
        result = await self.db.execute(_with_relations(select(Plant)).order_by(Plant.id))
        return list(result.scalars().all())

    async def get_plant(self, plant_id: int) -> Optional[Plant]:
        result = await self.db.execute(
            _with_relations(select(Plant).where(Plant.id == plant_id)).execution_options(
                populate_existing=True
            )
        )
        return result.scalar_one_or_none()

    async def create_plant(
        self,
        values: dict[str, Any],
        zones: Iterable[str] = (),
        bloom_seasons: Iterable[str] = (),
    ) -> Plant:
        plant = Plant(**values)
        self.db.add(plant)
        await self.db.flush()
        await self._link_zones(plant.id, zones)
        await self._link_bloom_seasons(plant.id, bloom_seasons)
        await self.db.commit()
        logger.info("created plant %d (%s)", plant.id, plant.name)
        return await self.get_plant(plant.id)

    async def update_plant(
        self,
        plant_id: int,
        values: dict[str, Any],
        zones: Optional[Iterable[str]] = None,
        bloom_seasons: Optional[Iterable[str]] = None,
    ) -> Optional[Plant]:
        plant = await self.db.get(Plant, plant_id)
        if plant is None:
            return None
        for field, value in values.items():
            setattr(plant, field, value)
        if zones is not None:
            await self.db.execute(delete(PlantZone).where(PlantZone.plant_id == plant_id))
            await self._link_zones(plant_id, zones)
        if bloom_seasons is not None:
            await self.db.execute(
                delete(PlantBloomSeason).where(PlantBloomSeason.plant_id == plant_id)
            )
            await self._link_bloom_seasons(plant_id, bloom_seasons)
        await self.db.commit()
        return await self.get_plant(plant_id)

    async def delete_plant(self, plant_id: int) -> bool:
        plant = await self.db.get(Plant, plant_id)
        if plant is None:
            return False
        await self.db.delete(plant)
        await self.db.commit()
        logger.info("deleted plant %d", plant_id)
        return True

    async def _link_zones(self, plant_id: int, labels: Iterable[str]) -> None:
        for label in dict.fromkeys(labels):
            zone = await self.upsert_zone(label)
            self.db.add(PlantZone(plant_id=plant_id, zone_id=zone.id))

    async def _link_bloom_seasons(self, plant_id: int, seasons: Iterable[str]) -> None:
        for season in dict.fromkeys(seasons):
            bloom_season = await self.upsert_bloom_season(season)
            self.db.add(PlantBloomSeason(plant_id=plant_id, bloom_season_id=bloom_season.id))

    # ── Reference data ────────────────────────────────────────────────────────

    async def upsert_zone(self, label: str) -> Zone:
        label = normalize_zone_label(label)
        await self.db.execute(
            self._insert(Zone).values(zone=label).on_conflict_do_nothing(index_elements=["zone"])
        )
        return await self.db.scalar(select(Zone).where(Zone.zone == label))

    async def upsert_bloom_season(self, season: str, description: Optional[str] = None) -> BloomSeason:
        season = normalize_season(season)
        await self.db.execute(
            self._insert(BloomSeason)
            .values(season=season, description=description)
            .on_conflict_do_nothing(index_elements=["season"])
        )
        return await self.db.scalar(select(BloomSeason).where(BloomSeason.season == season))

    async def list_zones(self) -> list[Zone]:
        result = await self.db.execute(select(Zone))
        return sort_zones(result.scalars().all())

    async def list_bloom_seasons(self) -> list[BloomSeason]:
        result = await self.db.execute(select(BloomSeason).order_by(BloomSeason.id))
        return list(result.scalars().all())
