import pytest
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from plantshelf.models.plant import PlantBloomSeason, PlantZone, Zone
from plantshelf.services import plant_store
from plantshelf.services.plant_store import SqlPlantStore


def _values(name: str = "Bee Balm") -> dict:
    return {
        "name": name,
        "scientific_name": "Monarda didyma",
        "description": "Shaggy red flowers that hummingbirds love.",
        "light_level": "bright",
        "water_needs": "medium",
        "bloom_time": "Summer",
        "height": "2-4 feet",
        "height_text": "Tall",
        "width": "2-3 feet",
    }


async def _count(db: AsyncSession, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


async def test_create_and_get_with_relations(db: AsyncSession):
    store = SqlPlantStore(db)
    created = await store.create_plant(_values(), zones=["4", "5a"], bloom_seasons=["Summer"])

    fetched = await store.get_plant(created.id)
    assert fetched.name == "Bee Balm"
    assert fetched.zone_labels == ["4", "5a"]
    assert fetched.bloom_season_labels == ["Summer"]
    assert fetched.created_at is not None


async def test_duplicate_labels_create_one_link(db: AsyncSession):
    store = SqlPlantStore(db)
    await store.create_plant(_values(), zones=["5", "5"], bloom_seasons=["Fall", "Fall"])

    assert await _count(db, PlantZone) == 1
    assert await _count(db, PlantBloomSeason) == 1


async def test_upsert_zone_is_idempotent(db: AsyncSession):
    store = SqlPlantStore(db)
    first = await store.upsert_zone("7B")
    second = await store.upsert_zone("7b")

    assert first.id == second.id
    assert first.zone == "7b"
    assert await _count(db, Zone) == 1


async def test_upsert_bloom_season_keeps_first_description(db: AsyncSession):
    store = SqlPlantStore(db)
    await store.upsert_bloom_season("Spring", "March through May")
    again = await store.upsert_bloom_season("spring", "ignored")

    assert again.season == "Spring"
    assert again.description == "March through May"


async def test_plants_share_reference_rows(db: AsyncSession):
    store = SqlPlantStore(db)
    await store.create_plant(_values("One"), zones=["6"])
    await store.create_plant(_values("Two"), zones=["6"])

    assert await _count(db, Zone) == 1
    assert await _count(db, PlantZone) == 2


async def test_list_plants_in_id_order(db: AsyncSession):
    store = SqlPlantStore(db)
    for name in ("Zinnia", "Allium"):
        await store.create_plant(_values(name))

    plants = await store.list_plants()
    assert [p.name for p in plants] == ["Zinnia", "Allium"]


async def test_update_replaces_links_only_when_given(db: AsyncSession):
    store = SqlPlantStore(db)
    created = await store.create_plant(_values(), zones=["4"], bloom_seasons=["Summer"])

    updated = await store.update_plant(created.id, {"water_needs": "high"}, zones=["8", "9"])
    assert updated.water_needs == "high"
    assert updated.zone_labels == ["8", "9"]
    assert updated.bloom_season_labels == ["Summer"]
    assert await _count(db, PlantZone) == 2


async def test_update_missing_plant_returns_none(db: AsyncSession):
    assert await SqlPlantStore(db).update_plant(404, {"name": "Ghost"}) is None


async def test_delete_cascades_join_rows(db: AsyncSession):
    store = SqlPlantStore(db)
    created = await store.create_plant(_values(), zones=["4", "5"], bloom_seasons=["Summer"])

    assert await store.delete_plant(created.id)
    assert await store.get_plant(created.id) is None
    assert await _count(db, PlantZone) == 0
    assert await _count(db, PlantBloomSeason) == 0
    # Reference rows outlive the plant.
    assert await _count(db, Zone) == 2
    assert not await store.delete_plant(created.id)


async def test_list_zones_orders_numerically(db: AsyncSession):
    store = SqlPlantStore(db)
    for label in ("10a", "9", "2b", "2a"):
        await store.upsert_zone(label)
    await db.commit()

    assert [z.zone for z in await store.list_zones()] == ["2a", "2b", "9", "10a"]


async def test_upsert_on_unsupported_dialect(db: AsyncSession, monkeypatch):
    monkeypatch.setattr(plant_store, "_DIALECT_INSERTS", {"postgresql": postgresql.insert})

    with pytest.raises(NotImplementedError, match="sqlite") as excinfo:
        await SqlPlantStore(db).upsert_zone("5")
    assert excinfo.value.__context__ is None
