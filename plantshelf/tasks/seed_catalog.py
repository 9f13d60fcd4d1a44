"""
Seed the catalog's reference data and a starter set of plants.

Reference data
--------------
Every hardiness half-zone 1a-13b and the four bloom seasons are upserted, so
re-running is harmless.

Sample plants
-------------
Inserted only when the store holds no plants at all. Rows are written the way
a nursery sheet describes plants ("4-9" zone ranges, free-text bloom time and
height); the zone range, bloom seasons and height category are derived from
that text.
"""
import logging

from plantshelf.db.session import AsyncSessionLocal
from plantshelf.services.plant_store import PlantStore, SqlPlantStore
from plantshelf.services.zones import (
    SEASONS,
    all_zone_labels,
    classify_height,
    expand_zone_range,
    parse_bloom_seasons,
)

logger = logging.getLogger(__name__)

SAMPLE_PLANTS: list[dict] = [
    {
        "name": "Rose Campion",
        "scientific_name": "Lychnis coronaria",
        "description": "Silver-felted foliage topped with vivid magenta flowers.",
        "light_level": "bright",
        "water_needs": "low",
        "bloom_time": "Late spring to midsummer",
        "height": "24-36 inches",
        "width": "18 inches",
        "grow_zones": "4-8",
    },
    {
        "name": "Hosta 'Blue Angel'",
        "scientific_name": "Hosta sieboldiana",
        "description": "Large blue-green leaves for deep shade borders.",
        "light_level": "low",
        "water_needs": "medium",
        "bloom_time": "Summer",
        "height": "3-4 feet",
        "width": "4 feet",
        "grow_zones": "3-9",
    },
    {
        "name": "Creeping Phlox",
        "scientific_name": "Phlox subulata",
        "description": "Evergreen mat covered in spring flowers; loves rock gardens.",
        "light_level": "bright",
        "water_needs": "low",
        "bloom_time": "Early spring",
        "height": "6 inches",
        "width": "24 inches",
        "grow_zones": "3-9",
    },
    {
        "name": "Black-eyed Susan",
        "scientific_name": "Rudbeckia fulgida",
        "description": "Golden daisies with dark centres from summer into fall.",
        "light_level": "bright",
        "water_needs": "medium",
        "bloom_time": "Midsummer to fall",
        "height": "2-3 feet",
        "width": "2 feet",
        "grow_zones": "3-9",
    },
    {
        "name": "Astilbe 'Fanal'",
        "scientific_name": "Astilbe x arendsii",
        "description": "Feathery crimson plumes for moist, partly shaded beds.",
        "light_level": "medium",
        "water_needs": "high",
        "bloom_time": "Early summer",
        "height": "18-24 inches",
        "width": "18 inches",
        "grow_zones": "4-8",
    },
    {
        "name": "Hellebore",
        "scientific_name": "Helleborus orientalis",
        "description": "Nodding cup-shaped flowers when little else is in bloom.",
        "light_level": "low",
        "water_needs": "medium",
        "bloom_time": "Late winter to early spring",
        "height": "12-18 inches",
        "width": "18 inches",
        "grow_zones": "4-9",
    },
    {
        "name": "Russian Sage",
        "scientific_name": "Salvia yangii",
        "description": "Airy lavender spires over aromatic silver stems.",
        "light_level": "bright",
        "water_needs": "low",
        "bloom_time": "Summer into fall",
        "height": "3-5 feet",
        "width": "3 feet",
        "grow_zones": "5-9",
    },
    {
        "name": "Japanese Anemone",
        "scientific_name": "Anemone x hybrida",
        "description": "Tall wiry stems carrying pink or white autumn flowers.",
        "light_level": "medium",
        "water_needs": "medium",
        "bloom_time": "Late summer to autumn",
        "height": "3-4 feet",
        "width": "2 feet",
        "grow_zones": "5-8",
    },
]


async def seed_reference_data(store: PlantStore) -> tuple[int, int]:
    """Upsert all zones and bloom seasons. Returns (zones, seasons) processed."""
    zones = all_zone_labels()
    for label in zones:
        await store.upsert_zone(label)
    for season, description in SEASONS.items():
        await store.upsert_bloom_season(season, description)
    return len(zones), len(SEASONS)


async def seed_sample_plants(store: PlantStore) -> int:
    """Insert SAMPLE_PLANTS into an empty store. Returns the number inserted."""
    if await store.list_plants():
        logger.info("seed_sample_plants: catalog already populated, skipping")
        return 0

    inserted = 0
    for row in SAMPLE_PLANTS:
        values = {k: v for k, v in row.items() if k != "grow_zones"}
        values["height_text"] = classify_height(row["height"])
        await store.create_plant(
            values,
            zones=expand_zone_range(row["grow_zones"]),
            bloom_seasons=parse_bloom_seasons(row["bloom_time"]),
        )
        inserted += 1
    return inserted


async def seed_catalog() -> None:
    logger.info("seed_catalog: starting")
    async with AsyncSessionLocal() as db:
        store = SqlPlantStore(db)
        zones, seasons = await seed_reference_data(store)
        await db.commit()
        plants = await seed_sample_plants(store)
    logger.info(
        "seed_catalog: complete, %d zones, %d seasons, %d plants inserted",
        zones, seasons, plants,
    )
