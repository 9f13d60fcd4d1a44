import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import plantshelf.models  # noqa: F401
from plantshelf.db.base import Base
from plantshelf.db.session import get_db
from plantshelf.main import app
from plantshelf.models.plant import BloomSeason, Plant, PlantBloomSeason, PlantZone, Zone
from plantshelf.services.memory_store import InMemoryPlantStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves ON DELETE CASCADE inert unless foreign keys are switched on per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def engine():
    # StaticPool keeps the single in-memory database alive across sessions.
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession):
    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def memory_store() -> InMemoryPlantStore:
    return InMemoryPlantStore()


@pytest.fixture
def make_plant():
    """Build a detached Plant with zone and season links, no database needed."""

    def _make(
        plant_id: int,
        name: str = "Plant",
        *,
        scientific_name: str | None = None,
        description: str = "",
        light_level: str = "medium",
        water_needs: str = "medium",
        height_text: str | None = None,
        zones: tuple[str, ...] = (),
        seasons: tuple[str, ...] = (),
    ) -> Plant:
        plant = Plant(
            id=plant_id,
            name=name,
            scientific_name=scientific_name or f"{name} officinalis",
            description=description,
            light_level=light_level,
            water_needs=water_needs,
            bloom_time="Summer",
            height="2 feet",
            height_text=height_text,
            width="1 foot",
        )
        plant.plant_zones = [PlantZone(zone=Zone(zone=z)) for z in zones]
        plant.plant_bloom_seasons = [
            PlantBloomSeason(bloom_season=BloomSeason(season=s)) for s in seasons
        ]
        return plant

    return _make


def plant_payload(**overrides) -> dict:
    payload = {
        "name": "Purple Coneflower",
        "scientificName": "Echinacea purpurea",
        "description": "Drought-tolerant prairie perennial loved by pollinators.",
        "lightLevel": "bright",
        "waterNeeds": "low",
        "bloomTime": "Midsummer to early fall",
        "height": "2-4 feet",
        "heightText": "Tall",
        "width": "18-24 inches",
        "temperature": "Hardy to -30F",
        "humidity": None,
        "careInstructions": "Deadhead to extend bloom.",
        "commonIssues": "Aster yellows",
        "zones": ["3", "4a", "4b"],
        "bloomSeasons": ["Summer", "Fall"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload_factory():
    return plant_payload
