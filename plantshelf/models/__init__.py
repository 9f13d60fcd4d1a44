from plantshelf.models.user import User
from plantshelf.models.plant import (
    BloomSeason,
    HeightCategory,
    LightLevel,
    Plant,
    PlantBloomSeason,
    PlantZone,
    WaterNeeds,
    Zone,
)

__all__ = [
    "User",
    "Plant",
    "Zone",
    "BloomSeason",
    "PlantZone",
    "PlantBloomSeason",
    "LightLevel",
    "WaterNeeds",
    "HeightCategory",
]
