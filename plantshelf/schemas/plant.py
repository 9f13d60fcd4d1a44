from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from plantshelf.core.config import settings
from plantshelf.models.plant import HeightCategory, LightLevel, WaterNeeds
from plantshelf.services.zones import normalize_season, normalize_zone_label

# The browser client speaks camelCase; snake_case is accepted on input too.
CAMEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}

_RELATION_FIELDS = {"zones", "bloom_seasons"}
_REQUIRED_COLUMNS = {
    "name", "scientific_name", "description", "light_level",
    "water_needs", "bloom_time", "height", "width",
}


def _normalize_zones(zones: list[str]) -> list[str]:
    return list(dict.fromkeys(normalize_zone_label(z) for z in zones))


def _normalize_seasons(seasons: list[str]) -> list[str]:
    return list(dict.fromkeys(normalize_season(s) for s in seasons))


class SortKey(str, Enum):
    NAME = "name"
    LIGHT = "light"
    ZONE = "zone"


class PlantFilter(BaseModel):
    """Validated listing request: search, category lists, sort and page window."""

    search: Optional[str] = None
    light_levels: list[LightLevel] = Field(default_factory=list)
    water_needs: list[WaterNeeds] = Field(default_factory=list)
    grow_zones: list[str] = Field(default_factory=list)
    bloom_seasons: list[str] = Field(default_factory=list)
    height_texts: list[HeightCategory] = Field(default_factory=list)
    sort: Optional[SortKey] = None
    page: int = Field(1, ge=1)
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)

    model_config = CAMEL_CONFIG

    @field_validator("grow_zones")
    @classmethod
    def validate_grow_zones(cls, v: list[str]) -> list[str]:
        return _normalize_zones(v)

    @field_validator("bloom_seasons")
    @classmethod
    def validate_bloom_seasons(cls, v: list[str]) -> list[str]:
        return _normalize_seasons(v)


class PlantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    scientific_name: str = Field(min_length=1, max_length=200)
    description: str
    image_url: Optional[str] = None
    light_level: LightLevel
    water_needs: WaterNeeds
    bloom_time: str
    height: str = Field(max_length=200)
    height_text: Optional[HeightCategory] = None
    width: str = Field(max_length=200)
    temperature: Optional[str] = None
    humidity: Optional[str] = None
    care_instructions: Optional[str] = None
    common_issues: Optional[str] = None
    zones: list[str] = Field(default_factory=list)
    bloom_seasons: list[str] = Field(default_factory=list)

    model_config = CAMEL_CONFIG

    @field_validator("name", "scientific_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("zones")
    @classmethod
    def validate_zones(cls, v: list[str]) -> list[str]:
        return _normalize_zones(v)

    @field_validator("bloom_seasons")
    @classmethod
    def validate_bloom_seasons(cls, v: list[str]) -> list[str]:
        return _normalize_seasons(v)

    def plant_values(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude=_RELATION_FIELDS)


class PlantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    scientific_name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = None
    light_level: Optional[LightLevel] = None
    water_needs: Optional[WaterNeeds] = None
    bloom_time: Optional[str] = None
    height: Optional[str] = Field(None, max_length=200)
    height_text: Optional[HeightCategory] = None
    width: Optional[str] = Field(None, max_length=200)
    temperature: Optional[str] = None
    humidity: Optional[str] = None
    care_instructions: Optional[str] = None
    common_issues: Optional[str] = None
    zones: Optional[list[str]] = None
    bloom_seasons: Optional[list[str]] = None

    model_config = CAMEL_CONFIG

    @field_validator("name", "scientific_name")
    @classmethod
    def validate_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("zones")
    @classmethod
    def validate_zones(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return None if v is None else _normalize_zones(v)

    @field_validator("bloom_seasons")
    @classmethod
    def validate_bloom_seasons(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return None if v is None else _normalize_seasons(v)

    @model_validator(mode="after")
    def reject_null_required(self) -> "PlantUpdate":
        nulled = sorted(
            f for f in self.model_fields_set & _REQUIRED_COLUMNS if getattr(self, f) is None
        )
        if nulled:
            raise ValueError(f"fields cannot be null: {', '.join(nulled)}")
        return self

    def plant_values(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True, exclude=_RELATION_FIELDS)


class PlantRead(BaseModel):
    id: int
    name: str
    scientific_name: str
    description: str
    image_url: Optional[str] = None
    image_mime_type: Optional[str] = None
    image_storage_path: Optional[str] = None
    light_level: str
    water_needs: str
    bloom_time: str
    height: str
    height_text: Optional[str] = None
    width: str
    temperature: Optional[str] = None
    humidity: Optional[str] = None
    care_instructions: Optional[str] = None
    common_issues: Optional[str] = None
    zones: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("zone_labels", "zones"),
        serialization_alias="zones",
    )
    bloom_seasons: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("bloom_season_labels", "bloomSeasons", "bloom_seasons"),
        serialization_alias="bloomSeasons",
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {**CAMEL_CONFIG, "from_attributes": True}


class PaginatedPlantsResponse(BaseModel):
    plants: list[PlantRead]
    total_count: int
    current_page: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    model_config = CAMEL_CONFIG


class PlantImageUploadResponse(BaseModel):
    message: str
    plant: PlantRead
    image_url: Optional[str] = None

    model_config = CAMEL_CONFIG


class PlantImageUrl(BaseModel):
    image_url: str

    model_config = CAMEL_CONFIG
