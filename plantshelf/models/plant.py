import enum
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from plantshelf.db.base import Base


class _LabelEnum(str, enum.Enum):
    """String enum that also accepts its values case-insensitively."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            folded = value.strip().casefold()
            for member in cls:
                if member.value.casefold() == folded:
                    return member
        return None


# Light scheme v1: three levels, one scalar per plant.
class LightLevel(_LabelEnum):
    LOW = "low"
    MEDIUM = "medium"
    BRIGHT = "bright"


class WaterNeeds(_LabelEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HeightCategory(_LabelEnum):
    SHORT = "Short"
    MEDIUM = "Medium"
    TALL = "Tall"


class Plant(Base):
    __tablename__ = "plants"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    scientific_name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str] = mapped_column(Text)

    # Image: either a direct URL, inline base64 data, or an object storage key
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    image_data: Mapped[Optional[str]] = mapped_column(Text)
    image_mime_type: Mapped[Optional[str]] = mapped_column(String(100))
    image_storage_path: Mapped[Optional[str]] = mapped_column(Text)

    # Care
    light_level: Mapped[str] = mapped_column(
        Enum(*[m.value for m in LightLevel], name="light_level_enum")
    )
    water_needs: Mapped[str] = mapped_column(
        Enum(*[m.value for m in WaterNeeds], name="water_needs_enum")
    )
    bloom_time: Mapped[str] = mapped_column(Text)
    height: Mapped[str] = mapped_column(String(200))
    height_text: Mapped[Optional[str]] = mapped_column(
        Enum(*[m.value for m in HeightCategory], name="height_category_enum")
    )
    width: Mapped[str] = mapped_column(String(200))
    temperature: Mapped[Optional[str]] = mapped_column(Text)
    humidity: Mapped[Optional[str]] = mapped_column(Text)
    care_instructions: Mapped[Optional[str]] = mapped_column(Text)
    common_issues: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    plant_zones: Mapped[list["PlantZone"]] = relationship(
        back_populates="plant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PlantZone.id",
    )
    plant_bloom_seasons: Mapped[list["PlantBloomSeason"]] = relationship(
        back_populates="plant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PlantBloomSeason.id",
    )

    @property
    def zone_labels(self) -> list[str]:
        """Distinct zone labels in link order."""
        return list(dict.fromkeys(pz.zone.zone for pz in self.plant_zones if pz.zone is not None))

    @property
    def bloom_season_labels(self) -> list[str]:
        return list(
            dict.fromkeys(
                pbs.bloom_season.season
                for pbs in self.plant_bloom_seasons
                if pbs.bloom_season is not None
            )
        )


class Zone(Base):
    __tablename__ = "zones"

    id: Mapped[int] = mapped_column(primary_key=True)
    zone: Mapped[str] = mapped_column(String(10), unique=True)

    plant_zones: Mapped[list["PlantZone"]] = relationship(
        back_populates="zone", cascade="all, delete-orphan", passive_deletes=True
    )


class BloomSeason(Base):
    __tablename__ = "bloom_seasons"

    id: Mapped[int] = mapped_column(primary_key=True)
    season: Mapped[str] = mapped_column(String(50), unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)

    plant_bloom_seasons: Mapped[list["PlantBloomSeason"]] = relationship(
        back_populates="bloom_season", cascade="all, delete-orphan", passive_deletes=True
    )


class PlantZone(Base):
    __tablename__ = "plant_zones"
    __table_args__ = (UniqueConstraint("plant_id", "zone_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    plant_id: Mapped[int] = mapped_column(ForeignKey("plants.id", ondelete="CASCADE"), index=True)
    zone_id: Mapped[int] = mapped_column(ForeignKey("zones.id", ondelete="CASCADE"), index=True)

    plant: Mapped["Plant"] = relationship(back_populates="plant_zones")
    zone: Mapped["Zone"] = relationship(back_populates="plant_zones")


class PlantBloomSeason(Base):
    __tablename__ = "plant_bloom_seasons"
    __table_args__ = (UniqueConstraint("plant_id", "bloom_season_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    plant_id: Mapped[int] = mapped_column(ForeignKey("plants.id", ondelete="CASCADE"), index=True)
    bloom_season_id: Mapped[int] = mapped_column(
        ForeignKey("bloom_seasons.id", ondelete="CASCADE"), index=True
    )

    plant: Mapped["Plant"] = relationship(back_populates="plant_bloom_seasons")
    bloom_season: Mapped["BloomSeason"] = relationship(back_populates="plant_bloom_seasons")
