from typing import Optional

from pydantic import BaseModel


class ZoneRead(BaseModel):
    id: int
    zone: str

    model_config = {"from_attributes": True}


class BloomSeasonRead(BaseModel):
    id: int
    season: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}
