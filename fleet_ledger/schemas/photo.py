from datetime import datetime
from pydantic import Field, HttpUrl, NonNegativeInt

from fleet_ledger.schemas.common import CamelModel


class PhotoCreate(CamelModel):
    url: HttpUrl = Field(..., description="Where the picture is hosted")
    position: NonNegativeInt = Field(0, description="Display order, 0 first")


class PhotoRead(CamelModel):
    id: int
    vehicle_id: int
    url: str
    position: int
    created_at: datetime
