from typing import List, Optional
from datetime import datetime
from pydantic import Field, HttpUrl, NonNegativeInt, field_validator

from fleet_ledger.models.vehicle import VehicleStatus
from fleet_ledger.schemas.common import CamelModel
from fleet_ledger.schemas.cost import CostRead
from fleet_ledger.schemas.photo import PhotoRead

MIN_YEAR = 1900


def _check_year(year: Optional[int]) -> Optional[int]:
    if year is None:
        return year
    max_year = datetime.now().year + 1
    if not MIN_YEAR <= year <= max_year:
        raise ValueError(f"year must be between {MIN_YEAR} and {max_year}")
    return year


class VehicleCreate(CamelModel):
    """Schema for registering a vehicle bought for resale. Prices in cents."""
    make: str = Field(..., min_length=1, description="Manufacturer (e.g. 'Peugeot')")
    model: str = Field(..., min_length=1, description="Model (e.g. '308')")
    year: int = Field(..., description="Manufacturing year")
    purchase_price: NonNegativeInt = Field(..., description="Purchase price in cents")
    sale_price: Optional[NonNegativeInt] = Field(None, description="Quoted or final sale price in cents")
    mileage: NonNegativeInt = Field(..., description="Odometer reading in kilometers")
    status: VehicleStatus = Field(VehicleStatus.IN_STOCK, description="in_stock, in_preparation or sold")
    main_photo_url: Optional[HttpUrl] = Field(None, description="Cover picture")

    @field_validator("year")
    @classmethod
    def year_in_range(cls, v):
        return _check_year(v)


class VehicleUpdate(CamelModel):
    """
    Partial update of a vehicle. Omitted fields are left unchanged;
    an explicit null clears the sale price or the cover picture.
    """
    make: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    year: Optional[int] = None
    purchase_price: Optional[NonNegativeInt] = None
    sale_price: Optional[NonNegativeInt] = None
    mileage: Optional[NonNegativeInt] = None
    status: Optional[VehicleStatus] = None
    main_photo_url: Optional[HttpUrl] = None

    @field_validator("year")
    @classmethod
    def year_in_range(cls, v):
        return _check_year(v)


class VehicleRead(CamelModel):
    """Vehicle as stored."""
    id: int
    owner_id: int
    make: str
    model: str
    year: int
    purchase_price: int
    sale_price: Optional[int] = None
    mileage: int
    status: VehicleStatus
    main_photo_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class VehicleWithTotals(VehicleRead):
    """Vehicle with its derived figures. margin is null without a sale price."""
    variable_costs: int = Field(..., description="Sum of cost entries in cents")
    total_cost: int = Field(..., description="Purchase price plus variable costs in cents")
    margin: Optional[int] = Field(None, description="Sale price minus total cost in cents")


class VehicleDetail(VehicleWithTotals):
    costs: List[CostRead] = Field(default_factory=list)
    photos: List[PhotoRead] = Field(default_factory=list)
