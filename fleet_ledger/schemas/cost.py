from typing import Optional
from datetime import datetime
from pydantic import Field, NonNegativeInt

from fleet_ledger.models.cost import CostCategory
from fleet_ledger.schemas.common import CamelModel


class CostCreate(CamelModel):
    """Schema for booking a cost against a vehicle."""
    label: str = Field(..., min_length=1, description="What the money was spent on")
    amount: NonNegativeInt = Field(..., description="Amount in cents")
    category: CostCategory = Field(CostCategory.OTHER, description="transport, repair, admin or other")
    incurred_at: datetime = Field(..., description="When the cost was incurred")


class CostUpdate(CamelModel):
    """Partial update of a cost. Omitted fields are left unchanged."""
    label: Optional[str] = Field(None, min_length=1)
    amount: Optional[NonNegativeInt] = None
    category: Optional[CostCategory] = None
    incurred_at: Optional[datetime] = None


class CostRead(CamelModel):
    id: int
    vehicle_id: int
    label: str
    amount: int
    category: CostCategory
    incurred_at: datetime
    created_at: datetime
