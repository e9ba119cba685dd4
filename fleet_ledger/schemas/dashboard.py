import enum
from typing import List
from pydantic import Field

from fleet_ledger.models.vehicle import VehicleStatus
from fleet_ledger.schemas.common import CamelModel


class DashboardPeriod(str, enum.Enum):
    """Creation-date window applied to the fleet part of the dashboard."""
    NONE = "none"
    LAST_DAY = "last_day"
    LAST_WEEK = "last_week"
    LAST_MONTH = "last_month"


class StatusCount(CamelModel):
    status: VehicleStatus = Field(..., description="Vehicle status")
    count: int = Field(..., description="Number of vehicles in this status")


class FleetTotals(CamelModel):
    """Totals over the period-filtered fleet. Amounts in cents."""
    purchase: int = Field(0, description="Sum of purchase prices of unsold vehicles")
    sale: int = Field(0, description="Sum of quoted sale prices of unsold vehicles")
    cost: int = Field(0, description="Sum of purchase price plus variable costs of every vehicle")
    potential_margin: int = Field(0, description="Projected margin of unsold vehicles that have a sale price")


class MonthlySales(CamelModel):
    month: str = Field(..., description="Calendar month of the sale, YYYY-MM")
    revenue: int = Field(0, description="Sum of sale prices in cents")
    costs: int = Field(0, description="Sum of total costs in cents")
    margin: int = Field(0, description="Sum of margins in cents")


class SalesSummary(CamelModel):
    """Realized sales over the whole fleet, whatever the period filter."""
    total_revenue: int = Field(0, description="Sum of sale prices of sold vehicles")
    total_costs: int = Field(0, description="Sum of total costs of sold vehicles")
    total_margin: int = Field(0, description="Sum of margins of sold vehicles")
    history: List[MonthlySales] = Field(default_factory=list, description="Per-month sales, oldest first")


class DashboardReport(CamelModel):
    """Schema for the dashboard response."""
    total_vehicles: int = Field(0, description="Number of vehicles in the filtered fleet")
    status_breakdown: List[StatusCount] = Field(default_factory=list, description="Vehicle count per status")
    totals: FleetTotals = Field(default_factory=FleetTotals, description="Fleet value totals")
    sales: SalesSummary = Field(default_factory=SalesSummary, description="Realized sales")

    model_config = {
        "json_schema_extra": {
            "example": {
                "totalVehicles": 2,
                "statusBreakdown": [
                    {"status": "in_stock", "count": 1},
                    {"status": "sold", "count": 1}
                ],
                "totals": {
                    "purchase": 500000,
                    "sale": 0,
                    "cost": 1700000,
                    "potentialMargin": 0
                },
                "sales": {
                    "totalRevenue": 1500000,
                    "totalCosts": 1200000,
                    "totalMargin": 300000,
                    "history": [
                        {"month": "2024-05", "revenue": 1500000, "costs": 1200000, "margin": 300000}
                    ]
                }
            }
        }
    }
