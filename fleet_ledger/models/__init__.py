"""
Import all models from their respective modules.
"""

from fleet_ledger.models.user import User, UserRole
from fleet_ledger.models.vehicle import Vehicle, VehicleStatus
from fleet_ledger.models.cost import Cost, CostCategory
from fleet_ledger.models.photo import Photo

# Export all models
__all__ = [
    "User",
    "UserRole",
    "Vehicle",
    "VehicleStatus",
    "Cost",
    "CostCategory",
    "Photo",
]
