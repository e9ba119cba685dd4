from fastapi import Depends, HTTPException, status

from fleet_ledger.core.security import TokenData, get_current_user
from fleet_ledger.models.vehicle import Vehicle
from fleet_ledger.services.store import VehicleStore, get_store


def get_owned_vehicle(
    vehicle_id: int,
    current_user: TokenData = Depends(get_current_user),
    store: VehicleStore = Depends(get_store),
) -> Vehicle:
    """Dependency loading the path's vehicle; 404 when it belongs to someone else."""
    vehicle = store.get_owned_vehicle(current_user.user_id, vehicle_id)
    if not vehicle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Vehicle with id {vehicle_id} not found"
        )
    return vehicle
