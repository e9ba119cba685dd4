from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from fleet_ledger.api.deps import get_owned_vehicle
from fleet_ledger.core.security import TokenData, get_current_user
from fleet_ledger.db.session import get_db
from fleet_ledger.models.vehicle import Vehicle, VehicleStatus
from fleet_ledger.schemas.cost import CostRead
from fleet_ledger.schemas.photo import PhotoRead
from fleet_ledger.schemas.vehicle import (
    VehicleCreate,
    VehicleDetail,
    VehicleRead,
    VehicleUpdate,
    VehicleWithTotals,
)
from fleet_ledger.services.financials import compute_totals
from fleet_ledger.services.store import VehicleStore, get_store

import logging

logger = logging.getLogger(__name__)

router = APIRouter()

# Columns an update may set back to NULL
NULLABLE_FIELDS = {"sale_price", "main_photo_url"}

def _with_totals(vehicle: Vehicle, costs) -> VehicleWithTotals:
    totals = compute_totals(vehicle, costs)
    return VehicleWithTotals(
        **VehicleRead.model_validate(vehicle).model_dump(),
        variable_costs=totals.variable_costs,
        total_cost=totals.total_cost,
        margin=totals.margin,
    )

@router.get("/", response_model=List[VehicleWithTotals])
def list_vehicles(
    status_filter: Optional[VehicleStatus] = Query(None, alias="status"),
    make: Optional[str] = None,
    current_user: TokenData = Depends(get_current_user),
    store: VehicleStore = Depends(get_store),
) -> List[VehicleWithTotals]:
    """
    List the merchant's vehicles, newest first, with total cost and margin.

    Supports filtering by status and by a case-insensitive make fragment.
    """
    vehicles = store.find_owned_vehicles(current_user.user_id, status=status_filter, make=make)
    costs = store.costs_by_vehicle(v.id for v in vehicles)
    return [_with_totals(v, costs.get(v.id, [])) for v in vehicles]

@router.post("/", response_model=VehicleRead, status_code=status.HTTP_201_CREATED)
def create_vehicle(
    vehicle_data: VehicleCreate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> VehicleRead:
    """
    Register a vehicle bought for resale.
    """
    values = vehicle_data.model_dump()
    if values["main_photo_url"] is not None:
        values["main_photo_url"] = str(values["main_photo_url"])

    vehicle = Vehicle(owner_id=current_user.user_id, **values)
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)

    logger.info(f"Vehicle {vehicle.id} registered for owner {current_user.user_id}")
    return vehicle

@router.get("/{vehicle_id}", response_model=VehicleDetail)
def get_vehicle(
    vehicle: Vehicle = Depends(get_owned_vehicle),
    store: VehicleStore = Depends(get_store),
) -> VehicleDetail:
    """
    Get one vehicle with its costs, photos and derived figures.
    """
    costs = store.find_costs_by_vehicle(vehicle.id)
    photos = store.find_photos_by_vehicle(vehicle.id)
    return VehicleDetail(
        **_with_totals(vehicle, costs).model_dump(),
        costs=[CostRead.model_validate(c) for c in costs],
        photos=[PhotoRead.model_validate(p) for p in photos],
    )

@router.put("/{vehicle_id}", response_model=VehicleRead)
def update_vehicle(
    vehicle_data: VehicleUpdate,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: Session = Depends(get_db),
) -> VehicleRead:
    """
    Update some fields of a vehicle. Marking it sold is a status update.
    """
    for field, value in vehicle_data.model_dump(exclude_unset=True).items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        if field == "main_photo_url" and value is not None:
            value = str(value)
        setattr(vehicle, field, value)

    db.commit()
    db.refresh(vehicle)
    return vehicle

@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vehicle(
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: Session = Depends(get_db),
) -> Response:
    """
    Delete a vehicle together with its costs and photos.
    """
    vehicle_id = vehicle.id
    db.delete(vehicle)
    db.commit()
    logger.info(f"Vehicle {vehicle_id} deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
