from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from fleet_ledger.api.deps import get_owned_vehicle
from fleet_ledger.db.session import get_db
from fleet_ledger.models.cost import Cost
from fleet_ledger.models.vehicle import Vehicle
from fleet_ledger.schemas.cost import CostCreate, CostRead, CostUpdate
from fleet_ledger.services.store import VehicleStore, get_store

router = APIRouter()

def _get_cost(db: Session, vehicle: Vehicle, cost_id: int) -> Cost:
    cost = db.query(Cost).filter(Cost.id == cost_id, Cost.vehicle_id == vehicle.id).first()
    if not cost:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cost with id {cost_id} not found"
        )
    return cost

@router.get("/", response_model=List[CostRead])
def list_costs(
    vehicle: Vehicle = Depends(get_owned_vehicle),
    store: VehicleStore = Depends(get_store),
) -> List[CostRead]:
    """
    List the costs of a vehicle, most recent first.
    """
    return store.find_costs_by_vehicle(vehicle.id)

@router.post("/", response_model=CostRead, status_code=status.HTTP_201_CREATED)
def create_cost(
    cost_data: CostCreate,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: Session = Depends(get_db),
) -> CostRead:
    """
    Book a cost against a vehicle.
    """
    cost = Cost(vehicle_id=vehicle.id, **cost_data.model_dump())
    db.add(cost)
    db.commit()
    db.refresh(cost)
    return cost

@router.put("/{cost_id}", response_model=CostRead)
def update_cost(
    cost_id: int,
    cost_data: CostUpdate,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: Session = Depends(get_db),
) -> CostRead:
    """
    Update some fields of a cost. Null values are ignored.
    """
    cost = _get_cost(db, vehicle, cost_id)
    for field, value in cost_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(cost, field, value)

    db.commit()
    db.refresh(cost)
    return cost

@router.delete("/{cost_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cost(
    cost_id: int,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: Session = Depends(get_db),
) -> Response:
    """
    Remove a cost from a vehicle.
    """
    cost = _get_cost(db, vehicle, cost_id)
    db.delete(cost)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
