"""
Owner-scoped read access to vehicles and the rows hanging off them.

A VehicleStore wraps the session of one request; endpoints receive it through
``get_store`` instead of querying a shared handle.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from fleet_ledger.db.session import get_db
from fleet_ledger.models.cost import Cost
from fleet_ledger.models.photo import Photo
from fleet_ledger.models.vehicle import Vehicle, VehicleStatus


class VehicleStore:
    def __init__(self, db: Session):
        self.db = db

    def find_owned_vehicles(
        self,
        owner_id: int,
        status: Optional[VehicleStatus] = None,
        make: Optional[str] = None,
    ) -> List[Vehicle]:
        """Vehicles of one owner, newest first, optionally filtered."""
        query = self.db.query(Vehicle).filter(Vehicle.owner_id == owner_id)

        # Apply filters if provided
        if status:
            query = query.filter(Vehicle.status == status)
        if make:
            query = query.filter(Vehicle.make.ilike(f"%{make}%"))

        return query.order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).all()

    def get_owned_vehicle(self, owner_id: int, vehicle_id: int) -> Optional[Vehicle]:
        return (
            self.db.query(Vehicle)
            .filter(Vehicle.id == vehicle_id, Vehicle.owner_id == owner_id)
            .first()
        )

    def find_costs_by_vehicle(self, vehicle_id: int) -> List[Cost]:
        return (
            self.db.query(Cost)
            .filter(Cost.vehicle_id == vehicle_id)
            .order_by(Cost.incurred_at.desc(), Cost.id.desc())
            .all()
        )

    def costs_by_vehicle(self, vehicle_ids: Iterable[int]) -> Dict[int, List[Cost]]:
        """Costs of several vehicles in one query, keyed by vehicle id."""
        vehicle_ids = list(vehicle_ids)
        grouped: Dict[int, List[Cost]] = defaultdict(list)
        if not vehicle_ids:
            return grouped
        for cost in self.db.query(Cost).filter(Cost.vehicle_id.in_(vehicle_ids)).all():
            grouped[cost.vehicle_id].append(cost)
        return grouped

    def find_photos_by_vehicle(self, vehicle_id: int) -> List[Photo]:
        return (
            self.db.query(Photo)
            .filter(Photo.vehicle_id == vehicle_id)
            .order_by(Photo.position.asc(), Photo.id.asc())
            .all()
        )


def get_store(db: Session = Depends(get_db)) -> VehicleStore:
    """Dependency building the store on the request's session."""
    return VehicleStore(db)
