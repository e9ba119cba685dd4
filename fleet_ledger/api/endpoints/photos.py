from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from fleet_ledger.api.deps import get_owned_vehicle
from fleet_ledger.db.session import get_db
from fleet_ledger.models.photo import Photo
from fleet_ledger.models.vehicle import Vehicle
from fleet_ledger.schemas.photo import PhotoCreate, PhotoRead
from fleet_ledger.services.store import VehicleStore, get_store

router = APIRouter()

@router.get("/", response_model=List[PhotoRead])
def list_photos(
    vehicle: Vehicle = Depends(get_owned_vehicle),
    store: VehicleStore = Depends(get_store),
) -> List[PhotoRead]:
    """
    List the photo references of a vehicle in display order.
    """
    return store.find_photos_by_vehicle(vehicle.id)

@router.post("/", response_model=PhotoRead, status_code=status.HTTP_201_CREATED)
def add_photo(
    photo_data: PhotoCreate,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: Session = Depends(get_db),
) -> PhotoRead:
    photo = Photo(vehicle_id=vehicle.id, url=str(photo_data.url), position=photo_data.position)
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return photo

@router.delete("/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(
    photo_id: int,
    vehicle: Vehicle = Depends(get_owned_vehicle),
    db: Session = Depends(get_db),
) -> Response:
    photo = db.query(Photo).filter(Photo.id == photo_id, Photo.vehicle_id == vehicle.id).first()
    if not photo:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Photo with id {photo_id} not found"
        )
    db.delete(photo)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
