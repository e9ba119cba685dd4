from fastapi import APIRouter, Depends, Response

from fleet_ledger.api.deps import get_owned_vehicle
from fleet_ledger.models.vehicle import Vehicle
from fleet_ledger.services.export import build_vehicle_sheet, render_vehicle_pdf
from fleet_ledger.services.store import VehicleStore, get_store

router = APIRouter()

@router.get(
    "/{vehicle_id}/pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
def export_vehicle_pdf(
    vehicle: Vehicle = Depends(get_owned_vehicle),
    store: VehicleStore = Depends(get_store),
) -> Response:
    """
    Download the vehicle sheet: details, figures, costs and up to three photos.
    """
    sheet = build_vehicle_sheet(
        vehicle,
        store.find_costs_by_vehicle(vehicle.id),
        store.find_photos_by_vehicle(vehicle.id),
    )
    return Response(
        content=render_vehicle_pdf(sheet),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="vehicle-{vehicle.id}.pdf"'},
    )
