from fastapi import APIRouter, Depends

from fleet_ledger.core.security import TokenData, get_current_user
from fleet_ledger.schemas.dashboard import DashboardPeriod, DashboardReport
from fleet_ledger.services.dashboard import compute_dashboard
from fleet_ledger.services.store import VehicleStore, get_store

router = APIRouter()

@router.get("/", response_model=DashboardReport)
def get_dashboard(
    period: DashboardPeriod = DashboardPeriod.NONE,
    current_user: TokenData = Depends(get_current_user),
    store: VehicleStore = Depends(get_store),
) -> DashboardReport:
    """
    Fleet and sales figures of the merchant. Amounts are integer cents.

    ``period`` restricts the fleet figures to vehicles created in the last
    day, week or month; realized sales always cover the whole history.
    """
    vehicles = store.find_owned_vehicles(current_user.user_id)
    costs = store.costs_by_vehicle(v.id for v in vehicles)
    return compute_dashboard(vehicles, costs, period)
