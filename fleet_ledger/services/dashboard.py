"""
Dashboard rollup over a merchant's fleet.

The rollup has two halves:
- fleet figures (status counts, stock value, costs, potential margin) over the
  vehicles created inside the requested period,
- realized sales (totals and a per-month history) over every sold vehicle,
  regardless of the period.

A sale is dated by the vehicle's ``updated_at``: there is no dedicated sold-at
column, and the status change to ``sold`` is what normally sets it.
"""

import calendar
from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from fleet_ledger.db.base_model import utcnow
from fleet_ledger.models.vehicle import VehicleStatus
from fleet_ledger.schemas.dashboard import (
    DashboardPeriod,
    DashboardReport,
    FleetTotals,
    MonthlySales,
    SalesSummary,
    StatusCount,
)
from fleet_ledger.services.financials import InvalidFinancialInput, VehicleTotals, compute_totals

import logging
logger = logging.getLogger(__name__)

# Order in which statuses appear in the breakdown
STATUS_ORDER = [VehicleStatus.IN_STOCK, VehicleStatus.IN_PREPARATION, VehicleStatus.SOLD]


def _one_month_before(moment: datetime) -> datetime:
    """Same day one calendar month earlier, clamped to the end of a shorter month."""
    if moment.month == 1:
        year, month = moment.year - 1, 12
    else:
        year, month = moment.year, moment.month - 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def resolve_cutoff(period: DashboardPeriod, now: datetime) -> Optional[datetime]:
    """Earliest creation date kept by ``period``, or None when nothing is filtered."""
    period = DashboardPeriod(period)
    if period == DashboardPeriod.LAST_DAY:
        return now - timedelta(hours=24)
    if period == DashboardPeriod.LAST_WEEK:
        return now - timedelta(days=7)
    if period == DashboardPeriod.LAST_MONTH:
        return _one_month_before(now)
    return None


def _status_of(vehicle: Any) -> VehicleStatus:
    try:
        return VehicleStatus(vehicle.status)
    except ValueError:
        raise InvalidFinancialInput(f"Vehicle {vehicle.id} has unknown status {vehicle.status!r}")


def _month_key(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}"


def compute_dashboard(
    vehicles: Iterable[Any],
    costs_by_vehicle: Mapping[Any, Iterable[Any]],
    period: DashboardPeriod = DashboardPeriod.NONE,
    now: Optional[datetime] = None,
) -> DashboardReport:
    """
    Build the dashboard report of one merchant.

    Args:
        vehicles: Every vehicle of the merchant, not pre-filtered by period.
        costs_by_vehicle: Cost entries keyed by vehicle id. Missing keys mean no costs.
        period: Creation-date window for the fleet figures.
        now: Reference instant (naive UTC) for the window, defaults to the current time.

    Returns:
        DashboardReport with every field present, zeros and empty lists included.

    Raises:
        InvalidFinancialInput: a cost entry is misfiled or an amount is invalid.
    """
    vehicles = list(vehicles)
    now = now if now is not None else utcnow()
    cutoff = resolve_cutoff(period, now)

    totals_by_id: Dict[Any, VehicleTotals] = {
        vehicle.id: compute_totals(vehicle, costs_by_vehicle.get(vehicle.id, []))
        for vehicle in vehicles
    }

    # Fleet half: vehicles created inside the period
    in_period = [v for v in vehicles if cutoff is None or v.created_at >= cutoff]
    status_counts = Counter(_status_of(v) for v in in_period)

    totals = FleetTotals()
    for vehicle in in_period:
        vehicle_totals = totals_by_id[vehicle.id]
        totals.cost += vehicle_totals.total_cost
        if _status_of(vehicle) == VehicleStatus.SOLD:
            continue
        totals.purchase += vehicle.purchase_price
        if vehicle.sale_price is not None:
            totals.sale += vehicle.sale_price
            totals.potential_margin += vehicle_totals.margin

    # Sales half: every realized sale, bucketed by month
    sales = SalesSummary()
    buckets: Dict[str, MonthlySales] = {}
    for vehicle in vehicles:
        if _status_of(vehicle) != VehicleStatus.SOLD or vehicle.sale_price is None:
            continue
        vehicle_totals = totals_by_id[vehicle.id]
        sales.total_revenue += vehicle.sale_price
        sales.total_costs += vehicle_totals.total_cost
        sales.total_margin += vehicle_totals.margin

        month = _month_key(vehicle.updated_at)
        bucket = buckets.setdefault(month, MonthlySales(month=month))
        bucket.revenue += vehicle.sale_price
        bucket.costs += vehicle_totals.total_cost
        bucket.margin += vehicle_totals.margin

    # "YYYY-MM" strings sort chronologically
    sales.history = [buckets[month] for month in sorted(buckets)]

    breakdown: List[StatusCount] = [
        StatusCount(status=status, count=status_counts[status])
        for status in STATUS_ORDER
        if status_counts[status]
    ]

    logger.info(
        f"Dashboard computed over {len(in_period)}/{len(vehicles)} vehicles "
        f"(period={DashboardPeriod(period).value}, {len(sales.history)} sales months)"
    )
    return DashboardReport(
        total_vehicles=sum(status_counts.values()),
        status_breakdown=breakdown,
        totals=totals,
        sales=sales,
    )
