"""
Per-vehicle financial totals.

All amounts are integer cents. The functions here never touch the database:
they take rows (or any object exposing the same attributes) and return derived
values, so the same inputs always give the same outputs.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

import logging
logger = logging.getLogger(__name__)


class InvalidFinancialInput(ValueError):
    """Raised when the rows handed to the aggregator cannot produce a correct total."""


@dataclass(frozen=True)
class VehicleTotals:
    variable_costs: int
    total_cost: int
    margin: Optional[int]  # None when the vehicle has no sale price


def check_amount(value: Any, field: str) -> int:
    """Reject anything but a non-negative integer amount of cents."""
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning(f"Rejected non-integer amount for {field}: {value!r}")
        raise InvalidFinancialInput(f"{field} must be an integer amount of cents, got {value!r}")
    if value < 0:
        logger.warning(f"Rejected negative amount for {field}: {value}")
        raise InvalidFinancialInput(f"{field} must not be negative, got {value}")
    return value


def compute_totals(vehicle: Any, costs: Iterable[Any]) -> VehicleTotals:
    """
    Compute variable costs, total cost and margin of one vehicle.

    Args:
        vehicle: Object with ``id``, ``purchase_price`` and ``sale_price``.
        costs: Cost entries of that vehicle only (``vehicle_id``, ``amount``).

    Returns:
        VehicleTotals with ``margin`` set to None when no sale price exists.

    Raises:
        InvalidFinancialInput: a cost belongs to another vehicle, or an amount
            is negative or not an integer.
    """
    purchase_price = check_amount(vehicle.purchase_price, "purchase_price")
    sale_price = vehicle.sale_price
    if sale_price is not None:
        check_amount(sale_price, "sale_price")

    variable_costs = 0
    for cost in costs:
        if cost.vehicle_id != vehicle.id:
            logger.error(f"Cost {getattr(cost, 'id', None)} belongs to vehicle {cost.vehicle_id}, not {vehicle.id}")
            raise InvalidFinancialInput(
                f"Cost entry references vehicle {cost.vehicle_id} while totaling vehicle {vehicle.id}"
            )
        variable_costs += check_amount(cost.amount, "amount")

    total_cost = purchase_price + variable_costs
    margin = sale_price - total_cost if sale_price is not None else None

    return VehicleTotals(variable_costs=variable_costs, total_cost=total_cost, margin=margin)
