"""
Cost arithmetic for On-Demand and Reserved pricing.

All figures are plain floats and are never rounded here; rounding
happens only when rendering.
"""

from dataclasses import dataclass
from typing import Tuple

from .models import PaymentOption, Term

HOURS_IN_MONTH = 730  # Average hours in a month
MONTHS_IN_YEAR = 12


@dataclass(frozen=True)
class UnitCost:
    """Per-instance cost figures for one term and payment option."""
    amortized_monthly_cost: float
    monthly_cost: float
    upfront_cost: float
    cost_for_term: float
    savings: float = 0.0
    savings_percent: float = 0.0


def monthly_cost(hourly_rate: float) -> float:
    """Convert an hourly rate to a monthly cost."""
    return hourly_rate * HOURS_IN_MONTH


def split_payment(
    amortized_monthly_cost: float,
    months_in_term: int,
    payment_option: PaymentOption
) -> Tuple[float, float]:
    """Split an amortized monthly cost into upfront and recurring parts.

    Args:
        amortized_monthly_cost: Monthly cost if nothing were paid upfront
        months_in_term: Length of the commitment in months
        payment_option: Reserved payment option

    Returns:
        Tuple of (upfront cost, monthly cost)

    Raises:
        ValueError: If the payment option is not a reserved one
    """
    if payment_option is PaymentOption.NO_UPFRONT:
        return 0.0, amortized_monthly_cost
    if payment_option is PaymentOption.PARTIAL_UPFRONT:
        return amortized_monthly_cost * months_in_term * 0.5, amortized_monthly_cost * 0.5
    if payment_option is PaymentOption.ALL_UPFRONT:
        return amortized_monthly_cost * months_in_term, 0.0
    raise ValueError(f"Not a reserved payment option: {payment_option.value}")


def savings_percent(savings: float, on_demand_total: float) -> float:
    """Savings as a percentage of the On-Demand total, 0 when that total is 0."""
    if on_demand_total == 0:
        return 0.0
    return savings / on_demand_total * 100


def on_demand_unit_cost(on_demand_hourly: float, horizon: Term) -> UnitCost:
    """Per-instance On-Demand cost viewed over a reserved horizon."""
    monthly = monthly_cost(on_demand_hourly)
    return UnitCost(
        amortized_monthly_cost=monthly,
        monthly_cost=monthly,
        upfront_cost=0.0,
        cost_for_term=monthly * horizon.months,
    )


def reserved_unit_cost(
    reserved_hourly: float,
    on_demand_hourly: float,
    term: Term,
    payment_option: PaymentOption
) -> UnitCost:
    """Per-instance Reserved cost and savings against On-Demand.

    The cost for the term is the amortized monthly cost times the months
    in the term, whatever the payment split.
    """
    months = term.months
    amortized = monthly_cost(reserved_hourly)
    upfront, monthly = split_payment(amortized, months, payment_option)
    cost_for_term = amortized * months

    on_demand_total = monthly_cost(on_demand_hourly) * months
    savings = on_demand_total - cost_for_term

    return UnitCost(
        amortized_monthly_cost=amortized,
        monthly_cost=monthly,
        upfront_cost=upfront,
        cost_for_term=cost_for_term,
        savings=savings,
        savings_percent=savings_percent(savings, on_demand_total),
    )
