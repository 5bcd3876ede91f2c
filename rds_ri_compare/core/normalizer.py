"""
Price normalization.

Turns one raw price point into On-Demand and Reserved cost records.
"""

import logging
from typing import Optional

from .calculator import UnitCost, on_demand_unit_cost, reserved_unit_cost
from .diagnostics import resolve_logger
from .models import (
    RESERVED_SLOTS,
    CostRecord,
    OfferingClass,
    PaymentOption,
    PricingViews,
    RawPricePoint,
    Term,
)


def normalize_price_point(
    point: RawPricePoint,
    count: int,
    logger: Optional[logging.Logger] = None
) -> PricingViews:
    """Build the cost records for one price point.

    Each view starts with an On-Demand record built for that horizon,
    followed by one record per reserved slot with a non-zero rate.

    Args:
        point: Raw hourly prices for one instance type and engine
        count: Number of running instances of that type
        logger: Optional logger for diagnostics

    Returns:
        PricingViews with 1-year and 3-year records
    """
    log = resolve_logger(logger)
    if count < 0:
        raise ValueError("count cannot be negative")

    views = PricingViews(
        one_year=[_on_demand_record(point, count, Term.ONE_YEAR)],
        three_year=[_on_demand_record(point, count, Term.THREE_YEAR)],
    )
    log.debug(
        "On-Demand %s/%s in %s: hourly=%f monthly=%f",
        point.instance_type, point.engine.value, point.region,
        point.on_demand_hourly, views.one_year[0].monthly_cost
    )

    for slot in RESERVED_SLOTS:
        rate = point.reserved_rate(slot)
        if rate == 0:
            continue  # not offered
        unit = reserved_unit_cost(rate, point.on_demand_hourly, slot.term, slot.payment_option)
        record = _build_record(
            point, count, slot.term, slot.payment_option, slot.offering_class, unit
        )
        views.for_term(slot.term).append(record)
        log.debug(
            "Reserved %s %s %s %s for %s: amortized monthly=%f",
            slot.term.value, slot.offering_class.value, slot.payment_option.value,
            point.engine.value, point.instance_type, unit.amortized_monthly_cost
        )

    return views


def _on_demand_record(point: RawPricePoint, count: int, horizon: Term) -> CostRecord:
    unit = on_demand_unit_cost(point.on_demand_hourly, horizon)
    return _build_record(
        point, count, Term.ON_DEMAND, PaymentOption.NOT_APPLICABLE, None, unit
    )


def _build_record(
    point: RawPricePoint,
    count: int,
    term: Term,
    payment_option: PaymentOption,
    offering_class: Optional[OfferingClass],
    unit: UnitCost
) -> CostRecord:
    record = CostRecord(
        region=point.region,
        instance_type=point.instance_type,
        engine=point.engine,
        term=term,
        payment_option=payment_option,
        offering_class=offering_class,
        count=count,
        amortized_monthly_cost=unit.amortized_monthly_cost,
        monthly_cost=unit.monthly_cost,
        upfront_cost=unit.upfront_cost,
        cost_for_term=unit.cost_for_term,
        savings=unit.savings,
        savings_percent=unit.savings_percent,
    )
    return record.with_count(count)
