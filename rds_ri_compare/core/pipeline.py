"""
Pricing pipeline.

Runs the normalizer for every priced instance key in the inventory and
collects the 1-year and 3-year views.
"""

import logging
from typing import Dict, Optional, Sequence

from .diagnostics import resolve_logger
from .models import Engine, InstanceKey, InventoryCount, PricingViews, RawPricePoint
from .normalizer import normalize_price_point


def process_instance_types(
    price_points: Sequence[RawPricePoint],
    inventory: InventoryCount,
    region: str,
    logger: Optional[logging.Logger] = None
) -> PricingViews:
    """Price every (instance type, engine) in the inventory.

    Keys with an unknown engine or no price point are skipped. Each key
    is normalized once with the first matching price point; later
    duplicates in the dataset are ignored.

    Args:
        price_points: Raw prices available for the region
        inventory: Running instance counts per key
        region: Region the prices must belong to
        logger: Optional logger for diagnostics

    Returns:
        PricingViews holding the records for all priced keys
    """
    log = resolve_logger(logger)
    by_key = _index_price_points(price_points, region, log)

    views = PricingViews()
    for key, count in inventory.items():
        if key.engine is Engine.UNKNOWN:
            log.info("Skipping %d instance(s) of %s with unsupported engine", count, key.instance_type)
            continue

        point = by_key.get(key)
        if point is None:
            log.debug("No pricing data for %s (%s) in %s", key.instance_type, key.engine.value, region)
            continue

        views.extend(normalize_price_point(point, count, log))

    log.debug("Priced %d record(s) for 1 year, %d for 3 years", len(views.one_year), len(views.three_year))
    return views


def _index_price_points(
    price_points: Sequence[RawPricePoint],
    region: str,
    log: logging.Logger
) -> Dict[InstanceKey, RawPricePoint]:
    """First price point per key for the region; later duplicates are skipped."""
    index: Dict[InstanceKey, RawPricePoint] = {}
    for point in price_points:
        if point.region != region:
            continue
        if point.key in index:
            log.debug("Ignoring duplicate price point for %s (%s)", point.instance_type, point.engine.value)
            continue
        index[point.key] = point
    return index
