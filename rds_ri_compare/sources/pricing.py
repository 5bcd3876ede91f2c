"""
RDS pricing dataset retrieval and parsing.

Downloads the public RDS instance pricing dataset and turns the entries
for one region into raw price points.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from ..core.diagnostics import resolve_logger
from ..core.models import RESERVED_SLOTS, Engine, RawPricePoint, ReservedSlot

DEFAULT_PRICING_URL = "https://instances.vantage.sh/rds/instances.json"
DEFAULT_TIMEOUT = 30.0

# Engine codes used as keys under each region of the dataset
ENGINE_PRICING_CODES: Dict[Engine, str] = {
    Engine.MYSQL: "2",
    Engine.POSTGRESQL: "14",
}


def _reserved_key(slot: ReservedSlot) -> str:
    return f"yrTerm{slot.term.years}{slot.offering_class.value}.{slot.payment_option.value}"


# Dataset reserved keys, e.g. "yrTerm1Standard.noUpfront"
RESERVED_KEYS: Dict[str, ReservedSlot] = {_reserved_key(slot): slot for slot in RESERVED_SLOTS}


class PricingFetchError(Exception):
    """Raised when the pricing dataset cannot be retrieved."""
    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


def fetch_pricing_dataset(
    url: str = DEFAULT_PRICING_URL,
    timeout: float = DEFAULT_TIMEOUT,
    logger: Optional[logging.Logger] = None
) -> List[Dict[str, Any]]:
    """Download the raw pricing dataset.

    Raises:
        PricingFetchError: On network, HTTP or decoding failure
    """
    log = resolve_logger(logger)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        dataset = response.json()
    except (requests.RequestException, ValueError) as e:
        log.error("Error fetching RDS pricing data from %s: %s", url, e)
        raise PricingFetchError(f"Failed to fetch pricing data from {url}: {e}", url) from e

    if not isinstance(dataset, list):
        raise PricingFetchError(f"Unexpected pricing data format from {url}", url)

    log.debug("Fetched %d pricing entries from %s", len(dataset), url)
    return dataset


def parse_price_points(
    dataset: Iterable[Dict[str, Any]],
    region: str,
    engines: Iterable[Engine],
    logger: Optional[logging.Logger] = None
) -> List[RawPricePoint]:
    """Extract price points for a region and set of engines.

    Entries without the region, whose On-Demand rate for an engine is
    zero, or that are not shaped as expected are left out.
    """
    log = resolve_logger(logger)
    codes = {engine: ENGINE_PRICING_CODES[engine] for engine in engines if engine in ENGINE_PRICING_CODES}

    points = []
    for entry in dataset:
        if not isinstance(entry, dict):
            log.debug("Skipping malformed pricing entry: %r", entry)
            continue
        instance_type = entry.get("instance_type")
        pricing = entry.get("pricing")
        region_pricing = pricing.get(region) if isinstance(pricing, dict) else None
        if not isinstance(instance_type, str) or not instance_type or not isinstance(region_pricing, dict):
            log.debug("No %s pricing for %s", region, instance_type)
            continue

        for engine, code in codes.items():
            engine_pricing = region_pricing.get(code)
            if not isinstance(engine_pricing, dict):
                log.debug("No %s pricing for %s in %s", engine.value, instance_type, region)
                continue
            on_demand = _to_rate(engine_pricing.get("ondemand"))
            if on_demand == 0:
                continue
            points.append(RawPricePoint(
                instance_type=instance_type,
                region=region,
                engine=engine,
                on_demand_hourly=on_demand,
                reserved_hourly=_parse_reserved(engine_pricing.get("reserved"))
            ))

    log.debug("Parsed %d price point(s) for %s", len(points), region)
    return points


def load_price_points(
    region: str,
    engines: Iterable[Engine],
    url: str = DEFAULT_PRICING_URL,
    timeout: float = DEFAULT_TIMEOUT,
    logger: Optional[logging.Logger] = None
) -> List[RawPricePoint]:
    """Fetch the dataset and parse it for a region."""
    dataset = fetch_pricing_dataset(url, timeout, logger)
    return parse_price_points(dataset, region, engines, logger)


def _parse_reserved(reserved: Any) -> Dict[ReservedSlot, float]:
    rates = {}
    if not isinstance(reserved, dict):
        return rates
    for key, value in reserved.items():
        slot = RESERVED_KEYS.get(key)
        if slot is None:
            continue
        rate = _to_rate(value)
        if rate > 0:
            rates[slot] = rate
    return rates


def _to_rate(value: Any) -> float:
    """Parse a dataset price; missing or malformed values mean not offered."""
    if value is None:
        return 0.0
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return 0.0
    return rate if rate > 0 else 0.0
