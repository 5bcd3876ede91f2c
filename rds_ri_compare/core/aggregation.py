"""
Count aggregation over cost records.

Rewrites record counts and totals from the authoritative inventory.
"""

from typing import Iterable, List

from .models import CostRecord, Engine, InventoryCount, Term


def aggregate_by_term_and_engine(
    records: Iterable[CostRecord],
    inventory: InventoryCount,
    term: Term,
    engine: Engine
) -> List[CostRecord]:
    """Select one engine's records for a term and weight them by inventory count.

    On-Demand records are kept alongside the target term as the baseline
    row. Records whose instance key has no running instances are dropped.

    Args:
        records: Records of one horizon
        inventory: Running instance counts per key
        term: Reserved term to keep
        engine: Engine to keep

    Returns:
        Records with counts and totals rewritten
    """
    aggregated = []
    for record in records:
        if record.engine is not engine:
            continue
        if record.term is not term and not record.is_on_demand:
            continue
        count = inventory.get(record.key, 0)
        if count > 0:
            aggregated.append(record.with_count(count))
    return aggregated


def reconcile_counts(records: Iterable[CostRecord], inventory: InventoryCount) -> List[CostRecord]:
    """Rewrite counts and totals without any term or engine filter.

    Records whose instance key is absent from the inventory are dropped.
    """
    reconciled = []
    for record in records:
        count = inventory.get(record.key, 0)
        if count > 0:
            reconciled.append(record.with_count(count))
    return reconciled
