"""
Inventory aggregation.

Collapses running instance observations into counts per instance key.
"""

from typing import Dict, Iterable, List, Optional

from .models import Engine, InventoryCount, RunningInstance

# Provider engine names (DescribeDBInstances ``Engine``) that can be priced
DB_ENGINE_MAPPING: Dict[str, Engine] = {
    "mysql": Engine.MYSQL,
    "postgres": Engine.POSTGRESQL,
}


def engine_from_db_engine(db_engine: Optional[str]) -> Engine:
    """Map a provider engine name to an Engine, ``Engine.UNKNOWN`` if unsupported."""
    if not db_engine:
        return Engine.UNKNOWN
    return DB_ENGINE_MAPPING.get(db_engine.strip().lower(), Engine.UNKNOWN)


def aggregate_inventory(instances: Iterable[RunningInstance]) -> InventoryCount:
    """Sum instance counts per (instance type, engine).

    Args:
        instances: Observed instances, duplicates allowed

    Returns:
        Mapping of InstanceKey to total count, in first-seen order
    """
    counts: InventoryCount = {}
    for instance in instances:
        counts[instance.key] = counts.get(instance.key, 0) + instance.count
    return counts


def engines_in_use(inventory: InventoryCount) -> List[Engine]:
    """Distinct engines present in the inventory, in first-seen order."""
    engines: List[Engine] = []
    for key in inventory:
        if key.engine not in engines:
            engines.append(key.engine)
    return engines


def total_instances(inventory: InventoryCount) -> int:
    return sum(inventory.values())
