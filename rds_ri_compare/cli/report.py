"""
Tabular rendering of cost records.

Builds rich tables with one row per cost record.
"""

from typing import Callable, List, Sequence, Tuple

from rich.console import Console
from rich.table import Table

from rds_ri_compare.core.aggregation import aggregate_by_term_and_engine
from rds_ri_compare.core.inventory import engines_in_use
from rds_ri_compare.core.models import CostRecord, Engine, InventoryCount, Term


def _money(value: float) -> str:
    return f"{value:.2f}"


COLUMNS: List[Tuple[str, Callable[[CostRecord], str]]] = [
    ("Region", lambda r: r.region),
    ("Instance Type", lambda r: r.instance_type),
    ("Amortized Monthly Cost/instance ($)", lambda r: _money(r.amortized_monthly_cost)),
    ("Number of Instances", lambda r: str(r.count)),
    ("Term", lambda r: r.term.value),
    ("Offering Class", lambda r: r.offering_class.value if r.offering_class else "N/A"),
    ("Payment Option", lambda r: r.payment_option.value),
    ("Upfront Cost / instance ($)", lambda r: _money(r.upfront_cost)),
    ("Monthly Cost / instance ($)", lambda r: _money(r.monthly_cost)),
    ("Total Cost for Term / instance ($)", lambda r: _money(r.cost_for_term)),
    ("Savings ($)", lambda r: _money(r.savings)),
    ("Savings (%)", lambda r: _money(r.savings_percent)),
    ("Total Upfront Cost ($)", lambda r: _money(r.total_upfront_cost)),
    ("Total Monthly Cost ($)", lambda r: _money(r.total_monthly_cost)),
    ("Total Amortized Monthly Cost ($)", lambda r: _money(r.total_amortized_monthly_cost)),
    ("Total Cost for Term ($)", lambda r: _money(r.total_cost_for_term)),
]


def record_to_row(record: CostRecord) -> List[str]:
    """Format a record as table cells, in column order."""
    return [render(record) for _, render in COLUMNS]


TEXT_COLUMNS = {"Region", "Instance Type", "Term", "Offering Class", "Payment Option"}


def build_table(records: Sequence[CostRecord], title: str) -> Table:
    table = Table(title=title, title_justify="left")
    for header, _ in COLUMNS:
        table.add_column(header, justify="left" if header in TEXT_COLUMNS else "right")
    for record in records:
        table.add_row(*record_to_row(record))
    return table


def render_term_tables(
    console: Console,
    records: Sequence[CostRecord],
    inventory: InventoryCount,
    term: Term
) -> None:
    """Print one table per priced engine in the inventory for a term."""
    for engine in engines_in_use(inventory):
        if engine is Engine.UNKNOWN:
            continue
        aggregated = aggregate_by_term_and_engine(records, inventory, term, engine)
        console.print(build_table(aggregated, f"{term.value} Term Costs for {engine.value}"))


def group_by_instance_type(
    records: Sequence[CostRecord],
    engine: Engine,
    horizon: Term
) -> List[Tuple[str, CostRecord]]:
    """One record per (instance type, term, offering class, payment option).

    ``records`` belong to one horizon; On-Demand titles name it. Returns
    (title, record) pairs in first-seen order; later duplicates are
    suppressed.
    """
    seen = set()
    groups = []
    for record in records:
        if record.engine is not engine:
            continue
        key = (record.instance_type, record.term, record.offering_class, record.payment_option)
        if key in seen:
            continue
        seen.add(key)
        term = f"{record.term.value} ({horizon.value})" if record.is_on_demand else record.term.value
        offering = f"-{record.offering_class.value}" if record.offering_class else ""
        title = (
            f"Costs for {record.instance_type}-{term}"
            f"{offering}-{record.payment_option.value}-{engine.value}"
        )
        groups.append((title, record))
    return groups


def render_instance_type_tables(
    console: Console,
    records: Sequence[CostRecord],
    engine: Engine,
    horizon: Term
) -> None:
    """Print one single-row table per instance type, term and payment option."""
    for title, record in group_by_instance_type(records, engine, horizon):
        console.print(build_table([record], title))


def render_inventory_table(console: Console, inventory: InventoryCount, region: str) -> None:
    table = Table(title=f"Running RDS instances in {region}", title_justify="left")
    table.add_column("Instance Type")
    table.add_column("Engine")
    table.add_column("Number of Instances", justify="right")
    for key, count in inventory.items():
        table.add_row(key.instance_type, key.engine.value, str(count))
    console.print(table)
