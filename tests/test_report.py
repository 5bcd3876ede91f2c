"""
Unit tests for table rendering helpers.
"""

import pytest
from rich.console import Console

from rds_ri_compare.cli.report import (
    COLUMNS,
    build_table,
    group_by_instance_type,
    record_to_row,
    render_term_tables,
)
from rds_ri_compare.core.models import (
    Engine,
    InstanceKey,
    OfferingClass,
    PaymentOption,
    RawPricePoint,
    ReservedSlot,
    Term,
)
from rds_ri_compare.core.normalizer import normalize_price_point

NO_UPFRONT_1Y = ReservedSlot(Term.ONE_YEAR, OfferingClass.STANDARD, PaymentOption.NO_UPFRONT)
NO_UPFRONT_1Y_CONVERTIBLE = ReservedSlot(Term.ONE_YEAR, OfferingClass.CONVERTIBLE, PaymentOption.NO_UPFRONT)


def create_views(count: int = 1):
    point = RawPricePoint(
        instance_type="db.r5.large",
        region="us-east-1",
        engine=Engine.MYSQL,
        on_demand_hourly=0.24,
        reserved_hourly={NO_UPFRONT_1Y: 0.15, NO_UPFRONT_1Y_CONVERTIBLE: 0.17}
    )
    return normalize_price_point(point, count)


class TestRecordRows:
    """Test row formatting."""

    def test_column_headers(self):
        headers = [header for header, _ in COLUMNS]
        assert headers[:4] == [
            "Region",
            "Instance Type",
            "Amortized Monthly Cost/instance ($)",
            "Number of Instances",
        ]
        assert headers[-1] == "Total Cost for Term ($)"
        assert len(headers) == 16

    def test_on_demand_row(self):
        row = dict(zip([h for h, _ in COLUMNS], record_to_row(create_views(2).one_year[0])))
        assert row["Region"] == "us-east-1"
        assert row["Term"] == "On-Demand"
        assert row["Offering Class"] == "N/A"
        assert row["Payment Option"] == "N/A"
        assert row["Number of Instances"] == "2"
        assert row["Monthly Cost / instance ($)"] == "175.20"
        assert row["Total Monthly Cost ($)"] == "350.40"
        assert row["Upfront Cost / instance ($)"] == "0.00"

    def test_money_has_two_decimals(self):
        row = dict(zip([h for h, _ in COLUMNS], record_to_row(create_views().one_year[1])))
        assert row["Amortized Monthly Cost/instance ($)"] == "109.50"
        assert row["Total Cost for Term / instance ($)"] == "1314.00"
        assert row["Savings ($)"] == "788.40"
        assert row["Savings (%)"] == "37.50"
        assert row["Payment Option"] == "noUpfront"
        assert row["Offering Class"] == "Standard"


class TestTables:
    """Test table assembly."""

    def test_build_table(self):
        table = build_table(create_views().one_year, "Title")
        assert table.row_count == 3
        assert len(table.columns) == len(COLUMNS)

    def test_render_term_tables_skips_unknown_engine(self):
        console = Console(record=True, width=400)
        inventory = {
            InstanceKey("db.r5.large", Engine.MYSQL): 1,
            InstanceKey("db.m5.large", Engine.UNKNOWN): 1,
        }
        render_term_tables(console, create_views().one_year, inventory, Term.ONE_YEAR)
        text = console.export_text()
        assert "1 Year Term Costs for MySQL" in text
        assert "##" not in text
        assert "Unknown" not in text


class TestGroupByInstanceType:
    """Test the per instance type grouping view."""

    def test_duplicates_suppressed(self):
        views = create_views()
        groups = group_by_instance_type(views.one_year + views.one_year, Engine.MYSQL, Term.ONE_YEAR)
        titles = [title for title, _ in groups]

        assert titles == [
            "Costs for db.r5.large-On-Demand (1 Year)-N/A-MySQL",
            "Costs for db.r5.large-1 Year-Standard-noUpfront-MySQL",
            "Costs for db.r5.large-1 Year-Convertible-noUpfront-MySQL",
        ]

    def test_three_year_on_demand_baseline_kept(self):
        """Each horizon keeps its own On-Demand row."""
        views = create_views()
        one_year = group_by_instance_type(views.one_year, Engine.MYSQL, Term.ONE_YEAR)
        three_year = group_by_instance_type(views.three_year, Engine.MYSQL, Term.THREE_YEAR)

        assert one_year[0][0] == "Costs for db.r5.large-On-Demand (1 Year)-N/A-MySQL"
        assert three_year[0][0] == "Costs for db.r5.large-On-Demand (3 Year)-N/A-MySQL"
        assert three_year[0][1].cost_for_term == pytest.approx(6307.20)

    def test_other_engines_ignored(self):
        assert group_by_instance_type(create_views().one_year, Engine.POSTGRESQL, Term.ONE_YEAR) == []
