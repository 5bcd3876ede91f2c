"""
Tests for the CLI interface.
"""
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from rds_ri_compare.cli.main import app, EXIT_CODE_OK, EXIT_CODE_FAIL
from rds_ri_compare.core.models import (
    Engine,
    OfferingClass,
    PaymentOption,
    RawPricePoint,
    ReservedSlot,
    RunningInstance,
    Term,
)
from rds_ri_compare.sources.inventory import InventoryFetchError
from rds_ri_compare.sources.pricing import PricingFetchError

runner = CliRunner()

PRICE_POINTS = [
    RawPricePoint(
        instance_type="db.r5.large",
        region="us-east-1",
        engine=Engine.MYSQL,
        on_demand_hourly=0.24,
        reserved_hourly={
            ReservedSlot(Term.ONE_YEAR, OfferingClass.STANDARD, PaymentOption.NO_UPFRONT): 0.15,
            ReservedSlot(Term.THREE_YEAR, OfferingClass.STANDARD, PaymentOption.ALL_UPFRONT): 0.1,
        }
    )
]


@pytest.fixture
def mock_instances():
    """Mock RDS instance discovery."""
    with patch('rds_ri_compare.cli.main.get_running_instances') as mock:
        mock.return_value = [
            RunningInstance("db.r5.large", Engine.MYSQL),
            RunningInstance("db.r5.large", Engine.MYSQL),
            RunningInstance("db.m5.large", Engine.UNKNOWN),
        ]
        yield mock


@pytest.fixture
def mock_prices():
    """Mock pricing dataset retrieval."""
    with patch('rds_ri_compare.cli.main.load_price_points') as mock:
        mock.return_value = PRICE_POINTS
        yield mock


class TestCompareCommand:
    """Test the compare command."""

    def test_prints_term_tables(self, mock_instances, mock_prices):
        result = runner.invoke(app, ["compare", "--region", "us-east-1"])

        assert result.exit_code == EXIT_CODE_OK
        assert "1 Year Term Costs for MySQL" in result.output
        assert "3 Year Term Costs for MySQL" in result.output
        assert "Term Costs for Unknown" not in result.output

    def test_region_and_engines_passed_to_pricing(self, mock_instances, mock_prices):
        runner.invoke(app, ["compare", "-r", "us-east-1"])

        mock_instances.assert_called_once()
        assert mock_instances.call_args[0][0] == "us-east-1"
        args, kwargs = mock_prices.call_args
        assert args[0] == "us-east-1"
        assert list(args[1]) == [Engine.MYSQL, Engine.UNKNOWN]

    def test_missing_region_fails(self, mock_instances, mock_prices):
        result = runner.invoke(app, ["compare"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Usage" in result.output
        mock_instances.assert_not_called()

    def test_invalid_log_level_fails(self, mock_instances, mock_prices):
        result = runner.invoke(app, ["compare", "-r", "us-east-1", "--log-level", "loud"])
        assert result.exit_code == EXIT_CODE_FAIL
        assert "Configuration error" in result.output

    def test_inventory_failure(self, mock_instances, mock_prices):
        mock_instances.side_effect = InventoryFetchError("access denied", "us-east-1")

        result = runner.invoke(app, ["compare", "-r", "us-east-1"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Failed to process instances" in result.output
        mock_prices.assert_not_called()

    def test_pricing_failure(self, mock_instances, mock_prices):
        mock_prices.side_effect = PricingFetchError("timed out", "https://example.test")

        result = runner.invoke(app, ["compare", "-r", "us-east-1"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Failed to fetch RDS pricing data" in result.output
        assert "Term Costs" not in result.output

    def test_no_running_instances(self, mock_instances, mock_prices):
        mock_instances.return_value = []

        result = runner.invoke(app, ["compare", "-r", "us-east-1"])

        assert result.exit_code == EXIT_CODE_OK
        assert "No running RDS instances found" in result.output
        mock_prices.assert_not_called()

    def test_by_instance_type_tables(self, mock_instances, mock_prices):
        result = runner.invoke(app, ["compare", "-r", "us-east-1", "--by-instance-type"])

        assert result.exit_code == EXIT_CODE_OK
        assert "Costs for db.r5.large-1 Year-Standard-noUpfront-MySQL" in result.output
        assert "Costs for db.r5.large-On-Demand (3 Year)-N/A-MySQL" in result.output

    def test_region_from_config_file(self, mock_instances, mock_prices, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("region: eu-west-1\nlog_level: error\n", encoding="utf-8")

        result = runner.invoke(app, ["compare", "--config", str(config_path)])

        assert result.exit_code == EXIT_CODE_OK
        assert mock_instances.call_args[0][0] == "eu-west-1"


class TestInventoryCommand:
    """Test the inventory command."""

    def test_lists_counts(self, mock_instances):
        result = runner.invoke(app, ["inventory", "-r", "us-east-1"])

        assert result.exit_code == EXIT_CODE_OK
        assert "db.r5.large" in result.output
        assert "Unknown" in result.output

    def test_inventory_failure(self, mock_instances):
        mock_instances.side_effect = InventoryFetchError("no credentials", "us-east-1")
        result = runner.invoke(app, ["inventory", "-r", "us-east-1"])
        assert result.exit_code == EXIT_CODE_FAIL
