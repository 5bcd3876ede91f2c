"""
CLI interface for RDS RI Compare.

Compares On-Demand and Reserved Instance pricing for running RDS instances.
"""

import logging
import sys
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from rds_ri_compare.cli.report import (
    render_instance_type_tables,
    render_inventory_table,
    render_term_tables,
)
from rds_ri_compare.config.loader import AppConfig, LogLevel, load_config, parse_log_level
from rds_ri_compare.core.aggregation import reconcile_counts
from rds_ri_compare.core.inventory import aggregate_inventory, engines_in_use, total_instances
from rds_ri_compare.core.models import RESERVED_TERMS, Engine
from rds_ri_compare.core.pipeline import process_instance_types
from rds_ri_compare.sources.inventory import InventoryFetchError, get_running_instances
from rds_ri_compare.sources.pricing import PricingFetchError, load_price_points

app = typer.Typer()
console = Console()
err_console = Console(stderr=True)

EXIT_CODE_OK = 0
EXIT_CODE_FAIL = 1

USAGE = "Usage: rds-ri-compare compare --region <region> [--log-level debug|info|warning|error]"

_LOG_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def configure_logging(level: LogLevel) -> logging.Logger:
    """Create the run's logger, writing to stderr through rich."""
    logger = logging.getLogger("rds_ri_compare")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(_LOG_LEVELS[level])
    logger.propagate = False
    return logger


def _load_settings(config_path: Optional[str], region: Optional[str], log_level: Optional[str]) -> AppConfig:
    config = load_config(config_path) if config_path else AppConfig()
    level = parse_log_level(log_level) if log_level else None
    return config.merged(region=region, log_level=level)


def _resolve_settings(config_path: Optional[str], region: Optional[str], log_level: Optional[str]) -> AppConfig:
    try:
        config = _load_settings(config_path, region, log_level)
    except (FileNotFoundError, yaml.YAMLError, ValueError) as e:
        console.print(f"[red]Configuration error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    if not config.region:
        console.print(USAGE)
        sys.exit(EXIT_CODE_FAIL)
    return config


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """RDS Reserved Instance comparison CLI."""
    if ctx.invoked_subcommand is None:
        console.print("RDS RI Compare - Use --help to see available commands")


@app.command()
def compare(
    region: Optional[str] = typer.Option(
        None,
        "--region",
        "-r",
        help="AWS region to inspect"
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML configuration file"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (debug, info, warning, error)"
    ),
    by_instance_type: bool = typer.Option(
        False,
        "--by-instance-type",
        help="Also print one table per instance type, term and payment option"
    )
):
    """
    Compare On-Demand and Reserved pricing for running RDS instances.

    Prints one table per engine for the 1-year and the 3-year term.
    """
    config = _resolve_settings(config_path, region, log_level)
    logger = configure_logging(config.log_level)

    try:
        inventory = aggregate_inventory(get_running_instances(config.region, logger=logger))
        if not inventory:
            console.print(f"No running RDS instances found in {config.region}")
            sys.exit(EXIT_CODE_OK)

        logger.info("Found %d running instance(s) in %s", total_instances(inventory), config.region)
        price_points = load_price_points(
            config.region,
            engines_in_use(inventory),
            url=config.pricing.url,
            timeout=config.pricing.timeout,
            logger=logger
        )
    except InventoryFetchError as e:
        console.print(f"[red]Failed to process instances:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)
    except PricingFetchError as e:
        console.print(f"[red]Failed to fetch RDS pricing data:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    views = process_instance_types(price_points, inventory, config.region, logger)

    for term in RESERVED_TERMS:
        render_term_tables(console, views.for_term(term), inventory, term)

    if by_instance_type:
        for term in RESERVED_TERMS:
            records = reconcile_counts(views.for_term(term), inventory)
            for engine in engines_in_use(inventory):
                if engine is not Engine.UNKNOWN:
                    render_instance_type_tables(console, records, engine, term)

    sys.exit(EXIT_CODE_OK)


@app.command()
def inventory(
    region: Optional[str] = typer.Option(
        None,
        "--region",
        "-r",
        help="AWS region to inspect"
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML configuration file"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (debug, info, warning, error)"
    )
):
    """List running RDS instance counts per instance type and engine."""
    config = _resolve_settings(config_path, region, log_level)
    logger = configure_logging(config.log_level)

    try:
        counts = aggregate_inventory(get_running_instances(config.region, logger=logger))
    except InventoryFetchError as e:
        console.print(f"[red]Failed to process instances:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    render_inventory_table(console, counts, config.region)
    sys.exit(EXIT_CODE_OK)


if __name__ == "__main__":
    app()
