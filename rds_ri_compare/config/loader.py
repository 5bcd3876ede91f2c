"""
Configuration management and loading.

Handles settings read from a YAML file and overridden from the CLI.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

import yaml

from rds_ri_compare.sources.pricing import DEFAULT_PRICING_URL, DEFAULT_TIMEOUT


class LogLevel(Enum):
    """Supported log levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class PricingSourceConfig:
    """Where and how to fetch the pricing dataset."""
    url: str = DEFAULT_PRICING_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate source settings."""
        if not self.url:
            raise ValueError("pricing url cannot be empty")
        if self.timeout <= 0:
            raise ValueError("pricing timeout must be > 0")


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    region: Optional[str] = None
    log_level: LogLevel = LogLevel.INFO
    pricing: PricingSourceConfig = PricingSourceConfig()

    def merged(self, region: Optional[str] = None, log_level: Optional[LogLevel] = None) -> "AppConfig":
        """Apply command-line overrides; None leaves a setting unchanged."""
        return replace(
            self,
            region=region or self.region,
            log_level=log_level or self.log_level
        )


def load_config(path: str) -> AppConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated AppConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'region', 'log_level', 'pricing'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    region = raw_config.get('region')
    if region is not None and (not isinstance(region, str) or not region.strip()):
        raise ValueError("'region' must be a non-empty string")

    log_level = LogLevel.INFO
    if 'log_level' in raw_config:
        log_level = parse_log_level(raw_config['log_level'])

    pricing = PricingSourceConfig()
    if 'pricing' in raw_config:
        pricing_data = raw_config['pricing']
        if not isinstance(pricing_data, dict):
            raise ValueError("'pricing' must be a dictionary")
        pricing = _parse_pricing_config(pricing_data)

    return AppConfig(
        region=region.strip() if region else None,
        log_level=log_level,
        pricing=pricing
    )


def parse_log_level(value) -> LogLevel:
    """Parse a log level name, case-insensitively."""
    if not isinstance(value, str):
        raise ValueError("'log_level' must be a string")
    try:
        return LogLevel(value.lower())
    except ValueError:
        valid_levels = [level.value for level in LogLevel]
        raise ValueError(f"'log_level' must be one of: {valid_levels}")


def _parse_pricing_config(data: Dict) -> PricingSourceConfig:
    """Parse and validate the pricing source section.

    Raises:
        ValueError: If configuration is invalid
    """
    allowed_keys = {'url', 'timeout'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in pricing: {unknown_keys}")

    url = data.get('url', DEFAULT_PRICING_URL)
    if not isinstance(url, str) or not url.strip():
        raise ValueError("'url' in pricing must be a non-empty string")

    timeout = data.get('timeout', DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ValueError("'timeout' in pricing must be > 0")

    return PricingSourceConfig(url=url.strip(), timeout=float(timeout))
