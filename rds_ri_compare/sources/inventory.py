"""
Running RDS instance discovery.

Lists available DB instances in a region through boto3.
"""

import logging
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.diagnostics import resolve_logger
from ..core.inventory import engine_from_db_engine
from ..core.models import RunningInstance

RUNNING_STATUS = "available"


class InventoryFetchError(Exception):
    """Raised when running instances cannot be listed."""
    def __init__(self, message: str, region: str):
        super().__init__(message)
        self.region = region


def get_running_instances(
    region: str,
    session: Optional[boto3.Session] = None,
    logger: Optional[logging.Logger] = None
) -> List[RunningInstance]:
    """List running RDS instances in a region.

    Args:
        region: AWS region name
        session: boto3 session to use (defaults to a new default session)
        logger: Optional logger for diagnostics

    Returns:
        One RunningInstance per available DB instance

    Raises:
        InventoryFetchError: If the RDS API call fails
    """
    log = resolve_logger(logger)
    try:
        session = session or boto3.Session()
        rds_client = session.client("rds", region_name=region)
        paginator = rds_client.get_paginator("describe_db_instances")

        instances = []
        for page in paginator.paginate():
            for db_instance in page.get("DBInstances", []):
                if db_instance.get("DBInstanceStatus") != RUNNING_STATUS:
                    continue
                instances.append(RunningInstance(
                    instance_type=db_instance["DBInstanceClass"],
                    engine=engine_from_db_engine(db_instance.get("Engine")),
                    identifier=db_instance.get("DBInstanceIdentifier")
                ))
    except (ClientError, BotoCoreError) as e:
        log.error("Error describing RDS instances in %s: %s", region, e)
        raise InventoryFetchError(f"Failed to list RDS instances in {region}: {e}", region) from e

    log.debug("Found %d running instance(s) in %s", len(instances), region)
    return instances
