"""
Logger plumbing for the core.

Core functions receive a logger from their caller. When none is given
they log into a silent logger.
"""

import logging
from typing import Optional

NULL_LOGGER = logging.getLogger("rds_ri_compare.null")
NULL_LOGGER.addHandler(logging.NullHandler())
NULL_LOGGER.propagate = False


def resolve_logger(logger: Optional[logging.Logger]) -> logging.Logger:
    """Return ``logger`` or the silent logger when it is None."""
    return logger if logger is not None else NULL_LOGGER
