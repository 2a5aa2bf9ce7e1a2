"""
Process-wide logging setup.

Called once by the API lifespan and by the scheduled handler on every
invocation; repeated calls replace the root handler instead of stacking.

Dependencies: logging (stdlib)
System role: Log formatting and levels
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_QUIET_LOGGERS = ("urllib3", "botocore", "boto3", "httpx", "sqlalchemy.engine")


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Send all records to stdout with a timestamped format.

    Args:
        level: Root level as a name ("DEBUG") or number; unknown names fall back to INFO
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(stream)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
