"""
Observability module.

Provides logging configuration, structured logging helpers and request
logging middleware.
"""

from govbid.observability.log_utils import job_context, log_job_failure
from govbid.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "job_context",
    "log_job_failure",
]
