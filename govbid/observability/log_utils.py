"""
Structured log context for queue items.

Values passed through `extra=` are flattened to short strings so a stray
result payload or enum never breaks a log call or floods a log line.

Dependencies: logging (stdlib)
System role: Log context shared by the worker, retry controller, reaper and processor
"""

import logging
from enum import Enum
from typing import Any

MAX_LOG_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_LOG_VALUE_LENGTH) -> str:
    """
    Render a value for a log record.

    Collections are reduced to their size, enums to their stored value and
    long strings are cut at max_length.
    """
    try:
        if value is None:
            text = "None"
        elif isinstance(value, Enum):
            text = str(value.value)
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        elif isinstance(value, (list, tuple, set)):
            text = f"{type(value).__name__}({len(value)} items)"
        else:
            text = str(value)
    except Exception as e:
        return f"<unloggable {type(e).__name__}>"

    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... (truncated, {len(text)} total)"


def job_context(item: Any, **context: Any) -> dict[str, str]:
    """
    Build `extra` for a log record about one queue item.

    Args:
        item: QueueItem (id, file_id, attempts, max_attempts are read if present)
        **context: Additional fields, e.g. outcome or error_msg
    """
    fields = {
        "queue_item_id": getattr(item, "id", None),
        "file_id": getattr(item, "file_id", None),
        "attempts": getattr(item, "attempts", None),
        "max_attempts": getattr(item, "max_attempts", None),
        **context,
    }
    return {key: safe_log_value(value) for key, value in fields.items()}


def log_job_failure(
    logger: logging.Logger,
    message: str,
    item: Any,
    exc: BaseException,
    with_traceback: bool = False,
) -> None:
    """
    Log an attempt that ended in an exception.

    Expected pipeline failures (download, analysis service, empty output)
    log without a traceback; crashes pass with_traceback=True.
    """
    logger.error(
        message,
        exc_info=exc if with_traceback else None,
        extra=job_context(item, error_type=type(exc).__name__, error_msg=str(exc)),
    )
