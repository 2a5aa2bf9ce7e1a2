"""
Scheduled handler for the analysis queue.

Lambda-style entry point invoked by a schedule (EventBridge, cron container,
etc). Each invocation runs exactly one process_queue() batch.

Environment variables:
- POSTGRES_URL or POSTGRES_*: metadata database
- OBJECT_STORE_BUCKET / OBJECT_STORE_REGION / OBJECT_STORE_ENDPOINT_URL
- ANALYSIS_GOOGLE_API_KEY / ANALYSIS_MODEL_NAME
- ANALYSIS_QUEUE_*: batch size, concurrency, timeouts
- LOG_LEVEL: Logging level

Dependencies: govbid.application.container, python-dotenv
System role: Scheduled trigger for the analysis queue
"""

import asyncio
import json
import logging
from typing import Any, Dict

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()

from govbid.application.container import create_queue_processor
from govbid.boundary.db.connection import get_async_engine
from govbid.configs import get_settings
from govbid.core.analysis_queue.models import QueueRunSummary
from govbid.observability.logger import configure_logging

logger = logging.getLogger(__name__)


async def _run_once() -> QueueRunSummary:
    """Run one batch, then release pooled connections bound to this event loop."""
    try:
        processor = create_queue_processor(get_settings())
        return await processor.process_queue()
    finally:
        await get_async_engine().dispose()


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Process one batch of the analysis queue.

    Args:
        event: Scheduler event (contents ignored)
        context: Lambda context object

    Returns:
        Dict with statusCode and JSON body holding the run summary or error
    """
    configure_logging(get_settings().log_level)
    logger.info(
        "%s:handler - Scheduled queue run",
        __name__,
        extra={"source": (event or {}).get("source", "unknown")},
    )

    try:
        summary = asyncio.run(_run_once())
    except Exception as e:
        logger.exception("%s:handler - %s: %s", __name__, type(e).__name__, e)
        return {
            "statusCode": 500,
            "body": json.dumps({"success": False, "error": "Failed to process AI queue", "details": str(e)}),
        }

    logger.info("%s:handler - %s", __name__, summary.message, extra=summary.model_dump())
    return {
        "statusCode": 200,
        "body": json.dumps(
            {"success": True, "message": summary.message, "summary": summary.model_dump()}
        ),
    }
