"""
Analysis queue API endpoints.

Routes:
    POST /analysis-queue/process          cron trigger (bearer secret)
    GET  /analysis-queue/process          manual trigger (?manual=true)
    POST /analysis-queue/items            enqueue a file
    GET  /analysis-queue/items/{item_id}  queue item status

Dependencies: govbid.application.services, govbid.core.analysis_queue, govbid.models
System role: Analysis queue HTTP API
"""

import logging
import secrets
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.responses import JSONResponse

from govbid.api.deps import (
    get_analysis_queue_service,
    get_queue_processor,
    get_settings_dependency,
)
from govbid.application.services.analysis_queue_service import AnalysisQueueService
from govbid.configs import Settings
from govbid.core.analysis_queue.processor import AnalysisQueueProcessor
from govbid.core.exceptions import (
    FileRecordNotFoundError,
    QueueItemNotFoundError,
    ValidationError,
)
from govbid.models.analysis_queue import (
    EnqueueRequest,
    EnqueueResponse,
    ProcessQueueResponse,
    QueueItemResponse,
    TriggerErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis-queue", tags=["analysis-queue"])


async def _run_queue(processor: AnalysisQueueProcessor, trigger: str):
    """Run one batch; failures become a 500 body instead of an exception."""
    try:
        summary = await processor.process_queue()
    except Exception as e:
        logger.exception(
            f"{__name__}:_run_queue - Queue processing failed",
            extra={"trigger": trigger, "error_type": type(e).__name__},
        )
        body = TriggerErrorResponse(
            error="Failed to process AI queue",
            details=str(e),
            timestamp=datetime.now(timezone.utc),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json"),
        )

    return ProcessQueueResponse(
        success=True,
        message=summary.message,
        timestamp=datetime.now(timezone.utc),
        summary=summary,
    )


@router.post("/process", response_model=ProcessQueueResponse)
async def process_queue_cron(
    authorization: str | None = Header(default=None),
    processor: AnalysisQueueProcessor = Depends(get_queue_processor),
    settings: Settings = Depends(get_settings_dependency),
):
    """
    Cron trigger for one queue run.

    Requires `Authorization: Bearer <ANALYSIS_QUEUE_CRON_SECRET>`.

    Raises:
        HTTPException(401): Missing or wrong bearer token
    """
    expected = f"Bearer {settings.queue.cron_secret}"
    if authorization is None or not secrets.compare_digest(authorization, expected):
        logger.warning(f"{__name__}:process_queue_cron - Rejected unauthorized trigger")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    return await _run_queue(processor, trigger="cron")


@router.get("/process", response_model=ProcessQueueResponse)
async def process_queue_manual(
    manual: bool = False,
    processor: AnalysisQueueProcessor = Depends(get_queue_processor),
):
    """
    Manual trigger for one queue run, for testing and operations.

    Raises:
        HTTPException(400): manual=true not given
    """
    if not manual:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Use POST for cron jobs or add ?manual=true for manual processing",
        )
    return await _run_queue(processor, trigger="manual")


@router.post(
    "/items",
    response_model=EnqueueResponse,
    status_code=status.HTTP_201_CREATED,
)
async def enqueue_file(
    request: EnqueueRequest,
    service: AnalysisQueueService = Depends(get_analysis_queue_service),
) -> EnqueueResponse:
    """
    Queue a checklist file for analysis.

    Returns the existing item (created=false) when the file already has one
    queued or processing.

    Raises:
        HTTPException(404): File not found
        HTTPException(400): Invalid request values
    """
    try:
        item, created = await service.enqueue_file(
            request.file_id,
            analysis_type=request.analysis_type,
            priority=request.priority,
            max_attempts=request.max_attempts,
        )
    except FileRecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return EnqueueResponse(**item.model_dump(), created=created)


@router.get("/items/{item_id}", response_model=QueueItemResponse)
async def get_queue_item(
    item_id: UUID,
    service: AnalysisQueueService = Depends(get_analysis_queue_service),
) -> QueueItemResponse:
    """
    Get queue item status for polling.

    Raises:
        HTTPException(404): Queue item not found
    """
    try:
        item = await service.get_queue_item(item_id)
    except QueueItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return QueueItemResponse.model_validate(item)
