"""
Checklist file API endpoints.

Routes: GET /files/analysis, POST /files/upload

Dependencies: govbid.application.services, govbid.models
System role: Checklist file HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from govbid.api.deps import get_analysis_queue_service
from govbid.application.services.analysis_queue_service import AnalysisQueueService
from govbid.core.analysis_queue.models import AnalysisType
from govbid.core.exceptions import ValidationError
from govbid.models.analysis_queue import QueueItemResponse
from govbid.models.file_analysis import (
    FileAnalysisListResponse,
    FileAnalysisResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


@router.get("/analysis", response_model=FileAnalysisListResponse)
async def list_file_analyses(
    file_id: UUID | None = None,
    company_id: UUID | None = None,
    service: AnalysisQueueService = Depends(get_analysis_queue_service),
) -> FileAnalysisListResponse:
    """
    List files with their latest analysis by file or company.

    Raises:
        HTTPException(400): Neither file_id nor company_id given
    """
    try:
        records = await service.list_file_analyses(file_id=file_id, company_id=company_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return FileAnalysisListResponse(
        analyses=[FileAnalysisResponse.model_validate(record) for record in records]
    )


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    company_id: UUID = Form(...),
    checklist_item_id: str = Form(...),
    analysis_type: str = Form(AnalysisType.CHECKLIST_DOCUMENT.value),
    uploaded_by: UUID | None = Form(None),
    file: UploadFile = File(...),
    service: AnalysisQueueService = Depends(get_analysis_queue_service),
) -> UploadResponse:
    """
    Upload a compliance document and queue it for analysis.

    Raises:
        HTTPException(400): Missing filename, empty or oversized file
    """
    content = await file.read()
    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE // (1024 * 1024)}MB",
        )

    try:
        file_record, item = await service.register_upload(
            company_id=company_id,
            checklist_item_id=checklist_item_id,
            file_name=file.filename or "",
            content=content,
            file_type=file.content_type or "application/octet-stream",
            uploaded_by=uploaded_by,
            analysis_type=analysis_type,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    logger.info(
        f"{__name__}:upload_file - Upload stored and queued",
        extra={"file_id": str(file_record.id), "queue_item_id": str(item.id)},
    )
    return UploadResponse(
        file=FileAnalysisResponse.model_validate(file_record),
        queue_item=QueueItemResponse.model_validate(item),
    )
