"""
Job worker for the analysis queue.

Runs one queue item through claim -> file lookup -> download -> prompt ->
analysis -> extraction -> persistence. Failures before persistence are
routed to the RetryController; persistence is retried on its own.

Pipeline:
    1. Claim (conditional; a lost claim is skipped)
    2. Resolve FileRecord
    3. Download bytes from the object store
    4. Select prompt pair
    5. Call the analysis service
    6. Extract structured result
    7. Save result to queue item and file in one transaction

Dependencies: tenacity, govbid.core.analysis_queue
System role: Per-item execution unit used by AnalysisQueueProcessor
"""

import asyncio
import logging

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from govbid.core.analysis_queue.clock import Clock, utcnow
from govbid.core.analysis_queue.interfaces import AnalysisService, MetadataStore, ObjectStore
from govbid.core.analysis_queue.models import (
    AnalysisMetadata,
    AnalysisResult,
    DocumentPayload,
    FileRecord,
    QueueItem,
    WorkerOutcome,
)
from govbid.core.analysis_queue.prompts import select_prompt
from govbid.core.analysis_queue.result_extractor import extract_analysis_result
from govbid.core.analysis_queue.retry_controller import RetryController
from govbid.core.exceptions import (
    AnalysisServiceError,
    DownloadError,
    EmptyResultError,
    FileRecordNotFoundError,
    PersistError,
)
from govbid.observability.log_utils import job_context, log_job_failure

logger = logging.getLogger(__name__)

_EXPECTED_FAILURES = (
    FileRecordNotFoundError,
    DownloadError,
    AnalysisServiceError,
    EmptyResultError,
)


class JobWorker:
    """
    Execute the analysis lifecycle for one queue item.

    Args:
        store: Metadata store
        object_store: Blob store holding uploaded files
        analysis_service: Generative analysis capability
        retry_controller: Failure router
        download_timeout: Seconds allowed for the object store read
        analysis_timeout: Seconds allowed for the analysis call
        store_timeout: Seconds allowed for each metadata store call
        persist_attempts: Attempts for the success write
        persist_wait_initial: First backoff between persistence attempts
        persist_wait_max: Backoff ceiling between persistence attempts
        clock: UTC time source
    """

    def __init__(
        self,
        store: MetadataStore,
        object_store: ObjectStore,
        analysis_service: AnalysisService,
        retry_controller: RetryController,
        download_timeout: float = 30.0,
        analysis_timeout: float = 120.0,
        store_timeout: float = 15.0,
        persist_attempts: int = 3,
        persist_wait_initial: float = 0.5,
        persist_wait_max: float = 5.0,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._object_store = object_store
        self._analysis_service = analysis_service
        self._retry = retry_controller
        self._download_timeout = download_timeout
        self._analysis_timeout = analysis_timeout
        self._store_timeout = store_timeout
        self._persist_attempts = persist_attempts
        self._persist_wait_initial = persist_wait_initial
        self._persist_wait_max = persist_wait_max
        self._clock = clock

    async def run(self, item: QueueItem) -> WorkerOutcome:
        """
        Process one dequeued item.

        Returns:
            WorkerOutcome for the attempt

        Raises:
            PersistError: Analysis succeeded but could not be saved
        """
        claimed = await asyncio.wait_for(
            self._store.claim_queue_item(item.id, self._clock()),
            timeout=self._store_timeout,
        )
        if claimed is None:
            logger.info(
                f"{__name__}:run - Claim lost, skipping item",
                extra=job_context(item),
            )
            return WorkerOutcome.SKIPPED

        logger.info(f"{__name__}:run - Claimed item", extra=job_context(claimed))

        try:
            result = await self._analyze(claimed)
        except Exception as e:
            log_job_failure(
                logger,
                f"{__name__}:run - Attempt failed",
                claimed,
                e,
                with_traceback=not isinstance(e, _EXPECTED_FAILURES),
            )
            return await self._retry.handle_failure(claimed, e)

        return await self._persist(claimed, result)

    async def _analyze(self, item: QueueItem) -> AnalysisResult:
        file_record = await asyncio.wait_for(
            self._store.get_file_record(item.file_id),
            timeout=self._store_timeout,
        )
        if file_record is None:
            raise FileRecordNotFoundError(str(item.file_id))

        data = await self._download(file_record)

        prompt = select_prompt(
            item.analysis_type,
            checklist_item=file_record.checklist_item_id,
            file_type=file_record.file_type,
        )
        raw = await self._invoke_analysis(
            prompt.system,
            prompt.user,
            DocumentPayload(mime_type=file_record.file_type, data=data),
        )

        metadata = AnalysisMetadata(
            analysis_timestamp=self._clock().isoformat(),
            file_type=file_record.file_type,
            checklist_item=file_record.checklist_item_id,
            analysis_type=item.analysis_type.value,
        )
        return extract_analysis_result(raw, metadata)

    async def _download(self, file_record: FileRecord) -> bytes:
        path = file_record.file_path
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._object_store.download, path),
                timeout=self._download_timeout,
            )
        except asyncio.TimeoutError as e:
            raise DownloadError(
                f"Download timed out after {self._download_timeout}s", path
            ) from e
        except DownloadError:
            raise
        except Exception as e:
            raise DownloadError(f"Failed to download file: {e}", path) from e

    async def _invoke_analysis(
        self,
        system_prompt: str,
        user_prompt: str,
        document: DocumentPayload,
    ) -> str:
        try:
            return await asyncio.wait_for(
                self._analysis_service.generate(system_prompt, user_prompt, document),
                timeout=self._analysis_timeout,
            )
        except asyncio.TimeoutError as e:
            raise AnalysisServiceError(
                f"Analysis timed out after {self._analysis_timeout}s",
                timed_out=True,
            ) from e
        except AnalysisServiceError:
            raise
        except Exception as e:
            raise AnalysisServiceError(f"Analysis service call failed: {e}") from e

    async def _persist(self, item: QueueItem, result: AnalysisResult) -> WorkerOutcome:
        """Write the result, retrying the write only."""
        payload = result.to_json_dict()
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(Exception),
            stop=stop_after_attempt(self._persist_attempts),
            wait=wait_exponential_jitter(
                initial=self._persist_wait_initial,
                max=self._persist_wait_max,
                jitter=self._persist_wait_initial,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:_persist - Retry {retry_state.attempt_number}/"
                f"{self._persist_attempts} after write failure",
                extra=job_context(item),
            ),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    saved = await asyncio.wait_for(
                        self._store.save_analysis(item.id, item.file_id, payload, self._clock()),
                        timeout=self._store_timeout,
                    )
        except Exception as e:
            log_job_failure(logger, f"{__name__}:_persist - Could not save analysis", item, e)
            raise PersistError(
                f"Failed to save analysis after {self._persist_attempts} attempt(s): {e}",
                queue_item_id=str(item.id),
            ) from e

        if saved is None:
            logger.warning(
                f"{__name__}:_persist - Item left processing before save, result dropped",
                extra=job_context(item),
            )
            return WorkerOutcome.SKIPPED

        logger.info(
            f"{__name__}:_persist - Analysis saved",
            extra=job_context(saved, compliance_status=result.compliance_status),
        )
        return WorkerOutcome.COMPLETED
