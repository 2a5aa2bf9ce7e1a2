"""
Test suite for AnalysisQueueProcessor.

End-to-end queue runs over the in-memory fakes: ordering, retry
convergence, timeouts, persistence failures and concurrent triggers.

System role: Verification of process_queue() behavior
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from fakes import Delay, FakeObjectStore, ScriptedAnalysisService, never_returns
from govbid.configs.queue import QueueSettings
from govbid.core.analysis_queue.models import FileAnalysisStatus, QueueStatus
from govbid.core.analysis_queue.processor import build_queue_processor
from govbid.core.exceptions import DownloadError


@pytest.fixture
def queue_settings() -> QueueSettings:
    return QueueSettings(
        batch_size=5,
        max_concurrency=5,
        analysis_timeout_seconds=0.05,
        download_timeout_seconds=1,
        store_timeout_seconds=1,
        stale_processing_seconds=900,
        persist_retry_wait_seconds=0,
    )


@pytest.fixture
def make_processor(queue_settings, store, object_store, analysis_service, clock):
    def _make(**overrides):
        return build_queue_processor(
            overrides.pop("settings", queue_settings),
            store=store,
            object_store=overrides.pop("object_store", object_store),
            analysis_service=overrides.pop("analysis_service", analysis_service),
            clock=clock,
        )

    return _make


class TestProcessQueueOrdering:
    """Test suite for batch ordering."""

    async def test_processes_priority_then_age(self, store, queue_settings, make_processor) -> None:
        # Arrange
        files = {name: store.add_file(checklist_item_id=name, file_path=f"co/{name}/f.pdf") for name in "ABC"}
        object_store = FakeObjectStore({f.file_path: b"pdf" for f in files.values()})
        service = ScriptedAnalysisService()
        store.add_item(files["A"].id, priority=0)
        store.add_item(files["B"].id, priority=5)
        store.add_item(files["C"].id, priority=5)
        settings = queue_settings.model_copy(update={"max_concurrency": 1})

        # Act
        summary = await make_processor(
            settings=settings, object_store=object_store, analysis_service=service
        ).process_queue()

        # Assert
        order = [call[1].split("Checklist item: ")[1].split("\n")[0] for call in service.calls]
        assert order == ["B", "C", "A"]
        assert summary.dequeued == 3
        assert summary.completed == 3


class TestProcessQueueRetries:
    """Test suite for retry convergence across runs."""

    async def test_two_timeouts_then_success(self, store, file_record, make_processor) -> None:
        # Arrange
        service = ScriptedAnalysisService(Delay(1.0), Delay(1.0))
        item = store.add_item(file_record.id, max_attempts=3)
        processor = make_processor(analysis_service=service)

        # Act
        summaries = [await processor.process_queue() for _ in range(3)]

        # Assert
        stored = store.items[item.id]
        assert [s.requeued for s in summaries] == [1, 1, 0]
        assert summaries[-1].completed == 1
        assert stored.status is QueueStatus.COMPLETED
        assert stored.attempts == 3
        assert store.files[file_record.id].ai_analysis_status is FileAnalysisStatus.COMPLETED

    async def test_download_always_failing_converges_to_failed(
        self, store, file_record, object_store, make_processor
    ) -> None:
        # Arrange
        object_store.fail_with = DownloadError("Failed to download file", file_record.file_path)
        item = store.add_item(file_record.id, max_attempts=2)
        processor = make_processor()

        # Act
        attempts_seen = []
        for _ in range(4):
            await processor.process_queue()
            attempts_seen.append(store.items[item.id].attempts)

        # Assert
        assert attempts_seen == [1, 2, 2, 2]
        assert store.items[item.id].status is QueueStatus.FAILED
        assert store.files[file_record.id].ai_analysis_status is FileAnalysisStatus.FAILED
        assert len(object_store.downloads) == 2

    async def test_completed_items_untouched_by_reruns(
        self, store, file_record, analysis_service, make_processor
    ) -> None:
        item = store.add_item(file_record.id)
        processor = make_processor()
        await processor.process_queue()
        completed = store.items[item.id]

        summary = await processor.process_queue()

        assert summary.dequeued == 0
        assert store.items[item.id] == completed
        assert len(analysis_service.calls) == 1


class TestProcessQueueConcurrency:
    """Test suite for concurrent triggers."""

    async def test_concurrent_runs_process_each_item_once(self, store, make_processor) -> None:
        # Arrange
        object_store = FakeObjectStore()
        for i in range(5):
            record = store.add_file(file_path=f"co/item/{i}.pdf")
            object_store.objects[record.file_path] = b"pdf"
            store.add_item(record.id)
        service = ScriptedAnalysisService()

        # Act
        first, second = await asyncio.gather(
            make_processor(object_store=object_store, analysis_service=service).process_queue(),
            make_processor(object_store=object_store, analysis_service=service).process_queue(),
        )

        # Assert
        assert first.completed + second.completed == 5
        assert first.skipped + second.skipped == first.dequeued + second.dequeued - 5
        assert len(service.calls) == 5
        assert all(item.attempts == 1 for item in store.items.values())


class TestProcessQueueFailureIsolation:
    """Test suite for errors that must not escape process_queue."""

    async def test_persist_failure_counted_then_reaped(
        self, store, file_record, clock, make_processor
    ) -> None:
        # Arrange
        store.save_failures = [ConnectionError("db down")] * 3
        item = store.add_item(file_record.id)
        processor = make_processor()

        # Act
        first = await processor.process_queue()
        clock.advance(901)
        second = await processor.process_queue()

        # Assert
        assert first.persist_failed == 1
        assert second.reaped == 1
        assert second.completed == 1
        assert store.items[item.id].status is QueueStatus.COMPLETED
        assert store.items[item.id].attempts == 2

    async def test_worker_crash_is_counted_not_raised(
        self, store, file_record, make_processor
    ) -> None:
        store.add_item(file_record.id)
        store.claim_queue_item = AsyncMock(side_effect=RuntimeError("connection lost"))

        summary = await make_processor().process_queue()

        assert summary.dequeued == 1
        assert summary.errored == 1

    async def test_hung_failure_write_does_not_stall_the_run(
        self, store, queue_settings, make_processor
    ) -> None:
        # Arrange
        slow = store.add_file(checklist_item_id="w9", file_path="co/w9/f.pdf")
        fine = store.add_file(checklist_item_id="coi", file_path="co/coi/f.pdf")
        object_store = FakeObjectStore({slow.file_path: b"pdf", fine.file_path: b"pdf"})
        stuck = store.add_item(slow.id, priority=5)
        done = store.add_item(fine.id, priority=0)
        store.update_queue_item = AsyncMock(side_effect=never_returns)
        settings = queue_settings.model_copy(
            update={"max_concurrency": 1, "store_timeout_seconds": 0.05}
        )
        processor = make_processor(
            settings=settings,
            object_store=object_store,
            analysis_service=ScriptedAnalysisService(Delay(1)),
        )

        # Act
        summary = await asyncio.wait_for(processor.process_queue(), timeout=5)

        # Assert
        assert summary.errored == 1
        assert summary.completed == 1
        assert store.items[stuck.id].status is QueueStatus.PROCESSING
        assert store.items[done.id].status is QueueStatus.COMPLETED

    async def test_empty_queue_returns_zero_summary(self, make_processor) -> None:
        summary = await make_processor().process_queue()

        assert summary.model_dump() == {
            "dequeued": 0,
            "completed": 0,
            "requeued": 0,
            "failed": 0,
            "skipped": 0,
            "persist_failed": 0,
            "errored": 0,
            "reaped": 0,
        }
