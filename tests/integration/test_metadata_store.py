"""
Test suite for SqlMetadataStore against in-memory SQLite.

System role: Verification that store operations keep queue items and
checklist files consistent
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from govbid.boundary.db.metadata_store import SqlMetadataStore
from govbid.core.analysis_queue.models import (
    AnalysisType,
    FileAnalysisStatus,
    QueueStatus,
)

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
RESULT = {"summary": "ok", "compliance_status": "compliant", "confidence_score": 0.9}


@pytest.fixture
def metadata_store(sqlite_session_factory) -> SqlMetadataStore:
    return SqlMetadataStore(sqlite_session_factory)


@pytest.fixture
async def company_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
async def stored_file(metadata_store, company_id):
    return await metadata_store.create_file_record(
        company_id=company_id,
        checklist_item_id="business-license",
        file_name="license.pdf",
        file_path=f"{company_id}/business-license/1-license.pdf",
        file_size=1024,
        file_type="application/pdf",
    )


async def _enqueue(metadata_store, file_id, **overrides):
    options = {
        "analysis_type": AnalysisType.CHECKLIST_DOCUMENT,
        "priority": 0,
        "max_attempts": 3,
        "now": NOW,
    }
    options.update(overrides)
    item, _ = await metadata_store.create_queue_item(file_id=file_id, **options)
    return item


class TestCreateAndLookup:
    """Test suite for creation and lookups."""

    async def test_create_queue_item_defaults(self, metadata_store, stored_file) -> None:
        # Act
        item = await _enqueue(metadata_store, stored_file.id)

        # Assert
        assert item.status is QueueStatus.QUEUED
        assert item.attempts == 0
        assert item.priority == 0
        assert item.result_data is None
        assert (await metadata_store.get_queue_item(item.id)).id == item.id
        record = await metadata_store.get_file_record(stored_file.id)
        assert record.ai_analysis_status is FileAnalysisStatus.PENDING

    async def test_get_active_queue_item(self, metadata_store, stored_file) -> None:
        item = await _enqueue(metadata_store, stored_file.id)

        active = await metadata_store.get_active_queue_item(stored_file.id)

        assert active.id == item.id

    async def test_second_create_returns_existing_active_item(
        self, metadata_store, stored_file
    ) -> None:
        # Arrange
        first, first_created = await metadata_store.create_queue_item(
            stored_file.id, AnalysisType.CHECKLIST_DOCUMENT, 0, 3, NOW
        )

        # Act
        second, second_created = await metadata_store.create_queue_item(
            stored_file.id, AnalysisType.FINANCIAL_DOCUMENT, 5, 3, NOW
        )

        # Assert
        assert first_created is True
        assert second_created is False
        assert second.id == first.id
        assert second.priority == 0
        queued = await metadata_store.select_queued(10, NOW)
        assert [i.id for i in queued] == [first.id]

    async def test_create_after_terminal_item_succeeds(self, metadata_store, stored_file) -> None:
        old = await _enqueue(metadata_store, stored_file.id)
        await metadata_store.claim_queue_item(old.id, NOW)
        await metadata_store.fail_queue_item(old.id, stored_file.id, "gone", NOW)

        item, created = await metadata_store.create_queue_item(
            stored_file.id, AnalysisType.CHECKLIST_DOCUMENT, 0, 3, NOW
        )

        assert created is True
        assert item.id != old.id

    async def test_missing_rows_return_none(self, metadata_store) -> None:
        assert await metadata_store.get_file_record(uuid.uuid4()) is None
        assert await metadata_store.get_queue_item(uuid.uuid4()) is None

    async def test_list_file_records_by_company_and_file(
        self, metadata_store, stored_file, company_id
    ) -> None:
        other = await metadata_store.create_file_record(
            company_id=uuid.uuid4(),
            checklist_item_id="insurance",
            file_path="other/insurance/1-coi.pdf",
            file_type="application/pdf",
        )

        by_company = await metadata_store.list_file_records(company_id=company_id)
        by_file = await metadata_store.list_file_records(file_id=other.id)
        mismatched = await metadata_store.list_file_records(file_id=other.id, company_id=company_id)

        assert [r.id for r in by_company] == [stored_file.id]
        assert [r.id for r in by_file] == [other.id]
        assert mismatched == []


class TestClaimAndSelect:
    """Test suite for select_queued and claim_queue_item."""

    async def test_claim_marks_item_and_file_processing(self, metadata_store, stored_file) -> None:
        # Arrange
        item = await _enqueue(metadata_store, stored_file.id)

        # Act
        claimed = await metadata_store.claim_queue_item(item.id, NOW)
        lost = await metadata_store.claim_queue_item(item.id, NOW)

        # Assert
        assert claimed.status is QueueStatus.PROCESSING
        assert claimed.attempts == 1
        assert lost is None
        record = await metadata_store.get_file_record(stored_file.id)
        assert record.ai_analysis_status is FileAnalysisStatus.PROCESSING

    async def test_select_queued_excludes_claimed(
        self, metadata_store, stored_file, company_id
    ) -> None:
        other_file = await metadata_store.create_file_record(
            company_id=company_id,
            checklist_item_id="w9",
            file_path=f"{company_id}/w9/1-form.pdf",
            file_type="application/pdf",
        )
        first = await _enqueue(metadata_store, stored_file.id, priority=1)
        second = await _enqueue(metadata_store, other_file.id)
        await metadata_store.claim_queue_item(first.id, NOW)

        items = await metadata_store.select_queued(5, NOW + timedelta(seconds=1))

        assert [i.id for i in items] == [second.id]

    async def test_select_stale_processing(self, metadata_store, stored_file) -> None:
        item = await _enqueue(metadata_store, stored_file.id)
        await metadata_store.claim_queue_item(item.id, NOW)

        fresh = await metadata_store.select_stale_processing(NOW - timedelta(minutes=1))
        stale = await metadata_store.select_stale_processing(NOW + timedelta(minutes=16))

        assert fresh == []
        assert [i.id for i in stale] == [item.id]


class TestSaveAnalysis:
    """Test suite for save_analysis."""

    async def test_writes_item_and_file(self, metadata_store, stored_file) -> None:
        # Arrange
        item = await _enqueue(metadata_store, stored_file.id)
        await metadata_store.claim_queue_item(item.id, NOW)

        # Act
        saved = await metadata_store.save_analysis(item.id, stored_file.id, RESULT, NOW)

        # Assert
        assert saved.status is QueueStatus.COMPLETED
        assert saved.result_data == RESULT
        assert saved.processed_at is not None
        record = await metadata_store.get_file_record(stored_file.id)
        assert record.ai_analysis == RESULT
        assert record.ai_analysis_status is FileAnalysisStatus.COMPLETED

    async def test_replaying_save_is_harmless(self, metadata_store, stored_file) -> None:
        item = await _enqueue(metadata_store, stored_file.id)
        await metadata_store.claim_queue_item(item.id, NOW)
        await metadata_store.save_analysis(item.id, stored_file.id, RESULT, NOW)

        replay = await metadata_store.save_analysis(item.id, stored_file.id, RESULT, NOW)

        assert replay.status is QueueStatus.COMPLETED
        assert replay.attempts == 1
        assert replay.result_data == RESULT

    async def test_rejected_when_item_was_requeued(self, metadata_store, stored_file) -> None:
        item = await _enqueue(metadata_store, stored_file.id)

        saved = await metadata_store.save_analysis(item.id, stored_file.id, RESULT, NOW)

        assert saved is None
        record = await metadata_store.get_file_record(stored_file.id)
        assert record.ai_analysis is None


class TestFailures:
    """Test suite for requeue and terminal failure writes."""

    async def test_requeue_is_conditional_on_processing(self, metadata_store, stored_file) -> None:
        item = await _enqueue(metadata_store, stored_file.id)
        patch = {"status": QueueStatus.QUEUED, "error_message": "boom", "claimed_at": None}

        missed = await metadata_store.update_queue_item(item.id, patch, expected_status=QueueStatus.PROCESSING)
        await metadata_store.claim_queue_item(item.id, NOW)
        hit = await metadata_store.update_queue_item(item.id, patch, expected_status=QueueStatus.PROCESSING)

        assert missed is None
        assert hit.status is QueueStatus.QUEUED
        assert hit.attempts == 1
        assert hit.error_message == "boom"

    async def test_fail_queue_item_marks_file_failed(self, metadata_store, stored_file) -> None:
        item = await _enqueue(metadata_store, stored_file.id)
        await metadata_store.claim_queue_item(item.id, NOW)

        failed = await metadata_store.fail_queue_item(item.id, stored_file.id, "gone", NOW)

        assert failed.status is QueueStatus.FAILED
        assert failed.error_message == "gone"
        record = await metadata_store.get_file_record(stored_file.id)
        assert record.ai_analysis_status is FileAnalysisStatus.FAILED
        assert await metadata_store.get_active_queue_item(stored_file.id) is None

    async def test_update_file_record(self, metadata_store, stored_file) -> None:
        updated = await metadata_store.update_file_record(
            stored_file.id, {"ai_analysis_status": FileAnalysisStatus.FAILED}
        )

        assert updated.ai_analysis_status is FileAnalysisStatus.FAILED
