import uuid
from unittest.mock import AsyncMock

import pytest

from govbid.api.deps import (
    get_analysis_queue_service,
    get_queue_processor,
    get_settings_dependency,
)
from govbid.configs import Settings
from govbid.configs.queue import QueueSettings
from govbid.core.analysis_queue.models import QueueItem, QueueRunSummary, QueueStatus
from govbid.core.exceptions import (
    FileRecordNotFoundError,
    QueueItemNotFoundError,
    ValidationError,
)

CRON_SECRET = "s3cret-token"


@pytest.fixture
def mock_processor():
    processor = AsyncMock()
    processor.process_queue.return_value = QueueRunSummary(dequeued=3, completed=2, requeued=1)
    return processor


@pytest.fixture
def mock_service():
    return AsyncMock()


@pytest.fixture
def client(client, mock_processor, mock_service):
    overrides = client.app.dependency_overrides
    overrides[get_queue_processor] = lambda: mock_processor
    overrides[get_analysis_queue_service] = lambda: mock_service
    overrides[get_settings_dependency] = lambda: Settings(queue=QueueSettings(cron_secret=CRON_SECRET))
    return client


class TestCronTrigger:
    def test_runs_with_correct_token(self, client, mock_processor):
        response = client.post(
            "/api/v1/analysis-queue/process",
            headers={"Authorization": f"Bearer {CRON_SECRET}"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"].startswith("Processed 3 queue item(s)")
        assert data["summary"]["completed"] == 2
        mock_processor.process_queue.assert_awaited_once()

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}, {"Authorization": CRON_SECRET}])
    def test_rejects_missing_or_wrong_token(self, client, mock_processor, headers):
        response = client.post("/api/v1/analysis-queue/process", headers=headers)

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"
        mock_processor.process_queue.assert_not_awaited()

    def test_processing_failure_returns_500_body(self, client, mock_processor):
        mock_processor.process_queue.side_effect = RuntimeError("database unreachable")

        response = client.post(
            "/api/v1/analysis-queue/process",
            headers={"Authorization": f"Bearer {CRON_SECRET}"},
        )

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to process AI queue"
        assert data["details"] == "database unreachable"
        assert "timestamp" in data


class TestManualTrigger:
    def test_requires_manual_flag(self, client, mock_processor):
        response = client.get("/api/v1/analysis-queue/process")

        assert response.status_code == 400
        mock_processor.process_queue.assert_not_awaited()

    def test_runs_with_manual_flag(self, client, mock_processor):
        response = client.get("/api/v1/analysis-queue/process", params={"manual": "true"})

        assert response.status_code == 200
        assert response.json()["summary"]["requeued"] == 1


class TestQueueItems:
    def test_enqueue_created(self, client, mock_service):
        file_id = uuid.uuid4()
        item = QueueItem(id=uuid.uuid4(), file_id=file_id)
        mock_service.enqueue_file.return_value = (item, True)

        response = client.post(
            "/api/v1/analysis-queue/items",
            json={"file_id": str(file_id), "analysis_type": "financial_document", "priority": 5},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == str(item.id)
        assert data["status"] == "queued"
        assert data["created"] is True
        call = mock_service.enqueue_file.await_args
        assert call.args == (file_id,)
        assert call.kwargs["analysis_type"].value == "financial_document"
        assert call.kwargs["priority"] == 5

    def test_enqueue_unknown_file(self, client, mock_service):
        file_id = uuid.uuid4()
        mock_service.enqueue_file.side_effect = FileRecordNotFoundError(str(file_id))

        response = client.post("/api/v1/analysis-queue/items", json={"file_id": str(file_id)})

        assert response.status_code == 404
        assert response.json()["detail"] == f"File not found: {file_id}"

    def test_enqueue_validation_error(self, client, mock_service):
        mock_service.enqueue_file.side_effect = ValidationError("bad input")

        response = client.post("/api/v1/analysis-queue/items", json={"file_id": str(uuid.uuid4())})

        assert response.status_code == 400

    def test_enqueue_rejects_zero_attempts(self, client, mock_service):
        response = client.post(
            "/api/v1/analysis-queue/items",
            json={"file_id": str(uuid.uuid4()), "max_attempts": 0},
        )

        assert response.status_code == 422
        mock_service.enqueue_file.assert_not_awaited()

    def test_get_item(self, client, mock_service):
        item = QueueItem(
            id=uuid.uuid4(),
            file_id=uuid.uuid4(),
            status=QueueStatus.FAILED,
            attempts=3,
            error_message="Processing lease expired",
        )
        mock_service.get_queue_item.return_value = item

        response = client.get(f"/api/v1/analysis-queue/items/{item.id}")

        assert response.status_code == 200
        assert response.json()["error_message"] == "Processing lease expired"

    def test_get_item_not_found(self, client, mock_service):
        item_id = uuid.uuid4()
        mock_service.get_queue_item.side_effect = QueueItemNotFoundError(str(item_id))

        response = client.get(f"/api/v1/analysis-queue/items/{item_id}")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"].lower()
