"""
Errors raised by the analysis queue.

Everything derives from AnalysisQueueError, whose `message` is what gets
stored on a failed queue item and whose `details` carry log context.
Worker-side failures (file lookup, download, analysis, empty output) are
retryable; PersistError is raised only after a successful analysis could not
be written back.

Dependencies: None
System role: Shared error vocabulary for core, boundary and API layers
"""

from typing import Any


class AnalysisQueueError(Exception):
    """
    Root error.

    Args:
        message: Human-readable reason
        details: Extra context for logs and API error bodies
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


def _with(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value})
    return merged


class ValidationError(AnalysisQueueError):
    """Bad caller input (missing filter, empty upload, attempt budget below 1)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, _with(details, field=field))


class FileRecordNotFoundError(AnalysisQueueError):
    """No checklist_files row for the id."""

    def __init__(self, file_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"File not found: {file_id}", _with(details, file_id=file_id))


class QueueItemNotFoundError(AnalysisQueueError):
    """No ai_analysis_queue row for the id."""

    def __init__(self, item_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Queue item not found: {item_id}", _with(details, queue_item_id=item_id))


class DownloadError(AnalysisQueueError):
    """The object store could not return the document bytes."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.path = path
        super().__init__(message, _with(details, path=path))


class AnalysisServiceError(AnalysisQueueError):
    """The generative model call failed or exceeded its timeout."""

    def __init__(
        self,
        message: str,
        timed_out: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.timed_out = timed_out
        super().__init__(message, _with(details, timed_out=timed_out))


class EmptyResultError(AnalysisQueueError):
    """The analysis service answered with no text."""


class PersistError(AnalysisQueueError):
    """A finished analysis could not be saved after all write attempts."""

    def __init__(
        self,
        message: str,
        queue_item_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, _with(details, queue_item_id=queue_item_id))
