"""
Queue run summary model.

Dependencies: pydantic
System role: Return type of AnalysisQueueProcessor.process_queue()
"""

from pydantic import BaseModel

from govbid.core.analysis_queue.models.enums import WorkerOutcome


class QueueRunSummary(BaseModel):
    """Counters for one process_queue() invocation."""

    dequeued: int = 0
    completed: int = 0
    requeued: int = 0
    failed: int = 0
    skipped: int = 0
    persist_failed: int = 0
    errored: int = 0
    reaped: int = 0

    def record(self, outcome: WorkerOutcome) -> None:
        field = outcome.value
        setattr(self, field, getattr(self, field) + 1)

    @property
    def message(self) -> str:
        return (
            f"Processed {self.dequeued} queue item(s): {self.completed} completed, "
            f"{self.requeued} requeued, {self.failed} failed, {self.skipped} skipped"
        )
