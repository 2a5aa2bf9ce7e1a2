"""
Enumerations for the analysis queue.

Dependencies: enum
System role: Closed vocabularies shared by the ORM, domain and API layers
"""

import enum


class AnalysisType(str, enum.Enum):
    """
    Kind of analysis requested for a document.

    Selects the prompt pair sent to the analysis service. OTHER is the
    generic fallback for anything not covered by a specific type.
    """

    CHECKLIST_DOCUMENT = "checklist_document"
    FINANCIAL_DOCUMENT = "financial_document"
    CERTIFICATION_DOCUMENT = "certification_document"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: "str | AnalysisType | None") -> "AnalysisType":
        """Coerce a free-form tag, mapping unknown values to OTHER."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls((tag or "").strip().lower())
        except ValueError:
            return cls.OTHER


class QueueStatus(str, enum.Enum):
    """
    Queue item lifecycle states.

    QUEUED: Eligible for the dequeuer
    PROCESSING: Claimed by one worker attempt
    COMPLETED: Terminal success; result_data holds the analysis
    FAILED: Terminal failure after max_attempts
    """

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


ACTIVE_QUEUE_STATUSES = (QueueStatus.QUEUED, QueueStatus.PROCESSING)


class FileAnalysisStatus(str, enum.Enum):
    """
    Analysis status mirrored from the owning queue item.

    PROCESSING may still be retried; only COMPLETED and FAILED are stable.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ComplianceStatus(str, enum.Enum):
    """Overall compliance verdict for an analyzed document."""

    COMPLIANT = "compliant"
    PARTIALLY_COMPLIANT = "partially_compliant"
    NON_COMPLIANT = "non_compliant"
    UNKNOWN = "unknown"


class WorkerOutcome(str, enum.Enum):
    """Result of one worker invocation on one queue item."""

    COMPLETED = "completed"
    REQUEUED = "requeued"
    FAILED = "failed"
    SKIPPED = "skipped"
