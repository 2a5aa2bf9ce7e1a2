"""
Structured analysis result models.

AnalysisResult is what gets persisted to both the queue item (result_data)
and the file record (ai_analysis). ParseOutcome carries either a parsed
result or the reason parsing failed.

Dependencies: pydantic
System role: Output contract of the result extractor
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from govbid.core.analysis_queue.models.enums import ComplianceStatus


class ExtractedData(BaseModel):
    """Entities pulled out of the document, grouped by category."""

    licenses: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    insurance: list[str] = Field(default_factory=list)
    financial_info: list[str] = Field(default_factory=list)


class AnalysisMetadata(BaseModel):
    """Context stamped onto every result after extraction."""

    analysis_timestamp: str = Field(description="ISO-8601 UTC time of extraction")
    file_type: str
    checklist_item: str
    analysis_type: str


class AnalysisResult(BaseModel):
    """Compliance findings for one document."""

    model_config = ConfigDict(extra="ignore")

    summary: str = ""
    key_findings: list[str] = Field(default_factory=list)
    compliance_status: ComplianceStatus = ComplianceStatus.UNKNOWN
    missing_requirements: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)
    extracted_data: ExtractedData = Field(default_factory=ExtractedData)
    raw_analysis: str | None = None

    analysis_timestamp: str | None = None
    file_type: str | None = None
    checklist_item: str | None = None
    analysis_type: str | None = None

    @field_validator("compliance_status", mode="before")
    @classmethod
    def _coerce_compliance_status(cls, value):
        if isinstance(value, ComplianceStatus):
            return value
        try:
            return ComplianceStatus(str(value).strip().lower())
        except ValueError:
            return ComplianceStatus.UNKNOWN

    def with_metadata(self, metadata: AnalysisMetadata) -> "AnalysisResult":
        return self.model_copy(update=metadata.model_dump())

    def to_json_dict(self) -> dict:
        """JSON-ready dict with snake_case keys, omitting an absent raw_analysis."""
        data = self.model_dump(mode="json")
        if data.get("raw_analysis") is None:
            data.pop("raw_analysis", None)
        return data


class ParseOutcome(BaseModel):
    """Either a parsed result or the reason the raw text could not be parsed."""

    result: AnalysisResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None
