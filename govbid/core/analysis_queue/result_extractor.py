"""
Analysis result extraction.

Turns raw analysis-service text into an AnalysisResult. Well-formed JSON
(bare or inside a Markdown code fence) is parsed into the structured model;
anything else degrades to a deterministic text fallback.

Dependencies: pydantic, json, re
System role: Result parsing stage of the job worker
"""

import json
import re

from pydantic import ValidationError as PydanticValidationError

from govbid.core.analysis_queue.models import (
    AnalysisMetadata,
    AnalysisResult,
    ComplianceStatus,
    ExtractedData,
    ParseOutcome,
)
from govbid.core.exceptions import EmptyResultError

FALLBACK_CONFIDENCE = 0.7
DEFAULT_CONFIDENCE = 0.6
MAX_KEY_FINDINGS = 5
MIN_FINDING_LENGTH = 20

# Substring matches, case-insensitive; highest matching score wins.
# "unlikely" contains "likely" and so scores 0.7.
CONFIDENCE_PATTERNS: list[tuple[re.Pattern[str], float]] = [
    (re.compile(r"definitely|certainly|clearly|obviously", re.IGNORECASE), 0.9),
    (re.compile(r"likely|probably|appears|seems", re.IGNORECASE), 0.7),
    (re.compile(r"possibly|might|could be|unclear", re.IGNORECASE), 0.5),
    (re.compile(r"unable to|cannot|not visible", re.IGNORECASE), 0.2),
]

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def compute_confidence(text: str) -> float:
    """
    Estimate confidence from hedging language in free text.

    Returns the highest score among matched pattern classes, or 0.6 when
    nothing matches, rounded to 2 decimals.
    """
    matched = [score for pattern, score in CONFIDENCE_PATTERNS if pattern.search(text)]
    return round(max(matched, default=DEFAULT_CONFIDENCE), 2)


def _strip_code_fence(text: str) -> str:
    if "```json" in text:
        text = text.split("```json", 1)[1].split("```", 1)[0]
    elif "```" in text:
        text = text.split("```", 1)[1].split("```", 1)[0]
    return text.strip()


def _clamp_confidence(value) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return min(1.0, max(0.0, float(value)))


def parse_analysis_result(raw: str, metadata: AnalysisMetadata) -> ParseOutcome:
    """
    Parse structured JSON output into an AnalysisResult.

    Never raises; failures are reported through ParseOutcome.error.

    Args:
        raw: Text returned by the analysis service
        metadata: Context stamped onto the result

    Returns:
        ParseOutcome with either result or error set
    """
    try:
        data = json.loads(_strip_code_fence(raw))
    except (json.JSONDecodeError, TypeError) as e:
        return ParseOutcome(error=f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        return ParseOutcome(error=f"Expected a JSON object, got {type(data).__name__}")

    confidence = _clamp_confidence(data.get("confidence_score"))
    data["confidence_score"] = confidence if confidence is not None else compute_confidence(raw)
    if data.get("extracted_data") is None:
        data.pop("extracted_data", None)
    data.pop("raw_analysis", None)

    try:
        result = AnalysisResult.model_validate(data)
    except PydanticValidationError as e:
        return ParseOutcome(error=f"Unexpected result shape: {e.error_count()} error(s)")

    return ParseOutcome(result=result.with_metadata(metadata))


def extract_key_findings(text: str) -> list[str]:
    """First five sentences longer than 20 characters, trimmed, in order."""
    findings = []
    for sentence in _SENTENCE_SPLIT.split(text):
        sentence = sentence.strip()
        if len(sentence) > MIN_FINDING_LENGTH:
            findings.append(sentence)
        if len(findings) == MAX_KEY_FINDINGS:
            break
    return findings


def build_fallback_result(raw: str, metadata: AnalysisMetadata) -> AnalysisResult:
    """Wrap unstructured text in an AnalysisResult with fixed defaults."""
    result = AnalysisResult(
        summary=raw,
        key_findings=extract_key_findings(raw),
        compliance_status=ComplianceStatus.UNKNOWN,
        missing_requirements=[],
        recommendations=[],
        confidence_score=FALLBACK_CONFIDENCE,
        extracted_data=ExtractedData(),
        raw_analysis=raw,
    )
    return result.with_metadata(metadata)


def extract_analysis_result(raw: str | None, metadata: AnalysisMetadata) -> AnalysisResult:
    """
    Structured parse with text fallback.

    Raises:
        EmptyResultError: When raw is empty or whitespace only
    """
    if raw is None or not raw.strip():
        raise EmptyResultError("No analysis result received")

    outcome = parse_analysis_result(raw, metadata)
    if outcome.ok:
        return outcome.result
    return build_fallback_result(raw, metadata)
