"""
Analysis prompt selection.

Maps each AnalysisType to a system/user prompt pair. The system prompt fixes
the JSON output contract; the user prompt is filled with the checklist item
and MIME type of the document being analyzed.

Dependencies: langchain_core.prompts
System role: Prompt source for the job worker
"""

from typing import NamedTuple

from langchain_core.prompts import PromptTemplate

from govbid.core.analysis_queue.models import AnalysisType

SYSTEM_PROMPT = """You are an expert in government contracting compliance. You review documents
submitted by companies bidding on public contracts and identify licenses, certifications,
insurance coverage, financial information and any other compliance requirements they satisfy
or are missing. Give structured, actionable findings.

Always respond with a single JSON object of this shape:
{
  "summary": "Brief overview of the document",
  "key_findings": ["finding1", "finding2"],
  "compliance_status": "compliant|partially_compliant|non_compliant",
  "missing_requirements": ["requirement1"],
  "recommendations": ["recommendation1"],
  "confidence_score": 0.85,
  "extracted_data": {
    "licenses": ["license1"],
    "certifications": ["cert1"],
    "insurance": ["policy1"],
    "financial_info": ["info1"]
  }
}"""

CHECKLIST_DOCUMENT_TEMPLATE = """Review this document for government contracting compliance.
Look for business licenses, certifications, insurance documents, financial statements,
past performance records and other compliance evidence.

Checklist item: {checklist_item}
File type: {file_type}

Include:
1. A summary of the document
2. The compliance information it contains
3. Requirements that are missing
4. Recommendations for improvement
5. Your confidence in the analysis"""

FINANCIAL_DOCUMENT_TEMPLATE = """Review this financial document for government contracting purposes.
Look at revenue, financial stability, bonding capacity, insurance coverage and
financial compliance requirements.

Checklist item: {checklist_item}
File type: {file_type}

Include:
1. A financial summary
2. Bonding capacity assessment
3. Insurance adequacy
4. Financial stability indicators
5. Compliance recommendations"""

CERTIFICATION_DOCUMENT_TEMPLATE = """Review this certification or license document.
Look at the certification type, validity period, issuing authority, scope of work
and compliance requirements.

Checklist item: {checklist_item}
File type: {file_type}

Include:
1. Certification details
2. Validity status
3. Scope and limitations
4. Renewal requirements
5. Compliance assessment"""

GENERIC_DOCUMENT_TEMPLATE = """Review this document for government contracting compliance.
Extract the key information and give a structured analysis.

Checklist item: {checklist_item}
File type: {file_type}"""


class PromptPair(NamedTuple):
    system: str
    user: str


PROMPT_TEMPLATES: dict[AnalysisType, PromptTemplate] = {
    AnalysisType.CHECKLIST_DOCUMENT: PromptTemplate.from_template(CHECKLIST_DOCUMENT_TEMPLATE),
    AnalysisType.FINANCIAL_DOCUMENT: PromptTemplate.from_template(FINANCIAL_DOCUMENT_TEMPLATE),
    AnalysisType.CERTIFICATION_DOCUMENT: PromptTemplate.from_template(
        CERTIFICATION_DOCUMENT_TEMPLATE
    ),
    AnalysisType.OTHER: PromptTemplate.from_template(GENERIC_DOCUMENT_TEMPLATE),
}


def select_prompt(
    analysis_type: AnalysisType | str | None,
    checklist_item: str,
    file_type: str,
) -> PromptPair:
    """
    Build the prompt pair for a document.

    Args:
        analysis_type: Requested analysis; unknown tags use the generic prompt
        checklist_item: Checklist item id the document was uploaded against
        file_type: MIME type of the document

    Returns:
        PromptPair: (system, user) prompts
    """
    template = PROMPT_TEMPLATES[AnalysisType.from_tag(analysis_type)]
    user = template.format(checklist_item=checklist_item, file_type=file_type)
    return PromptPair(system=SYSTEM_PROMPT, user=user)
