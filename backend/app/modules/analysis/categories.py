"""Fixed vocabularies the analysis pipeline validates against.

Providers are shown DOCUMENT_CATEGORIES verbatim in their prompt and may only
suggest an exact member. SECURITY_CLASSIFICATIONS is ordered from least to
most restrictive.
"""

from __future__ import annotations

from typing import Literal

DOCUMENT_CATEGORIES: tuple[str, ...] = (
    "Activity Reports",
    "Annual Reports",
    "Asset Management Records",
    "Award Documents",
    "Baseline and Endline Reports",
    "Beneficiary Data & Records",
    "Board Meeting Minutes",
    "Budgets & Forecasts",
    "Capacity Building Materials",
    "Case Management Reports",
    "Communication & PR Materials",
    "Community Engagement Records",
    "Compliance & Audit Reports",
    "Conflict of Interest Declarations",
    "Contracts & Agreements",
    "Data Protection & Privacy Records",
    "Departmental Monthly Reports",
    "Disciplinary Reports",
    "Donor Reports",
    "Emergency Response Plans",
    "Employee Contracts",
    "Environmental Impact Assessments",
    "Event Documentation",
    "Exit Strategies & Closure Reports",
    "External Evaluation Reports",
    "Financial Documents",
    "Flagship Events Reports",
    "Fundraising Materials",
    "Government Relations Documents",
    "Grant Agreements",
    "Grant Proposals",
    "Health & Safety Records",
    "Impact Assessment Reports",
    "Incident Reports",
    "Insurance Documents",
    "Internal Audit Reports",
    "IT & Systems Documentation",
    "Job Descriptions & Specifications",
    "Knowledge Management Resources",
    "Legal Documents",
    "Lesson Learned Documents",
    "Management Accounts Reports",
    "Marketing Materials",
    "Media Coverage & Press Releases",
    "Meeting Notes & Action Items",
    "Memorandums of Understanding (MOUs)",
    "Monitoring & Evaluation Reports",
    "Observer Newsletters",
    "Organizational Charts",
    "Partnership Agreements",
    "Performance Appraisals",
    "Performance Improvement Plans",
    "Permit & License Documents",
    "Policies & Procedures",
    "Pre-Award Assessments",
    "Procurement & Tender Documents",
    "Project Proposals",
    "Quality Assurance Documents",
    "Recruitment & Selection Records",
    "Regulatory Compliance Documents",
    "Research Books",
    "Research Papers",
    "Risk Registers",
    "Safeguarding Policies & Reports",
    "Staff Handbooks",
    "Stakeholder Mapping & Analysis",
    "Standard Operating Procedures (SOPs)",
    "Strategic Plans",
    "Sustainability Reports",
    "Technical Specifications",
    "Terms of Reference (ToRs)",
    "Training Materials",
    "Travel Reports",
    "User Manuals & Guides",
    "Vendor & Supplier Records",
    "Volunteer Management Records",
    "Waste Management Plans",
    "Workshop & Conference Materials",
    "Workplans & Activity Schedules",
)

_CATEGORY_SET = frozenset(DOCUMENT_CATEGORIES)

Classification = Literal["PUBLIC", "INTERNAL", "CONFIDENTIAL", "SECRET", "TOP_SECRET"]
Priority = Literal["LOW", "MEDIUM", "HIGH"]

SECURITY_CLASSIFICATIONS: tuple[str, ...] = (
    "PUBLIC",
    "INTERNAL",
    "CONFIDENTIAL",
    "SECRET",
    "TOP_SECRET",
)

PRIORITIES: tuple[str, ...] = ("LOW", "MEDIUM", "HIGH")

DEFAULT_CLASSIFICATION = "INTERNAL"
DEFAULT_CATEGORY = "General Document"
DEFAULT_LANGUAGE = "English"
DEFAULT_PRIORITY = "MEDIUM"


def is_valid_category(value: object) -> bool:
    return isinstance(value, str) and value in _CATEGORY_SET


def is_valid_classification(value: object) -> bool:
    return isinstance(value, str) and value in SECURITY_CLASSIFICATIONS
