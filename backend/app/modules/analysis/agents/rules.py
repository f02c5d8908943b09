"""Rule-based document analysis (no LLM, no network).

Deterministic keyword heuristics over the filename and the declared category.
Computed for every request: it fills any field the provider path leaves empty
and is used wholesale when no provider succeeds.
"""

from __future__ import annotations

import structlog

from app.modules.analysis.agent_schemas import RuleBasedAnalysis
from app.modules.analysis.categories import DEFAULT_LANGUAGE
from app.modules.analysis.schemas import AnalysisRequest

logger = structlog.get_logger()

# ---------------------------------------------------------------------------
# File type detection
# ---------------------------------------------------------------------------

# label -> family
FILE_FAMILIES: dict[str, str] = {
    "PDF Document": "Document",
    "Word Document": "Document",
    "Excel Spreadsheet": "Spreadsheet",
    "PowerPoint Presentation": "Presentation",
    "Image File": "Media",
    "Text Document": "Document",
    "Unknown Document": "Other",
}

UNKNOWN_FILE_TYPE = "Unknown Document"


def detect_file_type(content_type: str | None, filename: str) -> str:
    """Map an upload's MIME type / extension to a human-readable type label."""
    mime = (content_type or "").lower()
    name = filename.lower()

    if "pdf" in mime:
        return "PDF Document"
    if "word" in mime or name.endswith((".docx", ".doc")):
        return "Word Document"
    if "excel" in mime or name.endswith((".xlsx", ".xls")):
        return "Excel Spreadsheet"
    if "powerpoint" in mime or name.endswith((".pptx", ".ppt")):
        return "PowerPoint Presentation"
    if "image" in mime:
        return "Image File"
    if "text" in mime:
        return "Text Document"
    return UNKNOWN_FILE_TYPE


def file_family(file_type_label: str) -> str:
    return FILE_FAMILIES.get(file_type_label, "Other")


# ---------------------------------------------------------------------------
# Keyword tables
# ---------------------------------------------------------------------------

HIGH_SECURITY_KEYWORDS = (
    "confidential", "secret", "restricted", "classified", "private", "sensitive",
    "salary", "payroll", "contract", "financial", "budget", "audit",
    "personnel", "hr", "disciplinary", "termination", "medical",
    "legal", "lawsuit", "compliance", "investigation",
)

MEDIUM_SECURITY_KEYWORDS = (
    "internal", "staff", "employee", "management", "board", "strategic",
    "planning", "policy", "procedure", "meeting", "minutes",
)

PUBLIC_KEYWORDS = (
    "public", "announcement", "press", "newsletter", "brochure",
    "annual report", "publication", "marketing", "promotional",
)

NEGATIVE_FILENAME_KEYWORDS = ("termination", "disciplinary", "complaint", "violation")
POSITIVE_FILENAME_KEYWORDS = ("achievement", "success", "award", "promotion")
POSITIVE_CATEGORY_KEYWORDS = ("achievement", "award")

# (category keywords, score), first match wins
READABILITY_TABLE: tuple[tuple[tuple[str, ...], float], ...] = (
    (("technical", "manual"), 0.3),
    (("legal", "contract"), 0.4),
    (("policy", "procedure"), 0.6),
    (("report", "analysis"), 0.7),
    (("newsletter", "announcement"), 0.9),
)
DEFAULT_READABILITY = 0.65

# (filename keyword, category keyword, topic), every match adds its topic
TOPIC_RULES: tuple[tuple[str, str, str], ...] = (
    ("budget", "financial", "Financial Management"),
    ("hr", "employee", "Human Resources"),
    ("training", "training", "Staff Development"),
    ("project", "project", "Project Management"),
    ("policy", "policy", "Organizational Policy"),
    ("compliance", "audit", "Compliance"),
    ("report", "report", "Reporting"),
)

LANGUAGE_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("swahili", "kiswahili"), "Swahili"),
    (("french", "francais"), "French"),
    (("arabic", "عربي"), "Arabic"),
    (("spanish", "español"), "Spanish"),
)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


# ---------------------------------------------------------------------------
# Individual heuristics
# ---------------------------------------------------------------------------


def detect_language(filename: str) -> str:
    name = filename.lower()
    for keywords, language in LANGUAGE_KEYWORDS:
        if _contains_any(name, keywords):
            return language
    return DEFAULT_LANGUAGE


def classify_security(filename: str, category: str) -> tuple[str, float]:
    """Return (classification, confidence). Buckets are checked in order."""
    name = filename.lower()
    cat = category.lower()

    def matches(keywords: tuple[str, ...]) -> bool:
        return _contains_any(name, keywords) or _contains_any(cat, keywords)

    if matches(HIGH_SECURITY_KEYWORDS):
        return "CONFIDENTIAL", 0.8
    if matches(MEDIUM_SECURITY_KEYWORDS):
        return "INTERNAL", 0.6
    if matches(PUBLIC_KEYWORDS):
        return "PUBLIC", 0.9

    if "hr" in cat or "financial" in cat:
        return "CONFIDENTIAL", 0.7
    if "internal" in cat or "management" in cat:
        return "INTERNAL", 0.6

    return "INTERNAL", 0.5


def analyze_sentiment(filename: str, category: str) -> tuple[float, str]:
    name = filename.lower()
    cat = category.lower()

    if _contains_any(name, NEGATIVE_FILENAME_KEYWORDS):
        return 0.2, "Negative"
    if _contains_any(name, POSITIVE_FILENAME_KEYWORDS) or _contains_any(
        cat, POSITIVE_CATEGORY_KEYWORDS
    ):
        return 0.9, "Very Positive"
    return 0.65, "Positive"


def readability_score(category: str) -> float:
    cat = category.lower()
    for keywords, score in READABILITY_TABLE:
        if _contains_any(cat, keywords):
            return score
    return DEFAULT_READABILITY


def key_topics(filename: str, category: str) -> list[str]:
    name = filename.lower()
    cat = category.lower()
    topics = [
        topic
        for name_keyword, category_keyword, topic in TOPIC_RULES
        if name_keyword in name or category_keyword in cat
    ]
    return topics or [category]


def smart_summary(filename: str, category: str, file_type: str) -> str:
    cat = category.lower()
    stem = filename.rsplit(".", 1)[0] or filename

    if "report" in cat:
        return (
            f"Analysis of {stem}: This appears to be a {category} containing structured "
            f"information and data analysis. Document type: {file_type}."
        )
    if "contract" in cat or "agreement" in cat:
        return (
            f"Legal document analysis: {stem} is a {category} requiring careful review and "
            f"approval processes. Security classification recommended based on content sensitivity."
        )
    if "policy" in cat or "procedure" in cat:
        return (
            f"Organizational document: {stem} defines {category} guidelines for operational "
            f"compliance and standardization across departments."
        )
    if "financial" in cat or "budget" in cat:
        return (
            f"Financial document analysis: {stem} contains {category} information requiring "
            f"restricted access and confidential handling."
        )
    if "hr" in cat or "employee" in cat:
        return (
            f"Human resources document: {stem} contains {category} information with privacy "
            f"implications requiring appropriate access controls."
        )
    return (
        f"Document analysis: {stem} has been classified as {category} and processed for "
        f"intelligent categorization and security assessment."
    )


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class RuleBasedAnalyzer:
    """Deterministic baseline analysis keyed on filename + declared category."""

    agent_name = "RuleBased"

    def analyze(self, request: AnalysisRequest) -> RuleBasedAnalysis:
        filename = request.filename
        category = request.declared_category

        classification, confidence = classify_security(filename, category)
        sentiment, sentiment_label = analyze_sentiment(filename, category)

        result = RuleBasedAnalysis(
            file_type=request.file_type_label,
            file_family=file_family(request.file_type_label),
            language=detect_language(filename),
            classification=classification,
            classification_confidence=confidence,
            readability_score=readability_score(category),
            sentiment_score=sentiment,
            sentiment_label=sentiment_label,
            key_topics=key_topics(filename, category),
            summary=smart_summary(filename, category, request.file_type_label),
        )

        logger.debug(
            f"{self.agent_name}: analysis computed",
            file=filename,
            category=category,
            classification=result.classification,
        )
        return result
