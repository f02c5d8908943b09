"""Unit tests for the rule-based analyzer."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from app.modules.analysis.agents import rules as rules_module
from app.modules.analysis.agents.rules import (
    RuleBasedAnalyzer,
    analyze_sentiment,
    classify_security,
    detect_file_type,
    detect_language,
    key_topics,
    readability_score,
    smart_summary,
)
from factories import make_request


@pytest.mark.parametrize(
    ("content_type", "filename", "expected"),
    [
        ("application/pdf", "report.pdf", "PDF Document"),
        ("application/octet-stream", "minutes.docx", "Word Document"),
        ("application/vnd.ms-excel", "budget.bin", "Excel Spreadsheet"),
        (None, "deck.pptx", "PowerPoint Presentation"),
        ("image/png", "logo.png", "Image File"),
        ("text/plain", "notes.txt", "Text Document"),
        ("application/zip", "archive.zip", "Unknown Document"),
    ],
)
def test_detect_file_type(content_type: str | None, filename: str, expected: str) -> None:
    assert detect_file_type(content_type, filename) == expected


@pytest.mark.parametrize(
    ("filename", "category", "expected"),
    [
        ("Payroll_Confidential_2024.pdf", "Financial Documents", ("CONFIDENTIAL", 0.8)),
        ("Staff_Handbook.pdf", "Operations", ("INTERNAL", 0.6)),
        ("Press_Release.docx", "Newsletters", ("PUBLIC", 0.9)),
        ("photo.jpg", "General Document", ("INTERNAL", 0.5)),
    ],
)
def test_classify_security(filename: str, category: str, expected: tuple[str, float]) -> None:
    assert classify_security(filename, category) == expected


def test_high_keywords_beat_public_keywords() -> None:
    assert classify_security("public_budget_announcement.pdf", "Newsletters")[0] == "CONFIDENTIAL"


@pytest.mark.parametrize(
    ("filename", "category", "expected"),
    [
        ("Disciplinary_Notice.pdf", "General Document", (0.2, "Negative")),
        ("Award_Ceremony.pdf", "General Document", (0.9, "Very Positive")),
        ("Notes.pdf", "Achievement Reports", (0.9, "Very Positive")),
        ("Notes.pdf", "General Document", (0.65, "Positive")),
    ],
)
def test_analyze_sentiment(filename: str, category: str, expected: tuple[float, str]) -> None:
    assert analyze_sentiment(filename, category) == expected


def test_readability_first_match_wins() -> None:
    assert readability_score("Technical Manuals") == 0.3
    assert readability_score("Legal Contracts") == 0.4
    assert readability_score("Annual Reports") == 0.7
    assert readability_score("Photos") == 0.65


def test_detect_language() -> None:
    assert detect_language("Ripoti_Kiswahili.pdf") == "Swahili"
    assert detect_language("rapport_french.docx") == "French"
    assert detect_language("report.pdf") == "English"


def test_key_topics_fall_back_to_category() -> None:
    assert key_topics("Q3_Budget_Report.pdf", "Budgets & Forecasts") == [
        "Financial Management",
        "Reporting",
    ]
    assert key_topics("photo.jpg", "Photos") == ["Photos"]


def test_smart_summary_strips_extension() -> None:
    summary = smart_summary("Q3_Budget_Report.pdf", "Annual Reports", "PDF Document")
    assert summary.startswith("Analysis of Q3_Budget_Report:")
    assert "Document type: PDF Document." in summary


def test_analyzer_is_deterministic() -> None:
    request = make_request("Payroll_Confidential_2024.pdf", "Financial Documents")
    first = RuleBasedAnalyzer().analyze(request)

    assert first == RuleBasedAnalyzer().analyze(request)
    assert first.classification == "CONFIDENTIAL"
    assert first.file_family == "Document"
    assert first.language == "English"
    assert first.summary.startswith("Financial document analysis: Payroll_Confidential_2024")


def test_log_event_is_named_after_the_analyzer(monkeypatch: pytest.MonkeyPatch) -> None:
    rules_logger = MagicMock()
    monkeypatch.setattr(rules_module, "logger", rules_logger)

    RuleBasedAnalyzer().analyze(make_request())

    assert rules_logger.debug.call_args.args[0] == "RuleBased: analysis computed"
