"""Unit tests for the analysis router endpoints.

HTTP-level behaviour only (validation, status codes, error mapping); the
AnalysisService is replaced through FastAPI dependency overrides.
"""

from __future__ import annotations

import io
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient

from app.main import app
from app.modules.analysis.service import get_analysis_service

# ---------------------------------------------------------------------------
# Prefix used by the FastAPI app
# ---------------------------------------------------------------------------
PREFIX = "/api/v1/analysis"


def _override_service(analyze: AsyncMock) -> MagicMock:
    service = MagicMock()
    service.analyze = analyze
    app.dependency_overrides[get_analysis_service] = lambda: service
    return service


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_analyze_without_file_returns_400(client: AsyncClient) -> None:
    """POST /analyze with form fields but no file → 400, service never called."""
    service = _override_service(AsyncMock())

    resp = await client.post(f"{PREFIX}/analyze", data={"category": "Annual Reports"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "No file provided."
    service.analyze.assert_not_awaited()


async def test_analyze_internal_failure_returns_500(client: AsyncClient) -> None:
    """Unexpected service fault → 500 'Analysis failed: ...'."""
    _override_service(AsyncMock(side_effect=RuntimeError("rules table missing")))

    resp = await client.post(
        f"{PREFIX}/analyze",
        files=[("file", ("report.pdf", io.BytesIO(b"%PDF-fake"), "application/pdf"))],
    )

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Analysis failed: rules table missing"


async def test_analyze_builds_request_from_upload(client: AsyncClient) -> None:
    """Filename, category, title, file type and size are taken from the form."""
    service = _override_service(AsyncMock(side_effect=RuntimeError("stop here")))

    await client.post(
        f"{PREFIX}/analyze",
        files=[("file", ("Budget.xlsx", io.BytesIO(b"x" * 2048), "application/octet-stream"))],
        data={"category": "Budgets & Forecasts"},
    )

    request = service.analyze.await_args.args[0]
    assert request.filename == "Budget.xlsx"
    assert request.declared_category == "Budgets & Forecasts"
    assert request.title == "Budget.xlsx"
    assert request.file_type_label == "Excel Spreadsheet"
    assert request.file_size == 2048


async def test_analyze_metadata_requires_filename(client: AsyncClient) -> None:
    _override_service(AsyncMock())

    resp = await client.post(f"{PREFIX}/analyze-metadata", json={"declaredCategory": "Reports"})

    assert resp.status_code == 422


async def test_blank_category_defaults_on_both_endpoints(client: AsyncClient) -> None:
    """Empty or whitespace-only category → 'General Document' (JSON and multipart)."""
    service = _override_service(AsyncMock(side_effect=RuntimeError("stop here")))

    await client.post(
        f"{PREFIX}/analyze-metadata", json={"filename": "photo.jpg", "declaredCategory": ""}
    )
    await client.post(
        f"{PREFIX}/analyze",
        files=[("file", ("photo.jpg", io.BytesIO(b"\xff\xd8"), "image/jpeg"))],
        data={"category": "   "},
    )

    categories = [call.args[0].declared_category for call in service.analyze.await_args_list]
    assert categories == ["General Document", "General Document"]
