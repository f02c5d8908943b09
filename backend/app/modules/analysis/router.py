"""Document Analysis API - /analysis/ endpoints.

  - /analyze            Upload a document, get hybrid AI (or rule-based) metadata
  - /analyze-metadata   Same analysis for an already-stored file (JSON body)
  - /providers          Provider configuration and cooldown status
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.modules.analysis.agents.rules import detect_file_type
from app.modules.analysis.categories import DEFAULT_CATEGORY
from app.modules.analysis.schemas import (
    AnalysisRequest,
    AnalyzeResponse,
    ProvidersResponse,
)
from app.modules.analysis.service import AnalysisService, get_analysis_service

logger = structlog.get_logger()

router = APIRouter(prefix="/analysis", tags=["analysis"])


async def _upload_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size
    return len(await file.read())


async def _run(service: AnalysisService, request: AnalysisRequest) -> AnalyzeResponse:
    try:
        analysis = await service.analyze(request)
    except Exception as e:
        logger.error("AI analysis failed", file=request.filename, error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=f"Analysis failed: {e}") from e

    return AnalyzeResponse(
        success=True,
        analysis=analysis,
        analyzed_at=datetime.now(timezone.utc).isoformat(),
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_document(
    file: UploadFile | None = File(None, description="Document to analyze"),
    category: str = Form(DEFAULT_CATEGORY, description="Category chosen by the uploader"),
    title: str = Form("", description="Document title (defaults to the filename)"),
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalyzeResponse:
    """Upload a document and derive summary, classification, tags and topics.

    Pipeline: rule-based baseline -> [OpenAI || Gemini] -> consensus merge
    -> field-by-field assembly. Provider failures only add warnings.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file provided.")

    request = AnalysisRequest(
        filename=file.filename,
        declared_category=category,
        title=title or file.filename,
        file_type_label=detect_file_type(file.content_type, file.filename),
        file_size=await _upload_size(file),
    )
    return await _run(service, request)


@router.post("/analyze-metadata", response_model=AnalyzeResponse)
async def analyze_metadata(
    request: AnalysisRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalyzeResponse:
    """Analyze a document that is already stored, from its metadata alone."""
    return await _run(service, request)


@router.get("/providers", response_model=ProvidersResponse)
async def provider_status(
    service: AnalysisService = Depends(get_analysis_service),
) -> ProvidersResponse:
    """Return configuration and cooldown state of each AI provider."""
    return ProvidersResponse(providers=service.provider_status())
