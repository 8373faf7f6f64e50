"""
Lab Results Endpoints

POST /api/v1/labs/classify       - Classify results + summary
POST /api/v1/labs/abnormal       - Abnormal findings worded for a persona
POST /api/v1/labs/adaptive-view  - Local adaptive view for persona + results
GET  /api/v1/labs/adaptive-view/{user_id}?persona=  - Remote view, local fallback from stored lab results
"""

from typing import Optional

from fastapi import APIRouter, Depends

from healthlens.content.assembler import (
    abnormal_findings,
    assemble_adaptive_view,
    fetch_adaptive_view,
    summary_text,
)
from healthlens.content.models import AdaptiveViewRequest, AdaptiveViewResponse
from healthlens.dependencies import get_client
from healthlens.integrations.healthlens_client import HealthLensClient
from healthlens.persona.views import view_for

from .classify import abnormal_results, summarize_results
from .models import (
    AbnormalFindingsRequest,
    AbnormalFindingsResponse,
    ClassifyLabsRequest,
    ClassifyLabsResponse,
)


router = APIRouter(
    prefix="/api/v1/labs",
    tags=["labs"],
)


@router.post("/classify", response_model=ClassifyLabsResponse)
def classify_endpoint(request: ClassifyLabsRequest):
    summary = summarize_results(request.lab_results)
    return ClassifyLabsResponse(
        lab_results=request.lab_results,
        summary=summary,
        summary_text=summary_text(summary),
    )


@router.post("/abnormal", response_model=AbnormalFindingsResponse)
def abnormal_endpoint(request: AbnormalFindingsRequest):
    view = view_for(request.persona)
    return AbnormalFindingsResponse(
        persona=request.persona,
        view=view.value,
        abnormal_count=len(abnormal_results(request.lab_results)),
        findings=abnormal_findings(request.lab_results, view),
    )


@router.post("/adaptive-view", response_model=AdaptiveViewResponse)
def local_adaptive_view(request: AdaptiveViewRequest):
    return assemble_adaptive_view(
        request.persona,
        request.lab_results,
        recommendations=request.recommendations or None,
    )


@router.get("/adaptive-view/{user_id}", response_model=AdaptiveViewResponse)
def remote_adaptive_view(
    user_id: str,
    persona: Optional[str] = None,
    report_id: Optional[str] = None,
    client: HealthLensClient = Depends(get_client),
):
    """
    Adaptive view from the remote service, which decides the persona.
    When it fails, the view is assembled locally for `persona` from the
    user's stored lab results.
    """
    active = client if client.is_configured else None
    return fetch_adaptive_view(user_id, persona, client=active, report_id=report_id)
