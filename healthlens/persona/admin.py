"""
Persona Layer Endpoints

GET  /api/v1/persona/health              - Health check
GET  /api/v1/persona/questionnaire       - Questionnaire schema
POST /api/v1/persona/score               - Local scoring only
POST /api/v1/persona/assign              - Full assignment (remote enrichment + session)
GET  /api/v1/persona/info/{label}        - Persona metadata
GET  /api/v1/persona/view/{label}        - View family for a label
GET  /api/v1/persona/session/{id}        - Persisted session state
PUT  /api/v1/persona/session/{id}        - Manual persona switch

Version: persona_engine_v1
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from healthlens.dependencies import get_client, get_session_store
from healthlens.integrations.healthlens_client import HealthLensClient
from healthlens.session.store import SessionContext, SessionStore

from .catalog import resolve_persona_metadata
from .models import (
    AssignPersonaRequest,
    PersistedPersonaState,
    PersonaAssignment,
    PersonaHealthResponse,
    PersonaMetadata,
    QuestionnaireResponse,
    ScoreResponse,
    SwitchPersonaRequest,
)
from .questionnaire import questionnaire_schema
from .resolve import assign_persona, switch_persona
from .scoring import build_score_table, score_persona
from .views import view_for


router = APIRouter(
    prefix="/api/v1/persona",
    tags=["persona"],
)


def _active(client: HealthLensClient) -> Optional[HealthLensClient]:
    return client if client.is_configured else None


def _require_complete(responses: QuestionnaireResponse) -> None:
    missing = responses.missing_fields()
    if missing:
        raise HTTPException(
            status_code=422,
            detail={
                "error": "QUESTIONNAIRE_INCOMPLETE",
                "missing_fields": missing,
            },
        )


@router.get("/health", response_model=PersonaHealthResponse)
def persona_health(client: HealthLensClient = Depends(get_client)):
    """Health check for the persona module. Does not call the remote API."""
    return PersonaHealthResponse(remote_enabled=client.is_configured)


@router.get("/questionnaire")
def get_questionnaire():
    return questionnaire_schema()


@router.post("/score", response_model=ScoreResponse)
def score_endpoint(responses: QuestionnaireResponse):
    """
    Score a completed questionnaire locally.

    Returns the winning persona, its view family and the full score table.
    """
    _require_complete(responses)
    scores = build_score_table(responses)
    persona = score_persona(responses, scores)
    return ScoreResponse(persona=persona, view=view_for(persona), scores=scores)


@router.post("/assign", response_model=PersonaAssignment)
def assign_endpoint(
    request: AssignPersonaRequest,
    client: HealthLensClient = Depends(get_client),
    store: SessionStore = Depends(get_session_store),
):
    """
    Assign a persona.

    Remote calculation and metadata are best effort: on failure the local
    label and static catalog are used and warnings list what degraded.
    """
    _require_complete(request.questionnaire_responses)
    session = SessionContext(request.session_id, store) if request.session_id else None
    return assign_persona(
        request.questionnaire_responses,
        user_profile=request.user_profile,
        client=_active(client),
        session=session,
    )


@router.get("/info/{label}", response_model=PersonaMetadata)
def persona_info(label: str, client: HealthLensClient = Depends(get_client)):
    return resolve_persona_metadata(label, _active(client))


@router.get("/view/{label}")
def persona_view(label: str):
    return {"persona": label, "view": view_for(label).value}


@router.get("/session/{session_id}", response_model=PersistedPersonaState)
def get_session_state(session_id: str, store: SessionStore = Depends(get_session_store)):
    return SessionContext(session_id, store).load()


@router.put("/session/{session_id}", response_model=PersonaAssignment)
def switch_session_persona(
    session_id: str,
    request: SwitchPersonaRequest,
    client: HealthLensClient = Depends(get_client),
    store: SessionStore = Depends(get_session_store),
):
    """Switch the session's persona; the view family is recomputed and persisted."""
    return switch_persona(request.persona, client=_active(client), session=SessionContext(session_id, store))
