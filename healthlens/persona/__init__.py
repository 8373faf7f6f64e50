"""
HealthLens Persona Layer

Questionnaire → Persona → View Family

This package answers: "Given five questionnaire answers, who is this user
and which presentation should they get?"

- scoring: weighted rule-based persona scorer (pure)
- views: persona → bold / detailed view family (pure)
- catalog: persona metadata, remote first with a static fallback
- resolve: full assignment pipeline with remote confidence and session persistence

The remote service can enrich an assignment but never invent a label.

Version: persona_engine_v1
"""

from .models import (
    PersonaLabel,
    ViewFamily,
    QuestionnaireResponse,
    PersonaMetadata,
    PersonaCalculation,
    PersonaAssignment,
    PersistedPersonaState,
)
from .scoring import build_score_table, score_persona
from .views import view_for

__all__ = [
    "PersonaLabel",
    "ViewFamily",
    "QuestionnaireResponse",
    "PersonaMetadata",
    "PersonaCalculation",
    "PersonaAssignment",
    "PersistedPersonaState",
    "build_score_table",
    "score_persona",
    "view_for",
]

__version__ = "persona_engine_v1"
