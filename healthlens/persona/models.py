"""
Persona Layer Models

Pydantic models for questionnaire input, persona metadata, and the final
persona assignment handed to the rendering layer.

The canonical label set is PersonaLabel. Anything outside it (including
labels invented by the remote service) is never emitted as an assignment.

Version: persona_engine_v1
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class PersonaLabel(str, Enum):
    """
    The 17 persona tags. Declaration order is the score table order
    and therefore the tie-break order.
    """
    DETAIL_ORIENTED = "detail-oriented"
    ANALYTICAL = "analytical"
    TECH_SAVVY = "tech-savvy"
    QUICK_BOLD = "quick-bold"
    CASUAL = "casual"
    FAST_ACTION = "fast-action"
    HEALTH_CONSCIOUS = "health-conscious"
    BALANCED = "balanced"
    PASSIVE = "passive"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    POWER = "power"
    SNAPSHOT = "snapshot"
    GUIDED = "guided"
    ACTION_ORIENTED = "action-oriented"
    GOAL_FOCUSED = "goal-focused"
    FAST_BOLD = "fast-bold"


PERSONA_LABELS = frozenset(label.value for label in PersonaLabel)
DEFAULT_PERSONA = PersonaLabel.BALANCED


def parse_label(value: Optional[str]) -> Optional[PersonaLabel]:
    """Return the canonical label for a raw tag, or None if it is not one."""
    if value is None:
        return None
    try:
        return PersonaLabel(str(value).strip().lower())
    except ValueError:
        return None


class ViewFamily(str, Enum):
    BOLD = "bold"
    DETAILED = "detailed"


# Questionnaire option sets

TRACKING_STYLE_OPTIONS = ("detail-oriented", "casual", "quick-bold", "tech-savvy")
MOTIVATION_OPTIONS = ("goal-focused", "analytical", "fast-action", "health-conscious")
TIME_SPENT_OPTIONS = ("fast-bold", "balanced", "detail-oriented", "passive")
TECH_COMFORT_OPTIONS = ("beginner", "intermediate", "power")
DASHBOARD_PREFERENCE_OPTIONS = ("snapshot", "analytical", "guided", "action-oriented")

QUESTION_FIELDS = (
    "tracking_style",
    "motivation",
    "time_spent",
    "tech_comfort",
    "dashboard_preference",
)


class QuestionnaireResponse(BaseModel):
    """
    Five questionnaire answers.

    Accepts snake_case or the camelCase ids used by the questionnaire form.
    Empty or unknown values are allowed here; the scorer gives them zero
    weight and callers decide whether to block on missing_fields().
    """
    tracking_style: str = Field(
        default="",
        validation_alias=AliasChoices("tracking_style", "trackingStyle"),
        description="How the user tracks health goals",
    )
    motivation: str = Field(
        default="",
        validation_alias=AliasChoices("motivation"),
        description="What motivates the user to use the app",
    )
    time_spent: str = Field(
        default="",
        validation_alias=AliasChoices("time_spent", "timeSpent"),
        description="Time spent reviewing health data",
    )
    tech_comfort: str = Field(
        default="",
        validation_alias=AliasChoices("tech_comfort", "techComfort"),
        description="Comfort with technology and devices",
    )
    dashboard_preference: str = Field(
        default="",
        validation_alias=AliasChoices("dashboard_preference", "dashboardPreference"),
        description="Insights the user wants to see first",
    )

    class Config:
        extra = "ignore"

    @field_validator(*QUESTION_FIELDS, mode="before")
    @classmethod
    def _normalize_answer(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    def missing_fields(self) -> List[str]:
        return [name for name in QUESTION_FIELDS if not getattr(self, name)]

    def is_complete(self) -> bool:
        return not self.missing_fields()


class UiPreferences(BaseModel):
    """Rendering hints the remote persona service may attach."""
    show_detailed_charts: Optional[bool] = None
    show_trends: Optional[bool] = None
    show_raw_data: Optional[bool] = None
    complexity_level: Optional[str] = None
    show_medical_context: Optional[bool] = None
    highlight_abnormal: Optional[bool] = None
    simple_language: Optional[bool] = None

    class Config:
        extra = "allow"


class PersonaMetadata(BaseModel):
    """
    Display metadata for a persona.

    Every field is optional on the wire; list fields arriving as null
    are coerced to empty lists.
    """
    persona: Optional[str] = None
    name: str = ""
    category: str = ""
    description: str = ""
    strengths: List[str] = Field(default_factory=list)
    focus_areas: List[str] = Field(default_factory=list)
    dashboard_type: str = ""
    ui_preferences: Optional[UiPreferences] = None
    source: Literal["remote", "static"] = Field(
        default="remote",
        description="Where this metadata came from",
    )

    class Config:
        extra = "ignore"

    @field_validator("strengths", "focus_areas", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        if v is None:
            return []
        return v

    @field_validator("name", "category", "description", "dashboard_type", mode="before")
    @classmethod
    def _none_to_str(cls, v):
        if v is None:
            return ""
        return v


class PersonaCalculation(BaseModel):
    """Result of the remote persona calculation service."""
    persona: str
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str = ""

    class Config:
        extra = "ignore"

    @field_validator("reasoning", mode="before")
    @classmethod
    def _none_to_str(cls, v):
        if v is None:
            return ""
        return v


class PersonaAssignment(BaseModel):
    """
    What the rendering layer consumes.

    label is the durable persona. local_label is always the scorer's
    result so the UI can show provenance when the remote service won.
    """
    label: PersonaLabel
    view: ViewFamily
    metadata: PersonaMetadata
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    reasoning: Optional[str] = None
    local_label: PersonaLabel
    source: Literal["remote", "local"] = "local"
    responses_hash: Optional[str] = None
    warnings: List[str] = Field(
        default_factory=list,
        description="Soft degradation codes (remote lookups that fell back)",
    )
    assigned_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    class Config:
        extra = "forbid"


class PersistedPersonaState(BaseModel):
    """Per-session persona state as stored through a SessionStore."""
    session_id: str
    label: PersonaLabel = DEFAULT_PERSONA
    confidence: Optional[float] = None
    view: ViewFamily = ViewFamily.DETAILED
    stored: bool = Field(
        default=False,
        description="False when nothing was stored and defaults were returned",
    )


# API request/response models

class ScoreResponse(BaseModel):
    success: bool = True
    persona: PersonaLabel
    view: ViewFamily
    scores: Dict[str, int]


class AssignPersonaRequest(BaseModel):
    session_id: Optional[str] = None
    user_profile: Dict = Field(default_factory=dict)
    questionnaire_responses: QuestionnaireResponse


class SwitchPersonaRequest(BaseModel):
    persona: str


class PersonaHealthResponse(BaseModel):
    status: str = "ok"
    module: str = "persona_engine"
    version: str = "persona_engine_v1"
    remote_enabled: bool = True
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
