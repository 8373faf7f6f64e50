"""
Persona Scorer

Deterministic, weighted, rule-based classifier:
1. Start every persona label at zero
2. Add each question's weight to the label its answer maps to
3. Apply compound bonuses for answer combinations
4. Pick the highest score (first in table order wins ties)

Pure functions only. Unknown or empty answers contribute nothing.

Version: persona_engine_v1
"""

import logging
from typing import Dict, Optional, Tuple

from .models import DEFAULT_PERSONA, PersonaLabel, QuestionnaireResponse

logger = logging.getLogger(__name__)


ScoreTable = Dict[str, int]

QUESTION_WEIGHTS: Dict[str, int] = {
    "tracking_style": 3,
    "motivation": 2,
    "time_spent": 2,
    "tech_comfort": 2,
    "dashboard_preference": 1,
}

# answer value -> label that receives the question's weight
ANSWER_TARGETS: Dict[str, Dict[str, PersonaLabel]] = {
    "tracking_style": {
        "detail-oriented": PersonaLabel.DETAIL_ORIENTED,
        "casual": PersonaLabel.CASUAL,
        "quick-bold": PersonaLabel.QUICK_BOLD,
        "tech-savvy": PersonaLabel.TECH_SAVVY,
    },
    "motivation": {
        "goal-focused": PersonaLabel.BALANCED,
        "analytical": PersonaLabel.ANALYTICAL,
        "fast-action": PersonaLabel.FAST_ACTION,
        "health-conscious": PersonaLabel.HEALTH_CONSCIOUS,
    },
    "time_spent": {
        "fast-bold": PersonaLabel.QUICK_BOLD,
        "balanced": PersonaLabel.BALANCED,
        "detail-oriented": PersonaLabel.DETAIL_ORIENTED,
        "passive": PersonaLabel.PASSIVE,
    },
    "tech_comfort": {
        "beginner": PersonaLabel.BEGINNER,
        "intermediate": PersonaLabel.INTERMEDIATE,
        "power": PersonaLabel.POWER,
    },
    "dashboard_preference": {
        "snapshot": PersonaLabel.SNAPSHOT,
        "analytical": PersonaLabel.ANALYTICAL,
        "guided": PersonaLabel.GUIDED,
        "action-oriented": PersonaLabel.ACTION_ORIENTED,
    },
}

COMPOUND_BONUS = 2

# ((field, value), (field, value)) -> label receiving COMPOUND_BONUS
COMPOUND_RULES: Tuple[Tuple[Tuple[str, str], Tuple[str, str], PersonaLabel], ...] = (
    (("tracking_style", "detail-oriented"), ("motivation", "analytical"), PersonaLabel.ANALYTICAL),
    (("time_spent", "fast-bold"), ("dashboard_preference", "snapshot"), PersonaLabel.QUICK_BOLD),
    (("tech_comfort", "power"), ("tracking_style", "tech-savvy"), PersonaLabel.TECH_SAVVY),
)


def empty_score_table() -> ScoreTable:
    return {label.value: 0 for label in PersonaLabel}


def build_score_table(responses: QuestionnaireResponse) -> ScoreTable:
    """
    Accumulate weighted scores for every persona label.

    Args:
        responses: Questionnaire answers (may be partial)

    Returns:
        Ordered mapping label -> score, in PersonaLabel order
    """
    scores = empty_score_table()

    for question, weight in QUESTION_WEIGHTS.items():
        answer = getattr(responses, question)
        target = ANSWER_TARGETS[question].get(answer)
        if target is not None:
            scores[target.value] += weight

    for (field_a, value_a), (field_b, value_b), target in COMPOUND_RULES:
        if getattr(responses, field_a) == value_a and getattr(responses, field_b) == value_b:
            scores[target.value] += COMPOUND_BONUS

    return scores


def top_persona(scores: ScoreTable) -> PersonaLabel:
    """
    Arg-max over the score table.

    The candidate starts as (balanced, 0) and is only replaced by a
    strictly greater score, so the first maximum in table order wins
    and an all-zero table yields balanced.
    """
    best_label = DEFAULT_PERSONA.value
    best_score = 0
    for label, score in scores.items():
        if score > best_score:
            best_label, best_score = label, score
    return PersonaLabel(best_label)


def score_persona(
    responses: QuestionnaireResponse,
    scores: Optional[ScoreTable] = None,
) -> PersonaLabel:
    """Questionnaire answers -> winning persona label."""
    if scores is None:
        scores = build_score_table(responses)
    winner = top_persona(scores)
    logger.debug("Persona scores %s -> %s", scores, winner.value)
    return winner
