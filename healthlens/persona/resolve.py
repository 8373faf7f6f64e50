"""
Persona Assignment Pipeline

1. Score the questionnaire locally (always)
2. Ask the remote calculation service for persona + confidence (best effort)
3. Accept the remote label only if it is canonical
4. Derive the view family from the final label
5. Resolve metadata (remote first, static fallback)
6. Persist to the session when one is given

Remote failures never abort: they downgrade to the local label and
leave a soft warning code on the assignment.

Version: persona_engine_v1
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union

from healthlens.integrations.healthlens_client import HealthLensClient, HealthLensError
from healthlens.session.store import SessionContext
from healthlens.shared.hashing import canonicalize_and_hash

from .catalog import is_static_fallback, resolve_persona_metadata
from .models import (
    PersonaAssignment,
    PersonaCalculation,
    PersonaLabel,
    QuestionnaireResponse,
    parse_label,
)
from .scoring import score_persona
from .views import view_for

logger = logging.getLogger(__name__)


# Soft warning codes
PERSONA_CALCULATION_UNAVAILABLE = "PERSONA_CALCULATION_UNAVAILABLE"
PERSONA_CALCULATION_REJECTED = "PERSONA_CALCULATION_REJECTED"
PERSONA_INFO_UNAVAILABLE = "PERSONA_INFO_UNAVAILABLE"


def remote_calculation(
    client: HealthLensClient,
    user_profile: Dict[str, Any],
    responses: QuestionnaireResponse,
) -> Tuple[Optional[PersonaCalculation], Optional[str]]:
    """
    One attempt at the remote calculation.

    Returns:
        (calculation, None) on a usable result, otherwise (None, warning_code)
    """
    try:
        calculation = client.calculate_persona(user_profile, responses)
    except HealthLensError as e:
        logger.warning("Remote persona calculation failed, using local scorer: %s", e)
        return None, PERSONA_CALCULATION_UNAVAILABLE

    if parse_label(calculation.persona) is None:
        logger.warning("Remote persona calculation returned non-canonical label %r, ignored", calculation.persona)
        return None, PERSONA_CALCULATION_REJECTED

    return calculation, None


def build_assignment(
    label: PersonaLabel,
    local_label: PersonaLabel,
    client: Optional[HealthLensClient] = None,
    calculation: Optional[PersonaCalculation] = None,
    responses_hash: Optional[str] = None,
    warnings: Optional[list] = None,
) -> PersonaAssignment:
    warnings = list(warnings or [])
    metadata = resolve_persona_metadata(label, client)
    if client is not None and is_static_fallback(metadata):
        warnings.append(PERSONA_INFO_UNAVAILABLE)

    return PersonaAssignment(
        label=label,
        view=view_for(label),
        metadata=metadata,
        confidence=calculation.confidence if calculation else None,
        reasoning=calculation.reasoning if calculation else None,
        local_label=local_label,
        source="remote" if calculation else "local",
        responses_hash=responses_hash,
        warnings=warnings,
    )


def assign_persona(
    responses: QuestionnaireResponse,
    user_profile: Optional[Dict[str, Any]] = None,
    client: Optional[HealthLensClient] = None,
    session: Optional[SessionContext] = None,
) -> PersonaAssignment:
    """
    Full questionnaire → assignment pipeline.

    Args:
        responses: Five questionnaire answers (caller checks completeness)
        user_profile: Profile forwarded to the remote calculation
        client: Remote client; None keeps everything local
        session: Where to persist the result

    Returns:
        PersonaAssignment with label, view, metadata and provenance
    """
    local_label = score_persona(responses)
    label = local_label
    calculation = None
    warnings = []

    if client is not None:
        calculation, warning = remote_calculation(client, user_profile or {}, responses)
        if calculation is not None:
            label = parse_label(calculation.persona)
        else:
            warnings.append(warning)

    assignment = build_assignment(
        label=label,
        local_label=local_label,
        client=client,
        calculation=calculation,
        responses_hash=canonicalize_and_hash(responses.model_dump()),
        warnings=warnings,
    )

    logger.info(
        "Assigned persona %s (local=%s, source=%s, view=%s)",
        assignment.label.value,
        local_label.value,
        assignment.source,
        assignment.view.value,
    )

    if session is not None:
        session.record(assignment)
    return assignment


def switch_persona(
    persona: Union[PersonaLabel, str],
    client: Optional[HealthLensClient] = None,
    session: Optional[SessionContext] = None,
) -> PersonaAssignment:
    """
    Manual persona override ("view as"). Non-canonical tags become balanced.
    No confidence: the user picked it, nothing was calculated.
    """
    label = parse_label(persona.value if isinstance(persona, PersonaLabel) else persona)
    if label is None:
        logger.warning("Cannot switch to unknown persona %r, using balanced", persona)
        label = PersonaLabel.BALANCED

    assignment = build_assignment(label=label, local_label=label, client=client)
    if session is not None:
        session.record(assignment)
    return assignment
