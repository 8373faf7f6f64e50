"""
HealthLens Persona Assignment Tests
===================================
Tests for the questionnaire → assignment pipeline.

Tests:
1. test_local_only - no client keeps everything local
2. test_remote_success - remote label, confidence and reasoning win
3. test_remote_failure - local label plus soft warnings
4. test_rejected_label - non-canonical remote labels are ignored
5. test_session - assignments persist to the session context
6. test_switch - manual override recomputes the view
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from healthlens.integrations.healthlens_client import (
    HealthLensAPIError,
    HealthLensClient,
    HealthLensConnectionError,
)
from healthlens.persona.models import (
    PersonaCalculation,
    PersonaHealthResponse,
    PersonaLabel,
    PersonaMetadata,
    QuestionnaireResponse,
    ViewFamily,
)
from healthlens.persona.resolve import (
    PERSONA_CALCULATION_REJECTED,
    PERSONA_CALCULATION_UNAVAILABLE,
    PERSONA_INFO_UNAVAILABLE,
    assign_persona,
    switch_persona,
)
from healthlens.session.store import InMemorySessionStore, SessionContext


# ============================================
# FIXTURES
# ============================================

@pytest.fixture
def responses():
    """Scores to detail-oriented locally."""
    return QuestionnaireResponse(
        tracking_style="detail-oriented",
        motivation="analytical",
        time_spent="detail-oriented",
        tech_comfort="power",
        dashboard_preference="analytical",
    )


@pytest.fixture
def session():
    return SessionContext("session-123", InMemorySessionStore())


def make_client(calculation=None, calculation_error=None, info_error=None):
    client = MagicMock(spec=HealthLensClient)
    if calculation_error is not None:
        client.calculate_persona.side_effect = calculation_error
    else:
        client.calculate_persona.return_value = calculation
    if info_error is not None:
        client.get_persona_info.side_effect = info_error
    else:
        client.get_persona_info.side_effect = lambda label: PersonaMetadata(
            persona=label,
            name=f"Remote {label}",
            strengths=["remote"],
            focus_areas=["remote"],
        )
    return client


# ============================================
# TEST 1: LOCAL ONLY
# ============================================

class TestLocalOnly:

    def test_no_client(self, responses):
        assignment = assign_persona(responses)

        assert assignment.label == PersonaLabel.DETAIL_ORIENTED
        assert assignment.local_label == PersonaLabel.DETAIL_ORIENTED
        assert assignment.view == ViewFamily.DETAILED
        assert assignment.source == "local"
        assert assignment.confidence is None
        assert assignment.reasoning is None
        assert assignment.warnings == []
        assert assignment.metadata.name == "THE ANALYST"

    def test_responses_hash(self, responses):
        first = assign_persona(responses)
        second = assign_persona(QuestionnaireResponse.model_validate(responses.model_dump()))

        assert first.responses_hash.startswith("sha256:")
        assert first.responses_hash == second.responses_hash

    def test_timestamps_are_utc_aware(self, responses):
        assigned_at = datetime.fromisoformat(assign_persona(responses).assigned_at)
        health_at = datetime.fromisoformat(PersonaHealthResponse().timestamp)

        assert assigned_at.utcoffset() == timedelta(0)
        assert health_at.utcoffset() == timedelta(0)


# ============================================
# TEST 2: REMOTE SUCCESS
# ============================================

class TestRemoteSuccess:

    def test_remote_label_wins(self, responses):
        client = make_client(calculation=PersonaCalculation(
            persona="health-conscious",
            confidence=0.87,
            reasoning="Manages a condition",
        ))

        assignment = assign_persona(responses, user_profile={"age": 72}, client=client)

        assert assignment.label == PersonaLabel.HEALTH_CONSCIOUS
        assert assignment.local_label == PersonaLabel.DETAIL_ORIENTED
        assert assignment.view == ViewFamily.BOLD
        assert assignment.confidence == 0.87
        assert assignment.reasoning == "Manages a condition"
        assert assignment.source == "remote"
        assert assignment.metadata.name == "Remote health-conscious"
        assert assignment.warnings == []
        client.calculate_persona.assert_called_once_with({"age": 72}, responses)


# ============================================
# TEST 3: REMOTE FAILURE
# ============================================

class TestRemoteFailure:

    def test_calculation_failure_keeps_local_label(self, responses):
        client = make_client(calculation_error=HealthLensConnectionError("Connection refused"))

        assignment = assign_persona(responses, client=client)

        assert assignment.label == PersonaLabel.DETAIL_ORIENTED
        assert assignment.source == "local"
        assert assignment.confidence is None
        assert assignment.warnings == [PERSONA_CALCULATION_UNAVAILABLE]
        assert assignment.metadata.name == "Remote detail-oriented"

    def test_everything_down(self, responses):
        client = make_client(
            calculation_error=HealthLensAPIError("HealthLens API error (500)", status_code=500),
            info_error=HealthLensConnectionError("Connection refused"),
        )

        assignment = assign_persona(responses, client=client)

        assert assignment.label == PersonaLabel.DETAIL_ORIENTED
        assert assignment.metadata.name == "THE ANALYST"
        assert assignment.metadata.source == "static"
        assert assignment.warnings == [PERSONA_CALCULATION_UNAVAILABLE, PERSONA_INFO_UNAVAILABLE]


# ============================================
# TEST 4: REJECTED LABEL
# ============================================

class TestRejectedLabel:

    def test_non_canonical_remote_label(self, responses):
        client = make_client(calculation=PersonaCalculation(
            persona="super-user",
            confidence=0.99,
        ))

        assignment = assign_persona(responses, client=client)

        assert assignment.label == PersonaLabel.DETAIL_ORIENTED
        assert assignment.source == "local"
        assert assignment.confidence is None
        assert PERSONA_CALCULATION_REJECTED in assignment.warnings

    def test_remote_label_is_normalized(self, responses):
        client = make_client(calculation=PersonaCalculation(persona=" Power ", confidence=0.5))

        assignment = assign_persona(responses, client=client)
        assert assignment.label == PersonaLabel.POWER


# ============================================
# TEST 5: SESSION PERSISTENCE
# ============================================

class TestSessionPersistence:

    def test_assignment_recorded(self, responses, session):
        client = make_client(calculation=PersonaCalculation(persona="casual", confidence=0.6))

        assign_persona(responses, client=client, session=session)
        state = session.load()

        assert state.stored is True
        assert state.label == PersonaLabel.CASUAL
        assert state.view == ViewFamily.BOLD
        assert state.confidence == 0.6

    def test_local_assignment_clears_confidence(self, responses, session):
        client = make_client(calculation=PersonaCalculation(persona="casual", confidence=0.6))
        assign_persona(responses, client=client, session=session)

        assign_persona(responses, session=session)
        state = session.load()

        assert state.label == PersonaLabel.DETAIL_ORIENTED
        assert state.confidence is None


# ============================================
# TEST 6: MANUAL SWITCH
# ============================================

class TestSwitchPersona:

    def test_switch_recomputes_view(self, session):
        assignment = switch_persona("guided", session=session)

        assert assignment.label == PersonaLabel.GUIDED
        assert assignment.view == ViewFamily.BOLD
        assert assignment.confidence is None
        assert session.load().view == ViewFamily.BOLD

    def test_switch_to_unknown_is_balanced(self, session):
        assignment = switch_persona("wizard", session=session)

        assert assignment.label == PersonaLabel.BALANCED
        assert assignment.view == ViewFamily.DETAILED
        assert session.load().label == PersonaLabel.BALANCED

    def test_switch_uses_remote_metadata(self):
        client = make_client()
        assignment = switch_persona(PersonaLabel.POWER, client=client)

        assert assignment.metadata.name == "Remote power"
        client.calculate_persona.assert_not_called()
