"""
HealthLens Session State Tests
"""

import pytest

from healthlens.persona.models import PersonaLabel, ViewFamily
from healthlens.persona.resolve import build_assignment
from healthlens.session.store import (
    CONFIDENCE_KEY,
    PERSONA_KEY,
    VIEW_KEY,
    InMemorySessionStore,
    SessionContext,
    SessionStore,
)


@pytest.fixture
def store():
    return InMemorySessionStore()


class TestSessionContext:

    def test_requires_session_id(self, store):
        with pytest.raises(ValueError):
            SessionContext("", store)

    def test_in_memory_store_matches_protocol(self, store):
        assert isinstance(store, SessionStore)

    def test_empty_session_defaults(self, store):
        state = SessionContext("s1", store).load()

        assert state.stored is False
        assert state.label == PersonaLabel.BALANCED
        assert state.view == ViewFamily.DETAILED
        assert state.confidence is None

    def test_record_writes_keys(self, store):
        session = SessionContext("s1", store)
        session.record(build_assignment(PersonaLabel.SNAPSHOT, PersonaLabel.SNAPSHOT))

        assert store.get(f"s1:{PERSONA_KEY}") == "snapshot"
        assert store.get(f"s1:{VIEW_KEY}") == "bold"
        assert store.get(f"s1:{CONFIDENCE_KEY}") is None
        assert len(store) == 2

    def test_sessions_are_isolated(self, store):
        SessionContext("a", store).record(build_assignment(PersonaLabel.POWER, PersonaLabel.POWER))

        assert SessionContext("a", store).load().label == PersonaLabel.POWER
        assert SessionContext("b", store).load().stored is False


class TestCorruptState:

    def test_unknown_label(self, store):
        store.set(f"s1:{PERSONA_KEY}", "wizard")
        state = SessionContext("s1", store).load()

        assert state.label == PersonaLabel.BALANCED
        assert state.stored is False

    def test_stale_view_flag_recomputed(self, store):
        store.set(f"s1:{PERSONA_KEY}", "guided")
        store.set(f"s1:{VIEW_KEY}", "detailed")

        assert SessionContext("s1", store).load().view == ViewFamily.BOLD

    @pytest.mark.parametrize("raw", ["not-a-number", "1.5", "-0.1"])
    def test_bad_confidence_ignored(self, store, raw):
        store.set(f"s1:{PERSONA_KEY}", "casual")
        store.set(f"s1:{CONFIDENCE_KEY}", raw)

        assert SessionContext("s1", store).load().confidence is None

    def test_valid_confidence(self, store):
        store.set(f"s1:{PERSONA_KEY}", "casual")
        store.set(f"s1:{CONFIDENCE_KEY}", "0.8")

        assert SessionContext("s1", store).load().confidence == 0.8
