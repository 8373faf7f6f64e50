"""
Session Persona State

Replaces ambient browser storage with an explicit session context backed
by an injectable key/value store. Stored values are strings, so the
store can be anything with get/set (in-memory dict, Redis, cookies).

Keys per session:
- {session_id}:userPersona
- {session_id}:personaConfidence   (absent when no remote confidence)
- {session_id}:personaView
"""

import logging
import threading
from typing import Dict, Optional, Protocol, runtime_checkable

from healthlens.persona.models import (
    DEFAULT_PERSONA,
    PersistedPersonaState,
    PersonaAssignment,
    ViewFamily,
    parse_label,
)
from healthlens.persona.views import view_for

logger = logging.getLogger(__name__)

PERSONA_KEY = "userPersona"
CONFIDENCE_KEY = "personaConfidence"
VIEW_KEY = "personaView"


@runtime_checkable
class SessionStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemorySessionStore:
    """Process-local SessionStore. Thread-safe."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class SessionContext:
    """Persona state for one user session."""

    def __init__(self, session_id: str, store: SessionStore):
        if not session_id:
            raise ValueError("session_id is required")
        self.session_id = session_id
        self.store = store

    def _key(self, name: str) -> str:
        return f"{self.session_id}:{name}"

    def record(self, assignment: PersonaAssignment) -> None:
        """Persist label, confidence and view. The view is recomputed from the label."""
        view = view_for(assignment.label)
        self.store.set(self._key(PERSONA_KEY), assignment.label.value)
        self.store.set(self._key(VIEW_KEY), view.value)
        if assignment.confidence is not None:
            self.store.set(self._key(CONFIDENCE_KEY), repr(float(assignment.confidence)))
        else:
            self.store.delete(self._key(CONFIDENCE_KEY))
        logger.info("Session %s persona -> %s (%s view)", self.session_id, assignment.label.value, view.value)

    def load(self) -> PersistedPersonaState:
        """
        Read the stored state. Missing or corrupt values fall back to
        balanced / no confidence / the label's view.
        """
        raw_label = self.store.get(self._key(PERSONA_KEY))
        label = parse_label(raw_label)
        stored = label is not None
        if label is None:
            if raw_label is not None:
                logger.warning("Session %s has unknown persona %r, using default", self.session_id, raw_label)
            label = DEFAULT_PERSONA

        confidence = None
        raw_confidence = self.store.get(self._key(CONFIDENCE_KEY))
        if raw_confidence is not None:
            try:
                value = float(raw_confidence)
                if 0.0 <= value <= 1.0:
                    confidence = value
            except ValueError:
                logger.warning("Session %s has corrupt confidence %r", self.session_id, raw_confidence)

        view = view_for(label)
        raw_view = self.store.get(self._key(VIEW_KEY))
        if raw_view is not None and raw_view != view.value:
            # stale flag from an older assignment; the label is the source of truth
            logger.debug("Session %s view flag %r disagrees with label, recomputed", self.session_id, raw_view)

        return PersistedPersonaState(
            session_id=self.session_id,
            label=label,
            confidence=confidence,
            view=ViewFamily(view),
            stored=stored,
        )
