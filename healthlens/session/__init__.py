"""HealthLens session persona state"""

from .store import InMemorySessionStore, SessionContext, SessionStore

__all__ = [
    "InMemorySessionStore",
    "SessionContext",
    "SessionStore",
]
