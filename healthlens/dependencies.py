"""
Shared FastAPI dependencies.

One remote client and one session store per process. Tests swap them
through app.dependency_overrides.
"""

from functools import lru_cache

from healthlens.integrations.healthlens_client import HealthLensClient
from healthlens.session.store import InMemorySessionStore, SessionStore


@lru_cache(maxsize=1)
def get_client() -> HealthLensClient:
    return HealthLensClient()


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    return InMemorySessionStore()
