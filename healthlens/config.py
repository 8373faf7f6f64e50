"""
HealthLens Configuration
========================
Environment-driven settings shared by the remote client and the API server.

Environment Variables:
- HEALTHLENS_API_BASE_URL: Remote HealthLens API base (including /api/v1)
- HEALTHLENS_API_TIMEOUT_SECONDS: Single-attempt timeout for remote calls
- HEALTHLENS_REMOTE_ENABLED: "false" disables all remote calls (static fallback only)
- LOG_LEVEL: Root log level for the API server
- CORS_ALLOWED_ORIGINS: Comma-separated list of allowed origins
"""

import os
from typing import List

# =============================================================================
# REMOTE API
# =============================================================================

HEALTHLENS_API_BASE_URL = os.getenv(
    "HEALTHLENS_API_BASE_URL",
    "https://healthlens-api-master-320501699885.us-central1.run.app/api/v1",
)
HEALTHLENS_API_TIMEOUT_SECONDS = float(os.getenv("HEALTHLENS_API_TIMEOUT_SECONDS", "10.0"))
HEALTHLENS_REMOTE_ENABLED = os.getenv("HEALTHLENS_REMOTE_ENABLED", "true").lower() in ("1", "true", "yes")

# =============================================================================
# SERVER
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:8080"


def cors_allowed_origins() -> List[str]:
    raw = os.getenv("CORS_ALLOWED_ORIGINS", _DEFAULT_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
