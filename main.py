"""
HealthLens Persona Engine API Server v1.0.0
Persona scoring, metadata resolution and adaptive lab-result content.

Run locally:
  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from healthlens import __version__, config
from healthlens.labs.admin import router as labs_router
from healthlens.persona.admin import router as persona_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# one line per request is too chatty at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="HealthLens Persona Engine",
    description="Questionnaire-driven personas and adaptive lab-result views",
    version=__version__,
)

# ============================================
# CORS Configuration
# ============================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(persona_router)
app.include_router(labs_router)
logger.info("Persona and labs routers registered (remote enabled: %s)", config.HEALTHLENS_REMOTE_ENABLED)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": "healthlens-persona-engine",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
