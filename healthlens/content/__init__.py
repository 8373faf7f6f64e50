"""
HealthLens Adaptive Content

Persona-tailored payload contracts plus the local assembler used when
the remote adaptive-view service cannot answer.
"""

from .models import AdaptiveViewResponse, HealthTrendsPayload
from .assembler import (
    abnormal_findings,
    assemble_adaptive_view,
    deviation_text,
    fetch_adaptive_view,
    status_message,
    summary_text,
)
from .speech import SpeechCapability, read_results_aloud

__all__ = [
    "AdaptiveViewResponse",
    "HealthTrendsPayload",
    "abnormal_findings",
    "assemble_adaptive_view",
    "deviation_text",
    "fetch_adaptive_view",
    "status_message",
    "summary_text",
    "SpeechCapability",
    "read_results_aloud",
]
