"""
Speech Capability

Text-to-speech and speech recognition live in the rendering layer.
The core only knows this interface and works without it.
"""

import logging
from typing import List, Optional, Protocol, runtime_checkable

from healthlens.labs.models import LabResult
from healthlens.persona.models import ViewFamily

from .assembler import status_message

logger = logging.getLogger(__name__)


@runtime_checkable
class SpeechCapability(Protocol):
    def speak(self, text: str) -> None:
        ...

    def listen(self) -> str:
        ...


def read_results_aloud(
    results: List[LabResult],
    speech: Optional[SpeechCapability],
    view: ViewFamily = ViewFamily.BOLD,
) -> List[str]:
    """
    Speak one plain-language message per result.

    Returns the messages that were spoken; empty when no speech
    capability is available or the view is not voice-forward.
    """
    if speech is None or view != ViewFamily.BOLD:
        return []

    spoken = []
    for result in results:
        message = status_message(result)
        speech.speak(message)
        spoken.append(message)
    logger.debug("Read %d results aloud", len(spoken))
    return spoken
