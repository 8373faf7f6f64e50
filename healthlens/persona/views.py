"""
View Selector

Persona label -> view family. Bold is large/simple/voice-forward,
detailed is dense/analytical. Depends only on the raw label.
"""

from typing import Dict, Union

from .models import PersonaLabel, ViewFamily

DEFAULT_VIEW = ViewFamily.DETAILED

VIEW_TABLE: Dict[str, ViewFamily] = {
    # bold
    PersonaLabel.HEALTH_CONSCIOUS.value: ViewFamily.BOLD,
    PersonaLabel.QUICK_BOLD.value: ViewFamily.BOLD,
    PersonaLabel.FAST_ACTION.value: ViewFamily.BOLD,
    PersonaLabel.CASUAL.value: ViewFamily.BOLD,
    PersonaLabel.PASSIVE.value: ViewFamily.BOLD,
    PersonaLabel.BEGINNER.value: ViewFamily.BOLD,
    PersonaLabel.SNAPSHOT.value: ViewFamily.BOLD,
    PersonaLabel.GUIDED.value: ViewFamily.BOLD,
    PersonaLabel.ACTION_ORIENTED.value: ViewFamily.BOLD,
    # detailed
    PersonaLabel.BALANCED.value: ViewFamily.DETAILED,
    PersonaLabel.DETAIL_ORIENTED.value: ViewFamily.DETAILED,
    PersonaLabel.ANALYTICAL.value: ViewFamily.DETAILED,
    PersonaLabel.TECH_SAVVY.value: ViewFamily.DETAILED,
    PersonaLabel.POWER.value: ViewFamily.DETAILED,
    PersonaLabel.INTERMEDIATE.value: ViewFamily.DETAILED,
}


def view_for(label: Union[PersonaLabel, str]) -> ViewFamily:
    """Unmapped or unknown labels get the detailed view."""
    key = label.value if isinstance(label, PersonaLabel) else str(label).strip().lower()
    return VIEW_TABLE.get(key, DEFAULT_VIEW)
