"""
Persona Catalog

Resolves display metadata for a persona label:
1. Remote HealthLens persona-info service (authoritative when it answers)
2. Static catalog compiled below (fallback on any remote failure)
3. "balanced" entry for labels the static catalog does not carry

goal-focused and fast-bold have no static entry; they are score
buckets that never win, so they resolve to balanced on fallback.

Version: persona_engine_v1
"""

import logging
from typing import Dict, Optional, Union

from healthlens.integrations.healthlens_client import HealthLensClient, HealthLensError

from .models import DEFAULT_PERSONA, PersonaLabel, PersonaMetadata, parse_label

logger = logging.getLogger(__name__)


def _entry(
    label: PersonaLabel,
    name: str,
    category: str,
    description: str,
    strengths: list,
    focus_areas: list,
    dashboard_type: str,
) -> PersonaMetadata:
    return PersonaMetadata(
        persona=label.value,
        name=name,
        category=category,
        description=description,
        strengths=strengths,
        focus_areas=focus_areas,
        dashboard_type=dashboard_type,
        source="static",
    )


STATIC_CATALOG: Dict[str, PersonaMetadata] = {
    entry.persona: entry
    for entry in (
        _entry(
            PersonaLabel.DETAIL_ORIENTED,
            "THE ANALYST",
            "Detail-Focused Management",
            "You love diving deep into your health data and tracking every detail",
            ["Thorough data analysis", "Consistent tracking", "Pattern recognition"],
            ["Avoid analysis paralysis", "Set actionable goals"],
            "Comprehensive analytics with detailed charts and trends",
        ),
        _entry(
            PersonaLabel.ANALYTICAL,
            "THE RESEARCHER",
            "Data-Driven Health",
            "You prefer evidence-based insights and comprehensive health reports",
            ["Scientific approach", "Trend analysis", "Risk assessment"],
            ["Balance data with action", "Simplify complex insights"],
            "Advanced analytics with research-backed recommendations",
        ),
        _entry(
            PersonaLabel.TECH_SAVVY,
            "THE INNOVATOR",
            "Technology-Enhanced Health",
            "You leverage technology and devices to automate your health tracking",
            ["Device integration", "Automation", "Tech adoption"],
            ["Data accuracy validation", "Human touch points"],
            "Connected dashboard with device integrations",
        ),
        _entry(
            PersonaLabel.QUICK_BOLD,
            "THE ACHIEVER",
            "Fast-Action Health",
            "You want quick insights and immediate actionable recommendations",
            ["Quick decision making", "Goal-oriented", "Action-focused"],
            ["Patience for long-term trends", "Detailed planning"],
            "Streamlined view with key metrics and instant actions",
        ),
        _entry(
            PersonaLabel.CASUAL,
            "THE BALANCED",
            "Flexible Health Management",
            "You prefer a moderate approach to health tracking and management",
            ["Realistic expectations", "Flexible approach", "Sustainable habits"],
            ["Consistency building", "Goal setting"],
            "Simple overview with gentle reminders and tips",
        ),
        _entry(
            PersonaLabel.FAST_ACTION,
            "THE SPRINTER",
            "Immediate Impact Focus",
            "You want quick wins and immediate health improvements",
            ["Quick implementation", "High motivation", "Results-driven"],
            ["Long-term sustainability", "Patience with gradual changes"],
            "Action-oriented dashboard with immediate recommendations",
        ),
        _entry(
            PersonaLabel.HEALTH_CONSCIOUS,
            "THE GUARDIAN",
            "Preventive Health Focus",
            "You prioritize managing specific health conditions and prevention",
            ["Health awareness", "Preventive mindset", "Medical compliance"],
            ["Stress management", "Lifestyle balance"],
            "Condition-focused dashboard with medical insights",
        ),
        _entry(
            PersonaLabel.BALANCED,
            "THE HARMONIZER",
            "Holistic Health Approach",
            "You seek a well-rounded approach to health and wellness",
            ["Holistic thinking", "Life balance", "Sustainable practices"],
            ["Specific goal targeting", "Measurement consistency"],
            "Balanced dashboard with all aspects of health",
        ),
        _entry(
            PersonaLabel.PASSIVE,
            "THE OBSERVER",
            "Guided Health Journey",
            "You prefer gentle guidance and motivation to engage with health data",
            ["Receptive to guidance", "Low pressure approach", "Steady progress"],
            ["Engagement building", "Habit formation"],
            "Motivational dashboard with guided experiences",
        ),
        _entry(
            PersonaLabel.BEGINNER,
            "THE LEARNER",
            "Simple Health Start",
            "You prefer straightforward, easy-to-understand health information",
            ["Willingness to learn", "Appreciation for simplicity", "Step-by-step approach"],
            ["Building confidence", "Gradual complexity increase"],
            "Simplified interface with educational content",
        ),
        _entry(
            PersonaLabel.INTERMEDIATE,
            "THE EXPLORER",
            "Growing Health Knowledge",
            "You're comfortable with moderate complexity and guided exploration",
            ["Growth mindset", "Balanced complexity", "Guided learning"],
            ["Advanced feature adoption", "Independent decision making"],
            "Progressive interface with optional advanced features",
        ),
        _entry(
            PersonaLabel.POWER,
            "THE COMMANDER",
            "Advanced Health Control",
            "You want full control over your health data with advanced features",
            ["Advanced feature usage", "Customization", "Complex analysis"],
            ["Time management", "Avoiding over-optimization"],
            "Fully customizable dashboard with all available features",
        ),
        _entry(
            PersonaLabel.SNAPSHOT,
            "THE OVERVIEW",
            "Quick Health Status",
            "You prefer high-level summaries and key health indicators",
            ["Efficiency focus", "Key metric identification", "Quick assessment"],
            ["Detail exploration when needed", "Trend awareness"],
            "Summary dashboard with key health scores",
        ),
        _entry(
            PersonaLabel.GUIDED,
            "THE NAVIGATOR",
            "Goal-Oriented Health",
            "You want personalized recommendations and clear health goals",
            ["Goal commitment", "Guidance following", "Progress tracking"],
            ["Self-directed exploration", "Flexibility in approach"],
            "Goal-focused dashboard with personalized recommendations",
        ),
        _entry(
            PersonaLabel.ACTION_ORIENTED,
            "THE EXECUTOR",
            "Task-Driven Health",
            "You prefer clear tasks, reminders, and actionable health steps",
            ["Task completion", "Organization", "Consistent action"],
            ["Big picture thinking", "Flexibility in timing"],
            "Task-focused dashboard with reminders and action items",
        ),
    )
}


def static_metadata(label: Union[PersonaLabel, str, None]) -> PersonaMetadata:
    """
    Static catalog lookup. Returns a copy so callers cannot mutate the catalog.

    Labels missing from the catalog, or outside the canonical set,
    resolve to the balanced entry.
    """
    canonical = parse_label(label.value if isinstance(label, PersonaLabel) else label)
    entry = STATIC_CATALOG.get(canonical.value) if canonical else None
    if entry is None:
        entry = STATIC_CATALOG[DEFAULT_PERSONA.value]
    return entry.model_copy(deep=True)


def resolve_persona_metadata(
    label: Union[PersonaLabel, str],
    client: Optional[HealthLensClient] = None,
) -> PersonaMetadata:
    """
    Resolve display metadata for a persona label.

    Args:
        label: Persona label (canonical or not)
        client: Remote client; None means static catalog only

    Returns:
        Remote metadata when the service answers with a usable payload,
        otherwise the static entry (see static_metadata)
    """
    canonical = parse_label(label.value if isinstance(label, PersonaLabel) else label)
    if canonical is None:
        logger.warning("Unknown persona label %r, using %s metadata", label, DEFAULT_PERSONA.value)
        return static_metadata(DEFAULT_PERSONA)

    if client is None:
        return static_metadata(canonical)

    try:
        metadata = client.get_persona_info(canonical.value)
    except HealthLensError as e:
        logger.warning("Persona info unavailable for %s, using static catalog: %s", canonical.value, e)
        return static_metadata(canonical)

    # The remote service may enrich a label, never rename it
    if metadata.persona is not None and parse_label(metadata.persona) != canonical:
        logger.warning(
            "Persona info for %s returned foreign label %r, using static catalog",
            canonical.value,
            metadata.persona,
        )
        return static_metadata(canonical)

    metadata.persona = canonical.value
    return metadata


def is_static_fallback(metadata: PersonaMetadata) -> bool:
    return metadata.source == "static"
