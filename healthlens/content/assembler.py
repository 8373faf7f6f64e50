"""
Adaptive Content Assembler

Builds persona-tailored content from classified lab results when the
remote adaptive-view service is unavailable, and validates its payloads
when it is.

Bold view: plain-language sentences, no reference ranges, large type.
Detailed view: values, reference ranges, signed deviations, grouped by category.

Version: persona_engine_v1
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from healthlens.integrations.healthlens_client import HealthLensClient, HealthLensError
from healthlens.labs.classify import abnormal_results, summarize_results
from healthlens.labs.models import LabResult, LabStatus, LabSummary
from healthlens.persona.models import PersonaLabel, ViewFamily, parse_label
from healthlens.persona.views import view_for

from .models import (
    AdaptiveViewResponse,
    Header,
    ResultsView,
    ResultsViewConfig,
    Styling,
    Summary,
    SummaryConfig,
    UiComponents,
    ViewComponents,
)

logger = logging.getLogger(__name__)


# Per-family presentation settings
VIEW_PRESENTATION: Dict[ViewFamily, Dict[str, Any]] = {
    ViewFamily.BOLD: {
        "layout": "bold_view",
        "results_type": "status_cards",
        "use_plain_language": True,
        "show_reference_ranges": False,
        "medical_context": False,
        "styling": {"font_size": "large", "contrast": "high", "colors": "status"},
        "title": "Your Lab Results",
        "subtitle": "What your results mean, in plain words",
    },
    ViewFamily.DETAILED: {
        "layout": "dashboard_view",
        "results_type": "detailed_table",
        "use_plain_language": False,
        "show_reference_ranges": True,
        "medical_context": True,
        "styling": {"font_size": "normal", "contrast": "normal", "colors": "clinical"},
        "title": "Lab Results",
        "subtitle": "Comprehensive view of your health metrics",
    },
}


def _fmt(number: float) -> str:
    return f"{number:g}"


def summary_text(summary: LabSummary) -> str:
    if summary.abnormal == 0:
        return (
            "Excellent work! All your recent lab results are within healthy ranges. "
            "Your consistent health management is showing positive results."
        )
    if summary.abnormal <= 2:
        return (
            f"Your overall health profile is strong with {summary.normal} tests in normal range. "
            f"We've identified {summary.abnormal} area(s) that need attention - "
            "focus on the recommendations below."
        )
    return (
        f"You have {summary.normal} tests in normal range and {summary.abnormal} results requiring attention. "
        "Review the detailed recommendations and consult with your healthcare provider."
    )


def status_message(result: LabResult) -> str:
    """Plain-language sentence for the bold view (also what gets read aloud)."""
    if result.status == LabStatus.NORMAL:
        return f"Your {result.name} is in a healthy range."
    if result.status == LabStatus.HIGH:
        return f"Your {result.name} is higher than normal. Please discuss with your doctor."
    return f"Your {result.name} is lower than normal. Please discuss with your doctor."


def deviation_text(result: LabResult) -> Optional[str]:
    """'0.2 K/uL above upper limit' for the detailed view; None when in range."""
    if result.status == LabStatus.HIGH:
        return f"{_fmt(result.deviation)} {result.unit} above upper limit".replace("  ", " ")
    if result.status == LabStatus.LOW:
        return f"{_fmt(result.deviation)} {result.unit} below lower limit".replace("  ", " ")
    return None


def _signed_deviation(result: LabResult) -> str:
    sign = "+" if result.status == LabStatus.HIGH else "-"
    return f"{sign}{_fmt(result.deviation)}"


def abnormal_findings(results: List[LabResult], view: ViewFamily) -> str:
    """Answer to "which results are abnormal?", worded for the view family."""
    flagged = abnormal_results(results)

    if view == ViewFamily.BOLD:
        if not flagged:
            return "Good news! All your results are in the healthy range."
        items = "\n".join(
            f"• {r.name}: {'Higher' if r.status == LabStatus.HIGH else 'Lower'} than normal"
            for r in flagged
        )
        return (
            f"You have {len(flagged)} result(s) that need attention:\n\n{items}\n\n"
            "Please discuss these with your doctor."
        )

    if not flagged:
        return "Analysis complete: All biomarkers are within reference ranges. No abnormal values detected."
    items = "\n".join(
        f"• {r.name}: {_fmt(r.value)} {r.unit} "
        f"(Ref: {_fmt(r.reference_range.min)}-{_fmt(r.reference_range.max)}). "
        f"Status: {r.status.value.upper()}. Deviation: {_signed_deviation(r)} {r.unit}"
        for r in flagged
    )
    return (
        f"Abnormal findings detected ({len(flagged)} total):\n\n{items}\n\n"
        "Recommendation: Clinical correlation advised."
    )


def default_recommendations(results: List[LabResult], view: ViewFamily) -> List[str]:
    flagged = abnormal_results(results)
    if not flagged:
        return ["Keep up your current routine and plan your next routine checkup."]
    if view == ViewFamily.BOLD:
        return [f"Talk to your doctor about your {r.name}." for r in flagged]
    return [
        f"Review {r.name} with your clinician ({r.status.value}, {deviation_text(r)})."
        for r in flagged
    ]


def assemble_adaptive_view(
    persona: Union[PersonaLabel, str],
    results: List[LabResult],
    recommendations: Optional[List[str]] = None,
) -> AdaptiveViewResponse:
    """
    Local AdaptiveViewResponse for a persona.

    Unknown persona tags are reported as balanced and get the detailed view.
    """
    label = parse_label(persona.value if isinstance(persona, PersonaLabel) else persona) or PersonaLabel.BALANCED
    view = view_for(label)
    presentation = VIEW_PRESENTATION[view]
    summary = summarize_results(results)

    if recommendations is None:
        recommendations = default_recommendations(results, view)

    ui = UiComponents(
        layout=presentation["layout"],
        components=ViewComponents(
            header=Header(title=presentation["title"], subtitle=presentation["subtitle"]),
            results_view=ResultsView(
                type=presentation["results_type"],
                data=list(results),
                config=ResultsViewConfig(
                    type=presentation["results_type"],
                    highlight_abnormal=True,
                    use_plain_language=presentation["use_plain_language"],
                    show_reference_ranges=presentation["show_reference_ranges"],
                ),
            ),
            summary=Summary(
                content=summary_text(summary),
                config=SummaryConfig(
                    include_recommendations=bool(recommendations),
                    medical_context=presentation["medical_context"],
                ),
            ),
        ),
        styling=Styling(**presentation["styling"]),
        persona=label.value,
    )

    return AdaptiveViewResponse(
        persona=label.value,
        ui_components=ui,
        lab_results=list(results),
        recommendations=recommendations,
        cache_hit=False,
        source="local",
    )


def _remote_lab_results(client: HealthLensClient, user_id: str, report_id: Optional[str]) -> List[LabResult]:
    """Stored lab results for the local fallback; empty when they cannot be fetched."""
    try:
        rows = client.get_lab_results(user_id, report_id=report_id)
        return [LabResult.model_validate(row) for row in rows]
    except HealthLensError as e:
        logger.warning("Lab results unavailable for user %s: %s", user_id, e)
    except ValidationError as e:
        logger.warning("Lab results for user %s failed validation (%d errors)", user_id, e.error_count())
    return []


def fetch_adaptive_view(
    user_id: str,
    persona: Union[PersonaLabel, str, None] = None,
    results: Optional[List[LabResult]] = None,
    client: Optional[HealthLensClient] = None,
    report_id: Optional[str] = None,
) -> AdaptiveViewResponse:
    """
    Remote adaptive view when it answers with a valid payload carrying a
    canonical persona, otherwise the local assembly.

    Args:
        user_id: User whose view is requested
        persona: Label for the local assembly (balanced when missing or unknown)
        results: Lab results for the local assembly; None fetches the
            user's stored results from the remote service
        client: Remote client; None assembles locally
        report_id: Optional report filter

    Returns:
        AdaptiveViewResponse whose persona always agrees with its layout
    """
    label = parse_label(persona.value if isinstance(persona, PersonaLabel) else persona) or PersonaLabel.BALANCED

    if client is not None:
        try:
            payload = client.get_adaptive_view(user_id, report_id=report_id)
            view = AdaptiveViewResponse.model_validate(payload)
        except HealthLensError as e:
            logger.warning("Adaptive view unavailable for user %s, assembling locally: %s", user_id, e)
        except ValidationError as e:
            logger.warning("Adaptive view payload for user %s failed validation (%d errors), assembling locally", user_id, e.error_count())
        else:
            remote_label = parse_label(view.persona)
            if remote_label is not None:
                view.persona = remote_label.value
                view.ui_components.persona = remote_label.value
                view.source = "remote"
                return view
            logger.warning("Adaptive view for user %s has non-canonical persona %r, assembling locally", user_id, view.persona)

        if results is None:
            results = _remote_lab_results(client, user_id, report_id)

    return assemble_adaptive_view(label, results or [])
