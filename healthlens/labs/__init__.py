"""
HealthLens Lab Results

Numeric value + reference range → normal / high / low.
Every view (bold or detailed) consumes the same classified results.
"""

from .models import LabResult, LabStatus, LabSummary, ReferenceRange
from .classify import (
    abnormal_results,
    classify,
    deviation,
    group_by_category,
    summarize_results,
)

__all__ = [
    "LabResult",
    "LabStatus",
    "LabSummary",
    "ReferenceRange",
    "abnormal_results",
    "classify",
    "deviation",
    "group_by_category",
    "summarize_results",
]
