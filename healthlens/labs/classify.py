"""
Lab Result Classifier

status = high   iff value > max
         low    iff value < min
         normal otherwise

Deviation is the non-negative distance past the violated bound, in the
result's unit. Summary counts are a plain fold over statuses.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List

from .models import LabResult, LabStatus, LabSummary

# Lab values carry a few decimals at most; rounding drops float noise (11.2 - 11.0)
DEVIATION_PRECISION = 4


def classify(value: float, min_value: float, max_value: float) -> LabStatus:
    if value > max_value:
        return LabStatus.HIGH
    if value < min_value:
        return LabStatus.LOW
    return LabStatus.NORMAL


def deviation(value: float, min_value: float, max_value: float) -> float:
    """Distance outside the reference range; 0.0 when in range."""
    status = classify(value, min_value, max_value)
    if status == LabStatus.HIGH:
        return round(value - max_value, DEVIATION_PRECISION)
    if status == LabStatus.LOW:
        return round(min_value - value, DEVIATION_PRECISION)
    return 0.0


def summarize_results(results: Iterable[LabResult]) -> LabSummary:
    counts = {status: 0 for status in LabStatus}
    total = 0
    for result in results:
        counts[result.status] += 1
        total += 1
    return LabSummary(
        total=total,
        normal=counts[LabStatus.NORMAL],
        high=counts[LabStatus.HIGH],
        low=counts[LabStatus.LOW],
        critical=counts[LabStatus.CRITICAL],
    )


def abnormal_results(results: Iterable[LabResult]) -> List[LabResult]:
    return [r for r in results if r.is_abnormal]


def group_by_category(results: Iterable[LabResult]) -> Dict[str, List[LabResult]]:
    """Group results by category, keeping first-seen category order."""
    groups: Dict[str, List[LabResult]] = OrderedDict()
    for result in results:
        groups.setdefault(result.category, []).append(result)
    return groups
