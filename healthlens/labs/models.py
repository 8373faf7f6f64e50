"""
Lab Result Models

A lab result's status is derived from its value and reference range.
Any status sent by a client or remote service is ignored and recomputed.
"""

from enum import Enum
from typing import List

from pydantic import AliasChoices, BaseModel, Field, computed_field, model_validator


class LabStatus(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    LOW = "low"
    CRITICAL = "critical"  # reserved: no classification rule produces it


class ReferenceRange(BaseModel):
    """Clinically normal [min, max] interval."""
    min: float
    max: float

    class Config:
        extra = "ignore"

    @model_validator(mode="after")
    def _ordered(self):
        if self.min > self.max:
            raise ValueError(f"reference range min ({self.min}) exceeds max ({self.max})")
        return self


class LabResult(BaseModel):
    name: str
    value: float
    unit: str = ""
    reference_range: ReferenceRange = Field(
        validation_alias=AliasChoices("reference_range", "referenceRange"),
    )
    category: str = "Uncategorized"

    class Config:
        extra = "ignore"

    @computed_field
    @property
    def status(self) -> LabStatus:
        from .classify import classify
        return classify(self.value, self.reference_range.min, self.reference_range.max)

    @computed_field
    @property
    def deviation(self) -> float:
        from .classify import deviation
        return deviation(self.value, self.reference_range.min, self.reference_range.max)

    @property
    def is_abnormal(self) -> bool:
        return self.status != LabStatus.NORMAL


class LabSummary(BaseModel):
    """Status counts folded over a result set."""
    total: int = 0
    normal: int = 0
    high: int = 0
    low: int = 0
    critical: int = 0

    @computed_field
    @property
    def abnormal(self) -> int:
        return self.total - self.normal


# API request/response models

class ClassifyLabsRequest(BaseModel):
    lab_results: List[LabResult]


class ClassifyLabsResponse(BaseModel):
    success: bool = True
    lab_results: List[LabResult]
    summary: LabSummary
    summary_text: str


class AbnormalFindingsRequest(BaseModel):
    persona: str
    lab_results: List[LabResult]


class AbnormalFindingsResponse(BaseModel):
    success: bool = True
    persona: str
    view: str
    abnormal_count: int
    findings: str
