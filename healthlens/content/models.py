"""
Adaptive Content Contracts

Shapes that persona-tailored payloads must conform to, whether they come
from the remote adaptive-view service or are assembled locally:

- AdaptiveViewResponse: header + results view + summary + styling
- HealthTrendsPayload: header + chart section + summary + styling

Rendering is out of scope; these models only pin the data contract.
Remote payloads carry extra keys freely, so most models allow extras.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from healthlens.labs.models import LabResult


class Header(BaseModel):
    type: str = "simple_header"
    title: str
    subtitle: str = ""

    class Config:
        extra = "allow"


class ResultsViewConfig(BaseModel):
    type: str
    highlight_abnormal: bool = True
    use_plain_language: bool = False
    show_reference_ranges: bool = True

    class Config:
        extra = "allow"


class ResultsView(BaseModel):
    type: str
    data: List[LabResult] = Field(default_factory=list)
    config: ResultsViewConfig

    class Config:
        extra = "allow"


class SummaryConfig(BaseModel):
    type: str = "summary"
    include_recommendations: bool = True
    medical_context: bool = False

    class Config:
        extra = "allow"


class Summary(BaseModel):
    type: str = "summary_card"
    content: str = ""
    config: SummaryConfig = Field(default_factory=SummaryConfig)

    class Config:
        extra = "allow"


class Styling(BaseModel):
    font_size: Optional[str] = None
    contrast: Optional[str] = None
    colors: Optional[str] = None
    chart_palette: Optional[str] = None

    class Config:
        extra = "allow"


class ViewComponents(BaseModel):
    header: Header
    results_view: ResultsView
    summary: Summary

    class Config:
        extra = "allow"


class UiComponents(BaseModel):
    layout: str
    components: ViewComponents
    styling: Styling = Field(default_factory=Styling)
    persona: Optional[str] = None

    class Config:
        extra = "allow"


class AdaptiveViewResponse(BaseModel):
    """Persona-tailored results view."""
    persona: str
    ui_components: UiComponents
    lab_results: List[LabResult] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    cache_hit: bool = False
    source: str = Field(
        default="remote",
        description="'remote' when served by the adaptive-view service, 'local' when assembled here",
    )

    class Config:
        extra = "allow"

    @field_validator("recommendations", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        if v is None:
            return []
        return v


# Health trends (chart payloads)

class ChartPoint(BaseModel):
    year: int
    value: float


class ChartSeries(BaseModel):
    name: str
    unit: Optional[str] = None
    data: List[ChartPoint] = Field(default_factory=list)


class StatusColors(BaseModel):
    normal: Optional[str] = None
    warning: Optional[str] = None
    high: Optional[str] = None


class ChartConfig(BaseModel):
    color_scheme: Optional[str] = None
    show_trendline: Optional[bool] = None
    show_tooltips: Optional[bool] = None
    y_axis_label: Optional[str] = None
    bar_width: Optional[str] = None
    grouped: Optional[bool] = None
    stacked: Optional[bool] = None
    smooth_lines: Optional[bool] = None
    fill_opacity: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    show_labels: Optional[bool] = None
    show_threshold: Optional[bool] = None
    show_status_text: Optional[bool] = None
    status_colors: Optional[StatusColors] = None

    class Config:
        extra = "allow"


class Chart(BaseModel):
    """
    One chart. Series charts (line/bar/area) use series, radar charts use
    categories/values/reference, gauge charts use value/min/max/status.
    """
    chart_type: str
    title: str
    description: str = ""
    x_axis: Optional[str] = None
    y_axis: Optional[str] = None
    series: Optional[List[ChartSeries]] = None
    categories: Optional[List[str]] = None
    values: Optional[List[float]] = None
    reference: Optional[List[float]] = None
    value: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    unit: Optional[str] = None
    status: Optional[str] = None
    config: ChartConfig = Field(default_factory=ChartConfig)

    class Config:
        extra = "allow"


class ChartSection(BaseModel):
    type: str = "chart_section"
    charts: List[Chart] = Field(default_factory=list)


class TrendsComponents(BaseModel):
    header: Header
    charts: ChartSection
    summary: Summary


class TrendsUiComponents(BaseModel):
    layout: str
    components: TrendsComponents
    styling: Styling = Field(default_factory=Styling)


class HealthTrendsPayload(BaseModel):
    persona: str
    ui_components: TrendsUiComponents

    class Config:
        extra = "allow"


# API request models

class AdaptiveViewRequest(BaseModel):
    persona: str
    lab_results: List[LabResult]
    recommendations: List[str] = Field(default_factory=list)
