"""
Models package for infrastructure layer.
Contains Pydantic models for request/response serialization.
"""

from .models import (
    MeasurementModel,
    MeasurementCreateRequest,
    HiveModel,
    HiveCreateRequest,
    SummaryStatisticsModel,
    TooltipModel,
    ChartResponse,
    NoteModel,
    NoteCreateRequest,
    NoteUpdateRequest,
    NotePinRequest,
    RangeInfoModel,
    MetricInfoModel,
    ErrorResponse
)

__all__ = [
    "MeasurementModel",
    "MeasurementCreateRequest",
    "HiveModel",
    "HiveCreateRequest",
    "SummaryStatisticsModel",
    "TooltipModel",
    "ChartResponse",
    "NoteModel",
    "NoteCreateRequest",
    "NoteUpdateRequest",
    "NotePinRequest",
    "RangeInfoModel",
    "MetricInfoModel",
    "ErrorResponse"
]
