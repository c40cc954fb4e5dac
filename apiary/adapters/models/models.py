"""
Pydantic models for FastAPI request/response serialization.
These models handle the conversion between HTTP and domain objects.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from ...core.domain.measurement import Measurement
from ...core.domain.hive import Hive, Note
from ...core.domain.chart import ChartSnapshot, SummaryStatistics, TooltipView
from ...core.domain.selection import MetricSelection, RangeSelection


def _not_blank(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be empty")
    return value


class MeasurementModel(BaseModel):
    """Model for one hive sensor reading."""
    timestamp: datetime = Field(..., description="Time of the reading")
    weight: Optional[float] = Field(None, description="Hive weight in kg")
    temperature: Optional[float] = Field(None, description="Temperature in °C")
    humidity: Optional[float] = Field(None, description="Relative humidity in %")

    @classmethod
    def from_domain(cls, measurement: Measurement) -> "MeasurementModel":
        """Convert from domain object to model."""
        return cls(
            timestamp=measurement.timestamp,
            weight=measurement.weight,
            temperature=measurement.temperature,
            humidity=measurement.humidity
        )


class MeasurementCreateRequest(BaseModel):
    """Request model for recording a sensor reading."""
    timestamp: Optional[datetime] = Field(None, description="Time of the reading, defaults to now")
    weight: Optional[float] = Field(None, ge=0, description="Hive weight in kg")
    temperature: Optional[float] = Field(None, ge=-50, le=80, description="Temperature in °C")
    humidity: Optional[float] = Field(None, ge=0, le=100, description="Relative humidity in %")


class HiveModel(BaseModel):
    """Model for a hive with its latest reading."""
    id: str = Field(..., description="Hive ID")
    name: str = Field(..., description="Hive name")
    system_id: Optional[str] = Field(None, description="Sensor system linked to the hive")
    location: Optional[str] = Field(None, description="Where the hive stands")
    created_at: datetime = Field(..., description="Creation timestamp")
    latest_stats: Optional[MeasurementModel] = Field(None, description="Most recent reading")

    @classmethod
    def from_domain(cls, hive: Hive) -> "HiveModel":
        """Convert from domain object to model."""
        return cls(
            id=hive.id,
            name=hive.name,
            system_id=hive.system_id,
            location=hive.location,
            created_at=hive.created_at,
            latest_stats=MeasurementModel.from_domain(hive.latest_stats) if hive.latest_stats else None
        )


class HiveCreateRequest(BaseModel):
    """Request model for creating a hive."""
    name: str = Field(..., description="Hive name")
    system_id: str = Field(..., description="Sensor system ID")
    location: Optional[str] = Field(None, description="Where the hive stands")

    @field_validator('name', 'system_id')
    @classmethod
    def validate_not_blank(cls, v):
        return _not_blank(v)


class SummaryStatisticsModel(BaseModel):
    """Min/avg/max of the displayed values."""
    min: float
    avg: float
    max: float

    @classmethod
    def from_domain(cls, summary: SummaryStatistics) -> "SummaryStatisticsModel":
        return cls(min=summary.min, avg=summary.avg, max=summary.max)


class TooltipModel(BaseModel):
    """Rendered tooltip of a tapped chart point."""
    point_index: int
    screen_x: float
    screen_y: float
    timestamp_label: str
    value_label: str

    @classmethod
    def from_domain(cls, tooltip: TooltipView) -> "TooltipModel":
        return cls(
            point_index=tooltip.point_index,
            screen_x=tooltip.screen_x,
            screen_y=tooltip.screen_y,
            timestamp_label=tooltip.timestamp_label,
            value_label=tooltip.value_label
        )


class ChartResponse(BaseModel):
    """Response model for the chart of one hive metric."""
    hive_id: str = Field(..., description="Hive ID")
    range: str = Field(..., description="Selected time range")
    metric: str = Field(..., description="Selected metric")
    unit: str = Field(..., description="Unit label of the values")
    floor: float = Field(..., description="Lower bound of the y axis")
    ceiling: float = Field(..., description="Upper bound of the y axis")
    values: List[float] = Field(..., description="Clamped chart values, oldest first")
    labels: List[str] = Field(..., description="X axis labels")
    timestamps: List[datetime] = Field(..., description="Timestamp of every value")
    summary: SummaryStatisticsModel = Field(..., description="Min/avg/max of the values")
    total_points: int = Field(..., description="Number of values")
    generated_at: datetime = Field(..., description="Chart generation timestamp")
    tooltip: Optional[TooltipModel] = None

    @classmethod
    def from_domain(cls, snapshot: ChartSnapshot) -> "ChartResponse":
        """Convert from domain object to response model."""
        projection = snapshot.projection
        return cls(
            hive_id=snapshot.hive_id,
            range=snapshot.range.value,
            metric=snapshot.metric.value,
            unit=projection.unit,
            floor=projection.floor,
            ceiling=projection.ceiling,
            values=projection.values,
            labels=snapshot.labels,
            timestamps=[m.timestamp for m in snapshot.measurements],
            summary=SummaryStatisticsModel.from_domain(projection.summary),
            total_points=snapshot.total_points,
            generated_at=snapshot.generated_at,
            tooltip=TooltipModel.from_domain(snapshot.tooltip) if snapshot.tooltip else None
        )


class NoteModel(BaseModel):
    """Model for a journal note."""
    id: str
    title: str
    content: str
    hive_id: Optional[str] = None
    pinned: bool = False
    date: datetime

    @classmethod
    def from_domain(cls, note: Note) -> "NoteModel":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            hive_id=note.hive_id,
            pinned=note.pinned,
            date=note.date
        )


class NoteCreateRequest(BaseModel):
    """Request model for creating a note."""
    title: str = Field(..., description="Note title")
    content: str = Field("", description="Note body")
    hive_id: Optional[str] = Field(None, description="Hive the note is about")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _not_blank(v)


class NoteUpdateRequest(BaseModel):
    """Request model for a partial note update. An empty hive_id unlinks the note."""
    title: Optional[str] = None
    content: Optional[str] = None
    hive_id: Optional[str] = None


class NotePinRequest(BaseModel):
    pinned: bool = Field(..., description="Whether the note is pinned")


class RangeInfoModel(BaseModel):
    """Description of a selectable time range."""
    label: str
    duration_days: float
    sample_count: int

    @classmethod
    def from_domain(cls, range_selection: RangeSelection) -> "RangeInfoModel":
        return cls(
            label=range_selection.value,
            duration_days=range_selection.duration.total_seconds() / 86400,
            sample_count=range_selection.sample_count
        )


class MetricInfoModel(BaseModel):
    """Description of a selectable metric."""
    name: str
    display_name: str
    unit: str
    ceiling: float

    @classmethod
    def from_domain(cls, metric: MetricSelection) -> "MetricInfoModel":
        return cls(
            name=metric.value,
            display_name=metric.display_name,
            unit=metric.unit,
            ceiling=metric.ceiling
        )


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[str] = Field(None, description="Additional error details")
    error_type: Optional[str] = Field(None, description="Exception class that produced the error")
    timestamp: Optional[datetime] = Field(None, description="Time the error was reported")

