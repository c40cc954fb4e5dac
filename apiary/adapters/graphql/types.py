"""
GraphQL types for the Apiary Statistics Service.
Strawberry GraphQL type definitions based on domain entities.
"""

import strawberry
from typing import List, Optional
from datetime import datetime

from ...core.domain.measurement import Measurement as DomainMeasurement
from ...core.domain.hive import Hive as DomainHive, Note as DomainNote
from ...core.domain.chart import ChartSnapshot
from ...core.domain.selection import MetricSelection, RangeSelection


@strawberry.type
class Measurement:
    """GraphQL type for a hive sensor reading."""
    timestamp: datetime
    weight: Optional[float] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None

    @classmethod
    def from_domain(cls, measurement: DomainMeasurement) -> "Measurement":
        """Convert domain Measurement to GraphQL type."""
        return cls(
            timestamp=measurement.timestamp,
            weight=measurement.weight,
            temperature=measurement.temperature,
            humidity=measurement.humidity
        )


@strawberry.type
class Hive:
    """GraphQL type for hives."""
    id: str
    name: str
    system_id: Optional[str]
    location: Optional[str]
    created_at: datetime
    latest_stats: Optional[Measurement]

    @classmethod
    def from_domain(cls, hive: DomainHive) -> "Hive":
        """Convert domain Hive to GraphQL type."""
        return cls(
            id=hive.id,
            name=hive.name,
            system_id=hive.system_id,
            location=hive.location,
            created_at=hive.created_at,
            latest_stats=Measurement.from_domain(hive.latest_stats) if hive.latest_stats else None
        )


@strawberry.type
class ChartPoint:
    """One displayed value with its source timestamp and axis label."""
    timestamp: datetime
    label: str
    value: float


@strawberry.type
class HiveChart:
    """GraphQL type for the chart of one hive metric."""
    hive_id: str
    range: str
    metric: str
    unit: str
    floor: float
    ceiling: float
    points: List[ChartPoint]
    min_value: float
    avg_value: float
    max_value: float
    total_points: int
    generated_at: datetime

    @classmethod
    def from_domain(cls, snapshot: ChartSnapshot) -> "HiveChart":
        """Convert a chart snapshot to GraphQL type."""
        projection = snapshot.projection
        points = [
            ChartPoint(timestamp=measurement.timestamp, label=label, value=value)
            for measurement, label, value in zip(snapshot.measurements, snapshot.labels, projection.values)
        ]
        return cls(
            hive_id=snapshot.hive_id,
            range=snapshot.range.value,
            metric=snapshot.metric.value,
            unit=projection.unit,
            floor=projection.floor,
            ceiling=projection.ceiling,
            points=points,
            min_value=projection.summary.min,
            avg_value=projection.summary.avg,
            max_value=projection.summary.max,
            total_points=snapshot.total_points,
            generated_at=snapshot.generated_at
        )


@strawberry.type
class Note:
    """GraphQL type for journal notes."""
    id: str
    title: str
    content: str
    hive_id: Optional[str]
    pinned: bool
    date: datetime

    @classmethod
    def from_domain(cls, note: DomainNote) -> "Note":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            hive_id=note.hive_id,
            pinned=note.pinned,
            date=note.date
        )


@strawberry.type
class RangeInfo:
    """GraphQL type describing a selectable time range."""
    label: str
    duration_days: float
    sample_count: int

    @classmethod
    def from_domain(cls, range_selection: RangeSelection) -> "RangeInfo":
        return cls(
            label=range_selection.value,
            duration_days=range_selection.duration.total_seconds() / 86400,
            sample_count=range_selection.sample_count
        )


@strawberry.type
class MetricInfo:
    """GraphQL type describing a selectable metric."""
    name: str
    display_name: str
    unit: str
    ceiling: float

    @classmethod
    def from_domain(cls, metric: MetricSelection) -> "MetricInfo":
        return cls(
            name=metric.value,
            display_name=metric.display_name,
            unit=metric.unit,
            ceiling=metric.ceiling
        )
