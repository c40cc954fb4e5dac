from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .measurement import Measurement
from .selection import MetricSelection, RangeSelection


@dataclass(frozen=True)
class SummaryStatistics:
    """Min/max/average of the displayed (clamped) values."""
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0


@dataclass(frozen=True)
class ChartProjection:
    """Chart-ready series for one metric, aligned index by index with its source measurements."""
    metric: MetricSelection
    values: List[float]
    unit: str
    ceiling: float
    summary: SummaryStatistics = field(default_factory=SummaryStatistics)
    floor: float = 0.0

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class TooltipState:
    """Data point currently highlighted on the chart."""
    point_index: int
    screen_x: float
    screen_y: float
    value: float


@dataclass(frozen=True)
class TooltipView:
    """Rendered tooltip: formatted time and value, positioned near the tapped point."""
    point_index: int
    screen_x: float
    screen_y: float
    timestamp_label: str
    value_label: str


@dataclass
class ChartSnapshot:
    """Aggregate of the full chart state of a hive detail view."""
    hive_id: str
    range: RangeSelection
    metric: MetricSelection
    measurements: List[Measurement]
    projection: ChartProjection
    labels: List[str]
    sample_timestamps: List[datetime]
    generated_at: datetime
    tooltip: Optional[TooltipView] = None

    @property
    def total_points(self) -> int:
        return len(self.projection.values)
