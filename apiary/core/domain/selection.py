"""
Selections driving the hive chart: which time range and which metric.
Each value carries the fixed display parameters bound to it.
"""

from datetime import timedelta
from enum import Enum
from typing import List

from ..ports.exceptions import InvalidMetricError, InvalidRangeError


class RangeSelection(str, Enum):
    """Chart display window."""
    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"

    @property
    def duration(self) -> timedelta:
        """Total span covered by the range."""
        return _RANGE_PARAMETERS[self][0]

    @property
    def sample_count(self) -> int:
        """Number of points displayed for the range."""
        return _RANGE_PARAMETERS[self][1]

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> "RangeSelection":
        return cls.ONE_WEEK

    @classmethod
    def labels(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, label: str) -> "RangeSelection":
        """Resolve a range from its label (e.g. '1W'), case-insensitive."""
        if isinstance(label, cls):
            return label
        normalized = (label or "").strip().upper()
        for member in cls:
            if member.value == normalized:
                return member
        raise InvalidRangeError(label, cls.labels())


# range -> (total duration, sample count)
_RANGE_PARAMETERS = {
    RangeSelection.ONE_DAY: (timedelta(days=1), 24),
    RangeSelection.ONE_WEEK: (timedelta(days=7), 14),
    RangeSelection.ONE_MONTH: (timedelta(days=30), 15),
    RangeSelection.SIX_MONTHS: (timedelta(days=180), 24),
    RangeSelection.ONE_YEAR: (timedelta(days=365), 24),
}


class MetricSelection(str, Enum):
    """Sensor metric shown on the chart."""
    WEIGHT = "weight"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"

    @property
    def field_name(self) -> str:
        """Attribute of Measurement holding this metric."""
        return self.value

    @property
    def ceiling(self) -> float:
        """Upper bound of the chart's y axis."""
        return _METRIC_PARAMETERS[self][0]

    @property
    def unit(self) -> str:
        return _METRIC_PARAMETERS[self][1]

    @property
    def display_name(self) -> str:
        return _METRIC_PARAMETERS[self][2]

    @classmethod
    def default(cls) -> "MetricSelection":
        return cls.WEIGHT

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, name: str) -> "MetricSelection":
        """Resolve a metric from its name, accepting 'temp' for temperature."""
        if isinstance(name, cls):
            return name
        normalized = (name or "").strip().lower()
        normalized = _METRIC_ALIASES.get(normalized, normalized)
        for member in cls:
            if member.value == normalized:
                return member
        raise InvalidMetricError(name, cls.names())


# metric -> (display ceiling, unit label, display name)
_METRIC_PARAMETERS = {
    MetricSelection.WEIGHT: (50.0, "kg", "Weight"),
    MetricSelection.TEMPERATURE: (50.0, "°C", "Temperature"),
    MetricSelection.HUMIDITY: (70.0, "%", "Humidity"),
}

_METRIC_ALIASES = {"temp": "temperature"}
