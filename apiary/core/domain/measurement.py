from datetime import datetime
from typing import Optional
from dataclasses import dataclass

from .selection import MetricSelection


@dataclass
class Measurement:
    """
    Domain entity representing one sensor reading of a hive.
    Sensors that are not reporting leave their field as None.
    """
    hive_id: str
    timestamp: datetime
    weight: Optional[float] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None

    def __post_init__(self):
        """Validate measurement data after initialization."""
        if not self.hive_id:
            raise ValueError("hive_id is required")

        if self.weight is not None:
            if self.weight < 0:
                raise ValueError("weight must be non-negative")

        if self.humidity is not None:
            if not 0 <= self.humidity <= 100:
                raise ValueError("humidity must be between 0 and 100")

        if self.temperature is not None:
            if not -50 <= self.temperature <= 80:
                raise ValueError("temperature must be between -50 and 80 degrees Celsius")

    @property
    def has_weight(self) -> bool:
        """Check if weight measurement is available."""
        return self.weight is not None

    @property
    def has_temperature(self) -> bool:
        """Check if temperature measurement is available."""
        return self.temperature is not None

    @property
    def has_humidity(self) -> bool:
        """Check if humidity measurement is available."""
        return self.humidity is not None

    def value_of(self, metric: MetricSelection) -> Optional[float]:
        """Raw reading for the given metric, None when the sensor did not report."""
        return getattr(self, metric.field_name)
