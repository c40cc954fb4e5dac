"""
Synthetic measurement store for development and demos.
Produces plausible random hive readings so the chart can be exercised without
a sensor deployment. Enabled with MEASUREMENT_SOURCE=synthetic.
"""

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from ...core.ports.measurement_repository import MeasurementRepository
from ...core.domain.measurement import Measurement


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MAX_READINGS_PER_QUERY = 500
DEFAULT_LOOKBACK = timedelta(days=7)


class SyntheticMeasurementRepository(MeasurementRepository):
    """
    Generates readings on a fixed cadence instead of reading a database.

    Values are uniform random in the chart's display range (weight and
    temperature 0-50, humidity 0-70), seeded by hive and timestamp so that the
    same query always returns the same series. Written readings are kept in
    memory and merged into query results.
    """

    def __init__(
        self,
        cadence: timedelta = timedelta(hours=1),
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.cadence = cadence
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.url = "synthetic://"
        self.logger = logging.getLogger(__name__)
        self._written: Dict[str, List[Measurement]] = {}

    async def get_measurements(
        self,
        hive_id: str,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        limit: Optional[int] = None
    ) -> List[Measurement]:
        end = self._to_utc(end_time) if end_time else self._to_utc(self.clock())
        start = self._to_utc(start_time) if start_time else end - DEFAULT_LOOKBACK

        step = max(self.cadence, (end - start) / MAX_READINGS_PER_QUERY)
        measurements = [
            self._reading(hive_id, timestamp)
            for timestamp in self._aligned_timestamps(start, end, step)
        ]
        measurements.extend(
            m for m in self._written.get(hive_id, [])
            if start <= self._to_utc(m.timestamp) <= end
        )
        measurements.sort(key=lambda m: self._to_utc(m.timestamp))

        if limit:
            measurements = measurements[:limit]

        self.logger.debug(f"Generated {len(measurements)} synthetic measurements for hive {hive_id}")
        return measurements

    async def get_latest_measurement(self, hive_id: str) -> Optional[Measurement]:
        now = self._to_utc(self.clock())
        latest = self._reading(hive_id, self._floor(now, self.cadence))

        written = self._written.get(hive_id, [])
        if written:
            newest_written = max(written, key=lambda m: self._to_utc(m.timestamp))
            if self._to_utc(newest_written.timestamp) >= self._to_utc(latest.timestamp):
                return newest_written
        return latest

    async def write_measurement(self, measurement: Measurement) -> None:
        self._written.setdefault(measurement.hive_id, []).append(measurement)

    async def health_check(self) -> bool:
        return True

    def _reading(self, hive_id: str, timestamp: datetime) -> Measurement:
        rng = random.Random(f"{hive_id}:{int(timestamp.timestamp())}")
        return Measurement(
            hive_id=hive_id,
            timestamp=timestamp,
            weight=round(rng.random() * 50, 2),
            temperature=round(rng.random() * 50, 2),
            humidity=round(rng.random() * 70, 2)
        )

    def _aligned_timestamps(self, start: datetime, end: datetime, step: timedelta) -> List[datetime]:
        timestamp = self._floor(start, step)
        if timestamp < start:
            timestamp += step

        timestamps = []
        while timestamp <= end:
            timestamps.append(timestamp)
            timestamp += step
        return timestamps

    @staticmethod
    def _floor(timestamp: datetime, step: timedelta) -> datetime:
        """Snap timestamp down to the nearest multiple of step since the epoch."""
        return EPOCH + ((timestamp - EPOCH) // step) * step

    @staticmethod
    def _to_utc(dt: datetime) -> datetime:
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
