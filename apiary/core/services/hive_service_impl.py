"""
Implementation of the HiveService port.
This service orchestrates the hive store, the measurement store and the chart view-model.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..domain.chart import ChartSnapshot
from ..domain.hive import Hive
from ..domain.measurement import Measurement
from ..domain.selection import MetricSelection, RangeSelection
from ..ports.exceptions import HiveNotFoundError, RepositoryError, ValidationError
from ..ports.hive_repository import HiveRepository
from ..ports.hive_service import HiveService
from ..ports.measurement_repository import MeasurementRepository
from .hive_statistics_view_model import HiveStatisticsViewModel, utc_now


class HiveServiceImpl(HiveService):
    """
    Concrete implementation of the HiveService port.
    """

    def __init__(
        self,
        hive_repository: HiveRepository,
        measurement_repository: MeasurementRepository,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the hive service with its dependencies.

        Args:
            hive_repository: Store of hive documents
            measurement_repository: Store of sensor readings
            clock: Returns the current time, injectable for tests
        """
        self.hive_repository = hive_repository
        self.measurement_repository = measurement_repository
        self.clock = clock or utc_now
        self.logger = logging.getLogger(__name__)

    async def list_hives(self, user_id: str) -> List[Hive]:
        """List the hives of a user, merged with their latest measurement."""
        hives = await self.hive_repository.list_hives(user_id)

        for hive in hives:
            hive.latest_stats = await self._latest_stats(hive.id)

        self.logger.info(f"Listed {len(hives)} hives for user {user_id}")
        return hives

    async def get_hive(self, user_id: str, hive_id: str) -> Hive:
        hive = await self._require_hive(user_id, hive_id)
        hive.latest_stats = await self._latest_stats(hive.id)
        return hive

    async def create_hive(
        self,
        user_id: str,
        name: str,
        system_id: str,
        location: Optional[str] = None
    ) -> Hive:
        """Create a hive; both a name and a sensor system id are required."""
        if not name or not name.strip():
            raise ValidationError("Hive name cannot be empty")
        if not system_id or not system_id.strip():
            raise ValidationError("Sensor system id cannot be empty")

        hive = Hive(
            id=uuid.uuid4().hex,
            user_id=user_id,
            name=name.strip(),
            system_id=system_id.strip(),
            location=location.strip() if location and location.strip() else None,
            created_at=self.clock()
        )
        stored = await self.hive_repository.create_hive(hive)
        self.logger.info(f"Created hive {stored.id} for user {user_id}")
        return stored

    async def hive_chart(
        self,
        user_id: str,
        hive_id: str,
        range_selection: RangeSelection,
        metric: MetricSelection
    ) -> ChartSnapshot:
        """Load the chart of one metric of a hive over a time range."""
        await self._require_hive(user_id, hive_id)

        view_model = HiveStatisticsViewModel(
            hive_id=hive_id,
            measurement_repository=self.measurement_repository,
            range_selection=range_selection,
            metric=metric,
            clock=self.clock
        )
        await view_model.load()
        return view_model.snapshot()

    async def record_measurement(self, user_id: str, measurement: Measurement) -> Measurement:
        await self._require_hive(user_id, measurement.hive_id)
        await self.measurement_repository.write_measurement(measurement)
        self.logger.debug(f"Recorded measurement for hive {measurement.hive_id} at {measurement.timestamp}")
        return measurement

    async def _require_hive(self, user_id: str, hive_id: str) -> Hive:
        hive = await self.hive_repository.get_hive(user_id, hive_id)
        if hive is None:
            raise HiveNotFoundError(user_id, hive_id)
        return hive

    async def _latest_stats(self, hive_id: str) -> Optional[Measurement]:
        # a failing measurement store must not hide the hive list itself
        try:
            return await self.measurement_repository.get_latest_measurement(hive_id)
        except RepositoryError as e:
            self.logger.warning(f"Latest stats unavailable for hive {hive_id}: {e}")
            return None
