from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.chart import ChartSnapshot
from ..domain.hive import Hive
from ..domain.measurement import Measurement
from ..domain.selection import MetricSelection, RangeSelection


class HiveService(ABC):
    """
    Port (interface) for hive business logic.
    This defines the contract for hive listing, creation and chart statistics.
    """

    @abstractmethod
    async def list_hives(self, user_id: str) -> List[Hive]:
        """
        List the hives of a user, each carrying its latest measurement.

        Args:
            user_id: Owner of the hives

        Returns:
            Hives with `latest_stats` filled when the hive has reported

        Raises:
            RepositoryError: If a store cannot be read
        """
        pass

    @abstractmethod
    async def get_hive(self, user_id: str, hive_id: str) -> Hive:
        """
        Get one hive with its latest measurement.

        Raises:
            HiveNotFoundError: If the hive does not exist
        """
        pass

    @abstractmethod
    async def create_hive(
        self,
        user_id: str,
        name: str,
        system_id: str,
        location: Optional[str] = None
    ) -> Hive:
        """
        Create a hive linked to a sensor system.

        Raises:
            ValidationError: If name or system_id is blank
        """
        pass

    @abstractmethod
    async def hive_chart(
        self,
        user_id: str,
        hive_id: str,
        range_selection: RangeSelection,
        metric: MetricSelection
    ) -> ChartSnapshot:
        """
        Build the chart of one metric of a hive over a time range.

        Raises:
            HiveNotFoundError: If the hive does not exist
            RepositoryError: If measurements cannot be loaded
        """
        pass

    @abstractmethod
    async def record_measurement(self, user_id: str, measurement: Measurement) -> Measurement:
        """
        Store a sensor reading for an existing hive.

        Raises:
            HiveNotFoundError: If the hive does not exist
        """
        pass
