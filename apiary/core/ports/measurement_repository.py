from abc import ABC, abstractmethod
from typing import List, Optional
from datetime import datetime

from ..domain.measurement import Measurement


class MeasurementRepository(ABC):
    """
    Port (interface) for hive measurement data access.
    This defines the contract for fetching sensor readings from the measurement store.
    """

    @abstractmethod
    async def get_measurements(
        self,
        hive_id: str,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        limit: Optional[int] = None
    ) -> List[Measurement]:
        """
        Fetch the measurements of a hive, oldest first.

        Args:
            hive_id: Hive whose readings are requested
            start_time: Start time for the query range
            end_time: End time for the query range
            limit: Maximum number of measurements to return

        Returns:
            List of Measurement objects ordered oldest to newest

        Raises:
            RepositoryError: If data access fails
        """
        pass

    @abstractmethod
    async def get_latest_measurement(
        self,
        hive_id: str
    ) -> Optional[Measurement]:
        """
        Get the most recent measurement of a hive.

        Args:
            hive_id: Hive to get the latest measurement for

        Returns:
            The most recent Measurement object, or None if the hive never reported

        Raises:
            RepositoryError: If data access fails
        """
        pass

    @abstractmethod
    async def write_measurement(self, measurement: Measurement) -> None:
        """
        Store one sensor reading.

        Raises:
            RepositoryError: If the write fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the data source is available and healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
