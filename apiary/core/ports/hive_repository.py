from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.hive import Hive


class HiveRepository(ABC):
    """Port (interface) for hive documents of a user."""

    @abstractmethod
    async def list_hives(self, user_id: str) -> List[Hive]:
        """
        Fetch all hives of a user.

        Raises:
            RepositoryError: If data access fails
        """
        pass

    @abstractmethod
    async def get_hive(self, user_id: str, hive_id: str) -> Optional[Hive]:
        """Fetch one hive, None when it does not exist."""
        pass

    @abstractmethod
    async def create_hive(self, hive: Hive) -> Hive:
        """
        Persist a new hive.

        Returns:
            The stored hive
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the document store is reachable."""
        pass
