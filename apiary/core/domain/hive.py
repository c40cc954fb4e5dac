from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .measurement import Measurement


@dataclass
class Hive:
    """A tracked beehive, linked to the physical sensor system that reports for it."""
    id: str
    user_id: str
    name: str
    created_at: datetime
    system_id: Optional[str] = None
    location: Optional[str] = None
    latest_stats: Optional[Measurement] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("id is required")
        if not self.user_id:
            raise ValueError("user_id is required")


@dataclass
class Note:
    """Journal entry of a beekeeper, optionally about one hive."""
    id: str
    user_id: str
    title: str
    content: str
    date: datetime
    hive_id: Optional[str] = None
    pinned: bool = False

    @property
    def is_hive_note(self) -> bool:
        return bool(self.hive_id)
