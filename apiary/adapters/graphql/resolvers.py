"""
GraphQL resolvers for the Apiary Statistics Service.
Implements GraphQL query resolvers on top of the hive and note services.
"""

import strawberry
from typing import List, Optional
import logging

from ...core.ports.hive_service import HiveService
from ...core.ports.note_service import NoteService
from ...core.domain.selection import MetricSelection, RangeSelection
from .types import Hive, HiveChart, MetricInfo, Note, RangeInfo


# Dependencies, set by create_graphql_query
_hive_service: Optional[HiveService] = None
_note_service: Optional[NoteService] = None
_logger = logging.getLogger(__name__)


def _require(service, name: str):
    if service is None:
        raise Exception(f"{name} not initialized")
    return service


@strawberry.type
class Query:
    """GraphQL Query resolvers for the Apiary Statistics Service."""

    @strawberry.field
    def supported_ranges(self) -> List[RangeInfo]:
        """Time ranges the chart can display."""
        return [RangeInfo.from_domain(r) for r in RangeSelection]

    @strawberry.field
    def supported_metrics(self) -> List[MetricInfo]:
        """Metrics the chart can display."""
        return [MetricInfo.from_domain(m) for m in MetricSelection]

    @strawberry.field
    async def hives(self, user_id: str) -> List[Hive]:
        """
        Hives of a user with their latest reading.

        Args:
            user_id: Owner of the hives
        """
        _logger.info(f"GraphQL query: hives - user: {user_id}")
        hive_service = _require(_hive_service, "Hive service")
        hives = await hive_service.list_hives(user_id)
        return [Hive.from_domain(hive) for hive in hives]

    @strawberry.field
    async def hive_chart(
        self,
        user_id: str,
        hive_id: str,
        range: str = "1W",
        metric: str = "weight"
    ) -> HiveChart:
        """
        Chart of one metric of a hive over a time range.

        Args:
            user_id: Owner of the hive
            hive_id: Hive to chart
            range: 1D, 1W, 1M, 6M or 1Y
            metric: weight, temperature or humidity
        """
        _logger.info(f"GraphQL query: hiveChart - hive: {hive_id}, range: {range}, metric: {metric}")
        hive_service = _require(_hive_service, "Hive service")
        snapshot = await hive_service.hive_chart(
            user_id,
            hive_id,
            RangeSelection.parse(range),
            MetricSelection.parse(metric)
        )
        return HiveChart.from_domain(snapshot)

    @strawberry.field
    async def notes(self, user_id: str) -> List[Note]:
        """Notes of a user in display order."""
        _logger.info(f"GraphQL query: notes - user: {user_id}")
        note_service = _require(_note_service, "Note service")
        notes = await note_service.list_notes(user_id)
        return [Note.from_domain(note) for note in notes]


def create_graphql_query(hive_service: HiveService, note_service: NoteService):
    """
    Factory function to create the GraphQL Query type with injected dependencies.

    Args:
        hive_service: Implementation of the HiveService port
        note_service: Implementation of the NoteService port

    Returns:
        Query type resolving against the given services
    """
    global _hive_service, _note_service
    _hive_service = hive_service
    _note_service = note_service
    return Query
