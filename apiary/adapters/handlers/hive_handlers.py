"""
FastAPI handlers for hive endpoints.
These handlers implement the REST API for hives, their charts and their readings.
"""

from fastapi import APIRouter, Query
from typing import List
from datetime import datetime, timezone
import logging

from ...core.ports.hive_service import HiveService
from ...core.ports.exceptions import ValidationError
from ...core.domain.measurement import Measurement
from ...core.domain.selection import MetricSelection, RangeSelection
from ..models import (
    ChartResponse,
    ErrorResponse,
    HiveCreateRequest,
    HiveModel,
    MeasurementCreateRequest,
    MeasurementModel,
    MetricInfoModel,
    RangeInfoModel
)


class HiveHandlers:
    """
    FastAPI handlers for hive endpoints.
    Domain errors propagate to the handlers registered in errorhandling.
    """

    def __init__(self, hive_service: HiveService):
        """
        Initialize handlers with hive service dependency.

        Args:
            hive_service: Implementation of the HiveService port
        """
        self.hive_service = hive_service
        self.logger = logging.getLogger(__name__)

        self.router = APIRouter(prefix="/api/v1", tags=["hives"])
        self._setup_routes()

        route_count = len(self.router.routes)
        self.logger.info(f"Hive router initialized with {route_count} routes")

    def _setup_routes(self):
        """Setup FastAPI routes."""

        @self.router.get(
            "/users/{user_id}/hives",
            response_model=List[HiveModel],
            responses={503: {"model": ErrorResponse}},
            summary="List Hives",
            description="List the hives of a user with their latest sensor reading"
        )
        async def list_hives(user_id: str):
            self.logger.info(f"GET /users/{user_id}/hives called")
            hives = await self.hive_service.list_hives(user_id)
            return [HiveModel.from_domain(hive) for hive in hives]

        @self.router.post(
            "/users/{user_id}/hives",
            response_model=HiveModel,
            status_code=201,
            responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
            summary="Create Hive",
            description="Create a hive linked to a sensor system"
        )
        async def create_hive(user_id: str, request: HiveCreateRequest):
            hive = await self.hive_service.create_hive(
                user_id, request.name, request.system_id, request.location
            )
            return HiveModel.from_domain(hive)

        @self.router.get(
            "/users/{user_id}/hives/{hive_id}",
            response_model=HiveModel,
            responses={404: {"model": ErrorResponse}},
            summary="Get Hive"
        )
        async def get_hive(user_id: str, hive_id: str):
            hive = await self.hive_service.get_hive(user_id, hive_id)
            return HiveModel.from_domain(hive)

        @self.router.get(
            "/users/{user_id}/hives/{hive_id}/chart",
            response_model=ChartResponse,
            responses={
                400: {"model": ErrorResponse},
                404: {"model": ErrorResponse},
                503: {"model": ErrorResponse}
            },
            summary="Hive Chart",
            description="Chart-ready values of one metric of a hive over a time range"
        )
        async def hive_chart(
            user_id: str,
            hive_id: str,
            range: str = Query(RangeSelection.default().value, description="Time range: 1D, 1W, 1M, 6M or 1Y"),
            metric: str = Query(MetricSelection.default().value, description="Metric: weight, temperature or humidity")
        ):
            self.logger.info(f"GET chart for hive {hive_id} range={range} metric={metric}")
            snapshot = await self.hive_service.hive_chart(
                user_id,
                hive_id,
                RangeSelection.parse(range),
                MetricSelection.parse(metric)
            )
            return ChartResponse.from_domain(snapshot)

        @self.router.post(
            "/users/{user_id}/hives/{hive_id}/measurements",
            response_model=MeasurementModel,
            status_code=201,
            responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
            summary="Record Measurement",
            description="Store a sensor reading of a hive"
        )
        async def record_measurement(user_id: str, hive_id: str, request: MeasurementCreateRequest):
            try:
                measurement = Measurement(
                    hive_id=hive_id,
                    timestamp=request.timestamp or datetime.now(timezone.utc),
                    weight=request.weight,
                    temperature=request.temperature,
                    humidity=request.humidity
                )
            except ValueError as e:
                raise ValidationError(str(e))

            stored = await self.hive_service.record_measurement(user_id, measurement)
            return MeasurementModel.from_domain(stored)

        @self.router.get(
            "/meta/ranges",
            response_model=List[RangeInfoModel],
            summary="Supported Ranges"
        )
        async def supported_ranges():
            return [RangeInfoModel.from_domain(r) for r in RangeSelection]

        @self.router.get(
            "/meta/metrics",
            response_model=List[MetricInfoModel],
            summary="Supported Metrics"
        )
        async def supported_metrics():
            return [MetricInfoModel.from_domain(m) for m in MetricSelection]
