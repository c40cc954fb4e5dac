"""
View-model of the hive detail screen.
Owns the current range and metric selections, the loaded series and the
chart tooltip. Selection changes and taps are the only mutating entry points.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..domain.chart import ChartProjection, ChartSnapshot, TooltipState, TooltipView
from ..domain.measurement import Measurement
from ..domain.selection import MetricSelection, RangeSelection
from ..ports.exceptions import RepositoryError
from ..ports.measurement_repository import MeasurementRepository
from .chart_calculations import MetricProjector, RangeSampler, SeriesResampler, as_utc
from .chart_interaction import ChartInteractionTracker, format_axis_label


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HiveStatisticsViewModel:
    """
    Chart state of one hive.

    Typical use::

        view_model = HiveStatisticsViewModel(hive_id, repository)
        await view_model.load()
        view_model.select_metric(MetricSelection.HUMIDITY)
        view_model.tap_point(3, 120.0, 80.0)
        view_model.tooltip_view()
    """

    def __init__(
        self,
        hive_id: str,
        measurement_repository: MeasurementRepository,
        range_selection: RangeSelection = RangeSelection.ONE_WEEK,
        metric: MetricSelection = MetricSelection.WEIGHT,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Args:
            hive_id: Hive whose measurements are charted
            measurement_repository: Store the series is loaded from
            range_selection: Initial time range
            metric: Initial metric
            clock: Returns the reference "now"; injected for reproducible windows
        """
        self.hive_id = hive_id
        self.measurement_repository = measurement_repository
        self.clock = clock or utc_now
        self.tracker = ChartInteractionTracker()
        self.logger = logging.getLogger(__name__)

        self._range = range_selection
        self._metric = metric
        self._series: List[Measurement] = []
        self._reference_time: Optional[datetime] = None
        self.loading = False
        self.error: Optional[str] = None

    @property
    def range(self) -> RangeSelection:
        return self._range

    @property
    def metric(self) -> MetricSelection:
        return self._metric

    @property
    def series(self) -> List[Measurement]:
        """Resampled measurements currently displayed, oldest first."""
        return list(self._series)

    @property
    def tooltip(self) -> Optional[TooltipState]:
        return self.tracker.state

    @property
    def is_loaded(self) -> bool:
        return self._reference_time is not None

    async def load(self) -> List[Measurement]:
        """
        Fetch the hive's readings for the current range and fit them to the chart grid.

        A store failure is kept in `error` and re-raised; it is not retried.
        """
        now = as_utc(self.clock())
        start, end = RangeSampler.window(self._range, now)

        self.loading = True
        self.error = None
        try:
            raw = await self.measurement_repository.get_measurements(
                hive_id=self.hive_id,
                start_time=start,
                end_time=end
            )
        except RepositoryError as e:
            self.error = e.message
            self.logger.error(f"Could not load measurements for hive {self.hive_id}: {e}")
            raise
        finally:
            self.loading = False

        # the tooltip must never index into a series it was not tapped on
        self.tracker.on_selection_changed()
        self._series = SeriesResampler.resample(raw, self._range, now)
        self._reference_time = now

        self.logger.debug(
            f"Loaded {len(raw)} readings into {len(self._series)} points "
            f"for hive {self.hive_id} range={self._range.value}"
        )
        return self.series

    def select_range(self, range_selection: RangeSelection) -> bool:
        """
        Switch the time range. The loaded series no longer matches and must be reloaded.

        Returns:
            True if the selection changed
        """
        if range_selection == self._range:
            return False

        self.tracker.on_selection_changed()
        self._range = range_selection
        self._series = []
        self._reference_time = None
        return True

    def select_metric(self, metric: MetricSelection) -> bool:
        """
        Switch the displayed metric over the same series.

        Returns:
            True if the selection changed
        """
        if metric == self._metric:
            return False

        self.tracker.on_selection_changed()
        self._metric = metric
        return True

    @property
    def projection(self) -> ChartProjection:
        return MetricProjector.project(self._series, self._metric)

    def tap_point(self, index: int, screen_x: float, screen_y: float) -> TooltipState:
        """
        Show the tooltip of a rendered point.

        Raises:
            IndexError: If the index is not a point of the displayed series
        """
        values = self.projection.values
        if not 0 <= index < len(values):
            raise IndexError(f"Point {index} is outside the displayed series of {len(values)} points")
        return self.tracker.on_point_tapped(index, screen_x, screen_y, values[index])

    def labels(self) -> List[str]:
        """X axis labels of the displayed series."""
        return [format_axis_label(m.timestamp) for m in self._series]

    def tooltip_view(self) -> Optional[TooltipView]:
        return self.tracker.render(self._series, self.projection)

    def snapshot(self) -> ChartSnapshot:
        """Everything a consumer needs to draw the chart."""
        reference_time = self._reference_time or as_utc(self.clock())
        return ChartSnapshot(
            hive_id=self.hive_id,
            range=self._range,
            metric=self._metric,
            measurements=self.series,
            projection=self.projection,
            labels=self.labels(),
            sample_timestamps=RangeSampler.sample_timestamps(self._range, reference_time),
            generated_at=utc_now(),
            tooltip=self.tooltip_view()
        )
