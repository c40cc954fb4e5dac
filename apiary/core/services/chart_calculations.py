"""
Chart calculations for the hive detail view.
Turns a time range into a sampling grid, fits raw readings onto that grid,
and projects one metric into chart-ready values.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

import pandas as pd

from ..domain.chart import ChartProjection, SummaryStatistics
from ..domain.measurement import Measurement
from ..domain.selection import MetricSelection, RangeSelection


METRIC_FIELDS = [metric.field_name for metric in MetricSelection]


def as_utc(timestamp: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are assumed to already be UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


class RangeSampler:
    """Sampling grid of a Range Selection."""

    @staticmethod
    def evenly_spaced(duration: timedelta, count: int, now: datetime) -> List[datetime]:
        """
        Build `count` timestamps evenly spaced from `now - duration` to `now` inclusive.

        A single sample sits at `now`.
        """
        if count < 1:
            raise ValueError("count must be at least 1")

        if count == 1:
            return [now]

        start = now - duration
        step = duration / (count - 1)
        timestamps = [start + step * i for i in range(count - 1)]
        timestamps.append(now)
        return timestamps

    @staticmethod
    def sample_timestamps(range_selection: RangeSelection, now: datetime) -> List[datetime]:
        """Timestamps at which the chart shows a value for the given range."""
        return RangeSampler.evenly_spaced(
            range_selection.duration, range_selection.sample_count, now
        )

    @staticmethod
    def window(range_selection: RangeSelection, now: datetime) -> Tuple[datetime, datetime]:
        """Start and end of the time window covered by the range."""
        return now - range_selection.duration, now

    @staticmethod
    def spacing(range_selection: RangeSelection) -> Optional[timedelta]:
        """Distance between consecutive samples, None when the range has one sample."""
        if range_selection.sample_count == 1:
            return None
        return range_selection.duration / (range_selection.sample_count - 1)


class SeriesResampler:
    """
    Fits a raw measurement series onto the sampling grid of a range.

    Readings outside the range window are dropped. Every remaining reading is
    assigned to its nearest grid timestamp and each metric is averaged per
    bucket over the readings that report it. Buckets without readings are
    left out rather than filled in.
    """

    @staticmethod
    def resample(
        measurements: List[Measurement],
        range_selection: RangeSelection,
        now: datetime
    ) -> List[Measurement]:
        """
        Bucket-average measurements onto the range's sampling grid.

        Args:
            measurements: Raw readings of one hive, any order
            range_selection: Range that defines the window and the grid
            now: Reference time of the window end

        Returns:
            One Measurement per non-empty bucket, oldest first, stamped with
            the grid timestamp
        """
        now = as_utc(now)
        start, end = RangeSampler.window(range_selection, now)
        grid = RangeSampler.sample_timestamps(range_selection, now)

        in_window = [m for m in measurements if start <= as_utc(m.timestamp) <= end]
        if not in_window:
            return []

        df = SeriesResampler._measurements_to_dataframe(in_window)
        df["bucket"] = [
            SeriesResampler._nearest_bucket(m.timestamp, start, range_selection)
            for m in in_window
        ]

        # mean() skips NaN, so a metric only counts the readings that report it
        aggregated = df.groupby("bucket")[METRIC_FIELDS].mean()

        hive_id = in_window[0].hive_id
        resampled = []
        for bucket, row in aggregated.iterrows():
            resampled.append(
                Measurement(
                    hive_id=hive_id,
                    timestamp=grid[int(bucket)],
                    weight=_nan_to_none(row["weight"]),
                    temperature=_nan_to_none(row["temperature"]),
                    humidity=_nan_to_none(row["humidity"])
                )
            )

        return resampled

    @staticmethod
    def _nearest_bucket(timestamp: datetime, start: datetime, range_selection: RangeSelection) -> int:
        spacing = RangeSampler.spacing(range_selection)
        if spacing is None:
            return 0

        offset = (as_utc(timestamp) - start) / spacing
        bucket = math.floor(offset + 0.5)
        return min(max(bucket, 0), range_selection.sample_count - 1)

    @staticmethod
    def _measurements_to_dataframe(measurements: List[Measurement]) -> pd.DataFrame:
        data = [
            {
                "timestamp": as_utc(m.timestamp),
                "weight": m.weight,
                "temperature": m.temperature,
                "humidity": m.humidity
            }
            for m in measurements
        ]
        df = pd.DataFrame(data, columns=["timestamp"] + METRIC_FIELDS)
        df[METRIC_FIELDS] = df[METRIC_FIELDS].astype(float)
        return df


class MetricProjector:
    """Projects one metric of a measurement series into chart values."""

    @staticmethod
    def clamp(value: float, ceiling: float, floor: float = 0.0) -> float:
        """Limit a value to the chart's display bounds."""
        return max(floor, min(float(value), ceiling))

    @staticmethod
    def summarize(values: List[float]) -> SummaryStatistics:
        """
        Calculate min, max and mean of the displayed values.

        Args:
            values: Clamped chart values

        Returns:
            SummaryStatistics, all zero for an empty series
        """
        if not values:
            return SummaryStatistics(min=0.0, max=0.0, avg=0.0)

        return SummaryStatistics(
            min=min(values),
            max=max(values),
            avg=sum(values) / len(values)
        )

    @staticmethod
    def project(measurements: List[Measurement], metric: MetricSelection) -> ChartProjection:
        """
        Build the chart projection of a metric.

        Missing readings count as 0. Values are clamped to [0, ceiling] and the
        summary is computed over the clamped values, so it matches what the
        chart shows.
        """
        values = []
        for measurement in measurements:
            raw = measurement.value_of(metric)
            values.append(MetricProjector.clamp(raw if raw is not None else 0.0, metric.ceiling))

        return ChartProjection(
            metric=metric,
            values=values,
            unit=metric.unit,
            ceiling=metric.ceiling,
            summary=MetricProjector.summarize(values),
            floor=0.0
        )


def _nan_to_none(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)
