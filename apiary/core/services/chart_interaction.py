"""
Tooltip tracking for the hive chart.
"""

from datetime import datetime
from typing import List, Optional

from ..domain.chart import ChartProjection, TooltipState, TooltipView
from ..domain.measurement import Measurement


def format_tooltip_timestamp(timestamp: datetime) -> str:
    """Short tooltip date, e.g. 'Mar 29 14:00'."""
    return f"{timestamp.strftime('%b')} {timestamp.day} {timestamp.hour}:{timestamp.minute:02d}"


def format_axis_label(timestamp: datetime) -> str:
    """X axis label, e.g. '3/29'."""
    return f"{timestamp.month}/{timestamp.day}"


class ChartInteractionTracker:
    """
    Holds the tooltip of a chart.

    States are Empty (``state is None``) and Showing(point_index). A tap always
    shows the tapped point, a selection change always empties it. The point
    index is not checked against any series: owners clear the tracker before
    swapping in new data.
    """

    def __init__(self):
        self._state: Optional[TooltipState] = None

    @property
    def state(self) -> Optional[TooltipState]:
        return self._state

    @property
    def is_showing(self) -> bool:
        return self._state is not None

    def on_point_tapped(self, index: int, screen_x: float, screen_y: float, value: float) -> TooltipState:
        self._state = TooltipState(
            point_index=index,
            screen_x=screen_x,
            screen_y=screen_y,
            value=value
        )
        return self._state

    def on_selection_changed(self) -> None:
        self._state = None

    def render(self, measurements: List[Measurement], projection: ChartProjection) -> Optional[TooltipView]:
        """
        Render the current tooltip against the displayed series.

        Returns None when nothing is shown or the index does not point into
        the series.
        """
        state = self._state
        if state is None or not 0 <= state.point_index < len(measurements):
            return None

        measurement = measurements[state.point_index]
        return TooltipView(
            point_index=state.point_index,
            screen_x=state.screen_x,
            screen_y=state.screen_y,
            timestamp_label=format_tooltip_timestamp(measurement.timestamp),
            value_label=f"{state.value:.2f} {projection.unit}"
        )
