"""
Unit tests for the range and metric selections.
"""

import pytest
from datetime import timedelta

from apiary.core.domain.selection import MetricSelection, RangeSelection
from apiary.core.ports.exceptions import InvalidMetricError, InvalidRangeError


class TestRangeSelection:
    """Test cases for RangeSelection."""

    @pytest.mark.parametrize("range_selection,days,count", [
        (RangeSelection.ONE_DAY, 1, 24),
        (RangeSelection.ONE_WEEK, 7, 14),
        (RangeSelection.ONE_MONTH, 30, 15),
        (RangeSelection.SIX_MONTHS, 180, 24),
        (RangeSelection.ONE_YEAR, 365, 24),
    ])
    def test_range_parameters(self, range_selection, days, count):
        """Test duration and sample count of every range."""
        assert range_selection.duration == timedelta(days=days)
        assert range_selection.sample_count == count

    def test_default_is_one_week(self):
        assert RangeSelection.default() is RangeSelection.ONE_WEEK

    def test_labels_in_display_order(self):
        assert RangeSelection.labels() == ["1D", "1W", "1M", "6M", "1Y"]

    @pytest.mark.parametrize("label,expected", [
        ("1D", RangeSelection.ONE_DAY),
        ("1w", RangeSelection.ONE_WEEK),
        (" 6m ", RangeSelection.SIX_MONTHS),
        (RangeSelection.ONE_YEAR, RangeSelection.ONE_YEAR),
    ])
    def test_parse(self, label, expected):
        """Test that labels parse case-insensitively."""
        assert RangeSelection.parse(label) is expected

    @pytest.mark.parametrize("label", ["2W", "", None, "week"])
    def test_parse_unknown_label(self, label):
        """Test that unknown labels raise InvalidRangeError."""
        with pytest.raises(InvalidRangeError) as exc_info:
            RangeSelection.parse(label)

        assert exc_info.value.supported_ranges == RangeSelection.labels()


class TestMetricSelection:
    """Test cases for MetricSelection."""

    @pytest.mark.parametrize("metric,ceiling,unit", [
        (MetricSelection.WEIGHT, 50.0, "kg"),
        (MetricSelection.TEMPERATURE, 50.0, "°C"),
        (MetricSelection.HUMIDITY, 70.0, "%"),
    ])
    def test_metric_parameters(self, metric, ceiling, unit):
        """Test ceiling and unit of every metric."""
        assert metric.ceiling == ceiling
        assert metric.unit == unit

    def test_default_is_weight(self):
        assert MetricSelection.default() is MetricSelection.WEIGHT

    def test_field_name_matches_measurement_attribute(self):
        assert [m.field_name for m in MetricSelection] == ["weight", "temperature", "humidity"]

    @pytest.mark.parametrize("name,expected", [
        ("weight", MetricSelection.WEIGHT),
        ("Humidity", MetricSelection.HUMIDITY),
        ("temp", MetricSelection.TEMPERATURE),
        ("TEMPERATURE", MetricSelection.TEMPERATURE),
    ])
    def test_parse(self, name, expected):
        """Test parsing names, including the temp alias."""
        assert MetricSelection.parse(name) is expected

    def test_parse_unknown_metric(self):
        """Test that unknown metrics raise InvalidMetricError."""
        with pytest.raises(InvalidMetricError) as exc_info:
            MetricSelection.parse("pressure")

        assert exc_info.value.metric_name == "pressure"
        assert "weight" in str(exc_info.value)
