"""
Unit tests for the synthetic measurement store.
"""

import pytest
from datetime import timedelta

from apiary.adapters.repositories.synthetic_repository import SyntheticMeasurementRepository
from apiary.core.domain.measurement import Measurement


@pytest.fixture
def repository(clock):
    return SyntheticMeasurementRepository(clock=clock)


class TestSyntheticMeasurementRepository:
    """Test cases for the SyntheticMeasurementRepository."""

    @pytest.mark.asyncio
    async def test_hourly_readings_in_window(self, repository, fixed_now):
        """Test one reading per hour, both window ends included."""
        measurements = await repository.get_measurements(
            "hive-001", start_time=fixed_now - timedelta(days=1), end_time=fixed_now
        )

        assert len(measurements) == 25
        assert measurements[0].timestamp == fixed_now - timedelta(days=1)
        assert measurements[-1].timestamp == fixed_now

    @pytest.mark.asyncio
    async def test_values_within_display_ranges(self, repository):
        measurements = await repository.get_measurements("hive-001")

        assert measurements
        assert all(0 <= m.weight <= 50 for m in measurements)
        assert all(0 <= m.temperature <= 50 for m in measurements)
        assert all(0 <= m.humidity <= 70 for m in measurements)

    @pytest.mark.asyncio
    async def test_readings_are_reproducible(self, repository, fixed_now):
        """Test that the same query returns the same series."""
        start = fixed_now - timedelta(days=2)

        first = await repository.get_measurements("hive-001", start_time=start, end_time=fixed_now)
        second = await repository.get_measurements("hive-001", start_time=start, end_time=fixed_now)
        other_hive = await repository.get_measurements("hive-002", start_time=start, end_time=fixed_now)

        assert first == second
        assert [m.weight for m in first] != [m.weight for m in other_hive]

    @pytest.mark.asyncio
    async def test_long_windows_are_thinned(self, repository, fixed_now):
        measurements = await repository.get_measurements(
            "hive-001", start_time=fixed_now - timedelta(days=365), end_time=fixed_now
        )

        assert 0 < len(measurements) <= 501

    @pytest.mark.asyncio
    async def test_limit(self, repository):
        measurements = await repository.get_measurements("hive-001", limit=5)

        assert len(measurements) == 5

    @pytest.mark.asyncio
    async def test_written_readings_are_returned(self, repository, fixed_now):
        written = Measurement(
            hive_id="hive-001",
            timestamp=fixed_now - timedelta(minutes=30),
            weight=44.4
        )
        await repository.write_measurement(written)

        measurements = await repository.get_measurements(
            "hive-001", start_time=fixed_now - timedelta(hours=1), end_time=fixed_now
        )

        assert measurements == sorted(measurements, key=lambda m: m.timestamp)
        assert written in measurements
        assert len(measurements) == 3

    @pytest.mark.asyncio
    async def test_latest_measurement(self, repository, fixed_now):
        latest = await repository.get_latest_measurement("hive-001")

        assert latest.timestamp == fixed_now
        assert latest.hive_id == "hive-001"

    @pytest.mark.asyncio
    async def test_health_check(self, repository):
        assert await repository.health_check() is True
