"""
Test configuration and fixtures for unit tests.
"""

import sys
from pathlib import Path

# Add project root directory to Python path so the apiary package can be found
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from apiary.core.domain.hive import Hive, Note
from apiary.core.domain.measurement import Measurement
from apiary.core.ports.hive_repository import HiveRepository
from apiary.core.ports.logger import Logger
from apiary.core.ports.measurement_repository import MeasurementRepository
from apiary.core.ports.note_repository import NoteRepository


FIXED_NOW = datetime(2024, 3, 29, 14, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """Reference time shared by every clock-dependent test."""
    return FIXED_NOW


@pytest.fixture
def clock():
    """Fixture providing a clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def sample_measurements():
    """Hourly readings of one hive over the last 24 hours, oldest first."""
    measurements = []
    for hours_ago in range(24, 0, -1):
        measurements.append(
            Measurement(
                hive_id="hive-001",
                timestamp=FIXED_NOW - timedelta(hours=hours_ago),
                weight=30.0 + hours_ago * 0.1,
                temperature=34.5,
                humidity=55.0
            )
        )
    return measurements


@pytest.fixture
def sample_hive():
    """Fixture providing a stored hive."""
    return Hive(
        id="hive-001",
        user_id="user-001",
        name="Meadow Hive",
        system_id="system-001",
        location="North field",
        created_at=FIXED_NOW - timedelta(days=60)
    )


@pytest.fixture
def sample_notes():
    """Notes of one user, in no particular order."""
    return [
        Note(
            id="note-hive-old",
            user_id="user-001",
            title="Queen spotted",
            content="Marked queen seen on frame 4",
            date=FIXED_NOW - timedelta(days=3),
            hive_id="hive-001"
        ),
        Note(
            id="note-general-new",
            user_id="user-001",
            title="Buy frames",
            content="",
            date=FIXED_NOW - timedelta(days=1)
        ),
        Note(
            id="note-general-pinned",
            user_id="user-001",
            title="Treatment schedule",
            content="Oxalic acid in December",
            date=FIXED_NOW - timedelta(days=10),
            pinned=True
        ),
        Note(
            id="note-hive-pinned",
            user_id="user-001",
            title="Aggressive colony",
            content="Wear full suit",
            date=FIXED_NOW - timedelta(days=20),
            hive_id="hive-001",
            pinned=True
        ),
    ]


@pytest.fixture
def mock_measurement_repository(sample_measurements):
    """Fixture providing a mock MeasurementRepository."""
    mock_repo = MagicMock(spec=MeasurementRepository)

    # Configure the mock to return sample data (async)
    mock_repo.get_measurements = AsyncMock(return_value=sample_measurements)
    mock_repo.get_latest_measurement = AsyncMock(return_value=sample_measurements[-1])
    mock_repo.write_measurement = AsyncMock(return_value=None)
    mock_repo.health_check = AsyncMock(return_value=True)

    return mock_repo


@pytest.fixture
def mock_hive_repository(sample_hive):
    """Fixture providing a mock HiveRepository."""
    mock_repo = MagicMock(spec=HiveRepository)

    mock_repo.list_hives = AsyncMock(return_value=[sample_hive])
    mock_repo.get_hive = AsyncMock(return_value=sample_hive)
    mock_repo.create_hive = AsyncMock(side_effect=lambda hive: hive)
    mock_repo.health_check = AsyncMock(return_value=True)

    return mock_repo


@pytest.fixture
def mock_note_repository(sample_notes):
    """Fixture providing a mock NoteRepository."""
    mock_repo = MagicMock(spec=NoteRepository)

    mock_repo.list_notes = AsyncMock(return_value=sample_notes)
    mock_repo.get_note = AsyncMock(return_value=sample_notes[0])
    mock_repo.create_note = AsyncMock(side_effect=lambda note: note)
    mock_repo.update_note = AsyncMock(return_value=sample_notes[0])
    mock_repo.delete_note = AsyncMock(return_value=True)

    return mock_repo


@pytest.fixture
def mock_logger():
    """Fixture providing a mock Logger."""
    mock_logger = MagicMock(spec=Logger)
    return mock_logger
