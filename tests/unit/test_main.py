"""
Unit tests for application wiring.
"""

import pytest
import httpx
from fastapi import FastAPI
from unittest.mock import AsyncMock, MagicMock

from apiary import main
from apiary.adapters.repositories.synthetic_repository import SyntheticMeasurementRepository
from apiary.core.config.config import config


class TestApplicationWiring:
    """Test cases for the FastAPI application setup."""

    def test_synthetic_measurement_source(self, monkeypatch):
        monkeypatch.setattr(config, "MEASUREMENT_SOURCE", "synthetic")

        assert isinstance(main.get_measurement_repository(), SyntheticMeasurementRepository)

    def test_influx_measurement_source(self, monkeypatch):
        monkeypatch.setattr(config, "MEASUREMENT_SOURCE", "influx")
        monkeypatch.setattr(main, "InfluxMeasurementRepository", lambda **kwargs: kwargs)

        settings = main.get_measurement_repository()

        assert settings["bucket"] == config.INFLUXDB_BUCKET

    def test_redis_repositories_share_settings(self):
        hive_repository = main.get_hive_repository()
        note_repository = main.get_note_repository()

        assert hive_repository.user_key("u", "hives") == f"{config.REDIS_KEY_PREFIX}:users:u:hives"
        assert note_repository.url == hive_repository.url

    @pytest.mark.asyncio
    async def test_root_lists_endpoints(self):
        transport = httpx.ASGITransport(app=main.app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["service"] == "Apiary Statistics Service"
        assert body["endpoints"]["graphql"] == "/api/v1/graphql"

    @pytest.mark.asyncio
    async def test_lifespan_connects_every_store(self, monkeypatch):
        """Test that a failed hive store connection does not skip the note store."""
        hive_repository = MagicMock()
        hive_repository.connect = AsyncMock(return_value=False)
        hive_repository.disconnect = AsyncMock()
        note_repository = MagicMock()
        note_repository.connect = AsyncMock(return_value=True)
        note_repository.disconnect = AsyncMock()
        monkeypatch.setattr(main, "get_measurement_repository", SyntheticMeasurementRepository)
        monkeypatch.setattr(main, "get_hive_repository", lambda: hive_repository)
        monkeypatch.setattr(main, "get_note_repository", lambda: note_repository)
        app = FastAPI()

        async with main.lifespan(app):
            assert app.state.hive_repository is hive_repository
            assert app.state.note_repository is note_repository

        hive_repository.connect.assert_awaited_once()
        note_repository.connect.assert_awaited_once()
        hive_repository.disconnect.assert_awaited_once()
        note_repository.disconnect.assert_awaited_once()
