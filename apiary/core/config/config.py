"""
Configuration settings for the Apiary Statistics Service.
Loads configuration from environment variables with sensible defaults.
"""

import os
from typing import List, Optional

from ...adapters.logger.standard_logger import StandardLogger
from ..ports.logger import Logger


# Configure logging using our custom logger
logger: Logger = StandardLogger("apiary")


class Config:
    """Application configuration loaded from environment variables."""

    # InfluxDB configuration (measurement store)
    INFLUXDB_URL: str = os.getenv("INFLUXDB_URL", "http://localhost:8086")
    INFLUXDB_TOKEN: str = os.getenv("INFLUXDB_TOKEN", "your-influxdb-token-here")
    INFLUXDB_BUCKET: str = os.getenv("INFLUXDB_BUCKET", "apiary-bucket")
    INFLUXDB_ORG: str = os.getenv("INFLUXDB_ORG", "apiary-org")

    # Measurement source: "influx" for real data, "synthetic" for generated demo data
    MEASUREMENT_SOURCE: str = os.getenv("MEASUREMENT_SOURCE", "influx").lower()

    # Redis configuration (hive and note documents)
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_PASSWORD: Optional[str] = os.getenv("REDIS_PASSWORD") or None
    REDIS_DB: int = int(os.getenv("REDIS_DB", "0"))
    REDIS_KEY_PREFIX: str = os.getenv("REDIS_KEY_PREFIX", "apiary")

    CORS_ORIGINS: List[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]

    # Application configuration
    APP_TITLE: str = "Apiary Statistics Service"
    APP_DESCRIPTION: str = "Hive sensor statistics, charts and beekeeping notes"
    APP_VERSION: str = "1.0.0"
    DOCS_URL: str = "/docs"
    REDOC_URL: str = "/redoc"

    # GraphQL configuration
    GRAPHQL_PLAYGROUND_ENABLED: bool = os.getenv("GRAPHQL_PLAYGROUND_ENABLED", "true").lower() == "true"
    GRAPHQL_ENDPOINT: str = "/api/v1/graphql"

    # Server configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    RELOAD: bool = os.getenv("RELOAD", "true").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")


# Global configuration instance
config = Config()
