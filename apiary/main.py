"""
Main application entry point for the Apiary Statistics Service.
Sets up FastAPI app with dependency injection and error handling.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from .core.services.hive_service_impl import HiveServiceImpl
from .core.services.note_service_impl import NoteServiceImpl
from .core.ports.hive_service import HiveService
from .core.ports.note_service import NoteService
from .core.ports.measurement_repository import MeasurementRepository
from .adapters.repositories.influx_repository import InfluxMeasurementRepository
from .adapters.repositories.synthetic_repository import SyntheticMeasurementRepository
from .adapters.repositories.redis_repository import RedisHiveRepository, RedisNoteRepository
from .adapters.handlers.hive_handlers import HiveHandlers
from .adapters.handlers.note_handlers import NoteHandlers
from .adapters.graphql.schema import create_graphql_router

# Import configuration
from .core.config.config import config, logger

# Import error handlers
from .core.util.errorhandling import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Apiary Statistics Service...")

    # Startup
    measurement_repository = get_measurement_repository()
    hive_repository = get_hive_repository()
    note_repository = get_note_repository()

    hives_connected = await hive_repository.connect()
    notes_connected = await note_repository.connect()
    if not (hives_connected and notes_connected):
        logger.warn(
            "Redis is not reachable at startup",
            hive_store=hives_connected,
            note_store=notes_connected
        )

    hive_service = HiveServiceImpl(hive_repository, measurement_repository)
    note_service = NoteServiceImpl(note_repository)

    # Store services in app state for access in endpoints
    app.state.measurement_repository = measurement_repository
    app.state.hive_repository = hive_repository
    app.state.note_repository = note_repository
    app.state.hive_service = hive_service
    app.state.note_service = note_service

    include_routes(app, hive_service, note_service)

    yield

    # Shutdown
    logger.info("Shutting down Apiary Statistics Service...")
    await hive_repository.disconnect()
    await note_repository.disconnect()
    if isinstance(measurement_repository, InfluxMeasurementRepository):
        measurement_repository.close()


def include_routes(app: FastAPI, hive_service: HiveService, note_service: NoteService) -> None:
    """Mount the REST and GraphQL routers on the application."""
    app.include_router(HiveHandlers(hive_service).router)
    app.include_router(NoteHandlers(note_service).router)
    logger.info("REST API routers configured successfully")

    graphql_router = create_graphql_router(
        hive_service=hive_service,
        note_service=note_service,
        playground_enabled=config.GRAPHQL_PLAYGROUND_ENABLED
    )
    app.include_router(graphql_router, prefix=config.GRAPHQL_ENDPOINT, tags=["GraphQL"])
    logger.info("GraphQL router configured successfully")


# Create FastAPI application
app = FastAPI(
    title=config.APP_TITLE,
    description=config.APP_DESCRIPTION,
    version=config.APP_VERSION,
    docs_url=config.DOCS_URL,
    redoc_url=config.REDOC_URL,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Dependency injection setup
def get_measurement_repository() -> MeasurementRepository:
    """Get the configured measurement store."""
    if config.MEASUREMENT_SOURCE == "synthetic":
        logger.info("Using synthetic measurement data")
        return SyntheticMeasurementRepository()

    logger.info(f"Connecting to InfluxDB at: {config.INFLUXDB_URL}")
    return InfluxMeasurementRepository(
        url=config.INFLUXDB_URL,
        token=config.INFLUXDB_TOKEN,
        bucket=config.INFLUXDB_BUCKET,
        org=config.INFLUXDB_ORG
    )


def _redis_settings() -> dict:
    return {
        "host": config.REDIS_HOST,
        "port": config.REDIS_PORT,
        "password": config.REDIS_PASSWORD,
        "db": config.REDIS_DB,
        "key_prefix": config.REDIS_KEY_PREFIX,
        "logger": logger
    }


def get_hive_repository() -> RedisHiveRepository:
    """Get Redis hive repository instance."""
    return RedisHiveRepository(**_redis_settings())


def get_note_repository() -> RedisNoteRepository:
    """Get Redis note repository instance."""
    return RedisNoteRepository(**_redis_settings())


register_error_handlers(app)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": config.APP_TITLE,
        "version": config.APP_VERSION,
        "description": config.APP_DESCRIPTION,
        "endpoints": {
            "docs": config.DOCS_URL,
            "redoc": config.REDOC_URL,
            "health": "/health",
            "ranges": "/api/v1/meta/ranges",
            "metrics": "/api/v1/meta/metrics",
            "graphql": config.GRAPHQL_ENDPOINT
        }
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    """Service health check."""
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        measurements_healthy = await app.state.measurement_repository.health_check()
        documents_healthy = await app.state.hive_repository.health_check()

        return {
            "status": "healthy" if measurements_healthy and documents_healthy else "degraded",
            "service": "apiary",
            "measurement_store": "healthy" if measurements_healthy else "unhealthy",
            "document_store": "healthy" if documents_healthy else "unhealthy",
            "timestamp": timestamp
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "service": "apiary",
                "error": str(e),
                "timestamp": timestamp
            }
        )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apiary.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.RELOAD,
        log_level=config.LOG_LEVEL
    )
