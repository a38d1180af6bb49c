"""
FastAPI Application Entry Point
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import redis.asyncio as redis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from supabase import create_client

from rapiddial.api.v1.routes import api_router
from rapiddial.core.config import ConfigManager, Settings, get_settings
from rapiddial.core.validation import validate_settings_on_startup
from rapiddial.domain.services.call_correlator import CallRecordCorrelator
from rapiddial.domain.services.calling_list import CallingListGenerator
from rapiddial.domain.services.outcome_recorder import OutcomeRecorder
from rapiddial.domain.services.priority_scorer import PriorityScorer
from rapiddial.infrastructure.recordings.supabase_archiver import SupabaseRecordingArchiver
from rapiddial.infrastructure.storage.call_outcome_repository import SqlCallOutcomeRepository
from rapiddial.infrastructure.storage.call_record_store import SqlCallRecordStore
from rapiddial.infrastructure.storage.database import (
    create_db_engine,
    create_session_factory,
    init_db,
    ping,
)
from rapiddial.infrastructure.storage.prospect_repository import SqlProspectRepository
from rapiddial.services.calling_list_service import CallingListService
from rapiddial.services.outcome_catalog import OutcomeCatalog, OutcomeCatalogCache

logger = logging.getLogger(__name__)


async def _connect_redis(settings: Settings) -> Optional[redis.Redis]:
    if not settings.redis_url:
        logger.info("REDIS_URL not set - call outcome cache disabled")
        return None

    client = redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
    try:
        await client.ping()
    except redis.RedisError as e:
        logger.warning(f"Redis unavailable ({e}) - call outcome cache disabled")
        await client.aclose()
        return None

    logger.info(f"Connected to Redis: {settings.redis_url}")
    return client


def _build_archiver(settings: Settings, http_client: httpx.AsyncClient) -> Optional[SupabaseRecordingArchiver]:
    if not (settings.supabase_url and settings.supabase_service_key):
        logger.info("Supabase not configured - recordings keep their provider URL")
        return None

    provider_auth = None
    if settings.twilio_account_sid and settings.twilio_auth_token:
        provider_auth = (settings.twilio_account_sid, settings.twilio_auth_token)

    return SupabaseRecordingArchiver(
        supabase_client=create_client(settings.supabase_url, settings.supabase_service_key),
        http_client=http_client,
        bucket=settings.recordings_bucket,
        provider_auth=provider_auth,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan - startup and shutdown events.

    Startup:
    - Validates configuration
    - Creates the database engine and missing tables
    - Connects Redis (optional) and Supabase Storage (optional)
    - Wires the calling engine services onto app.state

    Shutdown:
    - Closes Redis and HTTP clients, disposes the engine
    """
    settings: Settings = app.state.settings

    # ========================
    # STARTUP
    # ========================
    logger.info("Starting RapidDial calling engine...")

    strict_validation = settings.environment == "production"
    try:
        validate_settings_on_startup(settings, strict=strict_validation)
    except RuntimeError as e:
        if strict_validation:
            logger.error(f"Startup failed: {e}")
            raise
        logger.warning(f"Configuration warnings (non-fatal in {settings.environment}): {e}")

    engine = create_db_engine(settings.database_url, echo=settings.database_echo)
    init_db(engine)
    session_factory = create_session_factory(engine)

    redis_client = await _connect_redis(settings)
    http_client = httpx.AsyncClient(timeout=30.0)

    config = ConfigManager(env=settings.environment)
    scorer = PriorityScorer.from_config(config)

    call_record_store = SqlCallRecordStore(session_factory, settings.storage_timeout_seconds)
    prospect_repository = SqlProspectRepository(session_factory, settings.storage_timeout_seconds)
    outcome_repository = SqlCallOutcomeRepository(session_factory, settings.storage_timeout_seconds)

    cache = OutcomeCatalogCache(redis_client, settings.outcome_cache_ttl_seconds) if redis_client is not None else None
    outcome_catalog = OutcomeCatalog(outcome_repository, cache)
    await outcome_catalog.seed_defaults()

    app.state.engine = engine
    app.state.redis = redis_client
    app.state.http_client = http_client
    app.state.call_record_store = call_record_store
    app.state.correlator = CallRecordCorrelator(call_record_store, _build_archiver(settings, http_client))
    app.state.outcome_recorder = OutcomeRecorder(call_record_store, prospect_repository)
    app.state.calling_list_service = CallingListService(
        prospect_repository,
        CallingListGenerator.from_config(config, scorer),
        scorer,
    )
    app.state.outcome_catalog = outcome_catalog

    logger.info("RapidDial calling engine started successfully")

    yield  # Application is running

    # ========================
    # SHUTDOWN
    # ========================
    logger.info("Shutting down RapidDial calling engine...")

    await http_client.aclose()
    if redis_client is not None:
        await redis_client.aclose()
    engine.dispose()

    logger.info("RapidDial calling engine shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(
        title="RapidDial",
        description="Field-rep calling lists and call tracking",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        return {"message": "RapidDial API", "status": "running"}

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint.

        Returns database reachability and whether the outcome cache is on.
        """
        health = {"status": "healthy"}

        try:
            await asyncio.to_thread(ping, app.state.engine)
            health["database"] = "connected"
        except SQLAlchemyError as e:
            logger.error(f"Health check: database unreachable: {e}")
            health["status"] = "degraded"
            health["database"] = "unreachable"

        health["cache_enabled"] = app.state.outcome_catalog.cache_enabled
        return health

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
