"""
FastAPI Application - Heatmap Pro Quote API

Serves the cached quote heatmap for Brazilian equities, real-estate funds,
US ETFs, the SELIC rate, USD/BRL and BTC/BRL.

The background RefreshScheduler keeps the cache current; every request is
answered straight from the cache without waiting on upstream sources.

Usage:
    uvicorn app.main:app --host 0.0.0.0 --port 3000

Docs:
    - Swagger: http://localhost:3000/docs
    - ReDoc: http://localhost:3000/redoc
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, settings as default_settings, validate_configuration
from core.logging import logger
from core.schemas import HeatmapResponse
from core.universe import build_universe
from services.heatmap import HeatmapAggregator
from services.refresh_scheduler import RefreshScheduler
from sources import BcbClient, BrapiClient, GoogleFinanceClient
from storage.quote_cache import QuoteCache


APP_TITLE = "Heatmap Pro Quote API"
APP_VERSION = "1.0.0"


# ============================================
# Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the refresh scheduler on startup and stop it on shutdown."""
    logger.info("=== Application Starting ===")
    try:
        await app.state.scheduler.start()
        logger.info("=== Started Successfully ===")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    yield

    logger.info("=== Shutting Down ===")
    try:
        await app.state.scheduler.stop()
        logger.info("=== Shutdown Complete ===")
    except Exception as e:
        logger.error(f"Shutdown error: {e}")


# ============================================
# Application Factory
# ============================================

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application and its services.

    Configuration is validated before any service is built. The universe,
    cache, aggregator and scheduler are created once here and shared
    through ``app.state``; the scheduler writes the cache and the request
    handlers read it through the aggregator.
    """
    if config is None:
        config = default_settings

    validate_configuration(config)
    universe = build_universe(config)
    cache = QuoteCache(universe)
    scheduler = RefreshScheduler(
        cache,
        universe,
        quote_page=GoogleFinanceClient(
            base_url=config.quote_page_base_url,
            language=config.quote_page_language,
            timeout=config.request_timeout,
        ),
        previous_close=BrapiClient(
            base_url=config.quotes_api_base_url,
            token=config.brapi_token,
            timeout=config.request_timeout,
        ),
        policy_rate=BcbClient(url=config.policy_rate_url, timeout=config.request_timeout),
        interval_seconds=config.refresh_interval_seconds,
        pacing=config.pacing_bounds,
        pair_min_age_seconds=config.pair_refresh_min_age_seconds,
        clamp_percent=config.change_clamp_percent,
    )

    app = FastAPI(
        title=APP_TITLE,
        description=(
            "Cached price / change heatmap for a fixed set of instruments.\n\n"
            "## REST Endpoints\n"
            "- `GET /api/heatmap` - Grouped, sorted heatmap snapshot\n"
            "- `GET /health` - Scheduler status\n"
        ),
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = config
    app.state.universe = universe
    app.state.cache = cache
    app.state.aggregator = HeatmapAggregator(cache, universe)
    app.state.scheduler = scheduler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"]
    )

    _register_routes(app)
    return app


# ============================================
# Routes
# ============================================

def _register_routes(app: FastAPI) -> None:

    @app.get("/", tags=["System"])
    async def root():
        """API information."""
        return {
            "name": APP_TITLE,
            "version": APP_VERSION,
            "status": "operational",
            "docs": "/docs",
            "instruments": len(app.state.universe),
        }

    @app.get("/health", tags=["System"])
    async def health_check():
        """Scheduler status and timing of the last refresh pass."""
        scheduler: RefreshScheduler = app.state.scheduler
        return {
            "status": "healthy" if scheduler.is_running else "idle",
            "scheduler_running": scheduler.is_running,
            "refreshing": scheduler.is_refreshing,
            "runs": scheduler.run_count,
            "last_run_started": scheduler.last_run_started,
            "last_run_finished": scheduler.last_run_finished,
            "last_run_refreshed": scheduler.last_run_refreshed,
        }

    @app.get("/api/heatmap", response_model=HeatmapResponse, tags=["Heatmap"])
    async def get_heatmap():
        """Current heatmap: one group per category, sorted by change percent descending."""
        return app.state.aggregator.response()

    @app.exception_handler(404)
    async def not_found_handler(request, exc):
        """Handle 404 errors."""
        return JSONResponse(status_code=404, content={"detail": "Not found", "path": str(request.url)})

    @app.exception_handler(500)
    async def internal_error_handler(request, exc):
        """Handle 500 errors."""
        logger.error(f"Internal error: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app = create_app()
