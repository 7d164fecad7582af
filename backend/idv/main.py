"""
IDV Client Registration — FastAPI Application Entry Point

Aggregates all routers, configures middleware, serves the optional static
frontend, and initializes (and optionally seeds) the database on startup.
"""
import logging
import time
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from idv.config import get_settings
from idv.database import SessionLocal, init_db
from idv.logging_config import configure_logging
from idv.routes import (
    auth_router, verification_router, clients_router, products_router,
    reports_router, dashboard_router,
)
from idv.schemas.schemas import HealthResponse
from idv.seed import seed_database

settings = get_settings()
logger = logging.getLogger(__name__)

# ─── Application Instance ───────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Identity verification and client registration API. "
        "Searches mock national registries, tax, telecom, banking and pension "
        "sources in priority order, then registers verified clients for insurance products."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# ─── Startup ─────────────────────────────────────────────────────────
BOOT_TIME = time.time()


@app.on_event("startup")
def on_startup():
    """Configure logging, create tables and seed demo data."""
    configure_logging()
    init_db()

    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()

    logger.info(
        "\n%s\n  %s v%s\n  TIME: %s\n  DATABASE: %s\n  LATENCY SIMULATION: %s\n  DEBUG: %s\n%s",
        "=" * 60,
        settings.APP_NAME, settings.APP_VERSION,
        datetime.now().isoformat(),
        settings.DATABASE_URL,
        "on" if settings.SIMULATE_LATENCY else "off",
        settings.DEBUG,
        "=" * 60,
    )


# ─── Middleware ──────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with timing."""
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 1)

    if request.url.path.startswith("/api"):
        logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration)

    return response


# ─── API Routers ─────────────────────────────────────────────────────
app.include_router(auth_router)
app.include_router(verification_router)
app.include_router(clients_router)
app.include_router(products_router)
app.include_router(reports_router)
app.include_router(dashboard_router)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def deep_health():
    """Health check including database connectivity."""
    db_ok = False
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError as e:
        logger.error("Health check database query failed: %s", e)
    finally:
        db.close()

    return HealthResponse(
        status="healthy" if db_ok else "degraded",
        database="connected" if db_ok else "disconnected",
        version=settings.APP_VERSION,
        uptime_seconds=round(time.time() - BOOT_TIME, 1),
    )


# ─── Serve Frontend (Static Files) ──────────────────────────────────
FRONTEND_DIR = Path(__file__).resolve().parent.parent.parent / "frontend"

if FRONTEND_DIR.exists():
    # API routers are included above, so they take precedence over the mount.
    app.mount("/", StaticFiles(directory=str(FRONTEND_DIR), html=True), name="frontend")
