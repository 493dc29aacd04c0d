"""
Sales Channels - Backend API
Sales channel management for the commerce backend
"""
import asyncio
import logging
import time
from contextlib import asynccontextmanager, suppress
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from sales_channels.api import sales_channels
from sales_channels.core.config import settings
from sales_channels.core.container import ServiceContainer
from sales_channels.core.database import Base, SessionLocal, check_database_connection, engine
from sales_channels.core.errors import DatabaseError, DomainError
from sales_channels.core.exception_formatter import format_exception

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# HTTP status per DomainError.code
ERROR_STATUS_CODES = {
    "not_found": 404,
    "invalid_data": 400,
    "duplicate_error": 422,
    "conflict": 409,
    "database_error": 500,
    "unexpected_state": 500,
}


async def poll_staged_jobs(container: ServiceContainer, interval: float, batch_size: int):
    """Deliver committed events every `interval` seconds until cancelled"""
    while True:
        try:
            await run_in_threadpool(container.event_bus_service.dispatch_staged_jobs, batch_size)
        except Exception as e:
            logger.error(f"Staged event dispatch failed: {e}")
        await asyncio.sleep(interval)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ServiceContainer = app.state.container

    if settings.DATABASE_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)

    await run_in_threadpool(container.bootstrap, settings.FEATURE_SALES_CHANNELS)

    poller = None
    if settings.EVENT_POLL_INTERVAL > 0:
        poller = asyncio.create_task(
            poll_staged_jobs(container, settings.EVENT_POLL_INTERVAL, settings.EVENT_BATCH_SIZE)
        )

    yield

    if poller:
        poller.cancel()
        with suppress(asyncio.CancelledError):
            await poller


# Create FastAPI application
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    lifespan=lifespan,
)
app.state.container = ServiceContainer(SessionLocal)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


# Error handlers
@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    status_code = ERROR_STATUS_CODES.get(exc.code, 500)
    return JSONResponse(status_code=status_code, content={"type": exc.code, "message": exc.message})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    formatted = format_exception(exc)
    if not isinstance(formatted, DomainError):
        logger.error(f"Unhandled integrity error on {request.url.path}: {exc}")
        formatted = DatabaseError("Database error")

    return await domain_error_handler(request, formatted)


@app.exception_handler(NotImplementedError)
async def not_implemented_handler(request: Request, exc: NotImplementedError):
    return JSONResponse(status_code=501, content={"type": "not_implemented", "message": str(exc)})


# Include API routers
if settings.FEATURE_SALES_CHANNELS:
    app.include_router(sales_channels.router, prefix="/admin/sales-channels", tags=["Sales Channels"])


@app.get("/")
async def root():
    """Root endpoint - API status"""
    return {
        "message": settings.API_TITLE,
        "status": "online",
        "version": settings.API_VERSION,
    }


@app.get("/health")
def health():
    """Health check endpoint for monitoring - tests database connectivity"""
    start_time = time.time()

    database = check_database_connection()

    return {
        "status": "healthy" if database["status"] == "connected" else "degraded",
        "service": "sales-channels-api",
        "version": settings.API_VERSION,
        "database": database,
        "total_latency_ms": round((time.time() - start_time) * 1000, 2),
    }
