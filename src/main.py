# src/main.py
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging
import uvicorn as uv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware
from core.config import settings
from core.identity import IdentityProvider
from db.document_store import DocumentStore
from schemas.response_schemas import HealthStatus
from utils.exception_handler import setup_exception_handlers
from utils.logger import setup_logger
from utils.rate_limiter import limiter
from routes import (
    users_router,
    patients_router,
    admissions_router,
    treatment_logs_router,
    billings_router,
    inventory_router,
    diet_plans_router,
    staff_router,
    affiliate_tracking_router,
    affiliate_accounts_router,
    activity_logs_router,
    dashboard_router,
)

# Quiet noisy third-party loggers
for log in ["watchfiles", "uvicorn.error", "uvicorn.access", "uvicorn.asgi"]:
    logging.getLogger(log).setLevel(logging.WARNING)

logger = setup_logger("SERVER")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the store and identity clients once and share them through app.state"""
    logger.info("Starting Practice Management API...")

    store = DocumentStore(settings.DATABASE_URL, echo=settings.DEBUG)
    try:
        await store.create_collections()
        if await store.ping():
            logger.info("Document store connection verified")
        else:
            logger.warning("Document store did not answer the startup ping")

        app.state.store = store
        app.state.identity = IdentityProvider.from_settings()

        logger.info("Application startup complete")
        yield

    except Exception as e:
        logger.error(f"Startup failed: {str(e)}")
        raise
    finally:
        logger.info("Closing document store")
        await store.close()
        logger.info("Shutting down application...")


app = FastAPI(
    title="Practice Management API",
    description="Role-scoped document API for clinics, hospitals and affiliates",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
)

# Rate limiting configuration
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Exception handling
setup_exception_handlers(app)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining"],
)

for router in (
    users_router,
    patients_router,
    admissions_router,
    treatment_logs_router,
    billings_router,
    inventory_router,
    diet_plans_router,
    staff_router,
    affiliate_tracking_router,
    affiliate_accounts_router,
    activity_logs_router,
    dashboard_router,
):
    app.include_router(router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    return {"name": app.title, "version": app.version, "status": "healthy"}


@app.get(f"{settings.API_PREFIX}/health", response_model=HealthStatus)
async def health_check():
    """Reports whether the document store answers a ping"""
    store = getattr(app.state, "store", None)
    store_healthy = store is not None and await store.ping()
    return HealthStatus(
        status="healthy" if store_healthy else "degraded",
        store="connected" if store_healthy else "disconnected",
        environment=settings.ENVIRONMENT,
    )


if __name__ == "__main__":
    source_root = os.path.dirname(os.path.abspath(__file__))
    watch_dirs = [
        os.path.join(source_root, package)
        for package in ("core", "db", "models", "routes", "schemas", "services", "utils")
    ]

    uv.run(
        "main:app",
        host=settings.UVICORN_HOST,
        port=settings.UVICORN_PORT,
        reload=settings.RELOAD,
        reload_dirs=watch_dirs,
        workers=1 if settings.RELOAD else settings.WORKERS_COUNT,
        log_level=settings.LOG_LEVEL.lower(),
    )
