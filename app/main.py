"""
FastAPI application entry point.
Configures routes, middleware, and lifecycle events.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import init_db, close_db
from app.errors import PersistenceError, ServiceError
from app.logging_config import configure_logging
from app.services.email_service import EmailService
from app.services.payment_gateway import get_payment_gateway

from app.api.artists import router as artists_router
from app.api.payments import router as payments_router
from app.api.registrations import router as registrations_router
from app.api.webhooks.razorpay import router as razorpay_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifecycle manager."""
    # Startup
    configure_logging()
    logging.info("Starting up...")

    await init_db()

    # Shared clients, injected into services per request
    app.state.payment_gateway = get_payment_gateway()
    app.state.email_service = EmailService(timeout=settings.gateway_timeout_seconds)

    yield

    # Shutdown
    await close_db()
    logging.info("Shutting down...")


app = FastAPI(
    title="Shashikala",
    description="Artist marketplace, event registrations and payments",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.debug,
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    logging.info(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logging.error(f"Database error: {exc}", exc_info=True)
    error = PersistenceError("Database operation failed")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logging.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal Server Error", "error": "internal_error"},
    )


# CORS middleware
origins = list(settings.cors_origins)
if settings.is_development:
    origins.append("*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "env": settings.app_env,
    }


app.include_router(registrations_router, prefix="/api", tags=["registrations"])
app.include_router(payments_router, prefix="/api", tags=["payments"])
app.include_router(artists_router, prefix="/api", tags=["artists"])

app.include_router(
    razorpay_router,
    prefix="/webhooks",
    tags=["webhooks"],
)
