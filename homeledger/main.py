"""FastAPI application and server entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from homeledger.api.errors import AppError, app_error_handler
from homeledger.api.limiter import limiter, rate_limit_handler
from homeledger.api.routes import auth, categories, debtors, expenses, payments, properties, reports
from homeledger.config import DEFAULT_SECRET_KEY, settings
from homeledger.services import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    # Startup: Initialize database tables
    init_db()
    logger.info("Database tables initialized")
    if settings.secret_key == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; tokens are signed with the default key")
    if settings.registration_enabled:
        logger.info("Self-service registration is enabled")
    yield
    # Shutdown
    logger.info("Application shutting down")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected failure and answer with a generic 500."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "internal_error", "message": "Server error"}},
    )


app = FastAPI(
    title=settings.api_title,
    description="Multi-tenant expense tracker: properties, expenses, reimbursements and reports",
    version=settings.api_version,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    """Add browser hardening headers to every response."""
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    return response


app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# Include routers
app.include_router(auth.router)
app.include_router(properties.router)
app.include_router(categories.router)
app.include_router(expenses.router)
app.include_router(debtors.router)
app.include_router(payments.router)
app.include_router(reports.router)


@app.get("/health")
@limiter.exempt
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


def main():
    """Run the API server with uvicorn."""
    import argparse

    import uvicorn
    from dotenv import load_dotenv

    from homeledger.services.logging import setup_server_logging

    parser = argparse.ArgumentParser(description="HomeLedger API server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=3000, help="Port to bind to")
    args = parser.parse_args()

    load_dotenv()
    setup_server_logging(log_file=settings.log_file, level_name=settings.log_level)

    logger.info("Starting Uvicorn server on %s:%d...", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
