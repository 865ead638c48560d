"""
Expense Tracker - Main Application Entry Point
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from app.api import expenses
from app.config import settings
from app.core.middleware import (
    CORRELATION_ID_HEADER,
    CorrelationIdFilter,
    correlation_id_middleware,
    request_logging_middleware,
)
from app.db import init_db, close_db
from app.domain.clock import to_iso, utc_now
from app.domain.errors import DomainError, NotFoundError, ValidationError, ValidationErrors
from app.version import __version__
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s'
)

# Add filter to all handlers so the format always has a correlation_id
for handler in logging.root.handlers:
    handler.addFilter(CorrelationIdFilter())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown"""
    # Startup
    logger.info("🚀 Starting Expense Tracker")
    logger.info(f"📦 Version: {__version__}")
    logger.info(f"📝 Environment: {settings.environment}")

    await init_db()

    logger.info("✅ Configuration loaded successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await close_db()


app = FastAPI(
    title="Expense Tracker API",
    description="Record, list, update and delete personal expenses",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)


# ============================================
# CORS Middleware Configuration
# ============================================
# Set CORS_ORIGINS env var as comma-separated list: "https://example.com,https://www.example.com"

allowed_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
if not settings.is_production:
    allowed_origins += ["http://localhost:8000", "http://127.0.0.1:8000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[CORRELATION_ID_HEADER],
)

# Last added runs first: correlation ID is set before the request is logged
app.middleware("http")(request_logging_middleware)
app.middleware("http")(correlation_id_middleware)


# ============================================
# Exception handlers
# ============================================

def _validation_response(details: list) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": details}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map pydantic validation errors to the same 400 shape as domain validation"""
    logger.warning(f"Validation error for {request.method} {request.url.path}: {exc.errors()}")

    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        details.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return _validation_response(details)


@app.exception_handler(ValidationErrors)
async def validation_errors_handler(request: Request, exc: ValidationErrors):
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {exc}")
    return _validation_response(exc.to_json())


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {exc}")
    return _validation_response([exc.to_json()])


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info(f"Not found for {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Resource not found", "details": exc.to_json()}
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.warning(f"Domain error for {request.method} {request.url.path}: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Bad request", "details": exc.to_json()}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error for {request.method} {request.url.path}: {exc}", exc_info=exc)
    message = "An unexpected error occurred" if settings.is_production else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": message}
    )


# Register expense routes
app.include_router(expenses.router, prefix="/api/v1", tags=["expenses"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "app": "Expense Tracker API",
        "version": __version__,
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Liveness check - returns status and timestamp."""
    return {
        "status": "ok",
        "timestamp": to_iso(utc_now()),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
