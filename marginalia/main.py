"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount router with anchoring/comment endpoints under /v1 prefix
  - Expose health check and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - routes.router: Business endpoints (anchors, texts, comments)

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - No real authentication (caller identity is the X-User-Id header)

Notes:
  - Last added middleware runs first: CORS → RequestContext → routes
  - /v1 prefix allows API versioning
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics

Run:
  uvicorn marginalia.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .exception_handlers import register_exception_handlers
from .logger import logger
from .metrics import get_metrics_response
from .middleware import RequestContextMiddleware
from .routes import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and applies log level."""
    # This will raise ValidationError if env vars are invalid
    settings = get_settings()
    logger.setLevel(getattr(logging, settings.log_level))

    logger.info(
        "Marginalia API starting up",
        extra={
            "anchor_context_length": settings.anchor_context_length,
            "anchor_snippet_length": settings.anchor_snippet_length,
            "match_timeout_seconds": settings.match_timeout_seconds,
            "fuzzy_matching_enabled": settings.fuzzy_matching_enabled,
        },
    )
    yield
    logger.info("Marginalia API shutting down")


# R: Create FastAPI application instance with API metadata
app = FastAPI(
    title="Marginalia API",
    version=__version__,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "anchors",
            "description": "Text anchors: create, resolve selections, re-locate",
        },
        {"name": "texts", "description": "Readable works comments attach to"},
        {"name": "comments", "description": "Anchored reader comments"},
    ],
)

# R: Add request context middleware
app.add_middleware(RequestContextMiddleware)

# R: Configure CORS with secure defaults
_cors_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_settings.get_allowed_origins_list(),
    allow_credentials=_cors_settings.cors_allow_credentials,  # R: Secure default: False
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-User-Id", "X-Request-Id"],
)

# R: Register API routes under /v1 prefix for versioning
app.include_router(router, prefix="/v1")

# R: Register exception handlers for structured error responses
register_exception_handlers(app)


@app.get("/healthz")
def healthz():
    """R: Liveness probe (the engine is stateless, nothing to check)."""
    return {"ok": True}


@app.get("/metrics")
def metrics():
    """
    R: Expose Prometheus metrics.

    Returns:
        Prometheus text format metrics
    """
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
