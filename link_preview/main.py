"""FastAPI application entry point for link-preview.

Configures logging, the shared HTTP client lifecycle, exception handling,
and routes.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from link_preview.core.config import settings
from link_preview.routes import health
from link_preview.routes.content import router as content_router
from link_preview.version import resolve_package_version

# ---------------------------------------------------------------------------
# Logging Configuration
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=settings.get_log_level_int(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup / shutdown lifecycle."""
    # --- Startup ---
    logger.info(
        "Starting link-preview (env=%s, port=%d)",
        settings.service_env,
        settings.port,
    )
    if settings.firecrawl_api_key:
        logger.info("Firecrawl fallback enabled (%s)", settings.firecrawl_base_url)
    else:
        logger.warning("FIRECRAWL_API_KEY not set; scraping fallback disabled")
    if not settings.apify_api_token:
        logger.info("APIFY_API_TOKEN not set; apify transcripts unavailable")

    app.state.http_client = httpx.AsyncClient(follow_redirects=True)

    yield

    # --- Shutdown ---
    await app.state.http_client.aclose()
    logger.info("Shutting down link-preview")


# ---------------------------------------------------------------------------
# App instance
# ---------------------------------------------------------------------------

app = FastAPI(
    title="link-preview API",
    version=resolve_package_version(),
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log every request with method, path, status, and duration."""
    start = time.monotonic()
    response = await call_next(request)
    duration_ms = (time.monotonic() - start) * 1000
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler that returns a structured JSON error."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
            }
        },
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

app.include_router(health.router)
app.include_router(content_router)


def run() -> None:
    """Serve the API with uvicorn using configured host and port."""
    import uvicorn

    uvicorn.run(
        "link_preview.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
