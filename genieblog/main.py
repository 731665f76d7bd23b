"""
SuiteGenie Blog API

Serves the blog's published posts: listings, search, rendered post bodies,
tables of contents and the blog sitemap.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from genieblog.config import get_settings
from genieblog.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from genieblog.routers import blog
from genieblog.services.content_store import check_content_directory, get_blog_content

logger = logging.getLogger(__name__)

settings = get_settings()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: warm the content cache on startup."""
    content = await get_blog_content()
    logger.info("Blog API ready with %d published posts", len(content.posts))
    yield


app = FastAPI(
    title="SuiteGenie Blog API",
    description="Blog listings, search and rendered post content for suitegenie.in",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Request ID (added last, so it is the outermost middleware)
app.add_middleware(RequestIDMiddleware)

# Routers
app.include_router(blog.router, prefix="/api")


def _run_health_checks() -> dict[str, Any]:
    """Run all health checks, returning the full response body."""
    checks = {"content": "ok" if check_content_directory() else "fail"}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded, failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    return {
        "status": overall,
        "service": "genieblog-api",
        "version": VERSION,
        "checks": checks,
    }


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check verifying the content source is readable."""
    return JSONResponse(content=_run_health_checks(), status_code=200)
