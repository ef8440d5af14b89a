# src/postboard/main.py
"""Main entry point for the Postboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from postboard.api import posts_router
from postboard.core.errors import ErrorKind, PostboardError
from postboard.core.logging import configure_logging
from postboard.core.settings import settings
from postboard.gql import build_graphql_router

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.MAPPING_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.STORAGE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Blog posts with comments, reactions, media and tags over REST and GraphQL",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(posts_router, prefix="/api")
app.include_router(build_graphql_router(), prefix=settings.graphql_path)


@app.exception_handler(PostboardError)
async def postboard_error_handler(request: Request, exc: PostboardError) -> JSONResponse:
    """Translate the error taxonomy to HTTP status codes."""
    status_code = ERROR_STATUS[exc.kind]
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.kind.name},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "rest": "/api/posts",
        "graphql": settings.graphql_path,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("postboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
