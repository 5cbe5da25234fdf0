"""Main FastAPI application module.

This module initializes the FastAPI application, maps application errors to
JSON responses and registers all route handlers.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging_config import setup_logging
from config import (
    API_HOST,
    API_PORT,
    API_PREFIX,
    CORS_ALLOWED_ORIGINS,
)
from core.exceptions import ForumError, ValidationError
from api.routes import auth, comments, discussions, protected, users
from utils.validation import format_issues

# Setup logging
setup_logging()

logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Discussion Forum API",
    description="Backend API for discussions and comments with role-based access.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error: str, message) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message},
    )


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    return _error_response(exc.status_code, exc.error, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ValidationError.error,
        format_issues(exc.errors()),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Only the router raises these: no route matched the path or the method
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return _error_response(
            status.HTTP_404_NOT_FOUND,
            "Not Found",
            f"Route {request.method} {request.url.path} does not exist",
        )
    return _error_response(exc.status_code, str(exc.detail), str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        "Internal server error",
    )


# Register route handlers
app.include_router(auth.router)
app.include_router(protected.router)
app.include_router(users.router)
app.include_router(discussions.router)
app.include_router(comments.router)


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returns API information and documentation links.

    Returns:
        Dictionary with API information and documentation links.
    """
    return {
        "name": "Discussion Forum API",
        "version": "1.0.0",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": f"{API_PREFIX}/health",
    }


@app.get(f"{API_PREFIX}/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Discussion Forum API on http://%s:%s", API_HOST, API_PORT)
    logger.info("API docs: http://%s:%s/docs", API_HOST, API_PORT)

    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
