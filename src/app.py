"""Main FastAPI application module.

This module initializes the FastAPI application, registers all route handlers
and renders every error response as ``{"error": <message>}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging_config import setup_logging
from config import (
    CORS_ALLOWED_ORIGINS,
    API_HOST,
    API_PORT,
)
from core.database import SessionLocal, init_db
from api.routes import (
    access_code,
    admin_students,
    auth,
    class_route,
    enrollment,
    stats,
    teachers,
)
from utils.user_manager import UserManager

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Class Access API",
    description="Backend API for teachers, classes, access codes and enrollment.",
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

# Register route handlers
app.include_router(auth.router)
app.include_router(teachers.router)
app.include_router(class_route.router)
app.include_router(access_code.router)
app.include_router(enrollment.router)
app.include_router(stats.router)
app.include_router(admin_students.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'][1:]) or 'body'}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": details},
    )


@app.on_event("startup")
def startup_tasks() -> None:
    """Create missing tables and seed the administrator account."""
    init_db()
    with SessionLocal() as db:
        UserManager(db).ensure_default_admin()
    logger.info("Database initialized")


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returns API information and documentation links.

    Returns:
        Dictionary with API information and documentation links.
    """
    return {
        "name": "Class Access API",
        "version": "1.0.0",
        "description": "Backend API for teachers, classes, access codes and enrollment.",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/api/health",
    }


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Class Access API on http://%s:%s", API_HOST, API_PORT)
    logger.info("API docs: http://%s:%s/docs", API_HOST, API_PORT)
    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
