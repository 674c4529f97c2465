"""Development backend for the job-board client.

Serves the job and user endpoints the client talks to, backed by an
in-memory store, so the client can be exercised end to end without the
hosted deployment. Run with::

    uvicorn jobboard.app.main:app --port 4000
"""
import os
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.core.config import ServerSettings
from jobboard.core.logging import setup_logging

from .database import InMemoryDatabase
from .dependencies import validation_message
from .routers import jobs, users

# Load environment variables
load_dotenv()

logger = setup_logging('api')


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def create_app(settings: Optional[ServerSettings] = None, db: Optional[InMemoryDatabase] = None) -> FastAPI:
    """Build the application with its own settings and empty store.

    Args:
        settings: Server settings, read from the environment when omitted
        db: Backing store, a fresh in-memory database when omitted

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Job Board API",
        description="Job postings and user accounts for the job-board client.",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )
    app.state.settings = settings if settings is not None else ServerSettings.from_env()
    app.state.db = db if db is not None else InMemoryDatabase()

    # Configure CORS; credentials are needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:5173").split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(jobs.router)
    app.include_router(users.router)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            path = request.url.path
            if request.url.query:
                path = f"{path}?{request.url.query}"
            message = f"Route {path} not found"
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {message}")
        return _error_response(exc.status_code, str(message))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error_response(status.HTTP_400_BAD_REQUEST, validation_message(exc.errors()[0]))

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "OK",
            "message": "Server is running successfully",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "port": app.state.settings.port,
        }

    @app.get("/api/status")
    async def api_status():
        return {
            "message": "API is working",
            "endpoints": {
                "user": "/api/v1/user",
                "job": "/api/v1/job",
            },
        }

    logger.info("Application created")
    return app


app = create_app()
