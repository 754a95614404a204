"""
API Backend - Main Application
Personal Expense Tracker: users, expenses and monthly budget summaries
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import Database
from .exceptions import ApiError
from .formatters import format_iso
from .routers import users, expenses, summary

API_VERSION = "1.0.0"


def configure_logging(level: str = "INFO"):
    """Configure structlog for JSON output at the given level"""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        )
    )


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings: Settings = app.state.settings
    logger.info("Starting Expense Tracker API", environment=settings.ENVIRONMENT)

    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    await database.init()
    app.state.database = database

    logger.info("Expense Tracker API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Expense Tracker API")
    await database.close()


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Readable one-line summary of request parsing failures"""
    parts = []
    for error in exc.errors():
        location = [str(p) for p in error.get("loc", ()) if p != "body"]
        field = ".".join(location)
        parts.append(f"{field}: {error.get('msg')}" if field else error.get("msg", ""))
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"


def register_exception_handlers(app: FastAPI):
    """Map the error taxonomy onto the response envelope"""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.info("Request rejected",
                    path=request.url.path,
                    method=request.method,
                    status=exc.status_code,
                    error=exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, _describe_validation_error(exc))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("Integrity error", path=request.url.path, method=request.method)
        return _error_response(409, "Duplicate entry")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error_response(404, "Route not found")
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception",
                     path=request.url.path,
                     method=request.method,
                     error=str(exc))
        return _error_response(500, "Internal server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The database is created in the lifespan from ``settings.DATABASE_URL``;
    tests override the ``get_db`` dependency instead.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Personal Expense Tracker API",
        description="Users with a monthly budget, their expenses and a monthly spending summary.",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.DEBUG else settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(expenses.router)
    app.include_router(summary.router, prefix="/api/summary", tags=["Summary"])

    @app.get("/")
    async def root():
        """Root endpoint with API info"""
        return {
            "success": True,
            "message": "Welcome to Personal Expense Tracker API",
            "version": API_VERSION,
            "endpoints": {
                "health": "/health",
                "users": "/api/users",
                "expenses": "/api/expenses",
                "summary": "/api/summary/:userId"
            }
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "success": True,
            "message": "API is running",
            "timestamp": format_iso()
        }

    return app


app = create_app()
