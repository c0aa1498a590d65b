"""
Tasky - main application module.
"""
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, get_settings
from .core.database import Store
from .routers import probes, tasks, users

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def create_app(store: Optional[Store] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the Tasky application.

    Args:
        store: Store to serve from. When omitted, one is connected on startup.
        settings: Settings to use, defaults to the process-wide instance

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Tasky API",
        description="Task management REST API backed by MongoDB",
        version=settings.service_version
    )
    app.state.store = store
    app.state.owns_store = store is None
    app.dependency_overrides[get_settings] = lambda: settings

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log every request with its status and timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Process-Time"] = str(process_time)
        logger.info(
            f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)"
        )
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are client errors"""
        message = _format_validation_errors(exc)
        logger.error(f"Error parsing request body: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions"""
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(exc) if settings.debug else "Internal server error"}
        )

    @app.on_event("startup")
    async def startup_event():
        """Connect to MongoDB before serving traffic"""
        logger.info("Starting Tasky...")
        if app.state.store is None:
            app.state.store = Store.connect(settings)
            if settings.mongo_init_collections:
                app.state.store.init_collections()
        logger.info("Tasky startup completed")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down Tasky...")
        if app.state.owns_store and app.state.store is not None:
            app.state.store.close()
            app.state.store = None
        logger.info("Tasky shutdown completed")

    app.include_router(probes.root_router, tags=["probes"])
    app.include_router(probes.router, prefix=settings.api_prefix, tags=["probes"])
    app.include_router(users.router, prefix=settings.api_prefix + "/users", tags=["users"])
    app.include_router(tasks.router, prefix=settings.api_prefix + "/tasks", tags=["tasks"])

    return app


app = create_app()
