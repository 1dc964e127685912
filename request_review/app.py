"""
Registration Review Service Application.

FastAPI application factory:
- builds the shared backend client, EventBus and controller
- loads pending requests once at startup
- mounts the review page, JSON API and admin feeds
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .controller import RegisterRequestsController
from .event_bus import EventBus
from .exceptions import ReviewError
from .notifications import NotificationPanel
from .utils.http_client import BackendClient
from .utils.log_collector import application_log_collector

logger = logging.getLogger(__name__)

SERVICE_NAME = "Registration Review"
SERVICE_VERSION = "1.0.0"


def _attach_log_collector() -> None:
    root_logger = logging.getLogger()
    if application_log_collector not in root_logger.handlers:
        root_logger.addHandler(application_log_collector)


def create_app(settings: Optional[Settings] = None, client: Optional[BackendClient] = None) -> FastAPI:
    """
    Create and configure the review FastAPI application.

    Args:
        settings: service settings, read from the environment when omitted
        client: backend client; built from ``settings`` when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings()
    if client is None:
        client = BackendClient(
            settings.api_base_url,
            auth_token=settings.auth_token,
            timeout=settings.timeout,
            verify=settings.verify_ssl,
        )
    _attach_log_collector()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup: build controller and load requests. Shutdown: close the client."""
        logger.info("🚀 Starting registration review service...")
        event_bus = EventBus()
        panel = NotificationPanel()
        await panel.attach(event_bus)
        controller = RegisterRequestsController(client, event_bus)
        app.state.event_bus = event_bus
        app.state.notification_panel = panel
        app.state.controller = controller

        if settings.load_on_startup:
            try:
                await controller.load()
            except ReviewError as e:
                # Сервис стартует с пустым списком, ошибка видна в уведомлениях
                logger.error(f"❌ Initial load of registration requests failed: {e.detail}")

        logger.info("✅ Registration review service ready")
        try:
            yield
        finally:
            logger.info("🔻 Shutting down registration review service...")
            await panel.detach(event_bus)
            await client.aclose()

    app = FastAPI(
        title=SERVICE_NAME,
        version=SERVICE_VERSION,
        description="Review pending registration requests",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )
    app.state.settings = settings

    # ============= CORS Configuration =============
    allow_origins = settings.allow_origins
    allow_credentials = not (len(allow_origins) == 1 and allow_origins[0] == "*")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    # ============= Error Handling =============

    @app.exception_handler(ReviewError)
    async def review_error_handler(request: Request, exc: ReviewError):
        return JSONResponse({
            "status": "error",
            "message": exc.detail
        }, status_code=exc.status_code)

    # ============= Basic Routes =============

    @app.get("/")
    async def root():
        """Root endpoint with basic info."""
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "status": "running",
            "endpoints": {
                "review_page": "/admin/register-requests",
                "api_docs": "/api/docs",
                "health": "/health"
            }
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        controller = getattr(app.state, "controller", None)
        return {
            "status": "healthy",
            "backend": settings.api_base_url,
            "pending_requests": len(controller.requests) if controller is not None else 0
        }

    # ============= Mount Routers =============
    from .routes import admin, register_requests

    app.include_router(register_requests.router, tags=["register-requests"])
    app.include_router(admin.router, prefix="/api", tags=["admin"])
    logger.info("✅ Routes mounted")

    return app
