import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from capybara_api.core.config import Settings, get_settings
from capybara_api.core.log import configure_logging
from capybara_api.repositories import CapybaraRepository, build_repository
from capybara_api.routers import capybaras as capybaras_router
from capybara_api.services.capybara_service import CapybaraService

logger = logging.getLogger(__name__)

API_TITLE = "Capybara API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "A simple CRUD API for capybaras"
DOCS_PATHS = ("/", "/api-docs")


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Abandon requests that exceed the configured budget with a 500."""

    def __init__(self, app, *, timeout_seconds: float) -> None:
        super().__init__(app)
        self._timeout = timeout_seconds

    async def dispatch(self, request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.error("Request timed out after %.1fs: %s %s", self._timeout, request.method, request.url.path)
            return JSONResponse({"error": "Request timed out"}, status_code=500)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[CapybaraRepository] = None,
) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``uvicorn --factory``)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    repository = repository if repository is not None else build_repository(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Capybara API starting with %s storage", type(repository).__name__)
        yield
        repository.close()

    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        description=API_DESCRIPTION,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository
    app.state.capybara_service = CapybaraService(repository)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    if settings.request_timeout_seconds > 0:
        app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(capybaras_router.router)
    capybaras_router.register_error_handlers(app)

    def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(openapi_url=app.openapi_url, title=f"{API_TITLE} - Swagger UI")

    for path in DOCS_PATHS:
        app.add_api_route(path, swagger_ui, methods=["GET"], include_in_schema=False)

    return app
