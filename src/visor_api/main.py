from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .dependencies import get_service
from .errors import StorageError, VisorError
from .events import ChangeNotifier
from .queries import status_summary
from .routers import log as log_router
from .routers import projects as projects_router
from .routers import tasks as tasks_router
from .schemas import StatusSummary
from .service import DocumentService
from .settings import Settings, get_settings
from .store import get_store

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"

openapi_tags = [
    {"name": "status", "description": "Document summary counts."},
    {"name": "projects", "description": "List and create projects."},
    {
        "name": "tasks",
        "description": "Create, filter, complete and archive tasks.",
    },
    {"name": "log", "description": "Append-only log entries."},
]


def _cors_headers(request: Request, allow_origins: List[str]) -> Dict[str, str]:
    headers = {
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
    }
    if "*" in allow_origins:
        headers["Access-Control-Allow-Origin"] = "*"
    else:
        origin = request.headers.get("origin")
        if origin in allow_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
    return headers


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(VisorError)
    async def visor_error_handler(request: Request, exc: VisorError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, "failed to save document")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and known paths with the wrong method are both "not found".
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error(status.HTTP_404_NOT_FOUND, "not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, "invalid request")


# PUBLIC_INTERFACE
def create_app(
    service: Optional[DocumentService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        service: document access for the handlers; defaults to the JSON file
            store at the configured data path with a fresh ChangeNotifier.
        settings: defaults to get_settings().
    """
    settings = settings or get_settings()
    if service is None:
        service = DocumentService(get_store(settings), ChangeNotifier())

    app = FastAPI(
        title="Visor API",
        description="Local task and log API over the Visor JSON document.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.service = service

    allow_origins = settings.cors_allow_origins

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        """Answer preflight requests and stamp CORS headers on every response."""
        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_204_NO_CONTENT)
        else:
            response = await call_next(request)
        response.headers.update(_cors_headers(request, allow_origins))
        return response

    # Unhandled errors are answered outside the middleware stack above, so the CORS headers go on here.
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s %s failed", request.method, request.url.path)
        response = _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal error")
        response.headers.update(_cors_headers(request, allow_origins))
        return response

    _install_exception_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/api/status", response_model=StatusSummary, summary="Status Summary", tags=["status"])
    def get_status(svc: DocumentService = Depends(get_service)) -> StatusSummary:
        """
        Counts of tasks, projects and pending tasks.
        """
        return StatusSummary(**status_summary(svc.read()))

    app.include_router(projects_router.router)
    app.include_router(tasks_router.router)
    app.include_router(log_router.router)
    return app


app = create_app()
