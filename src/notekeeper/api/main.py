from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..errors import NotFoundError, TransportError, ValidationError
from .repositories import build_repository
from .routers import notes as notes_router
from .settings import Settings, get_settings
from .store import NoteStore
from .utils import configure_logging, error_body

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "notes",
        "description": "Create, list, search, update and delete notes.",
    },
]


def _validation_message(errors: List[Dict[str, Any]]) -> str:
    """
    Summarize pydantic errors as one line a user can read, e.g.
    'title must not be empty' or 'content: Field required'.
    """
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = loc[-1] if loc else ""
        msg = str(err.get("msg", "invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(msg if not field or msg.startswith(field) else f"{field}: {msg}")
    return "; ".join(parts) or "Request validation failed"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "message": "title must not be empty",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        errors = jsonable_encoder(exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_body("ValidationError", _validation_message(errors), errors),
        )

    @app.exception_handler(ValidationError)
    async def store_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content=error_body("ValidationError", str(exc)))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content=error_body("NotFoundError", str(exc)))

    @app.exception_handler(TransportError)
    async def transport_handler(request: Request, exc: TransportError) -> JSONResponse:
        # Details stay in the server log
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content=error_body("ServerError", "Internal server error"))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("HTTPError", message, exc.detail),
            headers=getattr(exc, "headers", None),
        )


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[NoteStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit settings; read from the environment when omitted.
        store: A ready NoteStore. When omitted, one is built from settings
            on start-up and closed on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = getattr(app.state, "note_store", None) is None
        if owned:
            app.state.note_store = NoteStore(build_repository(settings))
        logger.info("Notes API started with %s backend", app.state.note_store.backend)
        try:
            yield
        finally:
            if owned:
                app.state.note_store.close()
                app.state.note_store = None

    app = FastAPI(
        title="Notes Backend",
        description="Backend API service for a personal note-taking app.",
        version=__version__,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.note_store = store

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the active backend.
        """
        store = request.app.state.note_store
        return {"message": "Healthy", "backend": store.backend if store else settings.persistence_backend}

    app.include_router(notes_router.router)
    return app


app = create_app()
