import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import config
from app.api.notes import router as notes_router
from app.exceptions import NotFoundError, ValidationError
from app.models.notes import ErrorEnvelope
from app.services.notes_service import NoteService
from app.storage.notes_store import NotesStore

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _error(
    status_code: int,
    message: str,
    errors: Optional[list[str]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorEnvelope(message=message, errors=errors).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("%s %s rejected: %s", request.method, request.url.path, "; ".join(exc.messages))
        return _error(400, exc.message, exc.messages)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    # malformed JSON bodies are a client error like any other failed rule
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        messages = [str(e.get("msg", "Invalid request")) for e in exc.errors()]
        logger.warning("%s %s rejected: %s", request.method, request.url.path, "; ".join(messages))
        return _error(400, "Validation failed", messages)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(data_dir: Optional[Path] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        base_dir = data_dir if data_dir is not None else config.data_dir()
        store = NotesStore(base_dir, config.notes_file_name())
        app.state.note_service = NoteService(store)
        logger.info(
            "Notes API ready: %d notes loaded from %s",
            len(app.state.note_service.list_notes()),
            store.path,
        )
        yield
        logger.info("Notes API shutting down")

    app = FastAPI(
        title="Simple Notes API",
        description="CRUD API for short text notes stored in a single JSON file.",
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Service health."},
            {"name": "notes", "description": "Create, view, edit, and delete notes."},
        ],
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "success", "data": {"ok": True}}

    app.include_router(notes_router)
    return app


setup_logging()
app = create_app()
