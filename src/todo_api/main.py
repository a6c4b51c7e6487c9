from __future__ import annotations

from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .exceptions import TodoNotFoundError
from .repositories import InMemoryRepository, Repository
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = structlog.get_logger(__name__)

openapi_tags = [
    {"name": "root", "description": "Service greeting."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": _jsonable_errors(exc),
        },
    )


def _jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may carry the raw exception object, which is not JSON serializable
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


async def not_found_exception_handler(request: Request, exc: TodoNotFoundError) -> JSONResponse:
    logger.warning("unhandled_todo_not_found", path=request.url.path, todo_id=exc.todo_id)
    return JSONResponse(status_code=404, content={"detail": "Todo not found"})


def root() -> PlainTextResponse:
    """
    Greeting endpoint.
    """
    return PlainTextResponse("Hello, World!")


# PUBLIC_INTERFACE
def create_app(repository: Optional[Repository] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application around a single shared repository.

    Args:
        repository: Storage backend shared by every request. A fresh
            InMemoryRepository is created when omitted.
        settings: Application settings; loaded from the environment when omitted.

    Returns:
        The configured FastAPI app. The repository is available as
        app.state.repository.
    """
    settings = settings or get_settings()
    repo = repository if repository is not None else InMemoryRepository()

    app = FastAPI(
        title="Todo API",
        description="CRUD service for todo items backed by a thread-safe in-memory store.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.repository = repo

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(TodoNotFoundError, not_found_exception_handler)

    app.add_api_route("/", root, methods=["GET"], summary="Greeting", tags=["root"])
    app.include_router(todos_router.router)

    logger.info("app_created", backend=type(repo).__name__)
    return app


app = create_app()
