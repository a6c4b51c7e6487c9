from __future__ import annotations

from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..exceptions import TodoNotFoundError
from ..repositories import Repository
from ..schemas import TodoCreate, TodoOut, TodoUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


def _get_repo(request: Request) -> Repository:
    """
    Return the repository the app was built with.
    """
    return request.app.state.repository


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_todo(payload: TodoCreate, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Create a new Todo.
    """
    created = repo.create(payload)
    logger.info("todo_created", todo_id=created["id"])
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List every Todo item. Order is not guaranteed.",
    responses={
        200: {"description": "List retrieved successfully"},
    },
)
def list_todos(repo: Repository = Depends(_get_repo)) -> List[TodoOut]:
    return [TodoOut(**it) for it in repo.all()]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(todo_id: int, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    item = repo.find(todo_id)
    if item is None:
        logger.debug("todo_not_found", todo_id=todo_id)
        raise _not_found()
    return TodoOut(**item)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description="Partially update fields of a Todo item. Omitted fields are left unchanged.",
    responses={
        200: {"description": "Todo updated"},
        404: {"description": "Todo not found"},
    },
)
def patch_todo(todo_id: int, payload: TodoUpdate, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Partial update of a Todo item.
    """
    try:
        updated = repo.update(todo_id, payload)
    except TodoNotFoundError as exc:
        logger.debug("todo_not_found", todo_id=exc.todo_id)
        raise _not_found() from exc
    logger.info("todo_updated", todo_id=todo_id, fields=sorted(payload.model_fields_set))
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: int, repo: Repository = Depends(_get_repo)) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    try:
        repo.delete(todo_id)
    except TodoNotFoundError as exc:
        logger.debug("todo_not_found", todo_id=exc.todo_id)
        raise _not_found() from exc
    logger.info("todo_deleted", todo_id=todo_id)
    return None
