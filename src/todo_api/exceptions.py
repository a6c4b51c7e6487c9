"""
Errors raised by repository backends.

These are independent of the HTTP layer; the routers translate them into
status codes.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class RepositoryError(Exception):
    """Base exception for all repository errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# PUBLIC_INTERFACE
class TodoNotFoundError(RepositoryError):
    """Raised by update/delete when no Todo exists for the given id."""

    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(message=f"Todo not found: {todo_id}", details={"todo_id": todo_id})
