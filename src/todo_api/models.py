from __future__ import annotations

from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    The stored shape of a Todo item.

    Fields:
    - id: Unique integer identifier, assigned by the repository on create
    - text: Free-form text of the item
    - completed: Boolean completion flag (False on create)
    """

    id: int
    text: str
    completed: bool
