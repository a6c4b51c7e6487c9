from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .exceptions import TodoNotFoundError
from .locks import ReadWriteLock
from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def create(self, data: TodoCreate) -> TodoEntity:
        """Create and return a new TodoEntity with a freshly assigned id."""

    @abstractmethod
    def find(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def all(self) -> List[TodoEntity]:
        """Return every stored TodoEntity. Callers must not rely on ordering."""

    @abstractmethod
    def update(self, todo_id: int, data: TodoUpdate) -> TodoEntity:
        """
        Update the provided fields of an existing TodoEntity and return it.
        Raises TodoNotFoundError if no entity has that id.
        """

    @abstractmethod
    def delete(self, todo_id: int) -> None:
        """Delete a TodoEntity by id. Raises TodoNotFoundError if not found."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository.

    Reads (find/all) share the lock; writes (create/update/delete) hold it
    exclusively. Ids come from a counter that deletions never decrement, so an
    id is never handed out twice during the life of the process.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._items: Dict[int, TodoEntity] = {}
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._items)

    def create(self, data: TodoCreate) -> TodoEntity:
        with self._lock.write():
            todo_id = self._next_id
            self._next_id += 1
            entity: TodoEntity = {
                "id": todo_id,
                "text": data.text,
                "completed": False,
            }
            self._items[todo_id] = entity
            return entity.copy()

    def find(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock.read():
            item = self._items.get(todo_id)
            return None if item is None else item.copy()

    def all(self) -> List[TodoEntity]:
        with self._lock.read():
            return [t.copy() for t in self._items.values()]

    def update(self, todo_id: int, data: TodoUpdate) -> TodoEntity:
        with self._lock.write():
            existing = self._items.get(todo_id)
            if existing is None:
                raise TodoNotFoundError(todo_id)

            # Update only provided fields
            updated = existing.copy()
            if data.text is not None:
                updated["text"] = data.text
            if data.completed is not None:
                updated["completed"] = data.completed

            self._items[todo_id] = updated
            return updated.copy()

    def delete(self, todo_id: int) -> None:
        with self._lock.write():
            if self._items.pop(todo_id, None) is None:
                raise TodoNotFoundError(todo_id)
