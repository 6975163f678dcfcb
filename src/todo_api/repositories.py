from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import Todo

UPDATABLE_FIELDS = frozenset({"title", "description"})
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


# PUBLIC_INTERFACE
class TodoRepository:
    """
    Data access for the ``todos`` table.

    Every method is its own transaction: writes commit before returning and
    roll back before re-raising a SQLAlchemy error.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> Tuple[List[Todo], int]:
        """Return every todo ordered by id, plus the total count."""
        rows = list(self._session.scalars(select(Todo).order_by(Todo.id)))
        count = self._session.scalar(select(func.count()).select_from(Todo)) or 0
        return rows, int(count)

    def create(self, title: str, description: Optional[str], priority: Optional[int] = None) -> Todo:
        """Insert a todo. Raises IntegrityError when the title is already taken."""
        todo = Todo(title=title, description=description, priority=priority or 0)
        self._session.add(todo)
        self._commit()
        self._session.refresh(todo)
        return todo

    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        if not _storable_id(todo_id):
            return None
        return self._session.get(Todo, todo_id)

    def find_by_title(self, title: str) -> Optional[Todo]:
        """Return the first todo whose title matches exactly, or None."""
        stmt = select(Todo).where(Todo.title == title).order_by(Todo.id).limit(1)
        return self._session.scalars(stmt).first()

    def update_by_id(self, todo_id: int, values: Dict[str, Any]) -> int:
        """
        Write the given title/description onto every row with this id.

        Returns the number of rows affected; the updated record is not loaded.
        """
        if not _storable_id(todo_id):
            return 0
        changes = {k: v for k, v in values.items() if k in UPDATABLE_FIELDS}
        if not changes:
            # Nothing to write; still report whether the row exists.
            return 1 if self.find_by_id(todo_id) is not None else 0
        affected = self._execute_write(update(Todo).where(Todo.id == todo_id).values(**changes))
        # updatedAt is computed in the statement, so a cached copy is stale.
        cached = self._session.identity_map.get(Session.identity_key(Todo, todo_id))
        if cached is not None:
            self._session.expire(cached)
        return affected

    def delete_by_id(self, todo_id: int) -> int:
        """Hard-delete every row with this id and return how many went away."""
        if not _storable_id(todo_id):
            return 0
        return self._execute_write(delete(Todo).where(Todo.id == todo_id))

    def _execute_write(self, stmt: Any) -> int:
        try:
            result = self._session.execute(stmt)
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise
        return int(result.rowcount or 0)

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise


def _storable_id(todo_id: int) -> bool:
    """Ids outside the 64-bit integer column range cannot match any row."""
    return MIN_ID <= todo_id <= MAX_ID
