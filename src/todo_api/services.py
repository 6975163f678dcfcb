"""Business rules for todos, expressed as Success/Failure outcomes."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from .models import Todo
from .outcomes import Failure, FailureKind, Outcome, Success
from .repositories import TodoRepository
from .schemas import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Title and description are required"
NOT_FOUND_BY_ID = "No todo found by this ID"
DUPLICATE_TITLE = "A todo with this title already exists"


class TodoService:
    """Service layer for todo operations."""

    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def list_todos(self) -> Outcome[Tuple[List[Todo], int]]:
        return Success(self._repository.list_all())

    def create_todo(self, payload: Optional[TodoCreate]) -> Outcome[Todo]:
        """Create a todo; title and description must both be non-empty."""
        payload = payload or TodoCreate()
        if not payload.title or not payload.description:
            return Failure(FailureKind.VALIDATION, MISSING_FIELDS, cause=MISSING_FIELDS)
        try:
            todo = self._repository.create(payload.title, payload.description, payload.priority)
        except IntegrityError:
            logger.info("Rejected duplicate title %r", payload.title)
            return Failure(FailureKind.CONFLICT, DUPLICATE_TITLE, cause="Duplicate title")
        return Success(todo)

    def get_todo(self, todo_id: int) -> Outcome[Todo]:
        todo = self._repository.find_by_id(todo_id)
        if todo is None:
            return Failure(FailureKind.NOT_FOUND, NOT_FOUND_BY_ID, cause="Invalid ID")
        return Success(todo)

    def find_by_title(self, title: str) -> Outcome[Optional[Todo]]:
        """A miss is not an error: the outcome carries None."""
        return Success(self._repository.find_by_title(title))

    def update_todo(self, todo_id: int, payload: TodoUpdate) -> Outcome[int]:
        """
        Write the fields present in the body and return the rows affected.
        Fields left out of the body are not touched.
        """
        values = payload.model_dump(exclude_unset=True)
        if "title" in values and values["title"] is None:
            return Failure(FailureKind.VALIDATION, "Title cannot be null", cause="Invalid title")
        try:
            affected = self._repository.update_by_id(todo_id, values)
        except IntegrityError:
            logger.info("Rejected rename of todo %s to duplicate title %r", todo_id, values.get("title"))
            return Failure(FailureKind.CONFLICT, DUPLICATE_TITLE, cause="Duplicate title")
        logger.debug("Updated %d row(s) for todo %s", affected, todo_id)
        return Success(affected)

    def delete_todo(self, todo_id: int) -> Outcome[int]:
        return Success(self._repository.delete_by_id(todo_id))
