from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..db import get_session
from ..errors import failure_response
from ..outcomes import Failure
from ..repositories import TodoRepository
from ..schemas import (
    CountEnvelope,
    ErrorEnvelope,
    OptionalTodoEnvelope,
    TodoCreate,
    TodoEnvelope,
    TodoListEnvelope,
    TodoOut,
    TodoPage,
    TodoResultEnvelope,
    TodoUpdate,
)
from ..services import TodoService

router = APIRouter(tags=["todos"])


def _get_service(session: Session = Depends(get_session)) -> TodoService:
    """
    Dependency building the service around a request-scoped session.
    """
    return TodoService(TodoRepository(session))


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=TodoListEnvelope,
    summary="List Todos",
    description="Return every todo together with the total count. No pagination.",
)
def list_todos(service: TodoService = Depends(_get_service)) -> TodoListEnvelope:
    outcome = service.list_todos()
    rows, count = outcome.value
    return TodoListEnvelope(data=TodoPage(count=count, rows=[TodoOut(**row.to_dict()) for row in rows]))


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TodoEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a todo. Title and description are required; priority defaults to 0.",
    responses={
        400: {"model": ErrorEnvelope, "description": "Title or description missing"},
        409: {"model": ErrorEnvelope, "description": "Title already used by another todo"},
    },
)
def create_todo(
    payload: Optional[TodoCreate] = Body(default=None),
    service: TodoService = Depends(_get_service),
) -> Union[TodoEnvelope, JSONResponse]:
    outcome = service.create_todo(payload)
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return TodoEnvelope(data=TodoOut(**outcome.value.to_dict()))


# PUBLIC_INTERFACE
@router.get(
    "/title/{title:path}",
    response_model=OptionalTodoEnvelope,
    summary="Find Todo By Title",
    description="Exact, case-sensitive title lookup. A miss answers 200 with data set to null.",
)
def get_todo_by_title(title: str, service: TodoService = Depends(_get_service)) -> OptionalTodoEnvelope:
    todo = service.find_by_title(title).value
    return OptionalTodoEnvelope(data=TodoOut(**todo.to_dict()) if todo is not None else None)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoResultEnvelope,
    summary="Get Todo",
    description="Get a single todo by ID.",
    responses={400: {"model": ErrorEnvelope, "description": "No todo with this ID"}},
)
def get_todo(todo_id: int, service: TodoService = Depends(_get_service)) -> Union[TodoResultEnvelope, JSONResponse]:
    outcome = service.get_todo(todo_id)
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return TodoResultEnvelope(result=TodoOut(**outcome.value.to_dict()))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=CountEnvelope,
    summary="Update Todo",
    description="Update title and/or description. Responds with the number of rows updated, not the record.",
    responses={
        400: {"model": ErrorEnvelope, "description": "Title explicitly set to null"},
        409: {"model": ErrorEnvelope, "description": "Title already used by another todo"},
    },
)
def update_todo(
    todo_id: int, payload: TodoUpdate, service: TodoService = Depends(_get_service)
) -> Union[CountEnvelope, JSONResponse]:
    outcome = service.update_todo(todo_id, payload)
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return CountEnvelope(data=outcome.value)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=CountEnvelope,
    summary="Delete Todo",
    description="Delete a todo by ID. Responds with the number of rows deleted (0 or 1).",
)
def delete_todo(todo_id: int, service: TodoService = Depends(_get_service)) -> CountEnvelope:
    return CountEnvelope(data=service.delete_todo(todo_id).value)
