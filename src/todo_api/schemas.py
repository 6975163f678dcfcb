from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Body of ``POST /``.

    Every field is optional at the schema level so that a missing title or
    description reaches the service and gets the uniform 400 envelope instead
    of a schema error.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "priority": 1,
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Unique title of the todo item")
    description: Optional[str] = Field(default=None, description="Detailed description")
    priority: Optional[int] = Field(default=None, description="-1 low, 0 medium (default), 1 high")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Body of ``PUT /{id}``.
    Only the fields actually sent are written.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "description": "Milk, eggs, bread, and paper towels",
            }
        }
    )

    title: Optional[str] = Field(default=None, description="New title")
    description: Optional[str] = Field(default=None, description="New description")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    A todo record as returned by the API. Serialized with camelCase keys.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "priority": 0,
                "isDone": False,
                "createdAt": "2025-01-25T10:15:30.123456+00:00",
                "updatedAt": "2025-01-25T10:15:30.123456+00:00",
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Unique title of the todo item")
    description: Optional[str] = Field(default=None, description="Detailed description")
    priority: int = Field(..., description="-1 low, 0 medium, 1 high")
    is_done: bool = Field(..., alias="isDone", description="Completion flag")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")


class TodoPage(BaseModel):
    count: int = Field(..., description="Number of todos stored")
    rows: List[TodoOut] = Field(..., description="Every stored todo")


class TodoListEnvelope(BaseModel):
    error: bool = False
    data: TodoPage


class TodoEnvelope(BaseModel):
    error: bool = False
    data: TodoOut


class TodoResultEnvelope(BaseModel):
    error: bool = False
    result: TodoOut


class OptionalTodoEnvelope(BaseModel):
    error: bool = False
    data: Optional[TodoOut] = None


class CountEnvelope(BaseModel):
    error: bool = False
    data: int = Field(..., description="Rows affected")


class ErrorEnvelope(BaseModel):
    error: bool = True
    message: str
    cause: Optional[str] = None
