from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item. The id is always assigned by the store.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Buy groceries",
            }
        }
    )

    text: str = Field(..., description="Text of the todo item")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for partially updating an existing Todo item.
    All fields are optional; omitted (or null) fields keep their current value.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Buy groceries and supplies",
                "completed": True,
            }
        }
    )

    text: Optional[str] = Field(default=None, description="New text of the todo item")
    completed: Optional[bool] = Field(default=None, description="New completion status")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "text": "Buy groceries",
                "completed": False,
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Text of the todo item")
    completed: bool = Field(..., description="Completion status flag")
