# This project was developed with assistance from AI tools.
"""Task request/response schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Assign a new task. The creator is always the caller."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    status: str = Field(default="Assigned", min_length=1, max_length=50)
    assigned_to_username: str = Field(min_length=1, max_length=150)


class TaskStatusUpdate(BaseModel):
    """Change a task's status.

    When ``expected_version`` is given the update only applies if the task
    has not changed since the caller read it.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    new_status: str = Field(min_length=1, max_length=50)
    expected_version: int | None = None


class TaskResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str | None = None
    status: str
    created_by_user_id: uuid.UUID
    assigned_to_user_id: uuid.UUID
    assigned_to_username: str
    assigned_to_name: str
    version: int
    created_at: datetime


class TaskListResponse(BaseModel):
    data: list[TaskResponse]
    count: int
