"""
Task Pydantic schemas.
"""

from pydantic import Field
from typing import Literal, Optional
from dailyops.app.models.base import CamelModel


class TaskCreate(CamelModel):
    """
    Schema for creating a new check definition.

    Without ``order`` the task goes after the last one.
    """
    title: str = Field(..., min_length=1, max_length=300)
    description: str = Field(default="", max_length=2000)
    required: bool = True
    order: Optional[int] = None


class TaskUpdate(CamelModel):
    """Schema for updating a check definition."""
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    description: Optional[str] = Field(None, max_length=2000)
    required: Optional[bool] = None
    order: Optional[int] = None


class TaskMoveRequest(CamelModel):
    """Move a task one position up or down in the ordered list."""
    direction: Literal["up", "down"]
