from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    project_id: str = Field(min_length=1, max_length=64)
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    assigned_to: str = Field(min_length=1, max_length=255)
    priority: Literal["Low", "Medium", "High"] = "Medium"
    due_date: Optional[date] = None


class TaskRead(BaseModel):
    id: str
    project_id: str
    resource_name: str
    title: str
    description: Optional[str] = None
    assigned_to: str
    owner_email: str
    priority: str
    status: str
    due_date: Optional[date] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskStatusUpdate(BaseModel):
    status: Literal["To Do", "In Progress", "Done"]
