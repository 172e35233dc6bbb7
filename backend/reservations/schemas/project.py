from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .task import TaskRead


class TeamMemberCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=255)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        local, _, domain = value.partition("@")
        if not local or "." not in domain or " " in value:
            raise ValueError("email is not a valid address")
        return value


class TeamMemberRead(BaseModel):
    id: str
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class ProjectCreate(BaseModel):
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    team: List[TeamMemberCreate] = []

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


class ProjectRead(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectSummary(ProjectRead):
    task_counts: dict[str, int] = {}
    team_size: int = 0


class ProjectDetail(ProjectRead):
    tasks: List[TaskRead] = []
    team: List[TeamMemberRead] = []
