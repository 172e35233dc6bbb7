from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoomBase(BaseModel):
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


class RoomCreate(RoomBase):
    pass


class RoomRead(RoomBase):
    id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
