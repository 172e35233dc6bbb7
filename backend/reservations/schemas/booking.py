from __future__ import annotations

from datetime import date as date_type, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def parse_date(value: str) -> date_type:
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_time(value: str):
    return datetime.strptime(value, TIME_FORMAT).time()


class BookingBase(BaseModel):
    room_name: str = Field(min_length=1, max_length=255)
    date: str = Field(description="Calendar date, YYYY-MM-DD")
    start_time: str = Field(description="Slot start, HH:MM")
    end_time: str = Field(description="Slot end, HH:MM")


class BookingCreate(BookingBase):
    user_name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        try:
            parse_date(value)
        except ValueError:
            raise ValueError("date must use the YYYY-MM-DD format") from None
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        try:
            parse_time(value)
        except ValueError:
            raise ValueError("times must use the HH:MM format") from None
        return value

    @field_validator("end_time")
    @classmethod
    def check_ends_after_start(cls, end_time: str, info: ValidationInfo) -> str:
        start_time: str | None = info.data.get("start_time")
        if start_time and parse_time(end_time) < parse_time(start_time):
            raise ValueError("end_time must be greater than or equal to start_time")
        return end_time


class BookingRead(BookingBase):
    id: str
    user_name: Optional[str] = None
    user_email: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
