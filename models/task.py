# simpletodo/models/task.py
from __future__ import annotations

from datetime import datetime
import uuid

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from utils.datetime_utils import local_now


class Task(SQLModel, table=True):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    title: str = ""
    # naive local time; plain DateTime so newer sqlmodel does not demand tzinfo
    date: datetime = Field(default_factory=local_now, index=True, sa_type=DateTime)
    is_completed: bool = False
    created_at: datetime = Field(default_factory=local_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=local_now, sa_type=DateTime)


__all__ = ["Task"]
