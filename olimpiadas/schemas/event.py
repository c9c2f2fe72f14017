# olimpiadas/schemas/event.py
import uuid
from datetime import date, datetime
from typing import Literal

from sqlmodel import SQLModel

EventStatus = Literal["active", "closed", "suspended", "test"]


class EventRead(SQLModel):
    id: uuid.UUID
    name: str
    description: str | None
    registration_start: date
    registration_end: date
    status: EventStatus
    created_at: datetime
