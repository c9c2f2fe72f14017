# olimpiadas/models/event.py
import uuid
from datetime import date, datetime, timezone

from sqlmodel import SQLModel, Field


class Event(SQLModel, table=True):
    """
    A competition instance (one edition of the Olimpíadas).

    Registration is possible while status == "active" and today falls
    inside [registration_start, registration_end].
    """

    __tablename__ = "events"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=200)
    description: str | None = Field(default=None)

    registration_start: date
    registration_end: date

    # active | closed | suspended | test
    status: str = Field(
        default="active",
        index=True,
        description="Event lifecycle status",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    def is_open_on(self, day: date) -> bool:
        return (
            self.status == "active"
            and self.registration_start <= day <= self.registration_end
        )
