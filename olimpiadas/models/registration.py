# olimpiadas/models/registration.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Registration(SQLModel, table=True):
    """
    A user's registration in an event.

    (user_id, event_id) is the upsert conflict key: registering again
    for the same event updates the fee / selected profile in place.
    """

    __tablename__ = "event_registrations"
    __table_args__ = (UniqueConstraint("user_id", "event_id"),)

    id: int | None = Field(default=None, primary_key=True)

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    event_id: uuid.UUID = Field(foreign_key="events.id", index=True)

    registration_fee_id: int = Field(foreign_key="registration_fees.id")
    selected_profile_id: int = Field(foreign_key="profiles.id")

    registered_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime | None = Field(default=None)
