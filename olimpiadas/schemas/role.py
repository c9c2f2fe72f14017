# olimpiadas/schemas/role.py
import uuid

from pydantic import ConfigDict
from sqlmodel import SQLModel


class ProfileRead(SQLModel):
    id: int
    name: str
    code: str


class EventUserRead(SQLModel):
    """A user and the profiles they hold in one event."""

    id: uuid.UUID
    full_name: str
    email: str | None
    branch_id: uuid.UUID | None
    profiles: list[ProfileRead]


class UserProfilesUpdate(SQLModel):
    """
    Admin payload replacing the full set of profiles a user holds in an
    event. An empty list removes every role.
    """

    model_config = ConfigDict(extra="forbid")

    profile_ids: list[int]


class UserProfilesRead(SQLModel):
    user_id: uuid.UUID
    event_id: uuid.UUID
    role_codes: list[str]
