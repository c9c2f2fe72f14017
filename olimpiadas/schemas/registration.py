# olimpiadas/schemas/registration.py
import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from olimpiadas.schemas.payment import PaymentRead
from olimpiadas.schemas.user import PersonalData, parse_birth_date

# ATL = athlete ("Atleta"), PGR = general public ("Público Geral")
RoleCategory = Literal["ATL", "PGR"]


class RegistrationCreate(SQLModel):
    """Payload for registering the current user in an event."""

    model_config = ConfigDict(extra="forbid")

    role: RoleCategory


class RegistrationRead(SQLModel):
    id: int
    user_id: uuid.UUID
    event_id: uuid.UUID
    registration_fee_id: int
    selected_profile_id: int
    registered_at: datetime
    updated_at: datetime | None


class RegistrationResultRead(SQLModel):
    """
    Outcome of an event registration.

    `already_existed` tells the client whether the call updated an
    existing registration instead of creating one.
    """

    registration: RegistrationRead
    already_existed: bool
    payment: PaymentRead | None = None


class DependentCreate(PersonalData):
    """
    Payload for registering a child under the current user.

    Phone and branch are copied from the guardian.
    """


class DependentProcessRequest(SQLModel):
    """Body of the process-event-registration function."""

    model_config = ConfigDict(extra="forbid")

    dependent_id: uuid.UUID
    event_id: uuid.UUID
    birth_date: date

    @field_validator("birth_date", mode="before")
    @classmethod
    def accept_br_date(cls, v):
        return parse_birth_date(v)
