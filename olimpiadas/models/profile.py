# olimpiadas/models/profile.py
import uuid

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

# Profile type codes
ATHLETE = "ATL"
GENERAL_PUBLIC = "PGR"
ORGANIZER = "ORE"
DELEGATION_REP = "RDD"
ADMIN = "ADM"
JUDGE = "JUZ"
DEPENDENT = "DEP"
CHILD_UNDER_7 = "C-6"
CHILD_7_TO_12 = "C+7"

# A user may hold at most one of these per event.
EXCLUSIVE_PROFILE_CODES = frozenset({ATHLETE, GENERAL_PUBLIC})


class ProfileType(SQLModel, table=True):
    """
    Global catalog of role templates (ATL, PGR, ORE, ...).
    """

    __tablename__ = "profile_types"

    id: int | None = Field(default=None, primary_key=True)
    code: str = Field(max_length=5, unique=True, index=True)
    name: str = Field(max_length=100)


class Profile(SQLModel, table=True):
    """
    A profile type made available in one event, e.g. "Atleta" for the
    2025 edition. Fees and role assignments point at this row.
    """

    __tablename__ = "profiles"
    __table_args__ = (UniqueConstraint("event_id", "profile_type_id"),)

    id: int | None = Field(default=None, primary_key=True)

    event_id: uuid.UUID = Field(foreign_key="events.id", index=True)
    profile_type_id: int = Field(foreign_key="profile_types.id", index=True)

    name: str = Field(max_length=100, description='e.g. "Atleta", "Público Geral"')


class RegistrationFee(SQLModel, table=True):
    """
    Registration fee for a (event, profile) pair. `exempt` profiles pay
    nothing and get a confirmed payment right away.
    """

    __tablename__ = "registration_fees"
    __table_args__ = (UniqueConstraint("event_id", "profile_id"),)

    id: int | None = Field(default=None, primary_key=True)

    event_id: uuid.UUID = Field(foreign_key="events.id", index=True)
    profile_id: int = Field(foreign_key="profiles.id", index=True)

    amount: float = Field(default=0, ge=0)
    exempt: bool = Field(default=False)


class RoleAssignment(SQLModel, table=True):
    """
    Join of user, profile and event.
    """

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "profile_id", "event_id"),)

    id: int | None = Field(default=None, primary_key=True)

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    profile_id: int = Field(foreign_key="profiles.id", index=True)
    event_id: uuid.UUID = Field(foreign_key="events.id", index=True)
