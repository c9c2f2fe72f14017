# olimpiadas/models/user.py
import uuid
from datetime import date, datetime, timezone

from sqlmodel import SQLModel, Field


class Branch(SQLModel, table=True):
    """
    A branch / chapter of the organization. Delegations compete per branch.
    """

    __tablename__ = "branches"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=120, index=True)
    city: str | None = Field(default=None, max_length=120)
    state: str | None = Field(default=None, max_length=2)


class User(SQLModel, table=True):
    """
    Persistent participant profile.

    Identity:
      - id: MUST match Supabase auth.users.id (UUID from JWT "sub").
        Dependents (children registered by a guardian) have no auth
        account; their id is generated here and `registered_by_id`
        points to the guardian.

    Roles are not stored here: they are per-event RoleAssignment rows.

    This table is *not* responsible for password hashes. Supabase Auth
    stores the password in its own schema.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str | None = Field(
        default=None,
        unique=True,
        index=True,
        description="Email from Supabase auth.users (dependents have none)",
    )

    full_name: str = Field(max_length=200)

    phone: str = Field(
        max_length=30,
        description="Phone with country code, digits only after the '+'",
    )

    # CPF | RG
    document_type: str = Field(default="CPF", max_length=3)

    document_number: str = Field(
        max_length=20,
        index=True,
        description="Digits only",
    )

    gender: str | None = Field(default=None, max_length=20)

    birth_date: date | None = Field(default=None)

    branch_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="branches.id",
        index=True,
    )

    confirmed: bool = Field(
        default=False,
        description="Set once the account (or dependent) is confirmed",
    )

    registered_by_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="users.id",
        index=True,
        description="Guardian that registered this dependent",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
