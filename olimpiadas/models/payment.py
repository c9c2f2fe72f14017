# olimpiadas/models/payment.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Payment(SQLModel, table=True):
    """
    Registration payment for one user in one event.

    `identifier` is the sequential, zero-padded number shown to the
    participant (used as the PIX reference). It is unique per event.
    """

    __tablename__ = "payments"
    __table_args__ = (UniqueConstraint("event_id", "identifier"),)

    id: int | None = Field(default=None, primary_key=True)

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    event_id: uuid.UUID = Field(foreign_key="events.id", index=True)
    registration_fee_id: int | None = Field(
        default=None,
        foreign_key="registration_fees.id",
    )

    amount: float = Field(default=0, ge=0)

    # pending | confirmed | cancelled
    status: str = Field(
        default="pending",
        index=True,
        description="Payment status lifecycle",
    )

    identifier: str = Field(max_length=10)

    exempt: bool = Field(default=False)

    proof_url: str | None = Field(default=None)
    validated_without_proof: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    validated_at: datetime | None = Field(default=None)
