# olimpiadas/schemas/payment.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic import Field as PydanticField
from sqlmodel import SQLModel, Field

PaymentStatus = Literal["pending", "confirmed", "cancelled"]


class PaymentRead(SQLModel):
    id: int
    user_id: uuid.UUID
    event_id: uuid.UUID
    registration_fee_id: int | None
    amount: float
    status: PaymentStatus
    identifier: str
    exempt: bool
    proof_url: str | None
    validated_without_proof: bool
    created_at: datetime
    validated_at: datetime | None


class PaymentStatusUpdate(SQLModel):
    """
    Admin payload to change payment status.

    `validated_without_proof` may be set when confirming a payment the
    participant never uploaded a receipt for.
    """

    model_config = ConfigDict(extra="forbid")

    status: PaymentStatus
    validated_without_proof: bool = False


class PaymentAmountUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    amount: float = Field(ge=0)


class ProofAttachment(BaseModel):
    """Base64 encoded file sent by the browser."""

    content: str
    filename: str
    type: str = "application/octet-stream"

    @field_validator("filename")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("filename cannot be empty")
        return v


class PaymentProofNotification(BaseModel):
    """
    Body of the send-payment-proof function.

    Field names follow the camelCase JSON sent by the web client.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_email: EmailStr = PydanticField(alias="userEmail")
    user_name: str = PydanticField(alias="userName")
    branch: str | None = None
    roles: str | list[str] = ""
    modalities: str | list[str] | None = None
    attachment: ProofAttachment
