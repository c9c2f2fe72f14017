# olimpiadas/schemas/user.py
import re
import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import ConfigDict, field_validator, model_validator
from sqlmodel import SQLModel, Field

from olimpiadas.core.documents import (
    clean_document_number,
    format_document,
    validate_cpf,
)
from olimpiadas.models.user import User

DocumentType = Literal["CPF", "RG"]

_BR_DATE = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def normalize_phone(value: str) -> str:
    """
    Keep the leading "+" of the country code and digits only,
    e.g. "+55 (11) 99988-7766" -> "+5511999887766".
    """
    value = value.strip()
    digits = re.sub(r"\D", "", value)
    return f"+{digits}" if value.startswith("+") else digits


def parse_birth_date(value):
    """Accept ISO dates and the dd/mm/yyyy format used by the signup form."""
    if isinstance(value, str) and _BR_DATE.match(value.strip()):
        return datetime.strptime(value.strip(), "%d/%m/%Y").date()
    return value


class PersonalData(SQLModel):
    """
    Fields shared by self sign-up and dependent sign-up.

    Validation rules:
      - full_name cannot be empty or whitespace
      - document_number is stored as digits only
      - a CPF must pass the check-digit validation
      - birth_date cannot be in the future
    """

    model_config = ConfigDict(extra="forbid")

    full_name: str = Field(max_length=200)
    document_type: DocumentType = "CPF"
    document_number: str = Field(max_length=20)
    gender: str | None = Field(default=None, max_length=20)
    birth_date: date

    @field_validator("full_name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("full_name cannot be empty")
        return v

    @field_validator("document_number")
    @classmethod
    def clean_document(cls, v: str) -> str:
        v = clean_document_number(v)
        if not v:
            raise ValueError("document_number cannot be empty")
        return v

    @field_validator("birth_date", mode="before")
    @classmethod
    def accept_br_date(cls, v):
        return parse_birth_date(v)

    @field_validator("birth_date")
    @classmethod
    def not_in_future(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("birth_date cannot be in the future")
        return v

    @model_validator(mode="after")
    def check_cpf(self):
        if self.document_type == "CPF" and not validate_cpf(self.document_number):
            raise ValueError("Invalid CPF")
        return self


class UserCreate(PersonalData):
    """
    Payload for first-time profile completion (after Supabase sign-up).

    The id and email come from the access token, never from the body.
    """

    phone: str = Field(max_length=30)
    branch_id: uuid.UUID | None = None

    @field_validator("phone")
    @classmethod
    def clean_phone(cls, v: str) -> str:
        v = normalize_phone(v)
        if len(v.lstrip("+")) < 8:
            raise ValueError("phone is too short")
        return v


class UserUpdate(SQLModel):
    """
    Partial profile update for authenticated users.
    Documents cannot be changed after sign-up.
    """

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=30)
    gender: str | None = Field(default=None, max_length=20)
    branch_id: uuid.UUID | None = None

    @field_validator("full_name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("full_name cannot be empty")
        return v

    @field_validator("phone")
    @classmethod
    def clean_phone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return normalize_phone(v)


class UserRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    email: str | None
    full_name: str
    phone: str
    document_type: str
    document_number: str
    document_display: str
    gender: str | None
    birth_date: date | None
    branch_id: uuid.UUID | None
    confirmed: bool
    registered_by_id: uuid.UUID | None
    created_at: datetime

    @classmethod
    def from_model(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            phone=user.phone,
            document_type=user.document_type,
            document_number=user.document_number,
            document_display=format_document(
                user.document_number, user.document_type
            ),
            gender=user.gender,
            birth_date=user.birth_date,
            branch_id=user.branch_id,
            confirmed=user.confirmed,
            registered_by_id=user.registered_by_id,
            created_at=user.created_at,
        )


class NavigationItemRead(SQLModel):
    label: str
    path: str
    roles: list[str]


class NavigationRead(SQLModel):
    """Menu entries and landing page for the user's roles in an event."""

    role_codes: list[str]
    items: list[NavigationItemRead]
    redirect: str | None
