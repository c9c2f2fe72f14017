# olimpiadas/schemas/auth.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class PasswordStrengthRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    password: str = Field(default="", max_length=256)


class PasswordStrengthRead(SQLModel):
    strength: int
    label: str
