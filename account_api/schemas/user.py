# account_api/schemas/user.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, ConfigDict, field_validator
from pydantic import Field as PydanticField
from sqlmodel import SQLModel, Field

MAX_PASSWORD_BYTES = 72


class RegisterPayload(SQLModel):
    """
    Raw registration body.

    Every field is optional here so the router can answer a missing name
    with 203 before the strict `UserCreate` rules are applied.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    email: str | None = None
    password: str | None = None


class UserCreate(SQLModel):
    """
    Validated registration data.

    Validation rules:
      - name: 1..50 chars after trimming
      - email must be a valid EmailStr
      - password: at least 6 chars, at most 72 bytes as UTF-8 (bcrypt limit)
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        return v


class UserRead(SQLModel):
    """Response schema returned to clients. Never includes the password hash."""

    id: int
    name: str
    email: str
    type: str | None = None
    created_at: datetime


class LoginPayload(SQLModel):
    """Login body; both fields required."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class TokenClaims(BaseModel):
    """
    Identity claims embedded in a session token.

    Field names on the wire are camelCase (`userId`).
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = PydanticField(alias="userId")
    email: str
    type: str | None = None
    name: str


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = PydanticField(alias="userId")
    email: str
    token: str


class WhoAmIResponse(BaseModel):
    data: TokenClaims


class ErrorResponse(BaseModel):
    error: str
