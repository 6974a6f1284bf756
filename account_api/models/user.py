# account_api/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user account.

    Identity:
      - id: assigned by the database on insert

    Password:
      - `password` only ever holds a bcrypt hash. The plaintext is hashed
        by the credential service before the row is built.

    Type:
      - free-form role classifier, "user" by default. Nothing in the API
        authorizes on it; it is copied into issued tokens.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        max_length=50,
        description="Display name given at registration",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login identifier; uniqueness enforced by the database",
    )

    password: str = Field(description="bcrypt hash of the password")

    type: str | None = Field(
        default="user",
        index=True,
        description="Role classifier carried in tokens",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
