# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# A registered user as stored in the users table. Identity is the email,
# which the store keeps unique. Users are created once and never mutated.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class UserRecord(BaseModel):
    """
    A row of the users table.

    `password_hash` is a bcrypt hash; it never leaves the service.
    """

    id: str
    email: str
    password_hash: str = Field(..., repr=False)
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "UserRecord":
        """Build a UserRecord from a store row."""
        return cls(
            id=str(row["id"]),
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=row.get("created_at"),
        )
