"""Per-user preferences stored in the database."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlmodel import Field, SQLModel


class UserPreference(SQLModel, table=True):
    """Key-value storage for user choices such as the payoff method."""

    __tablename__: ClassVar[str] = "user_preference"

    user_id: int = Field(primary_key=True)
    key: str = Field(primary_key=True, max_length=64)
    value: str = Field(nullable=False)
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
