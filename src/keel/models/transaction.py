"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Transaction(SQLModel, table=True):
    """A single ledger record; debt-type rows also carry payoff terms."""

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    type: str = Field(default="expense", max_length=16, index=True)
    description: str = Field(default="", max_length=255)
    category: str = Field(default="", max_length=64)
    amount: float = Field(nullable=False, description="Original amount of the record")
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    # Debt terms; only meaningful when type == "debt"
    remaining_balance: Optional[float] = Field(default=None)
    interest_rate: Optional[float] = Field(default=None, description="Annual percent, e.g. 24.99")
    minimum_payment: Optional[float] = Field(default=None)
