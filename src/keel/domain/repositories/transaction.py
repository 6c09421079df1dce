"""Transaction repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Ledger access.

    The payoff engine only reads. ``create`` and ``delete`` are the ledger's
    maintenance side, used when seeding or removing debts.
    """

    def list_all(self, *, user_id: int) -> list[Transaction]:
        """List all transactions for a user."""
        ...

    def list_by_type(self, transaction_type: str, *, user_id: int) -> list[Transaction]:
        """List transactions of a single type (case-insensitive) in insertion order."""
        ...

    def create(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Create a new transaction."""
        ...

    def delete(self, transaction_id: int, *, user_id: int) -> None:
        """Delete a transaction by ID."""
        ...
