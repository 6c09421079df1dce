"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from typing import Callable

from sqlalchemy import func
from sqlmodel import Session, select

from ...models.transaction import Transaction


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self, *, user_id: int) -> list[Transaction]:
        """List all transactions for a user."""
        with self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.user_id == user_id)
                .order_by(Transaction.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def list_by_type(self, transaction_type: str, *, user_id: int) -> list[Transaction]:
        """List transactions of one type, ordered by ID so snapshots are stable.

        The type match ignores case and surrounding whitespace, the same way
        debt extraction reads the column.
        """
        with self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.user_id == user_id)
                .where(func.lower(func.trim(Transaction.type)) == transaction_type.strip().lower())
                .order_by(Transaction.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, transaction: Transaction, *, user_id: int) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            transaction.user_id = user_id
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            return transaction

    def delete(self, transaction_id: int, *, user_id: int) -> None:
        """Delete a transaction by ID."""
        with self.session_factory() as session:
            transaction = session.exec(
                select(Transaction).where(
                    Transaction.id == transaction_id, Transaction.user_id == user_id
                )
            ).first()
            if transaction:
                session.delete(transaction)
                session.commit()


__all__ = ["SQLModelTransactionRepository"]
