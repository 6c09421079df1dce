"""Pytest configuration and shared fixtures for Keel tests.

Provides an isolated SQLite database per test, repository fixtures, and
factories for ledger records and debt snapshots, so the payoff engine can be
exercised without touching the real app database.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from keel.domain.debt import Debt
from keel.infra.repositories import SQLModelPreferenceRepository, SQLModelTransactionRepository
from keel.models import Transaction, UserPreference  # noqa: F401

TODAY = date(2026, 1, 15)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Create a session factory for repositories that expect Callable[[], Session]."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture
def user_id() -> int:
    return 1


@pytest.fixture
def transaction_repo(session_factory) -> SQLModelTransactionRepository:
    return SQLModelTransactionRepository(session_factory)


@pytest.fixture
def preference_repo(session_factory) -> SQLModelPreferenceRepository:
    return SQLModelPreferenceRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def transaction_factory(db_session, user_id):
    """Factory for creating ledger records, debt-bearing by default.

    Returns:
        Callable: Function that creates and persists Transaction instances
    """

    def _create_transaction(
        description: str = "Visa",
        category: str = "Credit Card",
        remaining_balance: float | None = 1000.00,
        interest_rate: float | None = 19.99,
        minimum_payment: float | None = None,
        amount: float = 1000.00,
        type: str = "debt",
        owner_id: int | None = None,
    ) -> Transaction:
        transaction = Transaction(
            user_id=owner_id or user_id,
            type=type,
            description=description,
            category=category,
            amount=amount,
            occurred_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            remaining_balance=remaining_balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
        )
        db_session.add(transaction)
        db_session.commit()
        db_session.refresh(transaction)
        return transaction

    return _create_transaction


def make_debt(
    debt_id: str,
    balance: str | int,
    rate: str | int,
    minimum: str | int,
    category: str = "Credit Card",
) -> Debt:
    """Build a Debt snapshot directly, bypassing extraction."""
    return Debt(
        id=debt_id,
        description=f"Debt {debt_id}",
        category=category,
        starting_balance=Decimal(str(balance)),
        interest_rate_annual_percent=Decimal(str(rate)),
        minimum_payment=Decimal(str(minimum)),
    )


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_money_equal(actual: Decimal, expected, tolerance: Decimal = Decimal("0.01")):
    """Assert that two money amounts agree to within a cent.

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    expected = Decimal(str(expected))
    assert (
        abs(actual - expected) <= tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
