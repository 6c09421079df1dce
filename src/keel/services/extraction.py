"""Debt snapshot extraction.

Turns ledger records into the ordered list of ``Debt`` values that the
snowball/avalanche comparison runs on. ``is_comparison_eligible`` is the single
definition of which debts belong to that cohort.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from ..constants.debts import (
    AUTO_LOAN_KEYWORDS,
    DEBT_TRANSACTION_TYPE,
    DEFAULT_MINIMUM_PAYMENT_FLOOR,
    DEFAULT_MINIMUM_PAYMENT_RATE,
    STUDENT_LOAN_KEYWORDS,
)
from ..domain.debt import Debt, NoEligibleDebts, RawDebtInput
from ..logging_config import get_logger

logger = get_logger(__name__)


def is_student_or_auto_loan(category: str) -> bool:
    """Return True for categories that are matched out of the cohort."""

    text = (category or "").lower()
    return any(keyword in text for keyword in STUDENT_LOAN_KEYWORDS + AUTO_LOAN_KEYWORDS)


def is_comparison_eligible(raw: RawDebtInput) -> bool:
    """Decide whether a record takes part in the strategy comparison.

    A record qualifies when it is a debt with a positive remaining balance and a
    known, positive interest rate, and its category is not a student or auto loan.
    """

    if raw.type.strip().lower() != DEBT_TRANSACTION_TYPE:
        return False
    if raw.remaining_balance is None or raw.remaining_balance <= 0:
        return False
    if raw.interest_rate is None or raw.interest_rate <= 0:
        return False
    return not is_student_or_auto_loan(raw.category)


def default_minimum_payment(balance: Decimal) -> Decimal:
    """Fallback minimum payment: 2% of the balance, never below 25."""

    return max(balance * DEFAULT_MINIMUM_PAYMENT_RATE, DEFAULT_MINIMUM_PAYMENT_FLOOR)


def normalize_debt(raw: RawDebtInput) -> Debt:
    """Fill in defaults so the simulator never sees a missing field.

    A missing rate becomes 0. A missing or non-positive minimum payment is
    derived from the balance.
    """

    balance = raw.remaining_balance if raw.remaining_balance is not None else Decimal("0")
    balance = max(balance, Decimal("0"))
    rate = raw.interest_rate if raw.interest_rate is not None else Decimal("0")
    minimum = raw.minimum_payment
    if minimum is None or minimum <= 0:
        minimum = default_minimum_payment(balance)
    return Debt(
        id=raw.id,
        description=raw.description,
        category=raw.category,
        starting_balance=balance,
        interest_rate_annual_percent=max(rate, Decimal("0")),
        minimum_payment=minimum,
    )


def _snapshot(records: Iterable[Any]) -> tuple[list[RawDebtInput], list[Debt]]:
    raws = [RawDebtInput.from_record(record) for record in records]
    return raws, [normalize_debt(raw) for raw in raws if is_comparison_eligible(raw)]


def extract_debts(records: Iterable[Any]) -> list[Debt]:
    """Return the comparison cohort in input order; may be empty."""

    raws, debts = _snapshot(records)
    logger.debug(
        "Extracted debt snapshot",
        extra={"records": len(raws), "eligible": len(debts)},
    )
    return debts


def extract_comparison_cohort(records: Iterable[Any]) -> list[Debt] | NoEligibleDebts:
    """Like ``extract_debts`` but returns ``NoEligibleDebts`` for an empty cohort."""

    raws, debts = _snapshot(records)
    if not debts:
        excluded = sum(
            1 for raw in raws if raw.type.strip().lower() == DEBT_TRANSACTION_TYPE
        )
        logger.info("No eligible debts for comparison", extra={"excluded_debts": excluded})
        return NoEligibleDebts(excluded_count=excluded)
    return debts
