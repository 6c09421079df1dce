"""Debt payoff service used by the presentation layer.

Reads the ledger and preferences through repositories, then hands plain
``Debt`` snapshots to the pure simulation and comparison functions.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional

from ..constants.debts import DEBT_TRANSACTION_TYPE
from ..domain.debt import ActionPlan, ComparisonResult, Debt, NoEligibleDebts, PayoffMethod
from ..domain.repositories import PreferenceRepository, TransactionRepository
from ..errors import InvalidPayoffMethodError
from ..logging_config import get_logger
from .comparison import build_action_plan, compare_strategies
from .extraction import extract_debts
from .preferences import PayoffPreferences, parse_allocation
from .progress import PayoffProgressTracker, ProgressState

logger = get_logger(__name__)


class DebtPayoffService:
    """Entry point for the method-selection and action-plan screens."""

    def __init__(
        self,
        transactions: TransactionRepository,
        preferences: PreferenceRepository,
        *,
        user_id: int,
        clock: Callable[[], date] = date.today,
        on_paid_off: Optional[Callable[[str], None]] = None,
    ):
        self.transactions = transactions
        self.user_id = user_id
        self.clock = clock
        self.preferences = PayoffPreferences(preferences, user_id=user_id)
        self.progress = PayoffProgressTracker(self.preferences, on_paid_off=on_paid_off)
        self.progress.load()

    def eligible_debts(self) -> list[Debt]:
        """Recompute the comparison cohort from the current ledger."""
        return extract_debts(self.transactions.list_all(user_id=self.user_id))

    def comparison(self) -> ComparisonResult | NoEligibleDebts:
        return compare_strategies(self.eligible_debts(), today=self.clock())

    def action_plan(
        self,
        method: PayoffMethod | str | None = None,
        extra_allocation: Any = None,
    ) -> ActionPlan | NoEligibleDebts:
        """Plan for the given (or stored) method and extra allocation."""
        chosen = PayoffMethod.parse(method) if method is not None else self.preferences.chosen_method()
        if chosen is None:
            raise InvalidPayoffMethodError("No payoff method has been chosen")
        if extra_allocation is not None:
            extra = parse_allocation(extra_allocation)
        else:
            extra = self.preferences.allocation()
        return build_action_plan(
            self.eligible_debts(),
            chosen,
            extra,
            self.progress.snapshot(),
            today=self.clock(),
        )

    def choose_method(self, method: PayoffMethod | str) -> PayoffMethod:
        return self.preferences.choose_method(method)

    def set_allocation(self, value: Any) -> Decimal:
        """Store a new extra allocation; invalid input raises and keeps the old one."""
        return self.preferences.set_allocation(value)

    def toggle_paid_off(self, debt_id: str) -> ProgressState:
        return self.progress.toggle(debt_id)

    def prune_progress(self) -> list[str]:
        """Forget marks for debts that were deleted from the ledger."""
        known = [
            str(record.id)
            for record in self.transactions.list_by_type(DEBT_TRANSACTION_TYPE, user_id=self.user_id)
        ]
        removed = self.progress.prune(known)
        if removed:
            logger.info("Pruned paid-off marks for deleted debts", extra={"removed": removed})
        return removed
