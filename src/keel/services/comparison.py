"""Snowball vs avalanche comparison and the follow-up action plan."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping

from ..domain.debt import (
    ActionPlan,
    ActionPlanEntry,
    ComparisonResult,
    Debt,
    NoEligibleDebts,
    PayoffMethod,
)
from ..logging_config import get_logger
from .debts import simulate
from .preferences import parse_allocation

logger = get_logger(__name__)


def total_minimum_payment(debts: Iterable[Debt]) -> Decimal:
    return sum((debt.minimum_payment for debt in debts), Decimal("0"))


def compare_strategies(debts: Iterable[Debt], *, today: date) -> ComparisonResult | NoEligibleDebts:
    """Run both strategies against the same snapshot with the same budget.

    The budget is the sum of minimum payments, so the comparison isolates the
    effect of ordering. An empty snapshot yields ``NoEligibleDebts``.
    """

    snapshot = tuple(debts)
    if not snapshot:
        return NoEligibleDebts()

    monthly_payment = total_minimum_payment(snapshot)
    snowball = simulate(snapshot, monthly_payment, PayoffMethod.SNOWBALL, today=today)
    avalanche = simulate(snapshot, monthly_payment, PayoffMethod.AVALANCHE, today=today)
    result = ComparisonResult(
        debts=snapshot,
        total_debt=sum((debt.starting_balance for debt in snapshot), Decimal("0")),
        monthly_payment=monthly_payment,
        snowball=snowball,
        avalanche=avalanche,
    )
    logger.info(
        "Compared payoff strategies",
        extra={
            "debts": len(snapshot),
            "monthly_payment": str(monthly_payment),
            "interest_savings": str(result.interest_savings),
            "time_savings": result.time_savings,
            "converged": result.converged,
        },
    )
    return result


def build_action_plan(
    debts: Iterable[Debt],
    method: PayoffMethod | str,
    extra_allocation: Any,
    paid_off: Mapping[str, bool] | None = None,
    *,
    today: date,
) -> ActionPlan | NoEligibleDebts:
    """Re-simulate the chosen method with minimums plus the user's extra amount.

    Each schedule entry carries the user's own paid-off mark, which is kept
    separate from the projection. The extra amount goes through
    ``parse_allocation``, so bad input raises ``InvalidAllocationInputError``.
    """

    extra_allocation = parse_allocation(extra_allocation)

    snapshot = tuple(debts)
    if not snapshot:
        return NoEligibleDebts()

    method = PayoffMethod.parse(method)
    marks = paid_off or {}
    monthly_payment = total_minimum_payment(snapshot) + extra_allocation
    result = simulate(snapshot, monthly_payment, method, today=today)
    entries = tuple(
        ActionPlanEntry(payoff=entry, marked_paid_off=bool(marks.get(entry.id, False)))
        for entry in result.payoff_schedule
    )
    return ActionPlan(
        method=method,
        extra_allocation=extra_allocation,
        monthly_payment=monthly_payment,
        result=result,
        entries=entries,
    )
