"""Debt payoff simulation (snowball and avalanche).

Each month runs three steps over the active debts:

1. accrue simple monthly interest (``balance * apr / 100 / 12``);
2. pay minimums in the strategy's fixed order from one shared pool;
3. put whatever is left of the pool on the first unpaid debt in that order.

Leftover extra payment is not carried to the next target in the same month.
The loop stops when every debt is cleared or after ``MAX_SIMULATION_MONTHS``.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional

from ..constants.debts import CENT, MAX_SIMULATION_MONTHS
from ..domain.debt import (
    Debt,
    DebtPayoff,
    PayoffMethod,
    SimulationDebtState,
    SimulationResult,
)
from ..errors import NonConvergentPlanError
from ..logging_config import get_logger

logger = get_logger(__name__)

_ZERO = Decimal("0")
_TWELVE = Decimal("12")
_HUNDRED = Decimal("100")

# Sort keys for the fixed payment order. sorted() is stable, so equal keys keep
# input order.
_ORDER_KEYS: dict[PayoffMethod, Callable[[SimulationDebtState], Decimal]] = {
    PayoffMethod.SNOWBALL: lambda state: state.debt.starting_balance,
    PayoffMethod.AVALANCHE: lambda state: -state.debt.interest_rate_annual_percent,
}


def round_cents(amount: Decimal) -> Decimal:
    """Round to cents using half-up rounding."""

    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def add_months(start: date, months: int) -> date:
    """Return *start* moved forward by *months*, clamping the day to month end."""

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, monthrange(year, month)[1])
    return date(year, month, day)


def debt_free_date(total_months: int, *, today: date, converged: bool = True) -> Optional[date]:
    """Calendar date of the last payment; None when the plan never finishes."""

    if not converged:
        return None
    return add_months(today, total_months)


def payment_order(debts: Iterable[Debt], method: PayoffMethod | str) -> list[Debt]:
    """Return *debts* in the order the strategy targets them."""

    key = _ORDER_KEYS[PayoffMethod.parse(method)]
    states = [SimulationDebtState.start(debt) for debt in debts]
    return [state.debt for state in sorted(states, key=key)]


def _monthly_interest(state: SimulationDebtState) -> Decimal:
    return state.remaining_balance * (state.debt.interest_rate_annual_percent / _HUNDRED) / _TWELVE


def _run_month(
    month: int, ordered: list[SimulationDebtState], total_monthly_payment: Decimal
) -> Decimal:
    """Advance one month in place and return the interest accrued."""

    accrued = _ZERO
    for state in ordered:
        if state.is_paid_off:
            continue
        interest = _monthly_interest(state)
        state.accrue(interest)
        accrued += interest

    pool = total_monthly_payment
    for state in ordered:
        if state.is_paid_off:
            continue
        # An under-funded pool pays what it can; balances then grow
        payment = min(state.debt.minimum_payment, state.remaining_balance, max(pool, _ZERO))
        pool -= payment
        state.pay(payment, month)

    if pool > 0:
        for state in ordered:
            if state.is_paid_off:
                continue
            state.pay(min(pool, state.remaining_balance), month)
            break

    return accrued


def _freeze(state: SimulationDebtState) -> DebtPayoff:
    return DebtPayoff(
        debt=state.debt,
        remaining_balance=round_cents(state.remaining_balance),
        total_interest=round_cents(state.total_interest_accrued),
        total_paid=round_cents(state.total_paid),
        payoff_month=state.payoff_month,
        is_paid_off=state.is_paid_off,
    )


def simulate(
    debts: Iterable[Debt],
    total_monthly_payment: Decimal,
    method: PayoffMethod | str,
    *,
    today: date,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> SimulationResult:
    """Run the month-by-month payoff simulation for one strategy.

    The caller's debts are never mutated; every run starts from fresh working
    state. ``total_monthly_payment`` should cover the sum of minimum payments.
    The simulator does not check this and simply stops at ``max_months``.
    The result's ``payoff_schedule`` keeps input order, and totals are rounded
    to cents once at the end.
    """

    method = PayoffMethod.parse(method)
    budget = Decimal(str(total_monthly_payment))
    states = [SimulationDebtState.start(debt) for debt in debts]
    ordered = sorted(states, key=_ORDER_KEYS[method])

    total_interest = _ZERO
    month = 0
    while month < max_months and not all(state.is_paid_off for state in states):
        month += 1
        total_interest += _run_month(month, ordered, budget)

    converged = all(state.is_paid_off for state in states)
    result = SimulationResult(
        method=method,
        total_months=month,
        total_interest=round_cents(total_interest),
        debt_free_date=debt_free_date(month, today=today, converged=converged),
        payoff_schedule=tuple(_freeze(state) for state in states),
    )

    if not converged:
        logger.warning(
            "Payoff plan did not converge",
            extra={
                "method": method.value,
                "months": month,
                "unpaid": [entry.id for entry in result.unpaid_debts],
                "monthly_payment": str(budget),
            },
        )
    logger.debug(
        "Simulated payoff plan",
        extra={
            "method": method.value,
            "debts": len(states),
            "monthly_payment": str(budget),
            "months": month,
            "total_interest": str(result.total_interest),
            "converged": converged,
        },
    )
    return result


def snowball_plan(debts: Iterable[Debt], total_monthly_payment: Decimal, *, today: date) -> SimulationResult:
    """Simulate paying the smallest balance first."""
    return simulate(debts, total_monthly_payment, PayoffMethod.SNOWBALL, today=today)


def avalanche_plan(debts: Iterable[Debt], total_monthly_payment: Decimal, *, today: date) -> SimulationResult:
    """Simulate paying the highest APR first."""
    return simulate(debts, total_monthly_payment, PayoffMethod.AVALANCHE, today=today)


def require_convergence(result: SimulationResult) -> SimulationResult:
    """Return *result* unchanged, or raise if it hit the month cap unpaid."""

    if not result.converged:
        raise NonConvergentPlanError(
            result.total_months, [entry.id for entry in result.unpaid_debts]
        )
    return result
