"""Value types for debt payoff planning.

``RawDebtInput`` mirrors a loosely-typed transaction record; everything after
the extraction step works on fully populated ``Debt`` values. Simulation
working state lives in ``SimulationDebtState`` and never escapes a run: the
results carry frozen ``DebtPayoff`` snapshots instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional

from ..errors import InvalidPayoffMethodError


class PayoffMethod(str, Enum):
    """Ordering policy for the extra payment target."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"

    @classmethod
    def parse(cls, value: "PayoffMethod | str") -> "PayoffMethod":
        """Return the method for *value*, accepting any letter case."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidPayoffMethodError(f"Unknown payoff method: {value!r}") from exc


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce a stored number or string to ``Decimal``; ``None`` if unusable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # str() keeps 24.99 as 24.99 instead of its binary expansion
        return Decimal(str(value))
    if isinstance(value, int):
        return Decimal(value)
    text = str(value).strip().replace(",", "").lstrip("$")
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


# Document-store records use camelCase; SQL rows use snake_case attributes.
_FIELD_ALIASES = {
    "id": ("id",),
    "type": ("type",),
    "description": ("description", "name", "memo"),
    "category": ("category",),
    "amount": ("amount",),
    "remaining_balance": ("remaining_balance", "remainingBalance"),
    "interest_rate": ("interest_rate", "interestRate"),
    "minimum_payment": ("minimum_payment", "minimumPayment"),
}


def _lookup(record: Any, name: str) -> Any:
    for alias in _FIELD_ALIASES[name]:
        if isinstance(record, Mapping):
            if alias in record:
                return record[alias]
        elif hasattr(record, alias):
            return getattr(record, alias)
    return None


@dataclass(slots=True, frozen=True)
class RawDebtInput:
    """A transaction record as read from the store, optional fields and all."""

    id: str
    type: str = ""
    description: str = ""
    category: str = ""
    amount: Optional[Decimal] = None
    remaining_balance: Optional[Decimal] = None
    interest_rate: Optional[Decimal] = None
    minimum_payment: Optional[Decimal] = None

    @classmethod
    def from_record(cls, record: Any) -> "RawDebtInput":
        """Build from a mapping (document store) or an object with attributes."""

        raw_id = _lookup(record, "id")
        return cls(
            id="" if raw_id is None else str(raw_id),
            type=str(_lookup(record, "type") or ""),
            description=str(_lookup(record, "description") or ""),
            category=str(_lookup(record, "category") or ""),
            amount=to_decimal(_lookup(record, "amount")),
            remaining_balance=to_decimal(_lookup(record, "remaining_balance")),
            interest_rate=to_decimal(_lookup(record, "interest_rate")),
            minimum_payment=to_decimal(_lookup(record, "minimum_payment")),
        )


@dataclass(slots=True, frozen=True)
class Debt:
    """Simulation-ready debt snapshot; immutable once extracted."""

    id: str
    description: str
    category: str
    starting_balance: Decimal
    interest_rate_annual_percent: Decimal
    minimum_payment: Decimal


@dataclass(slots=True)
class SimulationDebtState:
    """Mutable per-run state for one debt."""

    debt: Debt
    remaining_balance: Decimal
    total_interest_accrued: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    payoff_month: Optional[int] = None
    is_paid_off: bool = False

    @classmethod
    def start(cls, debt: Debt) -> "SimulationDebtState":
        return cls(debt=debt, remaining_balance=debt.starting_balance)

    def accrue(self, amount: Decimal) -> None:
        self.remaining_balance += amount
        self.total_interest_accrued += amount

    def pay(self, amount: Decimal, month: int) -> None:
        """Apply *amount* and freeze the debt at zero when it is cleared."""

        self.remaining_balance -= amount
        self.total_paid += amount
        if self.remaining_balance <= 0:
            self.remaining_balance = Decimal("0")
            self.is_paid_off = True
            self.payoff_month = month


@dataclass(slots=True, frozen=True)
class DebtPayoff:
    """Final state of one debt after a simulation run, rounded for display."""

    debt: Debt
    remaining_balance: Decimal
    total_interest: Decimal
    total_paid: Decimal
    payoff_month: Optional[int]
    is_paid_off: bool

    @property
    def id(self) -> str:
        return self.debt.id


@dataclass(slots=True, frozen=True)
class SimulationResult:
    """Outcome of one simulation run."""

    method: PayoffMethod
    total_months: int
    total_interest: Decimal
    debt_free_date: Optional[date]
    payoff_schedule: tuple[DebtPayoff, ...] = ()

    @property
    def converged(self) -> bool:
        """True when every debt was paid off before the month cap."""
        return all(entry.is_paid_off for entry in self.payoff_schedule)

    @property
    def unpaid_debts(self) -> list[DebtPayoff]:
        return [entry for entry in self.payoff_schedule if not entry.is_paid_off]

    @property
    def payoff_order(self) -> list[str]:
        """Debt ids in the order they were cleared; input order breaks ties."""
        paid = [entry for entry in self.payoff_schedule if entry.payoff_month is not None]
        return [entry.id for entry in sorted(paid, key=lambda e: e.payoff_month)]

    def entry_for(self, debt_id: str) -> Optional[DebtPayoff]:
        for entry in self.payoff_schedule:
            if entry.id == debt_id:
                return entry
        return None


@dataclass(slots=True, frozen=True)
class ComparisonResult:
    """Snowball and avalanche outcomes for the same debt snapshot."""

    debts: tuple[Debt, ...]
    total_debt: Decimal
    monthly_payment: Decimal
    snowball: SimulationResult
    avalanche: SimulationResult

    @property
    def interest_savings(self) -> Decimal:
        """Interest avalanche saves over snowball; may be negative."""
        return self.snowball.total_interest - self.avalanche.total_interest

    @property
    def time_savings(self) -> int:
        """Months avalanche saves over snowball; may be negative."""
        return self.snowball.total_months - self.avalanche.total_months

    @property
    def converged(self) -> bool:
        return self.snowball.converged and self.avalanche.converged


@dataclass(slots=True, frozen=True)
class NoEligibleDebts:
    """Sentinel returned when no debt qualifies for a comparison."""

    message: str = "No debts with a balance and a known interest rate to compare."
    excluded_count: int = 0


@dataclass(slots=True, frozen=True)
class ActionPlanEntry:
    """A scheduled debt annotated with the user's own paid-off mark."""

    payoff: DebtPayoff
    marked_paid_off: bool = False


@dataclass(slots=True, frozen=True)
class ActionPlan:
    """Re-simulated plan for the chosen method plus an extra allocation."""

    method: PayoffMethod
    extra_allocation: Decimal
    monthly_payment: Decimal
    result: SimulationResult
    entries: tuple[ActionPlanEntry, ...] = field(default_factory=tuple)

    @property
    def converged(self) -> bool:
        return self.result.converged

    @property
    def marked_count(self) -> int:
        return sum(1 for entry in self.entries if entry.marked_paid_off)
