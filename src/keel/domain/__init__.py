"""Domain value types and repository protocols."""

from .debt import (
    ActionPlan,
    ActionPlanEntry,
    ComparisonResult,
    Debt,
    DebtPayoff,
    NoEligibleDebts,
    PayoffMethod,
    RawDebtInput,
    SimulationDebtState,
    SimulationResult,
)

__all__ = [
    "ActionPlan",
    "ActionPlanEntry",
    "ComparisonResult",
    "Debt",
    "DebtPayoff",
    "NoEligibleDebts",
    "PayoffMethod",
    "RawDebtInput",
    "SimulationDebtState",
    "SimulationResult",
]
