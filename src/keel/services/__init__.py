"""Debt payoff services."""

from .comparison import build_action_plan, compare_strategies
from .debts import avalanche_plan, require_convergence, simulate, snowball_plan
from .extraction import extract_comparison_cohort, extract_debts, is_comparison_eligible
from .preferences import PayoffPreferences, parse_allocation
from .progress import PayoffProgressTracker, ProgressState

__all__ = [
    "PayoffPreferences",
    "PayoffProgressTracker",
    "ProgressState",
    "avalanche_plan",
    "build_action_plan",
    "compare_strategies",
    "extract_comparison_cohort",
    "extract_debts",
    "is_comparison_eligible",
    "parse_allocation",
    "require_convergence",
    "simulate",
    "snowball_plan",
]
