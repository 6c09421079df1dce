"""Exception hierarchy for the debt payoff engine."""


class KeelError(Exception):
    """Base exception for all Keel errors."""


class InvalidAllocationInputError(KeelError, ValueError):
    """Raised when a user-entered extra payment is non-numeric or negative."""


class InvalidPayoffMethodError(KeelError, ValueError):
    """Raised when a payoff method name is not snowball or avalanche."""


class NonConvergentPlanError(KeelError):
    """Raised when a plan hits the month cap with balances still owed."""

    def __init__(self, months: int, unpaid_ids: list[str]):
        self.months = months
        self.unpaid_ids = unpaid_ids
        super().__init__(
            f"Plan does not converge within {months} months; "
            f"{len(unpaid_ids)} debt(s) still owed"
        )


class PreferenceStoreError(KeelError):
    """Raised when the preference store cannot be read or written."""
