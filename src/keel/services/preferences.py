"""Typed access to the payoff-related user preferences."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..constants.debts import (
    PREF_CHOSEN_PAYOFF_METHOD,
    PREF_DEBT_PAYOFF_ALLOCATION,
    PREF_PAID_OFF_DEBTS,
)
from ..domain.debt import PayoffMethod, to_decimal
from ..domain.repositories import PreferenceRepository
from ..errors import InvalidAllocationInputError, InvalidPayoffMethodError
from ..logging_config import get_logger

logger = get_logger(__name__)


def parse_allocation(value: Any) -> Decimal:
    """Parse a user-entered extra monthly payment.

    Blank input means no extra payment. Anything non-numeric or negative raises
    ``InvalidAllocationInputError``.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal("0")
    amount = to_decimal(value)
    if amount is None:
        raise InvalidAllocationInputError(f"Extra payment must be a number, got {value!r}")
    if amount < 0:
        raise InvalidAllocationInputError(f"Extra payment must not be negative, got {value!r}")
    return amount


class PayoffPreferences:
    """Reads and writes the chosen method, extra allocation and paid-off marks.

    Every write upserts only its own key, so unrelated preferences survive.
    """

    def __init__(self, repository: PreferenceRepository, *, user_id: int):
        self.repository = repository
        self.user_id = user_id

    def chosen_method(self) -> Optional[PayoffMethod]:
        raw = self.repository.get(PREF_CHOSEN_PAYOFF_METHOD, user_id=self.user_id)
        if not raw:
            return None
        try:
            return PayoffMethod.parse(raw)
        except InvalidPayoffMethodError:
            logger.warning("Ignoring unknown stored payoff method", extra={"value": raw})
            return None

    def choose_method(self, method: PayoffMethod | str) -> PayoffMethod:
        parsed = PayoffMethod.parse(method)
        self.repository.set(PREF_CHOSEN_PAYOFF_METHOD, parsed.value, user_id=self.user_id)
        logger.info("Payoff method chosen", extra={"method": parsed.value, "user_id": self.user_id})
        return parsed

    def clear_method(self) -> None:
        self.repository.delete(PREF_CHOSEN_PAYOFF_METHOD, user_id=self.user_id)

    def allocation(self) -> Decimal:
        """Stored extra allocation; an unreadable value counts as zero."""
        raw = self.repository.get(PREF_DEBT_PAYOFF_ALLOCATION, user_id=self.user_id)
        try:
            return parse_allocation(raw)
        except InvalidAllocationInputError:
            logger.warning("Ignoring invalid stored allocation", extra={"value": raw})
            return Decimal("0")

    def set_allocation(self, value: Any) -> Decimal:
        """Validate then store; on invalid input nothing is written."""
        amount = parse_allocation(value)
        self.repository.set(PREF_DEBT_PAYOFF_ALLOCATION, str(amount), user_id=self.user_id)
        return amount

    def paid_off_debts(self) -> dict[str, bool]:
        raw = self.repository.get(PREF_PAID_OFF_DEBTS, user_id=self.user_id)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed paid-off map", extra={"value": raw})
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): bool(value) for key, value in data.items()}

    def save_paid_off_debts(self, marks: Mapping[str, bool]) -> None:
        payload = json.dumps({str(key): bool(value) for key, value in marks.items()}, sort_keys=True)
        self.repository.set(PREF_PAID_OFF_DEBTS, payload, user_id=self.user_id)
