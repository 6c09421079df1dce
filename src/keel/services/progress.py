"""User-asserted payoff progress.

A debt is either not marked or marked paid off by the user, and the mark can
be toggled back and forth. Marks are never derived from a simulation; the
projection is a plan, the mark is what actually happened.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, Optional

from ..errors import PreferenceStoreError
from ..logging_config import get_logger
from .preferences import PayoffPreferences

logger = get_logger(__name__)


class ProgressState(str, Enum):
    NOT_MARKED = "not_marked"
    MARKED_PAID_OFF = "marked_paid_off"


class PayoffProgressTracker:
    """In-memory paid-off marks with write-through persistence.

    Updates apply immediately. A failed write is logged and the in-memory
    state is kept.
    """

    def __init__(
        self,
        preferences: PayoffPreferences,
        *,
        on_paid_off: Optional[Callable[[str], None]] = None,
    ):
        self.preferences = preferences
        self.on_paid_off = on_paid_off
        self._marks: dict[str, bool] = {}

    def load(self) -> dict[str, bool]:
        """Seed state from the store; on read failure start empty."""
        try:
            self._marks = self.preferences.paid_off_debts()
        except PreferenceStoreError:
            logger.warning("Could not load paid-off marks", exc_info=True)
            self._marks = {}
        return self.snapshot()

    def snapshot(self) -> dict[str, bool]:
        return dict(self._marks)

    def is_marked(self, debt_id: str) -> bool:
        return self._marks.get(str(debt_id), False)

    def state(self, debt_id: str) -> ProgressState:
        return ProgressState.MARKED_PAID_OFF if self.is_marked(debt_id) else ProgressState.NOT_MARKED

    def toggle(self, debt_id: str) -> ProgressState:
        """Flip the mark for *debt_id* and return the new state."""
        return self._set(str(debt_id), not self.is_marked(debt_id))

    def mark_paid_off(self, debt_id: str) -> ProgressState:
        return self._set(str(debt_id), True)

    def unmark(self, debt_id: str) -> ProgressState:
        return self._set(str(debt_id), False)

    def prune(self, known_ids: Iterable[str]) -> list[str]:
        """Drop marks for debts that no longer exist; returns the removed ids."""
        keep = {str(debt_id) for debt_id in known_ids}
        removed = [debt_id for debt_id in self._marks if debt_id not in keep]
        if removed:
            for debt_id in removed:
                del self._marks[debt_id]
            self._persist()
        return removed

    def _set(self, debt_id: str, marked: bool) -> ProgressState:
        was_marked = self.is_marked(debt_id)
        self._marks[debt_id] = marked
        if marked != was_marked:
            self._persist()
        # Persisted before the hook runs
        if marked and not was_marked and self.on_paid_off is not None:
            self.on_paid_off(debt_id)
        return self.state(debt_id)

    def _persist(self) -> None:
        try:
            self.preferences.save_paid_off_debts(self._marks)
        except PreferenceStoreError:
            logger.warning(
                "Failed to persist paid-off marks; keeping in-memory state",
                extra={"marks": len(self._marks)},
                exc_info=True,
            )
