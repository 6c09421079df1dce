"""Tests for payoff preferences and the preference repository."""

from __future__ import annotations

from decimal import Decimal

import pytest

from keel.constants.debts import (
    PREF_CHOSEN_PAYOFF_METHOD,
    PREF_DEBT_PAYOFF_ALLOCATION,
    PREF_PAID_OFF_DEBTS,
)
from keel.domain.debt import PayoffMethod
from keel.errors import InvalidAllocationInputError, InvalidPayoffMethodError
from keel.services.preferences import PayoffPreferences, parse_allocation


class TestParseAllocation:
    """Validation of user-entered extra payments."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("150", Decimal("150")),
            (" 99.95 ", Decimal("99.95")),
            ("$1,200", Decimal("1200")),
            (75, Decimal("75")),
            ("", Decimal("0")),
            (None, Decimal("0")),
            ("0", Decimal("0")),
        ],
    )
    def test_valid_values(self, value, expected):
        assert parse_allocation(value) == expected

    @pytest.mark.parametrize("value", ["abc", "-5", -0.01, "NaN", "inf", "12..5"])
    def test_invalid_values_raise(self, value):
        with pytest.raises(InvalidAllocationInputError):
            parse_allocation(value)

    def test_error_is_also_a_value_error(self):
        with pytest.raises(ValueError):
            parse_allocation("ten dollars")


class TestPreferenceRepository:
    """SQLModel-backed key/value store."""

    def test_set_and_get_round_trip(self, preference_repo, user_id):
        preference_repo.set("theme", "dark", user_id=user_id)

        assert preference_repo.get("theme", user_id=user_id) == "dark"
        assert preference_repo.get("missing", user_id=user_id) is None

    def test_set_updates_existing_value(self, preference_repo, user_id):
        preference_repo.set("theme", "dark", user_id=user_id)
        preference_repo.set("theme", "light", user_id=user_id)

        assert preference_repo.get("theme", user_id=user_id) == "light"

    def test_set_many_merges_without_touching_other_keys(self, preference_repo, user_id):
        preference_repo.set("theme", "dark", user_id=user_id)

        preference_repo.set_many({"a": "1", "b": "2"}, user_id=user_id)

        values = {key: preference_repo.get(key, user_id=user_id) for key in ("theme", "a", "b", "c")}
        assert values == {"theme": "dark", "a": "1", "b": "2", "c": None}

    def test_values_are_scoped_per_user(self, preference_repo):
        preference_repo.set("theme", "dark", user_id=1)
        preference_repo.set("theme", "light", user_id=2)

        assert preference_repo.get("theme", user_id=1) == "dark"
        assert preference_repo.get("theme", user_id=2) == "light"

    def test_delete_removes_only_that_key(self, preference_repo, user_id):
        preference_repo.set_many({"a": "1", "b": "2"}, user_id=user_id)

        preference_repo.delete("a", user_id=user_id)
        preference_repo.delete("never-set", user_id=user_id)

        assert preference_repo.get("a", user_id=user_id) is None
        assert preference_repo.get("b", user_id=user_id) == "2"


class TestPayoffPreferences:
    """Typed access to method, allocation and paid-off marks."""

    @pytest.fixture
    def prefs(self, preference_repo, user_id):
        return PayoffPreferences(preference_repo, user_id=user_id)

    def test_method_defaults_to_none(self, prefs):
        assert prefs.chosen_method() is None

    def test_choose_method_persists_lowercase_value(self, prefs, preference_repo, user_id):
        assert prefs.choose_method("Avalanche") is PayoffMethod.AVALANCHE

        assert preference_repo.get(PREF_CHOSEN_PAYOFF_METHOD, user_id=user_id) == "avalanche"
        assert prefs.chosen_method() is PayoffMethod.AVALANCHE

    def test_choose_unknown_method_raises_and_keeps_previous(self, prefs):
        prefs.choose_method(PayoffMethod.SNOWBALL)

        with pytest.raises(InvalidPayoffMethodError):
            prefs.choose_method("hurricane")

        assert prefs.chosen_method() is PayoffMethod.SNOWBALL

    def test_clear_method(self, prefs):
        prefs.choose_method("snowball")

        prefs.clear_method()

        assert prefs.chosen_method() is None

    def test_corrupt_stored_method_reads_as_none(self, prefs, preference_repo, user_id):
        preference_repo.set(PREF_CHOSEN_PAYOFF_METHOD, "???", user_id=user_id)

        assert prefs.chosen_method() is None

    def test_invalid_allocation_keeps_previous_value(self, prefs, preference_repo, user_id):
        prefs.set_allocation("120.50")

        with pytest.raises(InvalidAllocationInputError):
            prefs.set_allocation("-20")

        assert prefs.allocation() == Decimal("120.50")
        assert preference_repo.get(PREF_DEBT_PAYOFF_ALLOCATION, user_id=user_id) == "120.50"

    def test_allocation_write_leaves_unrelated_preferences(self, prefs, preference_repo, user_id):
        preference_repo.set("currency", "EUR", user_id=user_id)
        prefs.choose_method("snowball")

        prefs.set_allocation("40")

        assert preference_repo.get("currency", user_id=user_id) == "EUR"
        assert prefs.chosen_method() is PayoffMethod.SNOWBALL

    def test_paid_off_map_round_trip(self, prefs):
        prefs.save_paid_off_debts({"1": True, "2": False})

        assert prefs.paid_off_debts() == {"1": True, "2": False}

    def test_malformed_paid_off_map_reads_as_empty(self, prefs, preference_repo, user_id):
        preference_repo.set(PREF_PAID_OFF_DEBTS, "{not json", user_id=user_id)

        assert prefs.paid_off_debts() == {}
