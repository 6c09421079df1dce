"""
Constants that define the debt payoff model.
Changing any of these changes simulation output, not just presentation.
"""

from decimal import Decimal

# Transaction type that carries a balance, rate and minimum payment
DEBT_TRANSACTION_TYPE = "debt"

# Category keywords that remove a debt from the snowball/avalanche cohort
STUDENT_LOAN_KEYWORDS = ("student",)
AUTO_LOAN_KEYWORDS = ("auto", "vehicle")

# Minimum payment fallback: max(balance * rate, floor)
DEFAULT_MINIMUM_PAYMENT_RATE = Decimal("0.02")
DEFAULT_MINIMUM_PAYMENT_FLOOR = Decimal("25")

# Hard cap on the monthly loop (50 years)
MAX_SIMULATION_MONTHS = 600

CENT = Decimal("0.01")

# Preference store keys
PREF_CHOSEN_PAYOFF_METHOD = "chosen_payoff_method"
PREF_DEBT_PAYOFF_ALLOCATION = "debt_payoff_allocation"
PREF_PAID_OFF_DEBTS = "paid_off_debts"
