"""SQLModel table exports."""

from .preference import UserPreference
from .transaction import Transaction

__all__ = ["Transaction", "UserPreference"]
