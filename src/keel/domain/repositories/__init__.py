"""Repository protocol definitions for domain layer."""

from .preference import PreferenceRepository
from .transaction import TransactionRepository

__all__ = ["PreferenceRepository", "TransactionRepository"]
