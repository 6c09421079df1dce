"""Concrete repository implementations using SQLModel."""

from .preference import SQLModelPreferenceRepository
from .transaction import SQLModelTransactionRepository

__all__ = ["SQLModelPreferenceRepository", "SQLModelTransactionRepository"]
