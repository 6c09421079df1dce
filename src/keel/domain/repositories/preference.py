"""Preference repository protocol."""

from __future__ import annotations

from typing import Mapping, Optional, Protocol


class PreferenceRepository(Protocol):
    """Per-user key/value store with merge-style upserts."""

    def get(self, key: str, *, user_id: int) -> Optional[str]:
        """Return the stored value for *key*, or None."""
        ...

    def set(self, key: str, value: str, *, user_id: int) -> None:
        """Insert or update a single key."""
        ...

    def set_many(self, values: Mapping[str, str], *, user_id: int) -> None:
        """Upsert several keys without touching any others."""
        ...

    def delete(self, key: str, *, user_id: int) -> None:
        """Remove a key if present."""
        ...
