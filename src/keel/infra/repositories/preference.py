"""Preference repository for per-user key/value pairs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...errors import PreferenceStoreError
from ...models.preference import UserPreference


class SQLModelPreferenceRepository:
    """SQLModel-based preference repository.

    Database errors are re-raised as ``PreferenceStoreError`` so callers can
    handle storage failures without importing SQLAlchemy.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str, *, user_id: int) -> Optional[str]:
        try:
            with self.session_factory() as session:
                row = session.exec(
                    select(UserPreference).where(
                        UserPreference.user_id == user_id, UserPreference.key == key
                    )
                ).first()
                return row.value if row else None
        except SQLAlchemyError as exc:
            raise PreferenceStoreError(f"Failed to read preference {key!r}") from exc

    def set(self, key: str, value: str, *, user_id: int) -> None:
        self.set_many({key: value}, user_id=user_id)

    def set_many(self, values: Mapping[str, str], *, user_id: int) -> None:
        if not values:
            return
        try:
            with self.session_factory() as session:
                existing = {
                    row.key: row
                    for row in session.exec(
                        select(UserPreference).where(
                            UserPreference.user_id == user_id,
                            UserPreference.key.in_(list(values)),  # type: ignore[attr-defined]
                        )
                    ).all()
                }
                now = datetime.now(timezone.utc)
                for key, value in values.items():
                    row = existing.get(key)
                    if row:
                        row.value = value
                        row.updated_at = now
                    else:
                        row = UserPreference(user_id=user_id, key=key, value=value, updated_at=now)
                    session.add(row)
                session.commit()
        except SQLAlchemyError as exc:
            raise PreferenceStoreError(f"Failed to write preferences {sorted(values)}") from exc

    def delete(self, key: str, *, user_id: int) -> None:
        try:
            with self.session_factory() as session:
                row = session.exec(
                    select(UserPreference).where(
                        UserPreference.user_id == user_id, UserPreference.key == key
                    )
                ).first()
                if row:
                    session.delete(row)
                    session.commit()
        except SQLAlchemyError as exc:
            raise PreferenceStoreError(f"Failed to delete preference {key!r}") from exc


__all__ = ["SQLModelPreferenceRepository"]
