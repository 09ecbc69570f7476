"""Preference repository for app-level key/value pairs."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.preference import Preference, utc_now
from ..database import SessionFactory


class SQLModelPreferenceRepository:
    """SQLModel-based preference repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[Preference]:
        with self.session_factory() as session:
            return session.exec(select(Preference).where(Preference.key == key)).first()

    def get_value(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            preference = session.exec(select(Preference).where(Preference.key == key)).first()
            return preference.value if preference else None

    def set(self, key: str, value: str) -> Preference:
        with self.session_factory() as session:
            preference = session.exec(select(Preference).where(Preference.key == key)).first()
            if preference:
                preference.value = value
                preference.updated_at = utc_now()
            else:
                preference = Preference(key=key, value=value)
            session.add(preference)
            session.commit()
            session.refresh(preference)
            return preference

    def delete(self, key: str) -> None:
        with self.session_factory() as session:
            preference = session.exec(select(Preference).where(Preference.key == key)).first()
            if preference:
                session.delete(preference)
                session.commit()


__all__ = ["SQLModelPreferenceRepository"]
