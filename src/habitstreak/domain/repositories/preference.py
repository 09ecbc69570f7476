"""Preference repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.preference import Preference


class PreferenceRepository(Protocol):
    """Key-value store for small application blobs."""

    def get(self, key: str) -> Optional[Preference]:
        """Retrieve the row stored under ``key``."""
        ...

    def get_value(self, key: str) -> Optional[str]:
        """Retrieve only the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> Preference:
        """Insert or overwrite the value under ``key``."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...
