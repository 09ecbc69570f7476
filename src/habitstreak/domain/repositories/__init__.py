"""Repository protocol definitions for domain layer."""

from .preference import PreferenceRepository

__all__ = ["PreferenceRepository"]
