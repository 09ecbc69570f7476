"""Concrete repository implementations using SQLModel."""

from .preference import SQLModelPreferenceRepository

__all__ = ["SQLModelPreferenceRepository"]
