"""View builders."""

from .habits import build_habits_view

__all__ = ["build_habits_view"]
