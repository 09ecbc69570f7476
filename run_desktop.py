#!/usr/bin/env python
"""Desktop app entrypoint for HabitStreak."""

import flet as ft

from habitstreak.desktop.app import main

if __name__ == "__main__":
    ft.app(target=main)
