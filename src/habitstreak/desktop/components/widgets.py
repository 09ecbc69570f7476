"""Small presentational widgets."""

from __future__ import annotations

import flet as ft

from ...models.habit import Priority
from ..constants import priority_style


def empty_state(message: str, hint: str | None = None) -> ft.Container:
    """Placeholder shown when there is nothing to list."""

    controls: list[ft.Control] = [
        ft.Icon(ft.Icons.CHECK_CIRCLE_OUTLINE, size=64, color=ft.Colors.ON_SURFACE_VARIANT),
        ft.Text(message, size=20, weight=ft.FontWeight.BOLD),
    ]
    if hint:
        controls.append(ft.Text(hint, color=ft.Colors.ON_SURFACE_VARIANT))
    return ft.Container(
        content=ft.Column(
            controls=controls,
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        padding=24,
    )


def priority_badge(priority: Priority) -> ft.Row:
    """Icon plus label for a habit's priority."""

    style = priority_style(priority)
    return ft.Row(
        controls=[
            ft.Icon(style.icon, color=style.color, size=14),
            ft.Text(style.label, size=13, color=ft.Colors.ON_SURFACE_VARIANT),
        ],
        spacing=4,
        tight=True,
    )
