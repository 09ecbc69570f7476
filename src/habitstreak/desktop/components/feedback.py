"""Dialog and snack bar helpers that work across Flet page APIs."""

from __future__ import annotations

import flet as ft


def open_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    """Show ``dialog`` on ``page``."""
    if hasattr(page, "open"):
        page.open(dialog)
        return
    page.dialog = dialog
    dialog.open = True
    page.update()


def close_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    if hasattr(page, "close"):
        page.close(dialog)
        return
    dialog.open = False
    page.dialog = None
    page.update()


def show_snack(page: ft.Page, message: str, *, error: bool = False) -> None:
    """Flash a short message at the bottom of the page."""
    snack = ft.SnackBar(
        content=ft.Text(message),
        bgcolor=ft.Colors.ERROR if error else None,
    )
    if hasattr(page, "open"):
        page.open(snack)
        return
    page.snack_bar = snack
    snack.open = True
    page.update()
