"""
Bundled visual themes.

Each builder returns a fresh factory; callers own the instance and pass it
where it is needed (windows, delegates, the demo).
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from PySide6.QtWidgets import QFrame, QPushButton, QWidget

from factory_engine.factory import ViewFactory
from gui.qt_binding import qt_factory
from gui.style import set_style_declaration


class ThemeTag(str, Enum):
    """Semantic tags understood by the bundled themes."""

    DANGER = "danger"
    WARNING = "warning"
    BORDERED = "bordered"
    ROUNDED = "rounded"


def _background(color: str) -> Callable[[QWidget], None]:
    def action(widget: QWidget) -> None:
        set_style_declaration(widget, "background-color", color)

    return action


def _build_theme(
    *,
    background: str,
    danger: str,
    warning: str,
    button_border: str,
    frame_border: str,
    apply_to_untagged: bool,
) -> ViewFactory[ThemeTag]:
    theme: ViewFactory[ThemeTag] = qt_factory(
        tag_type=ThemeTag,
        apply_to_untagged=apply_to_untagged,
    )

    theme.configure(QWidget, _background(background))
    theme.configure(QWidget, _background(danger), tagged=ThemeTag.DANGER)
    theme.configure(QWidget, _background(warning), tagged=ThemeTag.WARNING)

    @theme.style(QPushButton)
    def _button(button: QPushButton) -> None:
        set_style_declaration(button, "border", f"10px solid {button_border}")

    @theme.style(QFrame, tagged=ThemeTag.BORDERED)
    def _bordered(frame: QFrame) -> None:
        set_style_declaration(frame, "border", f"2px solid {frame_border}")

    theme.configure(
        QWidget,
        lambda widget: set_style_declaration(widget, "border-radius", "20px"),
        tagged=ThemeTag.ROUNDED,
    )
    return theme


def build_dark_theme(*, apply_to_untagged: bool = True) -> ViewFactory[ThemeTag]:
    """Dark theme: black surfaces, red danger, green button borders."""
    return _build_theme(
        background="black",
        danger="red",
        warning="yellow",
        button_border="green",
        frame_border="white",
        apply_to_untagged=apply_to_untagged,
    )


def build_light_theme(*, apply_to_untagged: bool = True) -> ViewFactory[ThemeTag]:
    """Light theme: blue surfaces, magenta danger, cyan button borders."""
    return _build_theme(
        background="blue",
        danger="magenta",
        warning="yellow",
        button_border="cyan",
        frame_border="black",
        apply_to_untagged=apply_to_untagged,
    )


THEMES: dict[str, Callable[..., ViewFactory[ThemeTag]]] = {
    "dark": build_dark_theme,
    "light": build_light_theme,
}


def build_theme(name: str, *, apply_to_untagged: bool = True) -> ViewFactory[ThemeTag]:
    """
    Build a bundled theme by name.

    Raises
    ------
    KeyError
        If ``name`` is not a bundled theme.
    """
    try:
        builder = THEMES[name]
    except KeyError:
        raise KeyError(f"Unknown theme: {name!r}") from None
    return builder(apply_to_untagged=apply_to_untagged)
