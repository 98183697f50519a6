"""
Style sheet declaration helpers.

Theme actions must be idempotent setters. These helpers treat a widget's style
sheet as an ordered mapping of declarations so each action replaces a single
property instead of the whole sheet.
"""

from __future__ import annotations

from PySide6.QtWidgets import QWidget


def style_declarations(widget: QWidget) -> dict[str, str]:
    """Parse the widget's selector-less style sheet into ``{property: value}``."""
    out: dict[str, str] = {}
    for chunk in widget.styleSheet().split(";"):
        name, sep, value = chunk.partition(":")
        if not sep:
            continue
        name = name.strip()
        if name:
            out[name] = value.strip()
    return out


def render_declarations(declarations: dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in declarations.items())


def set_style_declaration(widget: QWidget, name: str, value: str) -> None:
    """Set one style sheet property on ``widget``, keeping the others."""
    declarations = style_declarations(widget)
    if declarations.get(name) == value:
        return
    declarations[name] = value
    widget.setStyleSheet(render_declarations(declarations))
