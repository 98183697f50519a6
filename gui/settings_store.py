"""
GUI settings persisted as JSON under a data root.

Only the theme choice and the untagged-widget policy are stored; missing or
malformed files load as defaults.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from gui.themes import THEMES

DATA_ROOT_ENV = "VIEWFACTORY_HOME"


@dataclass(frozen=True, slots=True)
class GuiSettings:
    """
    Persisted GUI settings.

    Notes
    -----
    Only the choice of theme is persisted. Theme rules themselves are rebuilt
    in code on every start.
    """

    theme: str  # "dark" | "light"
    apply_to_untagged: bool

    @staticmethod
    def defaults() -> "GuiSettings":
        return GuiSettings(theme="dark", apply_to_untagged=True)


def default_data_root() -> Path:
    """
    Resolve the default data root.

    Preference order:
    1) %VIEWFACTORY_HOME% if set
    2) ~/.viewfactory
    """
    override = os.environ.get(DATA_ROOT_ENV)
    if override:
        return Path(override)
    return Path.home() / ".viewfactory"


def _settings_path(data_root: Path | None) -> Path:
    root = default_data_root() if data_root is None else data_root
    return root / "gui_settings.json"


def load_gui_settings(*, data_root: Path | None) -> GuiSettings:
    """
    Load GUI settings from disk.

    Parameters
    ----------
    data_root:
        Settings directory. If None, ``default_data_root()`` is used.

    Returns
    -------
    GuiSettings
        Loaded settings, or defaults if missing/unreadable.
    """
    path = _settings_path(data_root)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return GuiSettings.defaults()
    if not isinstance(payload, dict):
        return GuiSettings.defaults()

    defaults = GuiSettings.defaults()

    theme = payload.get("theme", defaults.theme)
    if theme not in THEMES:
        theme = defaults.theme

    apply_to_untagged = payload.get("apply_to_untagged", defaults.apply_to_untagged)
    if not isinstance(apply_to_untagged, bool):
        apply_to_untagged = defaults.apply_to_untagged

    return GuiSettings(theme=str(theme), apply_to_untagged=apply_to_untagged)


def save_gui_settings(*, data_root: Path | None, settings: GuiSettings) -> None:
    """
    Save GUI settings to disk.

    Parameters
    ----------
    data_root:
        Settings directory. If None, ``default_data_root()`` is used.
    settings:
        Settings to persist.
    """
    path = _settings_path(data_root)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "theme": settings.theme,
        "apply_to_untagged": settings.apply_to_untagged,
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
