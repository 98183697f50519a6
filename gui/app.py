"""
View factory demo app.

Shows the same tagged widgets styled by the dark and light themes side by
side. Widgets that no theme styled explicitly are picked up on first polish by
the theme chosen in the settings.
"""

from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from factory_engine.factory import ViewFactory
from factory_engine.materialize import SingleFactoryDelegate
from gui.qt_binding import install_polish_applier
from gui.settings_store import load_gui_settings
from gui.themes import ThemeTag, build_dark_theme, build_light_theme, build_theme


class ThemeColumn(QWidget):
    """One column of sample widgets styled by a single theme."""

    def __init__(self, title: str, theme: ViewFactory[ThemeTag]) -> None:
        super().__init__()
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        layout.addWidget(theme.create(QLabel, title))

        panel = theme.create(
            QFrame,
            tagged={ThemeTag.DANGER, ThemeTag.BORDERED, ThemeTag.ROUNDED},
        )
        panel.setMinimumSize(100, 100)
        layout.addWidget(panel)

        layout.addWidget(theme.create(QPushButton, "Button"))
        layout.addWidget(theme.create(QPushButton, "Rounded", tagged=ThemeTag.ROUNDED))
        layout.addWidget(theme.create(QLabel, "Warning", tagged=ThemeTag.WARNING))
        layout.addStretch(1)


class DemoWindow(QWidget):
    """
    Main window for the view factory demo.

    Responsibilities
    ----------------
    - Host one sample column per theme
    - Leave the header unstyled so automatic application can reach it
    """

    def __init__(self, *, dark: ViewFactory[ThemeTag], light: ViewFactory[ThemeTag]) -> None:
        super().__init__()
        self.setObjectName("demo")
        self.setWindowTitle("View Factory")
        self.resize(480, 520)

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        title = QLabel("View Factory")
        f = title.font()
        f.setPointSize(16)
        f.setBold(True)
        title.setFont(f)
        root.addWidget(title)

        columns = QHBoxLayout()
        self.dark_column = ThemeColumn("Dark", dark)
        self.light_column = ThemeColumn("Light", light)
        columns.addWidget(self.dark_column)
        columns.addWidget(self.light_column)
        root.addLayout(columns, 1)


def run_demo(*, theme_name: str | None = None, data_root: Path | None = None) -> int:
    """
    Run the demo application.

    Parameters
    ----------
    theme_name:
        Theme for widgets not styled explicitly. Defaults to the saved setting.
    data_root:
        Settings directory override.

    Returns
    -------
    int
        Qt application exit code.

    Raises
    ------
    KeyError
        If ``theme_name`` is not a bundled theme.
    """
    settings = load_gui_settings(data_root=data_root)
    ambient = build_theme(
        theme_name or settings.theme,
        apply_to_untagged=settings.apply_to_untagged,
    )

    app = QApplication.instance() or QApplication(sys.argv)
    install_polish_applier(app, SingleFactoryDelegate(ambient))

    w = DemoWindow(dark=build_dark_theme(), light=build_light_theme())
    w.show()
    return app.exec()
