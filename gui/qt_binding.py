"""
PySide6 binding for the view factory engine.

Qt widgets keep their tags in a dedicated dynamic property (``factoryTags``),
so tags can be authored in Qt Designer as a string dynamic property and are
picked up when a ``.ui`` description is loaded.

Materialization
---------------
- ``PolishApplier`` is an application event filter. Every ``QWidget`` receives
  ``QEvent.Polish`` once before it is first shown; the filter hands the widget
  to ``materialize``.
- ``load_ui`` loads a Designer description and materializes the whole tree
  immediately.

In both paths the per-widget ``factoryMaterialized`` property prevents a
second automatic application.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PySide6.QtCore import QEvent, QFile, QIODevice, QObject
from PySide6.QtUiTools import QUiLoader
from PySide6.QtWidgets import QApplication, QWidget

from factory_engine.errors import ViewFactoryError
from factory_engine.factory import ViewFactory
from factory_engine.materialize import MaterializationDelegate, materialize, materialize_all

logger = logging.getLogger(__name__)

TAGS_PROPERTY = "factoryTags"
MATERIALIZED_PROPERTY = "factoryMaterialized"


class UiLoadError(ViewFactoryError):
    """Raised when a Designer description cannot be loaded."""


class QtPropertyTagStorage:
    """Store view state in Qt dynamic properties of the widget."""

    def read_tags(self, view: QObject) -> str:
        value = view.property(TAGS_PROPERTY)
        return value.strip() if isinstance(value, str) else ""

    def write_tags(self, view: QObject, text: str) -> None:
        view.setProperty(TAGS_PROPERTY, text)

    def is_materialized(self, view: QObject) -> bool:
        return bool(view.property(MATERIALIZED_PROPERTY))

    def mark_materialized(self, view: QObject) -> None:
        view.setProperty(MATERIALIZED_PROPERTY, True)


def qt_factory(**kwargs: Any) -> ViewFactory[Any]:
    """
    Build a ``ViewFactory`` configured for Qt widgets.

    The type walk stops at ``QObject`` so that rules registered for
    ``QWidget`` apply to every widget. Keyword arguments are forwarded to
    ``ViewFactory``.
    """
    kwargs.setdefault("base_type", QObject)
    kwargs.setdefault("tag_storage", QtPropertyTagStorage())
    return ViewFactory(**kwargs)


class WindowThemeDelegate:
    """
    Pick a factory per top-level window.

    Windows are identified by ``objectName``. Widgets in windows without an
    assignment use ``default`` (which may be None: no automatic styling).
    """

    def __init__(self, default: ViewFactory[Any] | None = None) -> None:
        self.default = default
        self._by_window: dict[str, ViewFactory[Any]] = {}

    def assign(self, window_name: str, factory: ViewFactory[Any]) -> None:
        """Use ``factory`` for widgets whose top-level window is named ``window_name``."""
        self._by_window[window_name] = factory

    def factory_for(self, view: Any) -> ViewFactory[Any] | None:
        if not isinstance(view, QWidget):
            return None
        return self._by_window.get(view.window().objectName(), self.default)


class PolishApplier(QObject):
    """Event filter that materializes widgets on their first polish."""

    def __init__(self, delegate: MaterializationDelegate, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.delegate = delegate

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if event.type() == QEvent.Type.Polish and isinstance(watched, QWidget):
            materialize(watched, self.delegate)
        return False


def install_polish_applier(app: QApplication, delegate: MaterializationDelegate) -> PolishApplier:
    """
    Install a ``PolishApplier`` on ``app``.

    Returns
    -------
    PolishApplier
        The installed filter, parented to ``app``. Remove it with
        ``app.removeEventFilter``.
    """
    applier = PolishApplier(delegate, parent=app)
    app.installEventFilter(applier)
    return applier


def load_ui(
    source: Path | QIODevice,
    delegate: MaterializationDelegate,
    parent: QWidget | None = None,
) -> QWidget:
    """
    Load a Qt Designer description and materialize every widget in it.

    Parameters
    ----------
    source:
        Path to a ``.ui`` file, or an open ``QIODevice`` holding one.
    delegate:
        Chooses the factory per widget.
    parent:
        Optional parent for the loaded root widget.

    Returns
    -------
    QWidget
        The loaded root widget.

    Raises
    ------
    UiLoadError
        If the file cannot be opened or the description is invalid.
    """
    loader = QUiLoader()
    if isinstance(source, QIODevice):
        root = loader.load(source, parent)
    else:
        ui_file = QFile(str(source))
        if not ui_file.open(QIODevice.OpenModeFlag.ReadOnly):
            raise UiLoadError(f"Cannot open {source}: {ui_file.errorString()}")
        try:
            root = loader.load(ui_file, parent)
        finally:
            ui_file.close()

    if root is None:
        raise UiLoadError(f"Cannot load UI description: {loader.errorString()}")

    count = materialize_all([root, *root.findChildren(QWidget)], delegate)
    logger.debug("Loaded %s and materialized %d widget(s)", root.objectName() or root, count)
    return root
