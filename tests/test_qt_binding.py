from __future__ import annotations

from typing import Any

import pytest
from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtWidgets import QApplication, QFrame, QLabel, QPushButton, QWidget

from factory_engine.materialize import SingleFactoryDelegate
from gui.qt_binding import (
    MATERIALIZED_PROPERTY,
    TAGS_PROPERTY,
    QtPropertyTagStorage,
    UiLoadError,
    WindowThemeDelegate,
    install_polish_applier,
    load_ui,
    qt_factory,
)
from gui.style import style_declarations
from gui.themes import build_dark_theme, build_light_theme

UI_FORM = """<?xml version="1.0" encoding="UTF-8"?>
<ui version="4.0">
 <class>Form</class>
 <widget class="QWidget" name="form">
  <layout class="QVBoxLayout" name="layout">
   <item>
    <widget class="QPushButton" name="alarm">
     <property name="text">
      <string>Alarm</string>
     </property>
     <property name="factoryTags" stdset="0">
      <string>danger rounded</string>
     </property>
    </widget>
   </item>
   <item>
    <widget class="QLabel" name="plain">
     <property name="text">
      <string>Plain</string>
     </property>
    </widget>
   </item>
  </layout>
 </widget>
 <resources/>
 <connections/>
</ui>
"""


def _ui_buffer(text: str) -> QBuffer:
    buffer = QBuffer()
    buffer.setData(QByteArray(text.encode("utf-8")))
    buffer.open(QIODevice.OpenModeFlag.ReadOnly)
    return buffer


def test_property_storage_round_trips_tags(qapp: QApplication) -> None:
    storage = QtPropertyTagStorage()
    widget = QWidget()

    assert storage.read_tags(widget) == ""
    storage.write_tags(widget, "a b")
    assert widget.property(TAGS_PROPERTY) == "a b"
    assert storage.read_tags(widget) == "a b"

    assert not storage.is_materialized(widget)
    storage.mark_materialized(widget)
    assert widget.property(MATERIALIZED_PROPERTY) is True


def test_qwidget_rules_reach_subclasses(qapp: QApplication) -> None:
    calls: list[str] = []
    factory = qt_factory()
    factory.configure(QPushButton, lambda w: calls.append("button"))
    factory.configure(QWidget, lambda w: calls.append("widget"))

    factory.apply(QPushButton())

    assert calls == ["widget", "button"]


def test_polish_applier_materializes_each_widget_once(qapp: QApplication) -> None:
    calls: list[Any] = []
    factory = qt_factory()
    factory.configure(QLabel, calls.append)

    applier = install_polish_applier(qapp, SingleFactoryDelegate(factory))
    try:
        label = QLabel("x")
        label.ensurePolished()
        label.ensurePolished()
    finally:
        qapp.removeEventFilter(applier)

    assert calls == [label]


def test_load_ui_applies_persisted_designer_tags(qapp: QApplication) -> None:
    root = load_ui(_ui_buffer(UI_FORM), SingleFactoryDelegate(build_dark_theme()))

    alarm = root.findChild(QPushButton, "alarm")
    plain = root.findChild(QLabel, "plain")
    assert alarm is not None and plain is not None

    assert style_declarations(alarm) == {
        "background-color": "red",
        "border-radius": "20px",
        "border": "10px solid green",
    }
    assert style_declarations(plain) == {"background-color": "black"}
    assert style_declarations(root) == {"background-color": "black"}
    assert plain.property(MATERIALIZED_PROPERTY) is True


def test_load_ui_respects_apply_to_untagged(qapp: QApplication) -> None:
    theme = build_dark_theme(apply_to_untagged=False)
    root = load_ui(_ui_buffer(UI_FORM), SingleFactoryDelegate(theme))

    plain = root.findChild(QLabel, "plain")
    alarm = root.findChild(QPushButton, "alarm")
    assert plain is not None and alarm is not None
    assert plain.styleSheet() == ""
    assert style_declarations(alarm)["background-color"] == "red"


def test_load_ui_missing_file_raises(qapp: QApplication, tmp_path) -> None:
    with pytest.raises(UiLoadError):
        load_ui(tmp_path / "missing.ui", SingleFactoryDelegate(None))


def test_window_delegate_picks_theme_per_window(qapp: QApplication) -> None:
    dark = build_dark_theme()
    light = build_light_theme()
    delegate = WindowThemeDelegate(default=dark)
    delegate.assign("settings", light)

    settings = QWidget()
    settings.setObjectName("settings")
    child = QFrame(settings)
    main = QWidget()
    main.setObjectName("main")

    assert delegate.factory_for(child) is light
    assert delegate.factory_for(main) is dark
    assert delegate.factory_for(object()) is None
