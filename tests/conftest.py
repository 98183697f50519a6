from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from collections.abc import Iterator

import pytest
from PySide6.QtWidgets import QApplication


@pytest.fixture(scope="session")
def qapp() -> Iterator[QApplication]:
    """Headless QApplication shared by every Qt test."""
    app = QApplication.instance() or QApplication([])
    yield app  # type: ignore[misc]
