"""pytest configuration and fixtures for pyqt-formdelegates tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_form_config():
    """Reset the global delegate configuration around each test."""
    from pyqt_formdelegates.protocols import set_form_config

    set_form_config(None)
    yield
    set_form_config(None)
