import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtGui import QGuiApplication

from scrolltune.core.model import SettingsSnapshot, SmoothnessTier, SpeedTier


@pytest.fixture(scope="session")
def q_app():
    """Provides a QGuiApplication instance for the test session."""
    return QGuiApplication.instance() or QGuiApplication([])


@pytest.fixture
def make_settings():
    """Builds a fresh SettingsSnapshot; every call yields a new identity."""
    def _make(smoothness=SmoothnessTier.REGULAR, speed=SpeedTier.MEDIUM, **kwargs) -> SettingsSnapshot:
        return SettingsSnapshot(smoothness=smoothness, speed=speed, **kwargs)
    return _make
