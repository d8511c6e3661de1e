"""
Unit tests for the display geometry providers.
"""
import pytest
from unittest.mock import MagicMock, patch

from PyQt6.QtGui import QGuiApplication

from scrolltune.core.display import QtDisplayGeometry, StaticDisplayGeometry


def make_screen(width: int, height: int) -> MagicMock:
    screen = MagicMock()
    screen.geometry.return_value.width.return_value = width
    screen.geometry.return_value.height.return_value = height
    return screen


@pytest.fixture
def mock_qgui():
    """Patches QGuiApplication with two screens."""
    screens = [make_screen(1920, 1080), make_screen(2560, 1440)]
    with patch("scrolltune.core.display.QGuiApplication") as MockApp:
        MockApp.instance.return_value = MagicMock()
        MockApp.screens.return_value = screens
        yield MockApp


def test_static_geometry():
    geometry = StaticDisplayGeometry({"main": (1920, 1080)})
    assert geometry.pixel_extent("main") == (1920, 1080)
    assert geometry.pixel_extent("side") is None
    geometry.set_extent("side", (1080, 1920))
    assert geometry.pixel_extent("side") == (1080, 1920)


def test_qt_geometry_reads_screens(mock_qgui):
    geometry = QtDisplayGeometry()
    assert geometry.pixel_extent(0) == (1920, 1080)
    assert geometry.pixel_extent(1) == (2560, 1440)


@pytest.mark.parametrize("display_id", [2, -1, "0", None])
def test_qt_geometry_unknown_display(mock_qgui, display_id):
    assert QtDisplayGeometry().pixel_extent(display_id) is None


def test_qt_geometry_ignores_empty_screen(mock_qgui):
    mock_qgui.screens.return_value = [make_screen(0, 0)]
    assert QtDisplayGeometry().pixel_extent(0) is None


def test_qt_geometry_without_application(mock_qgui):
    mock_qgui.instance.return_value = None
    assert QtDisplayGeometry().pixel_extent(0) is None
    mock_qgui.screens.assert_not_called()


def test_qt_geometry_with_real_application(q_app):
    geometry = QtDisplayGeometry()
    screen_count = len(QGuiApplication.screens())
    for display_id in range(screen_count):
        width, height = geometry.pixel_extent(display_id)
        assert width > 0 and height > 0
    assert geometry.pixel_extent(screen_count) is None
