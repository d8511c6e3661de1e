"""
Display geometry lookup.

The resolver asks a display geometry provider for the pixel extent of the
display a scroll event targets. A missing display is not an error; the
provider returns None and display scaling is skipped.
"""

from __future__ import annotations
import logging
from typing import Dict, Hashable, Mapping, Optional, Protocol, Tuple

from PyQt6.QtGui import QGuiApplication

from scrolltune import constants

PixelExtent = Tuple[int, int]


class DisplayGeometryProvider(Protocol):
    def pixel_extent(self, display_id: Hashable) -> Optional[PixelExtent]:
        """Returns (width, height) in pixels, or None if the display is unknown."""
        ...


class StaticDisplayGeometry:
    """Serves a fixed display table. Useful for headless hosts and tests."""

    def __init__(self, extents: Optional[Mapping[Hashable, PixelExtent]] = None) -> None:
        self._extents: Dict[Hashable, PixelExtent] = dict(extents or {})

    def set_extent(self, display_id: Hashable, extent: PixelExtent) -> None:
        self._extents[display_id] = extent

    def pixel_extent(self, display_id: Hashable) -> Optional[PixelExtent]:
        return self._extents.get(display_id)


class QtDisplayGeometry:
    """
    Looks displays up among `QGuiApplication.screens()`.

    Display ids are indices into the screen list. Extents are logical pixels
    of the screen geometry.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{constants.app.APP_NAME}.QtDisplayGeometry")

    def pixel_extent(self, display_id: Hashable) -> Optional[PixelExtent]:
        if QGuiApplication.instance() is None:
            self.logger.debug("No Qt application, display geometry unavailable.")
            return None
        screens = QGuiApplication.screens()
        if not isinstance(display_id, int) or not (0 <= display_id < len(screens)):
            self.logger.debug("Unknown display id %r (%d screens)", display_id, len(screens))
            return None
        geometry = screens[display_id].geometry()
        if geometry.width() <= 0 or geometry.height() <= 0:
            return None
        return geometry.width(), geometry.height()
