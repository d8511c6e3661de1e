"""
Provides centralized, immutable constants for the ScrollTune core.

This package exposes singleton instances of constant groups, ensuring they
are validated on import and easily accessible from a single namespace.

Usage:
    from scrolltune import constants

    # Access application metadata
    print(constants.app.APP_NAME)

    # Access a default setting
    smooth = constants.config.defaults.DEFAULT_SMOOTHNESS

    # Access an acceleration anchor table
    min_row, max_row, curv, curv_precise = constants.acceleration.anchors.TABLES["regular"]
"""

from .acceleration import acceleration
from .app import app
from .config import config
from .logs import logs
from .timing import timing

__all__ = [
    "acceleration",
    "app",
    "config",
    "logs",
    "timing",
]
