"""
Utilities submodule for ScrollTune.

Provides settings parsing and logging setup.
"""

from .helpers import setup_logging
from .settings import SettingsError, SettingsParser

__all__ = ["SettingsError", "SettingsParser", "setup_logging"]
