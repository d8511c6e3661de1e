"""
ScrollTune - turns discrete scroll settings into acceleration and animation curves.
"""

from scrolltune.constants import app as _app

__version__ = _app.VERSION
