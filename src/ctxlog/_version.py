"""
Version information for ctxlog.

This file is the single source for the version number; setup.py reads
__version__ from here. Versions follow PEP 440 (e.g. 0.1.0b0).
"""

__version__ = "0.1.0b0"
__app_name__ = "ctxlog"
