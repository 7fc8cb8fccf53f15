# src/__init__.py - v1
"""smartprobe: cached, validated smartctl readings per device."""

from smartprobe.version import __version__

__all__ = ["__version__"]
