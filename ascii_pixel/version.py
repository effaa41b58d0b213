#!/usr/bin/env python3
# ascii_pixel/version.py
"""
Version metadata for ascii-pixel.
"""

__version__ = "1.0.0"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"ascii-pixel v{__version__}"
