#!/usr/bin/env python3
# ascii_pixel/errors.py
"""
Error taxonomy for ascii-pixel.

All errors derive from AsciiPixelError so the CLI can report them uniformly,
and each also subclasses the builtin it most resembles so callers that only
know about ValueError / OSError still catch them.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "AsciiPixelError",
    "InvalidDimension",
    "SourceUnavailable",
    "MalformedLayerSpecification",
    "GridDecodeError",
]


class AsciiPixelError(Exception):
    pass


class InvalidDimension(AsciiPixelError, ValueError):
    """Grid, canvas or bounds dimension outside the accepted range."""


class SourceUnavailable(AsciiPixelError, OSError):
    """A layer source could not be read. The I/O error is chained as __cause__."""

    def __init__(self, source: str, reason: Optional[str] = None):
        self.source = source
        self.reason = reason or "unavailable"
        super().__init__(f"{source}: {self.reason}")

    def __str__(self) -> str:
        return f"{self.source}: {self.reason}"


class MalformedLayerSpecification(AsciiPixelError, ValueError):
    def __init__(self, spec: str, reason: str = "Use: path:color[:zIndex]"):
        self.spec = spec
        self.reason = reason
        super().__init__(f"Invalid layer spec '{spec}'. {reason}")


class GridDecodeError(AsciiPixelError, ValueError):
    """Serialized grid document is structurally invalid."""
