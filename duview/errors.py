"""Session-fatal error types.

Navigation itself never fails; only scanning and drawing can, and both end
the session.
"""

from __future__ import annotations


class DuviewError(Exception):
    """Base class for errors surfaced to the CLI."""


class ScanError(DuviewError):
    """The walk could not start or failed as a whole."""


class RenderError(DuviewError):
    """Writing a frame to the terminal failed."""


__all__ = ["DuviewError", "ScanError", "RenderError"]
