"""Exception hierarchy for the session manager.

Fatal conditions raise one of these; per-window soft failures (missing
command line, failed spawn, a window that refuses to close) are logged and
counted instead.
"""

from typing import Optional


class SessionManagerError(Exception):
    """Base class for all session manager errors."""

    pass


class GatewayError(SessionManagerError):
    """Raised when a hyprctl invocation fails (nonzero exit or spawn error)."""

    def __init__(self, command: str, message: str, stderr: Optional[str] = None):
        self.command = command
        self.stderr = stderr
        detail = f"hyprctl {command!r} failed: {message}"
        if stderr:
            detail += f" ({stderr.strip()})"
        super().__init__(detail)


class CaptureError(SessionManagerError):
    """Raised when the compositor's window list cannot be interpreted."""

    pass


class SessionFileError(SessionManagerError):
    """Raised when a persisted session cannot be read or written."""

    pass


class ConfigError(SessionManagerError):
    """Raised when the settings file or Hyprland config cannot be used."""

    pass
