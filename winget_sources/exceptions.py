"""Error taxonomy for winget source operations.

"winget could not be started" and "winget ran but the action failed" are
kept apart so callers can tell a missing tool from a broken request.
A non-zero winget exit code is not an error at all: operations report it
as ``False`` / ``""`` / ``[]``.
"""

from typing import Optional


class WinGetSourcesError(Exception):
    """Base class for all errors raised by winget_sources."""


class ToolNotInstalled(WinGetSourcesError):
    """The winget executable could not be found or launched."""

    def __init__(self, executable: str = "winget"):
        self.executable = executable
        super().__init__(
            f"{executable} not found or could not be started. "
            f"Install App Installer: https://learn.microsoft.com/windows/package-manager/winget/"
        )


class ActionFailed(WinGetSourcesError):
    """Any other failure while running a source operation."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        if cause is not None:
            super().__init__(f"{message} ({type(cause).__name__}: {cause})")
        else:
            super().__init__(message)


class ParseError(WinGetSourcesError, ValueError):
    """The ``source list`` output is not a table we can read."""
