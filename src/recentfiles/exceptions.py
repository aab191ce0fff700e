"""Exceptions raised by the recent-files pipeline."""

from typing import List, Optional


class RecentFilesError(Exception):
    """Base exception for recent-files errors"""
    pass


class ExternalToolFailure(RecentFilesError):
    """Raised when git cannot be invoked, exits non-zero, or the operation deadline passes"""
    def __init__(
        self,
        command: List[str],
        returncode: Optional[int] = None,
        stderr: str = "",
        reason: Optional[str] = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if reason is None:
            reason = f"failed with code {returncode}: {stderr}"
        super().__init__(f"Command {' '.join(command)} {reason}")


class TimestampParseFailure(RecentFilesError):
    """Raised when git returns commit timestamp text in an unexpected format"""
    def __init__(self, payload: str, message: str = ""):
        self.payload = payload
        detail = f": {message}" if message else ""
        super().__init__(f"Cannot parse commit timestamp {payload!r}{detail}")
