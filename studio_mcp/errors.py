"""Exceptions raised by the studio-mcp server layers.

The blueprint core never raises; these cover the collaborators around it.
"""

from __future__ import annotations

from typing import Optional, Sequence


class StudioError(Exception):
    """Base exception for studio-mcp errors."""
    pass


class UsageError(StudioError):
    """Raised when the host CLI is invoked without a command."""
    pass


class UnknownToolError(StudioError, ValueError):
    """Raised when ``tools/call`` names a tool this server does not expose."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool '{name}'")
        self.name = name


class CommandExecutionError(StudioError):
    """Raised when a rendered command cannot be run or exits non-zero.

    ``str(error)`` is the text returned to the client in the error result.
    """

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        exit_code: Optional[int] = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.exit_code = exit_code
        self.output = output
