"""Subprocess execution for blueprint tools."""

from .run_command import CommandResult, execute, run_command

__all__ = [
    "CommandResult",
    "execute",
    "run_command",
]
