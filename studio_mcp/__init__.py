"""Expose a templated shell command as a single MCP tool."""

__version__ = "0.1.0"
