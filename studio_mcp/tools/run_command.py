"""Run a rendered argument vector as a subprocess and capture its output."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from studio_mcp.errors import CommandExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured streams of one finished command."""

    argv: List[str]
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def output(self) -> str:
        """stdout followed by stderr, stripped of surrounding whitespace."""
        parts = [self.stdout.strip(), self.stderr.strip()]
        return "\n".join(part for part in parts if part)


def _build_env(extra_env: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
    if not extra_env:
        return None
    env = os.environ.copy()
    env.update(extra_env)
    return env


async def _kill(proc: asyncio.subprocess.Process) -> None:
    """Kill ``proc`` if it is still running and reap it."""
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            # Exited between the returncode check and the signal.
            pass
    await proc.wait()


async def run_command(
    argv: Sequence[str],
    *,
    timeout: Optional[float] = None,
    cwd: Optional[Union[str, Path]] = None,
    extra_env: Optional[Mapping[str, str]] = None,
) -> CommandResult:
    """Execute ``argv`` directly (no shell) and wait for it to finish.

    Args:
        argv: Argument vector; ``argv[0]`` is resolved on ``PATH``.
        timeout: Seconds to wait before killing the process, None for no limit.
        cwd: Working directory for the child process.
        extra_env: Variables added on top of the inherited environment.

    Raises:
        CommandExecutionError: If the process cannot be spawned or times out.
    """
    argv = list(argv)
    if not argv or not argv[0]:
        raise CommandExecutionError("No command to run", argv=argv)

    logger.debug(f"Spawning {argv}")
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
            env=_build_env(extra_env),
        )
    except OSError as exc:
        raise CommandExecutionError(
            f"Failed to start '{argv[0]}': {exc}", argv=argv
        ) from exc

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        await _kill(proc)
        raise CommandExecutionError(
            f"Command timed out after {timeout} seconds", argv=argv
        ) from exc
    except BaseException:
        # Cancelled (or interrupted) while waiting: the child must not outlive us.
        await _kill(proc)
        raise

    return CommandResult(
        argv=argv,
        exit_code=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )


async def execute(
    argv: Sequence[str],
    *,
    timeout: Optional[float] = None,
    cwd: Optional[Union[str, Path]] = None,
    extra_env: Optional[Mapping[str, str]] = None,
) -> str:
    """Run ``argv`` and return its output, raising on a non-zero exit."""
    result = await run_command(argv, timeout=timeout, cwd=cwd, extra_env=extra_env)
    if not result.ok:
        logger.warning(f"Command {result.argv} exited with status {result.exit_code}")
        raise CommandExecutionError(
            result.output or f"Command exited with status {result.exit_code}",
            argv=result.argv,
            exit_code=result.exit_code,
            output=result.output,
        )
    return result.output
