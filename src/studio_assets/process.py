# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Run the external compilers behind the style and script transforms."""

from __future__ import annotations

import shutil

# Bandit: commands are argument lists assembled by the transform adapters and
# never pass through a shell.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from .errors import StudioAssetsError

TIMEOUT_RETURNCODE: Final[int] = 124
"""Exit status reported for a command killed after exceeding its timeout."""


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """How one compiler invocation runs.

    Attributes:
        cwd: Working directory, the current one when ``None``.
        env: Full environment replacing the inherited one when given.
        check: Raise :class:`SubprocessExecutionError` on a non-zero exit.
        timeout: Seconds before the command is killed.
        input_text: Text written to standard input; stdin is closed otherwise.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    timeout: float | None = None
    input_text: str | None = None


class SubprocessExecutionError(StudioAssetsError):
    """A checked command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stdout: str, stderr: str) -> None:
        super().__init__(f"{Path(command[0]).name} exited with status {returncode}: {stderr.strip() or '<no output>'}")
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def find_executable(name: str) -> str | None:
    """Return the absolute path of ``name`` on ``PATH``, if installed."""

    return shutil.which(name)


def _command_line(args: Sequence[str]) -> list[str]:
    """Return ``args`` with the executable resolved to an absolute path.

    Raises:
        ValueError: If ``args`` is empty.
        FileNotFoundError: If the executable is not installed.
    """

    if not args:
        raise ValueError("a command needs at least an executable")
    executable, *rest = args
    if Path(executable).is_absolute():
        return [executable, *rest]
    located = find_executable(executable)
    if located is None:
        raise FileNotFoundError(f"Executable '{executable}' was not found on PATH")
    return [located, *rest]


def _decode(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    return stream if isinstance(stream, str) else stream.decode(errors="replace")


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Run ``args`` capturing text output.

    A command exceeding ``options.timeout`` is reported with
    :data:`TIMEOUT_RETURNCODE` instead of raising ``TimeoutExpired``.

    Args:
        args: Executable followed by its arguments.
        options: Execution options; defaults to :class:`CommandOptions`.

    Returns:
        CompletedProcess[str]: Exit status with captured stdout and stderr.

    Raises:
        FileNotFoundError: If the executable is not installed.
        SubprocessExecutionError: If ``options.check`` is set and the command fails.
    """

    command = _command_line(args)
    opts = options or CommandOptions()
    try:
        completed = subprocess.run(  # nosec B603 - argument list, no shell
            command,
            cwd=opts.cwd,
            env=dict(opts.env) if opts.env is not None else None,
            input=opts.input_text,
            stdin=subprocess.DEVNULL if opts.input_text is None else None,
            capture_output=True,
            text=True,
            timeout=opts.timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        notice = f"Command timed out after {opts.timeout:.1f}s"
        stderr = _decode(exc.stderr)
        completed = CompletedProcess(
            command,
            TIMEOUT_RETURNCODE,
            stdout=_decode(exc.stdout),
            stderr=f"{stderr}\n{notice}" if stderr else notice,
        )

    if opts.check and completed.returncode != 0:
        raise SubprocessExecutionError(command, completed.returncode, completed.stdout, completed.stderr)
    return completed


__all__ = [
    "CommandOptions",
    "SubprocessExecutionError",
    "TIMEOUT_RETURNCODE",
    "find_executable",
    "run_command",
]
