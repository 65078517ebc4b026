# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by :mod:`localcmd`."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

StreamName = Literal["stdout", "stderr"]


class LocalCommandError(RuntimeError):
    """Base class for failures while locating or running a local command."""

    def __init__(self, message: str, command: Sequence[str]) -> None:
        """Initialise the error with ``message`` and the related argv.

        Args:
            message: Human readable description of the failure.
            command: Argument vector (or bare executable name) the failure relates to.
        """

        super().__init__(message)
        self.command = tuple(command)


class CommandNotFoundError(LocalCommandError, FileNotFoundError):
    """Raised when the executable cannot be resolved on ``PATH``."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Executable '{name}' was not found on PATH", (name,))
        self.name = name


class StartError(LocalCommandError):
    """Raised when the child process could not be spawned."""

    def __init__(self, command: Sequence[str], cause: OSError) -> None:
        super().__init__(f"Command '{command[0]}' could not be started: {cause}", command)
        self.cause = cause


class StreamReadError(LocalCommandError):
    """Raised when draining one of the child's output streams fails."""

    def __init__(self, stream: StreamName, cause: OSError, command: Sequence[str] = ()) -> None:
        """Initialise the error with the failing stream label.

        Args:
            stream: Which output stream failed, ``"stdout"`` or ``"stderr"``.
            cause: Underlying I/O error raised by the read.
            command: Argument vector of the invocation, when known.
        """

        super().__init__(f"failed while capturing {stream}: {cause}", command)
        self.stream: StreamName = stream
        self.cause = cause


class ExitError(LocalCommandError):
    """Raised when the child exits with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stdout: str, stderr: str) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Argument vector that was executed.
            returncode: Exit status reported by the child; negative for signals.
            stdout: Decoded standard output stream.
            stderr: Decoded standard error stream.
        """

        super().__init__(f"Command '{command[0]}' exited with status {returncode}", command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class ExecutionError(LocalCommandError):
    """Failure raised by ``LocalCommand.run`` with the captured output embedded."""

    def __init__(
        self,
        message: str,
        command: Sequence[str],
        *,
        stdout: str,
        stderr: str,
        cause: LocalCommandError,
    ) -> None:
        super().__init__(message, command)
        self.stdout = stdout
        self.stderr = stderr
        self.cause = cause


__all__ = [
    "CommandNotFoundError",
    "ExecutionError",
    "ExitError",
    "LocalCommandError",
    "StartError",
    "StreamName",
    "StreamReadError",
]
