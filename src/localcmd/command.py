# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run a local executable with fixed leading arguments and environment overlays."""

from __future__ import annotations

import logging
import os
import shutil

# Bandit: subprocess usage is intentional; argv lists are passed without a shell.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import replace

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .collector import CapturedOutput, drain_streams
from .errors import (
    CommandNotFoundError,
    ExecutionError,
    ExitError,
    LocalCommandError,
    StartError,
)
from .output import format_failure, merge_output

LOGGER = logging.getLogger(__name__)


class LocalCommand(BaseModel):
    """Immutable description of a local executable and how to invoke it.

    ``global_args`` are placed before the call-specific arguments of every
    invocation and ``env`` is layered over the inherited process environment,
    winning on key collisions. A bare ``command`` is started using the ``PATH``
    of that merged environment, while :meth:`look_path` searches the inherited
    ``PATH``, so a ``PATH`` overlay can make the two resolve differently.
    """

    model_config = ConfigDict(frozen=True)

    command: str = Field(min_length=1)
    global_args: tuple[str, ...] = ()
    env: dict[str, str] = Field(default_factory=dict)

    @field_validator("global_args", mode="before")
    @classmethod
    def _coerce_global_args(cls, value: Sequence[str] | str) -> object:
        """Return ``value`` as a tuple so a bare string is a single argument."""

        if isinstance(value, str):
            return (value,)
        if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
            return tuple(value)
        return value

    @field_validator("env", mode="before")
    @classmethod
    def _coerce_env(cls, value: object) -> object:
        """Accept ``KEY=VALUE`` entries in addition to a mapping.

        Args:
            value: Raw ``env`` value supplied by the caller.

        Returns:
            object: Mapping form of ``value`` for pydantic to validate.

        Raises:
            ValueError: If a sequence entry has no ``=`` separator.
        """

        if isinstance(value, (Mapping, str, bytes)) or not isinstance(value, Sequence):
            return value
        overlay: dict[object, object] = {}
        for entry in value:
            if not isinstance(entry, str) or "=" not in entry:
                raise ValueError(f"env entries must look like KEY=VALUE, got {entry!r}")
            key, _, item = entry.partition("=")
            overlay[key] = item
        return overlay

    def with_args(self, *args: str) -> LocalCommand:
        """Return a copy whose leading arguments are extended by ``args``."""

        return self.model_copy(update={"global_args": (*self.global_args, *args)})

    def with_env(self, overlay: Mapping[str, str]) -> LocalCommand:
        """Return a copy whose environment overlay is extended by ``overlay``."""

        return self.model_copy(update={"env": {**self.env, **overlay}})

    def argv(self, *args: str) -> list[str]:
        """Return the argument vector used for an invocation with ``args``."""

        return [self.command, *self.global_args, *args]

    def environment(self) -> dict[str, str]:
        """Return the inherited environment with the overlay applied last."""

        return {**os.environ, **self.env}

    def look_path(self) -> str:
        """Resolve the executable against ``PATH``.

        Empty and relative ``PATH`` entries are skipped so a match is never
        found through the current directory. A ``command`` containing a path
        separator is checked as given.

        Returns:
            str: Path of the executable that would be run.

        Raises:
            CommandNotFoundError: If no executable file by that name is found.
        """

        entries = os.environ.get("PATH", os.defpath).split(os.pathsep)
        search = os.pathsep.join(entry for entry in entries if os.path.isabs(entry))
        resolved = shutil.which(self.command, path=search)
        if resolved is None:
            raise CommandNotFoundError(self.command)
        return resolved

    def is_available(self) -> bool:
        """Return ``True`` when :meth:`look_path` succeeds."""

        try:
            self.look_path()
        except LocalCommandError:
            return False
        return True

    def capture(self, *args: str) -> CapturedOutput:
        """Start the command, drain both output streams and reap the child.

        Args:
            *args: Call-specific arguments appended after ``global_args``.

        Returns:
            CapturedOutput: Raw bytes of both streams, any stream failure and
            the exit status.

        Raises:
            StartError: If the child process cannot be spawned.
        """

        argv = self.argv(*args)
        LOGGER.debug("starting %s", argv)
        try:
            # Bandit: argv is built from the caller's specification; no shell is involved.
            process = subprocess.Popen(  # nosec B603
                argv,
                env=self.environment(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            raise StartError(argv, exc) from exc

        try:
            assert process.stdout is not None and process.stderr is not None
            captured = drain_streams(process.stdout, process.stderr)
        finally:
            # Pipes close before the wait so a child writing to a failed stream gets EPIPE.
            for pipe in (process.stdout, process.stderr):
                if pipe is not None:
                    pipe.close()
            returncode = process.wait()
        LOGGER.debug("%s exited with status %d", argv[0], returncode)

        if captured.error is not None:
            captured.error.command = tuple(argv)
        return replace(captured, returncode=returncode)

    @staticmethod
    def _checked_text(argv: Sequence[str], captured: CapturedOutput) -> tuple[str, str]:
        """Return decoded output after checking for stream and exit failures.

        Raises:
            StreamReadError: If draining either stream failed.
            ExitError: If the child exited with a non-zero status.
        """

        captured.raise_for_error()
        stdout, stderr = captured.stdout_text, captured.stderr_text
        if captured.returncode:
            raise ExitError(argv, captured.returncode, stdout, stderr)
        return stdout, stderr

    def run_separate(self, *args: str) -> tuple[str, str]:
        """Run the command and return its stdout and stderr untrimmed.

        Args:
            *args: Call-specific arguments appended after ``global_args``.

        Returns:
            tuple[str, str]: Decoded ``(stdout, stderr)``.

        Raises:
            StartError: If the child process cannot be spawned.
            StreamReadError: If draining either stream failed.
            ExitError: If the child exited with a non-zero status.
        """

        return self._checked_text(self.argv(*args), self.capture(*args))

    def run(self, *args: str) -> str:
        """Run the command and return stdout and stderr merged and trimmed.

        Args:
            *args: Call-specific arguments appended after ``global_args``.

        Returns:
            str: ``stdout`` and ``stderr`` joined by a newline, trimmed.

        Raises:
            ExecutionError: On any start, stream or exit failure. The message
                carries the trimmed stderr and a ``Full output`` section, and
                the underlying error is chained.
        """

        stdout = stderr = ""
        try:
            captured = self.capture(*args)
            stdout, stderr = captured.stdout_text, captured.stderr_text
            self._checked_text(self.argv(*args), captured)
        except LocalCommandError as exc:
            raise ExecutionError(
                format_failure(stdout, stderr),
                exc.command,
                stdout=stdout,
                stderr=stderr,
                cause=exc,
            ) from exc
        return merge_output(stdout, stderr)


__all__ = ["LocalCommand"]
