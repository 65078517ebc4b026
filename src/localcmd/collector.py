# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concurrent draining of a child process's stdout and stderr streams.

Reading one pipe to completion before touching the other deadlocks as soon as
the child fills the kernel buffer of the unread pipe. Both streams are
therefore copied by independent worker threads, and the caller resumes only
after both workers have reached end-of-stream (or failed).
"""

from __future__ import annotations

import io
import shutil
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import BinaryIO, Final

from .errors import StreamName, StreamReadError
from .output import decode_output

_CHUNK_SIZE: Final[int] = 64 * 1024
_STREAM_WORKERS: Final[int] = 2


@dataclass(slots=True, frozen=True)
class CapturedOutput:
    """Bytes collected from both output streams of one invocation."""

    stdout: bytes
    stderr: bytes
    error: StreamReadError | None = None
    returncode: int | None = None

    @property
    def stdout_text(self) -> str:
        """Return stdout decoded as text."""

        return decode_output(self.stdout)

    @property
    def stderr_text(self) -> str:
        """Return stderr decoded as text."""

        return decode_output(self.stderr)

    def raise_for_error(self) -> None:
        """Raise the recorded stream failure, if any.

        Raises:
            StreamReadError: When either stream failed while being drained.
        """

        if self.error is not None:
            raise self.error


@dataclass(slots=True, frozen=True)
class _DrainOutcome:
    data: bytes
    error: StreamReadError | None


def _drain(stream: BinaryIO, name: StreamName) -> _DrainOutcome:
    """Copy ``stream`` into memory until EOF, keeping partial data on failure."""

    buffer = io.BytesIO()
    try:
        shutil.copyfileobj(stream, buffer, _CHUNK_SIZE)
    except OSError as exc:
        return _DrainOutcome(buffer.getvalue(), StreamReadError(name, exc))
    return _DrainOutcome(buffer.getvalue(), None)


def drain_streams(stdout: BinaryIO, stderr: BinaryIO) -> CapturedOutput:
    """Read ``stdout`` and ``stderr`` to completion concurrently.

    Args:
        stdout: Readable binary stream carrying the child's standard output.
        stderr: Readable binary stream carrying the child's standard error.

    Returns:
        CapturedOutput: Full contents of both streams. When a read fails the
        bytes collected before the failure are kept and ``error`` holds the
        stdout failure if there is one, otherwise the stderr failure.
    """

    with ThreadPoolExecutor(max_workers=_STREAM_WORKERS, thread_name_prefix="localcmd-drain") as executor:
        out_future = executor.submit(_drain, stdout, "stdout")
        err_future = executor.submit(_drain, stderr, "stderr")
        wait((out_future, err_future), return_when=ALL_COMPLETED)
    out, err = out_future.result(), err_future.result()
    return CapturedOutput(stdout=out.data, stderr=err.data, error=out.error or err.error)


__all__ = ["CapturedOutput", "drain_streams"]
