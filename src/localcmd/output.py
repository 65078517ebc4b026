# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Text helpers applied to captured command output."""

from __future__ import annotations

from typing import Final

_QUOTE: Final[str] = "'"
_ENCODING: Final[str] = "utf-8"


def decode_output(value: bytes) -> str:
    """Return ``value`` decoded as text without validating the encoding.

    Args:
        value: Raw bytes captured from a child process stream.

    Returns:
        str: Decoded text; undecodable bytes survive as surrogate escapes.
    """

    return value.decode(_ENCODING, errors="surrogateescape")


def trim_output(output: str) -> str:
    """Strip whitespace and then a single pair of surrounding apostrophes.

    Args:
        output: Text captured from a command.

    Returns:
        str: ``output`` without surrounding whitespace and with at most one
        leading and one trailing ``'`` removed.
    """

    return output.strip().removesuffix(_QUOTE).removeprefix(_QUOTE)


def merge_output(stdout: str, stderr: str) -> str:
    """Return stdout and stderr joined by a newline and trimmed."""

    return trim_output(f"{stdout}\n{stderr}")


def format_failure(stdout: str, stderr: str) -> str:
    """Render the diagnostic message used when a command fails.

    The trimmed stderr leads, followed by a ``Full output`` section holding
    both trimmed streams (stdout first).
    """

    trimmed_err = trim_output(stderr)
    return f"{trimmed_err}\nFull output:\n{trim_output(stdout)}\n{trimmed_err}"


__all__ = ["decode_output", "format_failure", "merge_output", "trim_output"]
