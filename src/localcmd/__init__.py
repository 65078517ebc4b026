# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run local executables and collect their stdout and stderr without deadlocking."""

from __future__ import annotations

from importlib import metadata

from .collector import CapturedOutput, drain_streams
from .command import LocalCommand
from .errors import (
    CommandNotFoundError,
    ExecutionError,
    ExitError,
    LocalCommandError,
    StartError,
    StreamReadError,
)
from .output import trim_output

__all__ = [
    "CapturedOutput",
    "CommandNotFoundError",
    "ExecutionError",
    "ExitError",
    "LocalCommand",
    "LocalCommandError",
    "StartError",
    "StreamReadError",
    "__version__",
    "drain_streams",
    "trim_output",
]

try:
    __version__ = metadata.version("localcmd")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
