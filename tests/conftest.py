# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import sys

import pytest

from localcmd import LocalCommand


@pytest.fixture
def python_command() -> LocalCommand:
    """Return a command that runs its first call argument as Python source."""
    return LocalCommand(command=sys.executable, global_args=("-c",))
