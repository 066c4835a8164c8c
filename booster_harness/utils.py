# /*
# Copyright 2026 The Booster Harness Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Utility functions for kubectl invocation, command checks and CLI parsing."""

from __future__ import annotations

import subprocess
from pathlib import Path

import sh

from booster_harness.constants import DEFAULT_COMMAND_TIMEOUT_SECONDS, DEFAULT_KUBECTL_BINARY


def require_command(cmd: str) -> None:
    """Check if a command exists on the system PATH.

    Args:
        cmd: Name of the CLI command to check.

    Raises:
        RuntimeError: If the command is not found.
    """
    try:
        sh.which(cmd)
    except sh.ErrorReturnCode as err:
        raise RuntimeError(f"Required command '{cmd}' not found. Please install it first.") from err


def run_kubectl(
    args: list[str],
    timeout: int = DEFAULT_COMMAND_TIMEOUT_SECONDS,
    binary: str = DEFAULT_KUBECTL_BINARY,
    stdin: str | None = None,
) -> tuple[bool, str, str]:
    """Run a kubectl-compatible command and return (success, stdout, stderr).

    Uses subprocess instead of sh because JSON output must be read from
    stdout alone, with error messages kept apart on stderr.

    Args:
        args: kubectl arguments (e.g. ``["get", "pods", "-o", "json"]``).
        timeout: Maximum seconds to wait for the command to complete.
        binary: Client executable, ``oc`` or ``kubectl``.
        stdin: Optional text fed to the command (manifests applied with ``-f -``).

    Returns:
        Tuple of (success, stdout, stderr).
    """
    try:
        result = subprocess.run(
            [binary, *args],
            input=stdin,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return result.returncode == 0, result.stdout, result.stderr
    except (subprocess.SubprocessError, OSError) as exc:
        return False, "", str(exc)


def parse_template_option(value: str) -> tuple[str, Path]:
    """Split a ``NAME=PATH`` template option.

    Args:
        value: Raw option value.

    Returns:
        Tuple of (logical_name, template_path).

    Raises:
        ValueError: If the value is not of the form ``NAME=PATH``.
    """
    name, sep, path = value.partition("=")
    if not sep or not name.strip() or not path.strip():
        raise ValueError(f"Invalid template '{value}', expected NAME=PATH")
    return name.strip(), Path(path.strip())
