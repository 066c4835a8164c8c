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

"""Exception types raised by the lifecycle assistant."""

from __future__ import annotations


class HarnessError(RuntimeError):
    """Base class for every failure that aborts a test run."""


class ControlPlaneError(HarnessError):
    """The control plane rejected a request or the client command failed.

    Attributes:
        args_: kubectl arguments of the failed command.
        stderr: Captured standard error of the command.
    """

    def __init__(self, message: str, args_: list[str] | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.args_ = list(args_ or [])
        self.stderr = stderr


class ReadinessTimeoutError(HarnessError):
    """A bounded wait expired before its condition became true."""


class CleanupError(HarnessError):
    """An object could not be deleted after all retry attempts."""


class ApplicationNotResolvedError(HarnessError):
    """The application name is needed but was never resolved."""


class RouteNotFoundError(HarnessError):
    """No route exists for the resolved application name."""
