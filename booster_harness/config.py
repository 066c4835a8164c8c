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

"""Harness configuration, loaded from BOOSTER_* environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.panel import Panel

from booster_harness import console
from booster_harness.constants import (
    DEFAULT_APPLICATION_MANIFEST,
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DEFAULT_DELETE_MAX_ATTEMPTS,
    DEFAULT_DELETE_RETRY_WAIT_SECONDS,
    DEFAULT_KUBECTL_BINARY,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_READINESS_TIMEOUT_SECONDS,
    DEFAULT_ROUTE_SCHEME,
    DEFAULT_SCALE_TIMEOUT_SECONDS,
)


class HarnessConfig(BaseSettings):
    """Lifecycle assistant configuration, auto-loaded from BOOSTER_* env vars.

    Attributes:
        app_name: Explicit application name, overriding the name of the first
            deployed DeploymentConfig.
        namespace: Target namespace, or None for the client's current one.
        kubectl_binary: Control-plane CLI to invoke (``oc`` or ``kubectl``).
        application_manifest: Manifest bundle produced by the build step.
        route_scheme: URL scheme used to build the application base URL.
        readiness_timeout_seconds: Upper bound for pod readiness waits.
        scale_timeout_seconds: Upper bound for waiting on a scale to settle.
        poll_interval_seconds: Pause between two polls of the control plane.
        delete_max_attempts: Delete attempts per object during cleanup.
        delete_retry_wait_seconds: Pause between two delete attempts.
        command_timeout_seconds: Timeout for a single control-plane command.
    """

    model_config = SettingsConfigDict(env_prefix="BOOSTER_", extra="ignore")

    app_name: str | None = None
    namespace: str | None = None
    kubectl_binary: str = DEFAULT_KUBECTL_BINARY
    application_manifest: Path = DEFAULT_APPLICATION_MANIFEST
    route_scheme: str = Field(default=DEFAULT_ROUTE_SCHEME, pattern=r"^https?$")
    readiness_timeout_seconds: float = Field(default=DEFAULT_READINESS_TIMEOUT_SECONDS, ge=0)
    scale_timeout_seconds: float = Field(default=DEFAULT_SCALE_TIMEOUT_SECONDS, ge=0)
    poll_interval_seconds: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS, ge=0)
    delete_max_attempts: int = Field(default=DEFAULT_DELETE_MAX_ATTEMPTS, ge=1, le=10)
    delete_retry_wait_seconds: float = Field(default=DEFAULT_DELETE_RETRY_WAIT_SECONDS, ge=0)
    command_timeout_seconds: int = Field(default=DEFAULT_COMMAND_TIMEOUT_SECONDS, ge=1)


def display_config(config: HarnessConfig, namespace: str) -> None:
    """Print the resolved configuration.

    Args:
        config: Harness configuration to display.
        namespace: Namespace the assistant resolved to.
    """
    console.print(Panel.fit("Configuration", style="bold blue"))
    console.print(f"  namespace           : {namespace}")
    console.print(f"  app_name            : {config.app_name or '(from DeploymentConfig)'}")
    console.print(f"  kubectl_binary      : {config.kubectl_binary}")
    console.print(f"  application_manifest: {config.application_manifest}")
    console.print(f"  readiness_timeout   : {config.readiness_timeout_seconds}s")
    console.print(f"  scale_timeout       : {config.scale_timeout_seconds}s")
    console.print(f"  delete_max_attempts : {config.delete_max_attempts}")
