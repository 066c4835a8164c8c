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

"""Full lifecycle subcommand (deploy, await, scale, test, clean up)."""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path

import typer
from rich.panel import Panel

from booster_harness import console
from booster_harness.assistant import LifecycleAssistant
from booster_harness.config import HarnessConfig, display_config
from booster_harness.constants import (
    DATABASE_DEPLOYMENT,
    DATABASE_TEMPLATE,
    ENV_APPLICATION_NAME,
    ENV_BASE_URL,
    ENV_NAMESPACE,
)
from booster_harness.errors import HarnessError
from booster_harness.testing import deployed_application
from booster_harness.utils import parse_template_option


def build_config(
    app_name: str | None = None,
    namespace: str | None = None,
    manifest: Path | None = None,
) -> HarnessConfig:
    """Load the environment config and apply CLI overrides on top."""
    config = HarnessConfig()
    overrides: dict = {}
    if app_name is not None:
        overrides["app_name"] = app_name
    if namespace is not None:
        overrides["namespace"] = namespace
    if manifest is not None:
        overrides["application_manifest"] = manifest
    if overrides:
        config = config.model_copy(update=overrides)
    return config


def _run_tests(command: str, assistant: LifecycleAssistant) -> int:
    """Run the test command with the application coordinates exported."""
    console.print(Panel.fit(f"Running tests: {command}", style="bold blue"))
    env = {
        **os.environ,
        ENV_BASE_URL: assistant.base_url or "",
        ENV_APPLICATION_NAME: assistant.application_name or "",
        ENV_NAMESPACE: assistant.namespace,
    }
    return subprocess.run(shlex.split(command), env=env).returncode


def run(
    template: list[str] = typer.Option(
        [], "--template", "-t", help="Extra manifest bundle as NAME=PATH (repeatable)"),
    with_database: bool = typer.Option(
        False, "--with-database", help="Deploy the bundled PostgreSQL template first"),
    replicas: int | None = typer.Option(
        None, "--replicas", min=0, help="Scale the application once it is ready"),
    exec_cmd: str | None = typer.Option(
        None, "--exec", help="Test command to run against the deployed application"),
    app_name: str | None = typer.Option(
        None, "--app-name", help="Application name (overrides BOOSTER_APP_NAME)"),
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help="Target namespace (overrides BOOSTER_NAMESPACE)"),
    manifest: Path | None = typer.Option(
        None, "--manifest", help="Application manifest (overrides BOOSTER_APPLICATION_MANIFEST)"),
) -> None:
    """Deploy, await readiness, optionally scale and test, then clean up."""
    try:
        templates = dict(parse_template_option(value) for value in template)
    except ValueError as err:
        raise typer.BadParameter(str(err), param_hint="--template") from err
    if with_database:
        templates = {DATABASE_DEPLOYMENT: DATABASE_TEMPLATE, **templates}

    config = build_config(app_name=app_name, namespace=namespace, manifest=manifest)
    exit_code = 0
    try:
        assistant = LifecycleAssistant(config)
        display_config(config, assistant.namespace)
        console.print(Panel.fit("Deploying booster", style="bold blue"))
        with deployed_application(assistant, templates=templates, replicas=replicas) as deployed:
            console.print(f"[green]\u2705 {deployed.application_name} is ready at {deployed.base_url}[/green]")
            if exec_cmd:
                exit_code = _run_tests(exec_cmd, deployed)
            console.print(Panel.fit("Cleaning up", style="bold blue"))
    except (HarnessError, OSError) as err:
        console.print(f"[red]\u274c {err}[/red]")
        raise typer.Exit(1) from err

    console.print("[green]\u2705 All deployed objects deleted[/green]")
    if exit_code:
        console.print(f"[red]\u274c Test command exited with {exit_code}[/red]")
        raise typer.Exit(exit_code)
