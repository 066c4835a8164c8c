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

"""Read-only inspection subcommands (pods, route)."""

from __future__ import annotations

import typer
from rich.table import Table

from booster_harness import console
from booster_harness.config import HarnessConfig
from booster_harness.constants import KIND_ROUTE
from booster_harness.control_plane import KubectlControlPlane
from booster_harness.errors import HarnessError
from booster_harness.resources import is_pod_ready, pod_phase

app = typer.Typer(help="Inspect the objects of a deployed booster.")


def _client_and_namespace(namespace: str | None) -> tuple[KubectlControlPlane, str]:
    config = HarnessConfig()
    client = KubectlControlPlane(binary=config.kubectl_binary, timeout=config.command_timeout_seconds)
    return client, namespace or config.namespace or client.current_namespace()


@app.command()
def pods(
    selector: str | None = typer.Option(None, "--selector", "-l", help="Label selector"),
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Namespace to list"),
) -> None:
    """List pods with their phase and readiness."""
    try:
        client, ns = _client_and_namespace(namespace)
        items = client.list_pods(ns, label_selector=selector)
    except HarnessError as err:
        console.print(f"[red]\u274c {err}[/red]")
        raise typer.Exit(1) from err

    table = Table(title=f"Pods in {ns}")
    table.add_column("Name")
    table.add_column("Phase")
    table.add_column("Ready")
    for pod in items:
        table.add_row(pod.name, pod_phase(pod) or "-", "yes" if is_pod_ready(pod) else "no")
    console.print(table)


@app.command()
def route(
    name: str = typer.Argument(..., help="Route name, usually the application name"),
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Namespace of the route"),
) -> None:
    """Print the external URL of a route."""
    try:
        client, ns = _client_and_namespace(namespace)
        obj = client.get(KIND_ROUTE, name, ns)
    except HarnessError as err:
        console.print(f"[red]\u274c {err}[/red]")
        raise typer.Exit(1) from err

    host = (obj.manifest.get("spec") or {}).get("host") if obj else None
    if not host:
        console.print(f"[red]\u274c No route '{name}' in {ns}[/red]")
        raise typer.Exit(1)
    typer.echo(f"{HarnessConfig().route_scheme}://{host}")
