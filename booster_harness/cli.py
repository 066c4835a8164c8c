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

"""
cli.py - Command-line entry point for the booster test harness.

Subcommands:
    run        Deploy the booster, await readiness, optionally scale and run tests, clean up
    inspect    Read-only views (pods, route)

Environment Variables:
    All settings can be overridden via BOOSTER_* environment variables:
    - BOOSTER_APP_NAME (default: name of the first DeploymentConfig)
    - BOOSTER_NAMESPACE (default: current namespace of the oc context)
    - BOOSTER_KUBECTL_BINARY (default: oc)
    - BOOSTER_APPLICATION_MANIFEST (default: target/classes/META-INF/fabric8/openshift.yml)
    - And more (see HarnessConfig for the full list)

Examples:
    # Deploy with the bundled database, scale to 2 and run the integration tests
    booster-harness run --with-database --replicas 2 --exec "pytest tests/integration"

    # Show application pods and their readiness
    booster-harness inspect pods -l deploymentconfig=my-booster
"""

from __future__ import annotations

import logging
import sys

import typer

from booster_harness import console
from booster_harness.commands import inspect_cmd, run_cmd

app = typer.Typer(
    help="Test harness for deploying a booster into OpenShift.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log control-plane commands"),
) -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.command("run")(run_cmd.run)
app.add_typer(inspect_cmd.app, name="inspect")


def main() -> None:
    try:
        app()
    except Exception as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
