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

"""Lifecycle assistant: deploy, await readiness, scale and clean up a booster.

One :class:`LifecycleAssistant` is the context of a single test run. It
remembers every object it created, grouped under a logical deployment name
(``application``, ``database``, ...), and deletes exactly those objects on
:meth:`LifecycleAssistant.cleanup`.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from booster_harness import logger
from booster_harness.config import HarnessConfig
from booster_harness.constants import (
    APPLICATION_DEPLOYMENT,
    DATABASE_DEPLOYMENT,
    DATABASE_TEMPLATE,
    KIND_DEPLOYMENT_CONFIG,
    KIND_ROUTE,
    LABEL_DEPLOYMENT_CONFIG,
)
from booster_harness.control_plane import ControlPlane, KubectlControlPlane
from booster_harness.errors import (
    ApplicationNotResolvedError,
    CleanupError,
    ControlPlaneError,
    RouteNotFoundError,
)
from booster_harness.resources import ClusterObject, PodPredicate, is_pod_ready, is_running, name_prefix
from booster_harness.waiting import await_condition


class LifecycleAssistant:
    """Deploys a booster and its collaborators into a namespace for one test run.

    Args:
        config: Harness configuration; loaded from the environment if omitted.
        client: Control-plane client; a :class:`KubectlControlPlane` if omitted.
        sleep: Sleep function used between polls and delete retries.
    """

    def __init__(
        self,
        config: HarnessConfig | None = None,
        client: ControlPlane | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or HarnessConfig()
        self._client = client or KubectlControlPlane(
            binary=self.config.kubectl_binary, timeout=self.config.command_timeout_seconds,
        )
        self._namespace = self.config.namespace or self._client.current_namespace()
        self._sleep = sleep
        self._created: dict[str, list[ClusterObject]] = {}
        self._application_name: str | None = None
        self.base_url: str | None = None

    def __enter__(self) -> LifecycleAssistant:
        return self

    def __exit__(self, *exc_info) -> None:
        self.cleanup()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def client(self) -> ControlPlane:
        return self._client

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def application_name(self) -> str | None:
        return self._application_name

    @property
    def created(self) -> Mapping[str, list[ClusterObject]]:
        """Read-only view of the tracked objects per logical name."""
        return MappingProxyType(self._created)

    def _require_application_name(self) -> str:
        if not self._application_name:
            raise ApplicationNotResolvedError(
                "Application name is not resolved; call deploy_application() first "
                "or set BOOSTER_APP_NAME"
            )
        return self._application_name

    def deployment_config(self) -> ClusterObject | None:
        """Fetch the application's DeploymentConfig as currently stored."""
        return self._client.get(KIND_DEPLOYMENT_CONFIG, self._require_application_name(), self._namespace)

    # ------------------------------------------------------------------
    # Deployment
    # ------------------------------------------------------------------

    def deploy(self, name: str, template_file: str | Path) -> list[ClusterObject]:
        """Create or replace all objects of a manifest bundle and track them.

        Args:
            name: Logical deployment name the objects are tracked under.
            template_file: Path of the manifest bundle.

        Returns:
            The objects the control plane created or replaced.
        """
        manifest_text = Path(template_file).read_text()
        entities = self._client.apply(manifest_text, self._namespace)
        if name in self._created:
            # Objects already tracked under this name are not deleted and get orphaned.
            logger.warning("%s was already deployed; %d previously tracked object(s) will not be cleaned up",
                           name, len(self._created[name]))
        self._created[name] = list(entities)
        logger.info("%s deployed, %d object(s) created.", name, len(entities))
        return entities

    def deploy_database(self, template_file: str | Path | None = None) -> list[ClusterObject]:
        """Deploy the database template, the bundled PostgreSQL one by default."""
        return self.deploy(DATABASE_DEPLOYMENT, template_file or DATABASE_TEMPLATE)

    def deploy_application(self) -> str:
        """Deploy the packaged application and point ``base_url`` at its route.

        Returns:
            The resolved application name.

        Raises:
            ApplicationNotResolvedError: If no name is configured and the
                manifest holds no DeploymentConfig.
            RouteNotFoundError: If no route carries the application name.
        """
        self._application_name = self.config.app_name
        entities = self.deploy(APPLICATION_DEPLOYMENT, self.config.application_manifest)

        if self._application_name is None:
            self._application_name = next(
                (obj.name for obj in entities if obj.kind == KIND_DEPLOYMENT_CONFIG), None,
            )
        application_name = self._require_application_name()

        route = self._client.get(KIND_ROUTE, application_name, self._namespace)
        host = ((route.manifest.get("spec") or {}).get("host") if route else None)
        if not host:
            raise RouteNotFoundError(f"No route with a host found for '{application_name}' in {self._namespace}")
        self.base_url = f"{self.config.route_scheme}://{host}"
        logger.info("Route url: %s", self.base_url)
        return application_name

    # ------------------------------------------------------------------
    # Readiness and scaling
    # ------------------------------------------------------------------

    def await_application_readiness_or_fail(self) -> None:
        """Wait until a pod named after the application is running."""
        application_name = self._require_application_name()
        self.await_pod_readiness_or_fail(name_prefix(application_name), description=f"{application_name} pods")

    def await_pod_readiness_or_fail(self, predicate: PodPredicate, description: str = "matching pods") -> None:
        """Wait until at least one pod matching *predicate* is running.

        Raises:
            ReadinessTimeoutError: If no such pod runs within the readiness bound.
        """
        def _any_running() -> bool:
            pods = self._client.list_pods(self._namespace)
            return sum(1 for pod in pods if predicate(pod) and is_running(pod)) >= 1

        await_condition(
            _any_running,
            f"{description} to be running",
            timeout=self.config.readiness_timeout_seconds,
            interval=self.config.poll_interval_seconds,
            sleep=self._sleep,
        )

    def _application_pods(self) -> list[ClusterObject]:
        selector = f"{LABEL_DEPLOYMENT_CONFIG}={self._require_application_name()}"
        return self._client.list_pods(self._namespace, label_selector=selector)

    def scale(self, replicas: int) -> None:
        """Scale the application and wait until exactly *replicas* pods are ready.

        Raises:
            ReadinessTimeoutError: If the pod set does not settle within the scale bound.
        """
        if replicas < 0:
            raise ValueError(f"replicas must not be negative, got {replicas}")
        application_name = self._require_application_name()
        logger.info("Scaling replicas from %d to %d.", len(self._application_pods()), replicas)
        self._client.scale(KIND_DEPLOYMENT_CONFIG, application_name, replicas, self._namespace)

        def _settled() -> bool:
            pods = self._application_pods()
            return len(pods) == replicas and all(is_pod_ready(pod) for pod in pods)

        await_condition(
            _settled,
            f"{application_name} to have {replicas} ready pod(s)",
            timeout=self.config.scale_timeout_seconds,
            interval=self.config.poll_interval_seconds,
            sleep=self._sleep,
        )

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Delete every tracked object, stopping at the first undeletable one.

        Logical names are processed in sorted order, objects within a name in
        sorted order of kind. Deleted objects are dropped from tracking as
        they go, so after a failure the remaining objects are still tracked.

        Raises:
            CleanupError: If an object cannot be deleted after all attempts.
        """
        for name in sorted(self._created):
            remaining = self._created[name]
            for obj in sorted(remaining, key=lambda o: o.kind):
                logger.info("Deleting %s : %s", name, obj.kind)
                self._delete_with_retries(obj)
                remaining.remove(obj)
            del self._created[name]

    def _delete_with_retries(self, obj: ClusterObject) -> None:
        def _log_failure(retry_state: RetryCallState) -> None:
            outcome = retry_state.outcome
            reason = outcome.exception() if outcome.failed else "deletion still pending"
            logger.warning("Error deleting resource %s %s retrying #%d: %s",
                           obj.kind, obj.name, retry_state.attempt_number, reason)

        retrying = Retrying(
            stop=stop_after_attempt(self.config.delete_max_attempts),
            wait=wait_fixed(self.config.delete_retry_wait_seconds),
            retry=retry_if_exception_type(ControlPlaneError) | retry_if_result(lambda pending: pending),
            after=_log_failure,
            sleep=self._sleep,
        )
        try:
            retrying(self._client.delete, obj, grace_period=0)
        except RetryError as err:
            logger.error("Unable to delete %s %s in %s after %d attempt(s)",
                         obj.kind, obj.name, obj.namespace or self._namespace,
                         err.last_attempt.attempt_number)
            raise CleanupError(f"Unable to delete {obj.kind} {obj.name}") from err
