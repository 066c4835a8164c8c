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

"""Control-plane access over the ``oc``/``kubectl`` command-line client."""

from __future__ import annotations

import json
from typing import Protocol

from booster_harness import logger
from booster_harness.constants import (
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DEFAULT_KUBECTL_BINARY,
    DEFAULT_NAMESPACE,
    DELETE_PENDING_KEYWORDS,
    NOT_FOUND_KEYWORDS,
)
from booster_harness.errors import ControlPlaneError
from booster_harness.resources import ClusterObject, objects_from_payload
from booster_harness.utils import require_command, run_kubectl


class ControlPlane(Protocol):
    """Operations the lifecycle assistant needs from the cluster."""

    def current_namespace(self) -> str: ...

    def apply(self, manifest_text: str, namespace: str) -> list[ClusterObject]: ...

    def list_pods(self, namespace: str, label_selector: str | None = None) -> list[ClusterObject]: ...

    def get(self, kind: str, name: str, namespace: str) -> ClusterObject | None: ...

    def scale(self, kind: str, name: str, replicas: int, namespace: str) -> None: ...

    def delete(self, obj: ClusterObject, grace_period: int = 0) -> bool: ...


class KubectlControlPlane:
    """:class:`ControlPlane` backed by the ``oc`` or ``kubectl`` binary.

    Every call shells out once and parses the JSON printed on stdout. A
    non-zero exit raises :class:`ControlPlaneError` with the captured stderr.
    """

    def __init__(
        self,
        binary: str = DEFAULT_KUBECTL_BINARY,
        timeout: int = DEFAULT_COMMAND_TIMEOUT_SECONDS,
        check_binary: bool = True,
    ) -> None:
        if check_binary:
            require_command(binary)
        self.binary = binary
        self.timeout = timeout

    def _run(self, args: list[str], stdin: str | None = None, timeout: int | None = None) -> tuple[bool, str, str]:
        logger.debug("%s %s", self.binary, " ".join(args))
        return run_kubectl(args, timeout=timeout or self.timeout, binary=self.binary, stdin=stdin)

    def _run_or_fail(self, args: list[str], stdin: str | None = None) -> str:
        ok, stdout, stderr = self._run(args, stdin=stdin)
        if not ok:
            raise ControlPlaneError(
                f"'{self.binary} {args[0]}' failed: {stderr.strip()[:500]}", args_=args, stderr=stderr,
            )
        return stdout

    def _run_json(self, args: list[str], stdin: str | None = None) -> dict:
        stdout = self._run_or_fail([*args, "-o", "json"], stdin=stdin)
        if not stdout.strip():
            return {}
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as err:
            raise ControlPlaneError(f"Unparseable output from '{self.binary} {args[0]}': {err}", args_=args) from err

    def current_namespace(self) -> str:
        """Namespace of the client's current context, ``default`` if unset."""
        ok, stdout, _ = self._run(["config", "view", "--minify", "-o", "jsonpath={..namespace}"])
        namespace = stdout.strip() if ok else ""
        return namespace or DEFAULT_NAMESPACE

    def apply(self, manifest_text: str, namespace: str) -> list[ClusterObject]:
        """Create or replace every object of a manifest bundle.

        Args:
            manifest_text: YAML or JSON bundle, fed to ``apply -f -``.
            namespace: Namespace to create the objects in.

        Returns:
            The created or replaced objects, as reported back by the server.
        """
        payload = self._run_json(["apply", "-f", "-", "-n", namespace], stdin=manifest_text)
        return objects_from_payload(payload)

    def list_pods(self, namespace: str, label_selector: str | None = None) -> list[ClusterObject]:
        args = ["get", "pods", "-n", namespace]
        if label_selector:
            args += ["-l", label_selector]
        return objects_from_payload(self._run_json(args))

    def get(self, kind: str, name: str, namespace: str) -> ClusterObject | None:
        """Fetch one object, or None when it does not exist."""
        args = ["get", kind.lower(), name, "-n", namespace, "-o", "json"]
        ok, stdout, stderr = self._run(args)
        if not ok:
            if any(kw in stderr for kw in NOT_FOUND_KEYWORDS):
                return None
            raise ControlPlaneError(f"'{self.binary} get {kind} {name}' failed: {stderr.strip()[:500]}",
                                    args_=args, stderr=stderr)
        try:
            return ClusterObject.from_manifest(json.loads(stdout))
        except json.JSONDecodeError as err:
            raise ControlPlaneError(f"Unparseable output for {kind} {name}: {err}", args_=args) from err

    def scale(self, kind: str, name: str, replicas: int, namespace: str) -> None:
        self._run_or_fail(["scale", f"{kind.lower()}/{name}", f"--replicas={replicas}", "-n", namespace])

    def delete(self, obj: ClusterObject, grace_period: int = 0) -> bool:
        """Delete an object.

        Args:
            obj: Object to delete.
            grace_period: Seconds the object gets to terminate; 0 forces
                immediate removal.

        Returns:
            True if the deletion is still pending once the command gave up
            waiting, False once the object is gone.
        """
        args = ["delete", obj.resource_ref, f"--grace-period={grace_period}",
                "--ignore-not-found", f"--timeout={self.timeout}s"]
        if grace_period == 0:
            args.append("--force")
        if obj.namespace:
            args += ["-n", obj.namespace]
        ok, _, stderr = self._run(args, timeout=self.timeout + 10)
        if ok:
            return False
        if any(kw in stderr for kw in DELETE_PENDING_KEYWORDS):
            return True
        raise ControlPlaneError(f"'{self.binary} delete {obj.resource_ref}' failed: {stderr.strip()[:500]}",
                                args_=args, stderr=stderr)
