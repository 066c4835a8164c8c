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

"""Kind-tagged cluster objects and pod predicates.

The assistant treats every object the control plane hands back as an opaque
manifest. Only ``kind``, ``metadata.namespace`` and ``metadata.name`` are
extracted; pods additionally expose their phase and ``Ready`` condition.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from booster_harness.constants import CONDITION_READY, KIND_LIST, POD_PHASE_RUNNING


@dataclass(frozen=True)
class ClusterObject:
    """A cluster object as returned by the control plane.

    Attributes:
        kind: Resource kind (e.g. ``DeploymentConfig``).
        namespace: Namespace the object lives in, empty for cluster-scoped kinds.
        name: Object name.
        manifest: Full manifest body including status.
    """

    kind: str
    namespace: str
    name: str
    manifest: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_manifest(cls, manifest: dict[str, Any]) -> ClusterObject:
        metadata = manifest.get("metadata") or {}
        return cls(
            kind=manifest.get("kind", ""),
            namespace=metadata.get("namespace") or "",
            name=metadata.get("name", ""),
            manifest=manifest,
        )

    @property
    def api_version(self) -> str:
        return self.manifest.get("apiVersion", "")

    @property
    def group(self) -> str:
        """API group of the object, empty for the core group."""
        api_version = self.api_version
        return api_version.split("/", 1)[0] if "/" in api_version else ""

    @property
    def labels(self) -> dict[str, str]:
        return (self.manifest.get("metadata") or {}).get("labels") or {}

    @property
    def resource_ref(self) -> str:
        """Fully-qualified ``kind.group/name`` reference understood by kubectl."""
        resource = self.kind.lower()
        if self.group:
            resource = f"{resource}.{self.group}"
        return f"{resource}/{self.name}"

    def __str__(self) -> str:
        return f"{self.kind} {self.name}"


def objects_from_payload(payload: dict[str, Any]) -> list[ClusterObject]:
    """Flatten a control-plane JSON payload into cluster objects.

    Args:
        payload: Either a single object or a ``List`` with ``items``.

    Returns:
        Objects in the order the control plane reported them.
    """
    if not payload:
        return []
    if payload.get("kind", "").endswith(KIND_LIST) or "items" in payload:
        return [ClusterObject.from_manifest(item) for item in payload.get("items") or []]
    return [ClusterObject.from_manifest(payload)]


# ============================================================================
# Pod status
# ============================================================================

def pod_phase(pod: ClusterObject) -> str:
    return (pod.manifest.get("status") or {}).get("phase") or ""


def is_running(pod: ClusterObject) -> bool:
    return pod_phase(pod).lower() == POD_PHASE_RUNNING


def is_pod_ready(pod: ClusterObject) -> bool:
    """Check the pod's ``Ready`` condition.

    The condition is sometimes missing from the reported status while a pod
    starts; that counts as not ready.
    """
    conditions = (pod.manifest.get("status") or {}).get("conditions") or []
    for condition in conditions:
        if condition.get("type") == CONDITION_READY:
            return condition.get("status") == "True"
    return False


# ============================================================================
# Predicates
# ============================================================================

PodPredicate = Callable[[ClusterObject], bool]


def name_prefix(prefix: str) -> PodPredicate:
    """Match pods whose name starts with *prefix*."""
    return lambda pod: pod.name.startswith(prefix)


def has_label(key: str, value: str) -> PodPredicate:
    """Match pods carrying the label ``key=value``."""
    return lambda pod: pod.labels.get(key) == value
