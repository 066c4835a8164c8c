import os

import pytest
import yaml

from booster_harness.assistant import LifecycleAssistant
from booster_harness.config import HarnessConfig
from booster_harness.errors import ControlPlaneError
from booster_harness.resources import ClusterObject

APPLICATION_MANIFEST = """
apiVersion: v1
kind: List
items:
- apiVersion: v1
  kind: Service
  metadata:
    name: my-booster
- apiVersion: apps.openshift.io/v1
  kind: DeploymentConfig
  metadata:
    name: my-booster
  spec:
    replicas: 1
- apiVersion: route.openshift.io/v1
  kind: Route
  metadata:
    name: my-booster
  spec:
    to:
      kind: Service
      name: my-booster
"""


def make_pod(name, phase='Running', ready=None, labels=None):
    status = {'phase': phase}
    if ready is not None:
        status['conditions'] = [{'type': 'Ready', 'status': 'True' if ready else 'False'}]
    return ClusterObject.from_manifest({
        'apiVersion': 'v1',
        'kind': 'Pod',
        'metadata': {'name': name, 'namespace': 'booster-ns', 'labels': labels or {}},
        'status': status,
    })


class FakeControlPlane:
    """In-memory control plane recording every call the assistant makes."""

    def __init__(self, namespace='booster-ns'):
        self.namespace = namespace
        self.applied = []
        self.objects = {}
        self.pod_snapshots = []
        self.pod_selectors = []
        self.scaled = []
        self.delete_attempts = []
        self.delete_failures = {}
        self.delete_pending = {}

    def current_namespace(self):
        return self.namespace

    def apply(self, manifest_text, namespace):
        items = []
        for doc in yaml.safe_load_all(manifest_text):
            if not doc:
                continue
            items.extend(doc['items'] if doc.get('kind') == 'List' else [doc])
        objects = []
        for item in items:
            metadata = {**item.get('metadata', {}), 'namespace': namespace}
            objects.append(ClusterObject.from_manifest({**item, 'metadata': metadata}))
        self.applied.append(objects)
        return objects

    def list_pods(self, namespace, label_selector=None):
        self.pod_selectors.append(label_selector)
        if not self.pod_snapshots:
            pods = []
        elif len(self.pod_snapshots) > 1:
            pods = self.pod_snapshots.pop(0)
        else:
            pods = self.pod_snapshots[0]
        if label_selector:
            key, _, value = label_selector.partition('=')
            pods = [pod for pod in pods if pod.labels.get(key) == value]
        return pods

    def get(self, kind, name, namespace):
        return self.objects.get((kind, name))

    def scale(self, kind, name, replicas, namespace):
        self.scaled.append((kind, name, replicas))

    def delete(self, obj, grace_period=0):
        key = (obj.kind, obj.name)
        self.delete_attempts.append((obj.kind, obj.name, grace_period))
        if self.delete_failures.get(key, 0):
            self.delete_failures[key] -= 1
            raise ControlPlaneError(f'transient failure deleting {obj}')
        if self.delete_pending.get(key, 0):
            self.delete_pending[key] -= 1
            return True
        return False

    def add_route(self, name, host):
        self.objects[('Route', name)] = ClusterObject.from_manifest({
            'apiVersion': 'route.openshift.io/v1',
            'kind': 'Route',
            'metadata': {'name': name, 'namespace': self.namespace},
            'spec': {'host': host},
        })


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in list(os.environ):
        if key.startswith('BOOSTER_'):
            monkeypatch.delenv(key)


@pytest.fixture()
def manifest_file(tmp_path):
    path = tmp_path / 'openshift.yml'
    path.write_text(APPLICATION_MANIFEST)
    return path


@pytest.fixture()
def config(manifest_file):
    return HarnessConfig(
        application_manifest=manifest_file,
        poll_interval_seconds=0,
        delete_retry_wait_seconds=0.5,
        readiness_timeout_seconds=300,
        scale_timeout_seconds=300,
    )


@pytest.fixture()
def client():
    return FakeControlPlane()


@pytest.fixture()
def sleeps():
    return []


@pytest.fixture()
def assistant(config, client, sleeps):
    return LifecycleAssistant(config, client=client, sleep=sleeps.append)


@pytest.fixture()
def deployed(assistant, client):
    client.add_route('my-booster', 'my-booster-booster-ns.apps.example.com')
    assistant.deploy_application()
    return assistant
