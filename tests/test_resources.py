import pytest

from booster_harness.resources import (
    ClusterObject,
    has_label,
    is_pod_ready,
    is_running,
    name_prefix,
    objects_from_payload,
)
from conftest import make_pod


def test_object_fields_are_extracted_from_manifest():
    obj = ClusterObject.from_manifest({
        'apiVersion': 'apps.openshift.io/v1',
        'kind': 'DeploymentConfig',
        'metadata': {'name': 'my-booster', 'namespace': 'ns', 'labels': {'app': 'my-booster'}},
        'spec': {'replicas': 1},
    })
    assert obj.kind == 'DeploymentConfig'
    assert obj.name == 'my-booster'
    assert obj.namespace == 'ns'
    assert obj.group == 'apps.openshift.io'
    assert obj.labels == {'app': 'my-booster'}
    assert obj.manifest['spec'] == {'replicas': 1}


@pytest.mark.parametrize('api_version, kind, expected', [
    pytest.param('v1', 'Service', 'service/db', id='core-group'),
    pytest.param('apps.openshift.io/v1', 'DeploymentConfig', 'deploymentconfig.apps.openshift.io/db', id='named-group'),
    pytest.param('image.openshift.io/v1', 'ImageStream', 'imagestream.image.openshift.io/db', id='image-group'),
])
def test_resource_ref_is_qualified_by_group(api_version, kind, expected):
    obj = ClusterObject.from_manifest({'apiVersion': api_version, 'kind': kind, 'metadata': {'name': 'db'}})
    assert obj.resource_ref == expected


def test_equality_ignores_manifest_body():
    one = ClusterObject('Service', 'ns', 'db', {'spec': {'a': 1}})
    two = ClusterObject('Service', 'ns', 'db', {'spec': {'a': 2}})
    assert one == two


def test_list_payload_is_flattened_in_order():
    payload = {'kind': 'List', 'items': [
        {'kind': 'ImageStream', 'metadata': {'name': 'a'}},
        {'kind': 'Service', 'metadata': {'name': 'b'}},
    ]}
    assert [obj.name for obj in objects_from_payload(payload)] == ['a', 'b']


def test_typed_list_payload_is_flattened():
    payload = {'kind': 'PodList', 'items': [{'kind': 'Pod', 'metadata': {'name': 'p'}}]}
    assert [obj.kind for obj in objects_from_payload(payload)] == ['Pod']


def test_single_object_payload():
    payload = {'kind': 'Service', 'metadata': {'name': 'svc'}}
    assert objects_from_payload(payload) == [ClusterObject('Service', '', 'svc')]


def test_empty_payload():
    assert objects_from_payload({}) == []


@pytest.mark.parametrize('phase, expected', [
    ('Running', True),
    ('running', True),
    ('Pending', False),
    ('Succeeded', False),
    ('', False),
])
def test_running_phase_is_case_insensitive(phase, expected):
    assert is_running(make_pod('p', phase=phase)) is expected


def test_pod_without_status_is_not_running():
    pod = ClusterObject.from_manifest({'kind': 'Pod', 'metadata': {'name': 'p'}})
    assert not is_running(pod)
    assert not is_pod_ready(pod)


@pytest.mark.parametrize('ready, expected', [
    pytest.param(True, True, id='ready'),
    pytest.param(False, False, id='not-ready'),
    pytest.param(None, False, id='condition-missing'),
])
def test_pod_readiness(ready, expected):
    assert is_pod_ready(make_pod('p', ready=ready)) is expected


def test_name_prefix_predicate():
    predicate = name_prefix('my-booster')
    assert predicate(make_pod('my-booster-1-abcde'))
    assert not predicate(make_pod('my-database-1-abcde'))


def test_label_predicate():
    predicate = has_label('app', 'my-database')
    assert predicate(make_pod('db', labels={'app': 'my-database'}))
    assert not predicate(make_pod('db', labels={'app': 'other'}))
    assert not predicate(make_pod('db'))
