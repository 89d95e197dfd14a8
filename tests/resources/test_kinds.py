"""
Tests for the status checks of each leaf kind
"""

# Third Party
import pytest

# Local
from appcontroller.definition import ResourceDefinition
from appcontroller.exceptions import ConfigError, ResourceFailedError
from appcontroller.resources import Job, PetSet, Pod, ReplicaSet, StatefulSet
from appcontroller.resources.replicas import replicas_readiness, success_factor
from appcontroller.status import Readiness
from appcontroller.test_helpers.helpers import (
    MockClusterClient,
    make_condition,
    make_job,
    make_obj,
    make_pet_set,
    make_pod,
    make_replica_set,
    make_stateful_set,
)


def check(resource_kind, obj, meta=None):
    client = MockClusterClient([obj])
    return resource_kind.new_existing(obj["metadata"]["name"], client).status(meta)


## Pod #########################################################################


def test_pod_ready():
    assert check(Pod, make_pod()) is Readiness.READY


def test_pod_not_ready():
    assert check(Pod, make_pod(ready=False)) is Readiness.NOT_READY


def test_pod_pending():
    pod = make_obj("Pod", "web-0", status={"phase": "Pending"})
    assert check(Pod, pod) is Readiness.NOT_READY


def test_pod_succeeded():
    assert check(Pod, make_pod(ready=False, phase="Succeeded")) is Readiness.READY


def test_pod_failed():
    pod = make_pod(ready=False, phase="Failed")
    pod["status"]["message"] = "OOMKilled"
    with pytest.raises(ResourceFailedError) as exc_info:
        check(Pod, pod)
    assert exc_info.value.is_fatal_error
    assert "pod/web-0" in str(exc_info.value)
    assert "OOMKilled" in str(exc_info.value)


def test_pod_latest_condition_wins():
    pod = make_pod(ready=False)
    pod["status"]["conditions"].append(make_condition("Ready", True, age_seconds=60))
    assert check(Pod, pod) is Readiness.NOT_READY


def test_pod_without_status():
    assert check(Pod, make_obj("Pod", "web-0")) is Readiness.NOT_READY


## Job #########################################################################


def test_job_complete():
    assert check(Job, make_job(complete=True)) is Readiness.READY


def test_job_running():
    assert check(Job, make_job()) is Readiness.NOT_READY


def test_job_failed():
    with pytest.raises(ResourceFailedError) as exc_info:
        check(Job, make_job(failed=True))
    assert "BackoffLimitExceeded: too many retries" in str(exc_info.value)


def test_job_failure_recovered():
    job = make_job(complete=True)
    job["status"]["conditions"].append(make_condition("Failed", False))
    assert check(Job, job) is Readiness.READY


## Replicated kinds ############################################################


@pytest.mark.parametrize(
    ["make_fn", "resource_kind"],
    [(make_replica_set, ReplicaSet), (make_stateful_set, StatefulSet)],
)
@pytest.mark.parametrize(
    ["replicas", "ready", "meta", "expected"],
    [
        (3, 3, None, Readiness.READY),
        (3, 2, None, Readiness.NOT_READY),
        (3, 0, None, Readiness.NOT_READY),
        (0, 0, None, Readiness.READY),
        (4, 2, {"success_factor": "50"}, Readiness.READY),
        (4, 1, {"success_factor": "50"}, Readiness.NOT_READY),
        (3, 1, {"success_factor": "34"}, Readiness.NOT_READY),
        (3, 1, {"success_factor": "33"}, Readiness.READY),
        (3, 2, {"other": "ignored"}, Readiness.NOT_READY),
    ],
)
def test_replicated_ready_counts(
    make_fn, resource_kind, replicas, ready, meta, expected
):
    obj = make_fn(replicas=replicas, ready=ready)
    assert check(resource_kind, obj, meta) is expected


def test_replica_set_missing_counts():
    """No replica count means one replica, no ready count means none ready"""
    replica_set = make_obj("ReplicaSet", "web-rs", api_version="apps/v1")
    assert check(ReplicaSet, replica_set) is Readiness.NOT_READY
    replica_set["status"] = {"readyReplicas": 1}
    assert check(ReplicaSet, replica_set) is Readiness.READY


def test_pet_set_uses_observed_replicas():
    assert check(PetSet, make_pet_set(replicas=2, current=2)) is Readiness.READY
    assert check(PetSet, make_pet_set(replicas=2, current=1)) is Readiness.NOT_READY


def test_replicated_meta_from_definition():
    """The definition meta is carried on the resource and only applies when the
    caller passes it to status
    """
    client = MockClusterClient([make_replica_set(replicas=4, ready=2)])
    definition = ResourceDefinition(
        replicaset=make_replica_set(), meta={"success_factor": "50"}
    )
    resource = ReplicaSet.new(definition, client)
    assert resource.status() is Readiness.NOT_READY
    assert resource.status(resource.meta) is Readiness.READY


## success_factor ##############################################################


@pytest.mark.parametrize(
    ["meta", "expected"],
    [
        (None, 100),
        ({}, 100),
        ({"success_factor": "80"}, 80),
        ({"success_factor": 1}, 1),
        ({"success_factor": " 100 "}, 100),
    ],
)
def test_success_factor(meta, expected):
    assert success_factor(meta) == expected


@pytest.mark.parametrize("raw", ["0", "101", "-5", "half", "50.5", ""])
def test_success_factor_invalid(raw):
    with pytest.raises(ConfigError):
        success_factor({"success_factor": raw})


def test_replicas_readiness_invalid_factor():
    with pytest.raises(ConfigError):
        replicas_readiness("replicaset/web-rs", 1, 1, {"success_factor": "0"})
