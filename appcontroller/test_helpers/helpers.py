"""
This module holds common helper functions for making testing easy
"""

# Standard
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from unittest import mock
import copy
import os

# First Party
import alog

# Local
from appcontroller.client.dry_run_client import DryRunClusterClient
from appcontroller.config import library_config
from appcontroller.exceptions import ClusterError

log = alog.use_channel("TEST")


def configure_logging():
    alog.configure(
        os.environ.get("LOG_LEVEL", "off"),
        os.environ.get("LOG_FILTERS", ""),
        formatter="json"
        if os.environ.get("LOG_JSON", "").lower() == "true"
        else "pretty",
        thread_id=os.environ.get("LOG_THREAD_ID", "").lower() == "true",
    )


configure_logging()

TEST_NAMESPACE = "test"
SOME_OTHER_NAMESPACE = "somewhere"

## Manifests ###################################################################


def make_obj(
    kind: str,
    name: str,
    api_version: str = "v1",
    labels: Optional[Dict[str, str]] = None,
    spec: Optional[dict] = None,
    status: Optional[dict] = None,
    namespace: str = TEST_NAMESPACE,
) -> dict:
    obj = {
        "apiVersion": api_version,
        "kind": kind,
        "metadata": {"name": name, "namespace": namespace},
    }
    if labels is not None:
        obj["metadata"]["labels"] = dict(labels)
    if spec is not None:
        obj["spec"] = copy.deepcopy(spec)
    if status is not None:
        obj["status"] = copy.deepcopy(status)
    return obj


def make_condition(type_name, status, age_seconds=0, reason=None, message=None):
    """Helper for making conditions. Larger ages are older."""
    timestamp = datetime.now() - timedelta(seconds=age_seconds)
    condition = {
        "type": type_name,
        "status": str(status),
        "lastTransitionTime": timestamp.isoformat(),
    }
    if reason is not None:
        condition["reason"] = reason
    if message is not None:
        condition["message"] = message
    return condition


def make_service(name="web", selector=None, **kwargs) -> dict:
    spec = {"ports": [{"port": 80}]}
    if selector is not None:
        spec["selector"] = dict(selector)
    return make_obj("Service", name, spec=spec, **kwargs)


def make_pod(name="web-0", labels=None, ready=True, phase="Running", **kwargs):
    status = {
        "phase": phase,
        "conditions": [make_condition("Ready", ready)],
    }
    return make_obj("Pod", name, labels=labels, status=status, **kwargs)


def make_job(name="migrate", labels=None, complete=False, failed=False, **kwargs):
    conditions = []
    if complete:
        conditions.append(make_condition("Complete", True))
    if failed:
        conditions.append(
            make_condition(
                "Failed",
                True,
                reason="BackoffLimitExceeded",
                message="too many retries",
            )
        )
    return make_obj(
        "Job",
        name,
        api_version=library_config.api_versions.job,
        labels=labels,
        status={"conditions": conditions},
        **kwargs,
    )


def make_replica_set(name="web-rs", labels=None, replicas=1, ready=1, **kwargs):
    return make_obj(
        "ReplicaSet",
        name,
        api_version=library_config.api_versions.replica_set,
        labels=labels,
        spec={"replicas": replicas},
        status={"replicas": replicas, "readyReplicas": ready},
        **kwargs,
    )


def make_stateful_set(name="db", labels=None, replicas=1, ready=1, **kwargs):
    return make_obj(
        "StatefulSet",
        name,
        api_version=library_config.api_versions.stateful_set,
        labels=labels,
        spec={"replicas": replicas},
        status={"replicas": replicas, "readyReplicas": ready},
        **kwargs,
    )


def make_pet_set(name="db", labels=None, replicas=1, current=1, **kwargs):
    return make_obj(
        "PetSet",
        name,
        api_version=library_config.api_versions.pet_set,
        labels=labels,
        spec={"replicas": replicas},
        status={"replicas": current},
        **kwargs,
    )


## Clients #####################################################################


def _failable(fail, method):
    """Wrap a method so it raises a ClusterError when fail is set"""

    def failable_method(*args, **kwargs):
        if fail:
            raise ClusterError("Mocked cluster failure")
        return method(*args, **kwargs)

    return failable_method


class MockClusterClient(DryRunClusterClient):
    """The MockClusterClient wraps a DryRunClusterClient so that every
    operation is a mock.Mock spy that can optionally be configured to fail
    """

    def __init__(
        self,
        resources: Optional[List[dict]] = None,
        namespace: str = TEST_NAMESPACE,
        get_fail: bool = False,
        list_fail: bool = False,
        create_fail: bool = False,
        delete_fail: bool = False,
        is_enabled_fail: bool = False,
        **kwargs,
    ):
        super().__init__(resources=resources, namespace=namespace, **kwargs)
        self.get_object = mock.Mock(
            side_effect=_failable(get_fail, super().get_object)
        )
        self.list_objects = mock.Mock(
            side_effect=_failable(list_fail, super().list_objects)
        )
        self.create_object = mock.Mock(
            side_effect=_failable(create_fail, super().create_object)
        )
        self.delete_object = mock.Mock(
            side_effect=_failable(delete_fail, super().delete_object)
        )
        self.is_enabled = mock.Mock(
            side_effect=_failable(is_enabled_fail, super().is_enabled)
        )

    def listed_kinds(self) -> List[str]:
        """The kinds passed to list_objects, in call order"""
        return [call.args[0] for call in self.list_objects.call_args_list]

    def fetched(self) -> List[str]:
        """The kind/name pairs passed to get_object, in call order"""
        return [
            f"{call.args[0]}/{call.args[1]}"
            for call in self.get_object.call_args_list
        ]


@contextmanager
def override_config(**overrides):
    """Temporarily override top-level library config values"""
    saved = {key: library_config.get(key) for key in overrides}
    try:
        for key, val in overrides.items():
            library_config[key] = val
        yield library_config
    finally:
        for key, val in saved.items():
            library_config[key] = val
