"""
Tests for readiness aggregation over the children a selector addresses
"""

# Third Party
import pytest

# Local
from appcontroller.exceptions import (
    ClusterError,
    ResourceFailedError,
    SelectorParseError,
)
from appcontroller.resources import (
    Pod,
    ReplicaSet,
    Service,
    resource_list_ready,
    selector_status,
)
from appcontroller.status import Readiness
from appcontroller.test_helpers.helpers import (
    MockClusterClient,
    make_job,
    make_pet_set,
    make_pod,
    make_replica_set,
    make_service,
    make_stateful_set,
    override_config,
)

WEB = {"app": "web"}

## Helpers #####################################################################


def service_status(*children, selector=None, **kwargs):
    """Run the status check of a "web" service over the given children"""
    client = MockClusterClient(
        [make_service("web", selector=WEB if selector is None else selector)]
        + list(children),
        **kwargs,
    )
    readiness = Service.new_existing("web", client).status()
    return readiness, client


## Scenarios ###################################################################


def test_no_children_is_ready():
    """A selector that matches nothing across all kinds is vacuously ready"""
    readiness, client = service_status()
    assert readiness is Readiness.READY
    assert client.listed_kinds() == ["Pod", "Job", "ReplicaSet", "StatefulSet"]


def test_single_not_ready_pod():
    """The verdict of a single not-ready pod is the verdict of the service"""
    pod = make_pod("web-0", labels=WEB, ready=False)
    readiness, client = service_status(pod)
    assert readiness is Readiness.NOT_READY
    assert readiness is Pod.new_existing("web-0", client).status()


def test_all_children_ready():
    readiness, _ = service_status(
        make_pod("web-0", labels=WEB),
        make_job("web-migrate", labels=WEB, complete=True),
        make_replica_set("web-rs", labels=WEB, replicas=2, ready=2),
        make_stateful_set("web-db", labels=WEB, replicas=3, ready=3),
    )
    assert readiness is Readiness.READY


def test_unlabeled_children_ignored():
    readiness, _ = service_status(
        make_pod("web-0", labels=WEB),
        make_pod("other-0", labels={"app": "other"}, ready=False),
        make_pod("bare-0", ready=False),
    )
    assert readiness is Readiness.READY


def test_empty_selector_issues_no_lists():
    """An empty selector is ready without listing or probing anything"""
    readiness, client = service_status(
        make_pod("web-0", labels=WEB, ready=False), selector={}
    )
    assert readiness is Readiness.READY
    client.list_objects.assert_not_called()
    client.is_enabled.assert_not_called()


def test_missing_selector_issues_no_lists():
    client = MockClusterClient([make_service("web")])
    assert Service.new_existing("web", client).status() is Readiness.READY
    client.list_objects.assert_not_called()


## Short circuit ###############################################################


def test_short_circuit_after_first_not_ready():
    """No child after the first non-ready one is checked"""
    readiness, client = service_status(
        make_pod("web-0", labels=WEB),
        make_pod("web-1", labels=WEB, ready=False),
        make_pod("web-2", labels=WEB),
        make_replica_set("web-rs", labels=WEB, ready=0),
    )
    assert readiness is Readiness.NOT_READY
    assert client.fetched() == ["Service/web", "Pod/web-0", "Pod/web-1"]


def test_short_circuit_across_kinds():
    readiness, client = service_status(
        make_pod("web-0", labels=WEB),
        make_job("web-migrate", labels=WEB),
        make_replica_set("web-rs", labels=WEB),
    )
    assert readiness is Readiness.NOT_READY
    assert client.fetched() == ["Service/web", "Pod/web-0", "Job/web-migrate"]


def test_short_circuit_across_terms():
    """Once a term is not ready, later terms are not listed"""
    readiness, client = service_status(
        make_pod("web-0", labels=WEB, ready=False),
        selector={"app": "web", "tier": "front"},
    )
    assert readiness is Readiness.NOT_READY
    selectors = {
        call.kwargs["label_selector"] for call in client.list_objects.call_args_list
    }
    assert selectors == {"app=web"}


## Selector terms ##############################################################


def test_one_list_per_term_and_kind():
    readiness, client = service_status(selector={"tier": "front", "app": "web"})
    assert readiness is Readiness.READY
    selectors = [
        call.kwargs["label_selector"] for call in client.list_objects.call_args_list
    ]
    assert selectors == ["app=web"] * 4 + ["tier=front"] * 4


def test_terms_checked_independently():
    """A child matching only one of the terms still counts for that term"""
    readiness, _ = service_status(
        make_pod("web-0", labels={"app": "web", "tier": "front"}),
        make_pod("other-0", labels={"tier": "front"}, ready=False),
        selector={"app": "web", "tier": "front"},
    )
    assert readiness is Readiness.NOT_READY


def test_terms_are_not_a_conjunction():
    """Terms are not combined into one query. No pod carries both app=web and
    tier=front, yet each term has a ready match, so the service is ready. This
    is looser than a conjunctive selector, which would match nothing here.
    """
    readiness, client = service_status(
        make_pod("web-0", labels={"app": "web"}),
        make_pod("front-0", labels={"tier": "front"}),
        selector={"app": "web", "tier": "front"},
    )
    assert readiness is Readiness.READY
    assert client.fetched() == ["Service/web", "Pod/web-0", "Pod/front-0"]


def test_non_string_selector_value():
    readiness, client = service_status(
        make_pod("web-0", labels={"version": "2"}, ready=False),
        selector={"version": 2},
    )
    assert readiness is Readiness.NOT_READY
    assert client.list_objects.call_args_list[0].kwargs["label_selector"] == "version=2"


def test_child_at_other_api_version():
    """Children are found whatever apiVersion they were stored with"""
    replica_set = make_replica_set("web-rs", labels=WEB, replicas=3, ready=0)
    replica_set["apiVersion"] = "extensions/v1beta1"
    readiness, client = service_status(make_pod("web-0", labels=WEB), replica_set)
    assert readiness is Readiness.NOT_READY
    assert client.fetched()[-1] == "ReplicaSet/web-rs"


def test_invalid_selector_term():
    with pytest.raises(SelectorParseError):
        service_status(selector={"app": "not a valid value"})


## Stateful generation #########################################################


def test_probe_resolved_once():
    """The stateful set api is probed once per status check, not per term"""
    _, client = service_status(selector={"app": "web", "tier": "front"})
    client.is_enabled.assert_called_once_with("apps/v1")


def test_current_generation_only():
    readiness, client = service_status(
        make_stateful_set("web-db", labels=WEB),
        make_pet_set("web-db", labels=WEB, current=0),
    )
    assert readiness is Readiness.READY
    assert "StatefulSet" in client.listed_kinds()
    assert "PetSet" not in client.listed_kinds()


def test_legacy_generation_only():
    readiness, client = service_status(
        make_stateful_set("web-db", labels=WEB),
        make_pet_set("web-db", labels=WEB, current=0),
        enabled_group_versions=["v1", "batch/v1"],
    )
    assert readiness is Readiness.NOT_READY
    assert "PetSet" in client.listed_kinds()
    assert "StatefulSet" not in client.listed_kinds()


def test_configured_generation_skips_probe():
    with override_config(stateful_set_api_enabled=False):
        _, client = service_status()
    client.is_enabled.assert_not_called()
    assert client.listed_kinds() == ["Pod", "Job", "ReplicaSet", "PetSet"]


## Errors ######################################################################


def test_failed_child_raises():
    with pytest.raises(ResourceFailedError):
        service_status(make_job("web-migrate", labels=WEB, failed=True))


def test_list_error_propagates():
    with pytest.raises(ClusterError):
        service_status(list_fail=True)


def test_probe_error_propagates():
    with pytest.raises(ClusterError):
        service_status(is_enabled_fail=True)


## resource_list_ready #########################################################


def test_resource_list_ready_empty():
    assert resource_list_ready([]) is Readiness.READY


def test_resource_list_ready_passes_meta():
    client = MockClusterClient([make_replica_set("web-rs", replicas=4, ready=2)])
    resources = [ReplicaSet.new_existing("web-rs", client)]
    assert resource_list_ready(resources) is Readiness.NOT_READY
    assert resource_list_ready(resources, {"success_factor": "50"}) is Readiness.READY


def test_selector_status_direct():
    client = MockClusterClient([make_pod("web-0", labels=WEB)])
    assert selector_status(client, WEB) is Readiness.READY
    assert selector_status(client, None) is Readiness.READY
