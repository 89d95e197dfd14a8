"""
Readiness aggregation for composite resources.

A composite resource (e.g. a Service) is ready when everything its label
selector addresses is ready. Each key/value pair of the selector is queried on
its own, and every term's matches must be ready. Children are themselves
evaluated through their kind's status check, so readiness is recursive.
"""

# Standard
from typing import Dict, Iterable, List, Optional

# First Party
import alog

# Local
from ..client import ClusterClientBase
from ..labels import selector_from_dict
from ..status import Readiness
from ..utils import object_name
from . import compat
from .base import KINDS, Resource

log = alog.use_channel("READY")

# Kinds that are always searched for children, in evaluation order. The
# stateful workload generation chosen by compat is searched last.
CHILD_KIND_TAGS = ["pod", "job", "replicaset"]


def resource_list_ready(
    resources: Iterable[Resource],
    meta: Optional[Dict[str, str]] = None,
) -> Readiness:
    """Evaluate resources in order, stopping at the first one that is not
    ready. Errors raised by a status check propagate and stop the evaluation.
    """
    for resource in resources:
        readiness = resource.status(meta)
        if readiness is not Readiness.READY:
            log.debug("[%s] is not ready: %s", resource.key, readiness)
            return readiness
    return Readiness.READY


def discover_children(
    client: ClusterClientBase,
    label_selector: str,
    stateful_enabled: bool,
) -> List[Resource]:
    """List the objects of every child kind that match the selector and wrap
    each as an existing resource
    """
    child_kinds = [KINDS[tag] for tag in CHILD_KIND_TAGS]
    child_kinds.append(compat.stateful_kind(stateful_enabled))

    children = []
    for resource_kind in child_kinds:
        objects = resource_kind.kind_client(client).list(label_selector)
        log.debug3(
            "Found %d [%s] children for [%s]",
            len(objects),
            resource_kind.tag,
            label_selector,
        )
        children.extend(
            resource_kind.new_existing(object_name(obj), client) for obj in objects
        )
    return children


def selector_status(
    client: ClusterClientBase,
    selector: Optional[Dict[str, str]],
) -> Readiness:
    """Determine readiness of everything addressed by a selector

    Args:
        client:  ClusterClientBase
            The client used to discover and check the children
        selector:  Optional[Dict[str, str]]
            The label key/value pairs of the composite resource

    Returns:
        readiness:  Readiness
            READY if every term's children are ready (vacuously so for an
            empty selector or a term with no matches), otherwise the first
            non-ready verdict found in sorted term order
    """
    if not selector:
        log.debug2("Empty selector. Nothing to wait for.")
        return Readiness.READY

    # Resolved once so that every term sees the same generation
    stateful_enabled = compat.stateful_sets_enabled(client)

    for key, value in sorted(selector.items()):
        label_selector = str(selector_from_dict({key: str(value)}))
        log.debug2("Checking status for [%s]", label_selector)
        children = discover_children(client, label_selector, stateful_enabled)
        readiness = resource_list_ready(children)
        if readiness is not Readiness.READY:
            return readiness
    return Readiness.READY
