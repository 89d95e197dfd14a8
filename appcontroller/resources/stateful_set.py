"""
StatefulSets are the current generation of the stateful workload api. They are
ready when enough of their replicas report ready.
"""

# Local
from .base import ManagedResource, register_kind
from .replicas import replicas_readiness


@register_kind("statefulset", kind="StatefulSet", accessor="stateful_sets")
class StatefulSet(ManagedResource):
    __doc__ = __doc__

    @classmethod
    def check_status(cls, client, name, meta):
        stateful_set = cls.kind_client(client).get(name)
        return replicas_readiness(
            cls.make_key(name),
            desired=(stateful_set.get("spec") or {}).get("replicas"),
            ready=(stateful_set.get("status") or {}).get("readyReplicas"),
            meta=meta,
        )
