"""
ReplicaSets are ready when enough of their replicas report ready
"""

# Local
from .base import ManagedResource, register_kind
from .replicas import replicas_readiness


@register_kind("replicaset", kind="ReplicaSet", accessor="replica_sets")
class ReplicaSet(ManagedResource):
    __doc__ = __doc__

    @classmethod
    def check_status(cls, client, name, meta):
        replica_set = cls.kind_client(client).get(name)
        return replicas_readiness(
            cls.make_key(name),
            desired=(replica_set.get("spec") or {}).get("replicas"),
            ready=(replica_set.get("status") or {}).get("readyReplicas"),
            meta=meta,
        )
