"""
PetSets are the legacy generation of the stateful workload api. Their status
has no ready count, so the observed replica count is used instead.
"""

# Local
from .base import ManagedResource, register_kind
from .replicas import replicas_readiness


@register_kind("petset", kind="PetSet", accessor="pet_sets")
class PetSet(ManagedResource):
    __doc__ = __doc__

    @classmethod
    def check_status(cls, client, name, meta):
        pet_set = cls.kind_client(client).get(name)
        return replicas_readiness(
            cls.make_key(name),
            desired=(pet_set.get("spec") or {}).get("replicas"),
            ready=(pet_set.get("status") or {}).get("replicas"),
            meta=meta,
        )
