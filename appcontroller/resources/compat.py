"""
Selection between the two generations of the stateful workload api. A cluster
serves either StatefulSets or their predecessor, PetSets, for a given set of
objects. The two schemas are not interchangeable.
"""

# Standard
from typing import Type

# First Party
import alog

# Local
from .. import config
from ..client import ClusterClientBase
from .base import KINDS, ManagedResource

log = alog.use_channel("COMPT")

STATEFUL_SET_TAG = "statefulset"
PET_SET_TAG = "petset"


def stateful_sets_enabled(client: ClusterClientBase) -> bool:
    """Determine whether the current stateful workload api should be used. The
    stateful_set_api_enabled config value wins when set, otherwise the cluster
    is asked whether it serves the configured StatefulSet api version.
    """
    override = config.stateful_set_api_enabled
    if override is not None:
        log.debug2("Using configured stateful set support: %s", override)
        return bool(override)
    enabled = client.is_enabled(config.api_versions.stateful_set)
    log.debug2(
        "Cluster serves [%s]? %s", config.api_versions.stateful_set, enabled
    )
    return enabled


def stateful_kind(enabled: bool) -> Type[ManagedResource]:
    """Get the kind to query for stateful workloads. Exactly one of the two
    generations is ever used.
    """
    return KINDS[STATEFUL_SET_TAG if enabled else PET_SET_TAG]
