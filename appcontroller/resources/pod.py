"""
Pods are ready when they have completed successfully or report the Ready
condition. A Failed pod is a terminal failure.
"""

# First Party
import alog

# Local
from ..exceptions import ResourceFailedError
from ..status import Readiness
from .base import ManagedResource, register_kind
from .conditions import READY_CONDITION, condition_is

log = alog.use_channel("POD")

SUCCEEDED_PHASE = "Succeeded"
FAILED_PHASE = "Failed"


@register_kind("pod", kind="Pod", accessor="pods")
class Pod(ManagedResource):
    __doc__ = __doc__

    @classmethod
    def check_status(cls, client, name, meta):
        pod = cls.kind_client(client).get(name)
        pod_status = pod.get("status") or {}
        phase = pod_status.get("phase")
        log.debug2("[%s] is in phase [%s]", cls.make_key(name), phase)
        if phase == SUCCEEDED_PHASE:
            return Readiness.READY
        if phase == FAILED_PHASE:
            detail = pod_status.get("message") or pod_status.get("reason") or phase
            raise ResourceFailedError(cls.make_key(name), detail)
        if condition_is(pod, READY_CONDITION, True):
            return Readiness.READY
        return Readiness.NOT_READY
