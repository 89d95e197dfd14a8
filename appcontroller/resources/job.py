"""
Jobs are ready once complete. A job whose latest Failed condition is true has
given up and is a terminal failure.
"""

# First Party
import alog

# Local
from ..exceptions import ResourceFailedError
from ..status import Readiness
from .base import ManagedResource, register_kind
from .conditions import (
    COMPLETE_CONDITION,
    FAILED_CONDITION,
    condition_is,
    condition_message,
)

log = alog.use_channel("JOB")


@register_kind("job", kind="Job", accessor="jobs")
class Job(ManagedResource):
    __doc__ = __doc__

    @classmethod
    def check_status(cls, client, name, meta):
        job = cls.kind_client(client).get(name)
        if condition_is(job, FAILED_CONDITION, True):
            raise ResourceFailedError(
                cls.make_key(name),
                condition_message(job, FAILED_CONDITION) or "job failed",
            )
        if condition_is(job, COMPLETE_CONDITION, True):
            return Readiness.READY
        log.debug2("[%s] has not completed", cls.make_key(name))
        return Readiness.NOT_READY
