"""
The reporting decorator wraps every constructed resource so that creation,
deletion and readiness events can be observed without the resources knowing
who is listening.
"""

# Standard
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

# First Party
import alog

# Local
from .status import Readiness

log = alog.use_channel("REPRT")


class ResourceEventType(Enum):
    """Enum for all operations that produce a report"""

    CREATE = "CREATE"
    DELETE = "DELETE"
    STATUS = "STATUS"


@dataclass
class ResourceEvent:
    """DataClass describing the outcome of one operation on one resource"""

    key: str
    type: ResourceEventType
    readiness: Optional[Readiness] = None
    error: Optional[Exception] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def succeeded(self) -> bool:
        return self.error is None


REPORTER_TYPE = Callable[[ResourceEvent], None]  # pylint: disable=invalid-name


class ReportingResource:
    """Decorator around a resource that logs every operation and hands a
    ResourceEvent to each reporter. Errors are re-raised unchanged after they
    have been reported.
    """

    def __init__(self, resource, reporters: Optional[List[REPORTER_TYPE]] = None):
        self.resource = resource
        self.reporters = list(reporters or [])

    @property
    def key(self) -> str:
        return self.resource.key

    def create(self):
        log.debug("Creating [%s]", self.key, extra={"resource_key": self.key})
        try:
            self.resource.create()
        except Exception as err:
            log.warning(
                "Create failed for [%s]: %s",
                self.key,
                err,
                extra={"resource_key": self.key},
            )
            self._report(ResourceEventType.CREATE, error=err)
            raise
        log.info("Created [%s]", self.key, extra={"resource_key": self.key})
        self._report(ResourceEventType.CREATE)

    def delete(self):
        log.debug("Deleting [%s]", self.key, extra={"resource_key": self.key})
        try:
            self.resource.delete()
        except Exception as err:
            log.warning(
                "Delete failed for [%s]: %s",
                self.key,
                err,
                extra={"resource_key": self.key},
            )
            self._report(ResourceEventType.DELETE, error=err)
            raise
        log.info("Deleted [%s]", self.key, extra={"resource_key": self.key})
        self._report(ResourceEventType.DELETE)

    def status(self, meta: Optional[Dict[str, str]] = None) -> Readiness:
        try:
            readiness = self.resource.status(meta)
        except Exception as err:
            log.debug(
                "Status check failed for [%s]: %s",
                self.key,
                err,
                extra={"resource_key": self.key},
            )
            self._report(ResourceEventType.STATUS, error=err)
            raise
        log.debug(
            "Status of [%s]: %s", self.key, readiness, extra={"resource_key": self.key}
        )
        self._report(ResourceEventType.STATUS, readiness=readiness)
        return readiness

    def __getattr__(self, name):
        # Only called for attributes not found on the decorator itself
        if name == "resource":
            raise AttributeError(name)
        return getattr(self.resource, name)

    def __repr__(self):
        return f"ReportingResource({self.resource!r})"

    ## Implementation Details ##################################################

    def _report(self, event_type: ResourceEventType, **kwargs):
        event = ResourceEvent(key=self.key, type=event_type, **kwargs)
        for reporter in self.reporters:
            reporter(event)
