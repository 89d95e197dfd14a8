"""
Services are composite resources: a Service is ready when everything its pod
selector addresses is ready.
"""

# First Party
import alog

# Local
from .base import ManagedResource, register_kind
from .readiness import selector_status

log = alog.use_channel("SRVCE")


@register_kind("service", kind="Service", accessor="services")
class Service(ManagedResource):
    __doc__ = __doc__

    @classmethod
    def check_status(cls, client, name, meta):
        service = cls.kind_client(client).get(name)
        selector = (service.get("spec") or {}).get("selector") or {}
        log.debug(
            "Checking status of [%s] for selector %s", cls.make_key(name), selector
        )
        return selector_status(client, selector)
