"""
Custom json log format that carries resource identifiers
"""

# First Party
from alog import AlogJsonFormatter


class AppControllerJsonFormatter(AlogJsonFormatter):
    """Extends AlogJsonFormatter with process/thread information and the key of
    the resource a log line concerns. Log calls can attach the key with
    extra={"resource_key": ...}.
    """

    _FIELDS_TO_PRINT = AlogJsonFormatter._FIELDS_TO_PRINT + [
        "process",
        "thread",
        "threadName",
        "resourceKey",
        "namespace",
    ]

    def __init__(self, namespace=None):
        super().__init__()
        self.namespace = namespace

    def format(self, record):
        if self.namespace:
            record.namespace = self.namespace
        if resource_key := getattr(record, "resource_key", None):
            record.resourceKey = resource_key
        return super().format(record)
