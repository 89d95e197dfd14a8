"""
Readiness verdicts reported by resources
"""

# Standard
from enum import Enum


class Readiness(Enum):
    """The verdict of a single status check. Terminal failures and transport
    errors are raised as exceptions rather than returned.
    """

    READY = "ready"
    NOT_READY = "not ready"

    def __bool__(self):
        return self is Readiness.READY

    def __str__(self):
        return self.value
