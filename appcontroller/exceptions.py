"""
Exception hierarchy for appcontroller. Every error says whether polling again
could change the outcome.
"""

## Base Error ##################################################################


class AppControllerError(Exception):
    """Base class for all appcontroller exceptions"""

    def __init__(self, message: str, is_fatal_error: bool):
        """Subclasses fix is_fatal_error so that callers can branch on the
        class alone
        """
        super().__init__(message)
        self._is_fatal_error = is_fatal_error

    @property
    def is_fatal_error(self):
        """Property indicating whether or not re-polling the same resource can
        be expected to change the outcome
        """
        return self._is_fatal_error


## Fatal Errors ################################################################


class AppControllerFatalError(AppControllerError):
    """An AppControllerFatalError is one that will not resolve itself by
    waiting and polling again
    """

    def __init__(self, message: str = ""):
        super().__init__(message=message, is_fatal_error=True)


class ConfigError(AppControllerFatalError):
    """Exception caused by invalid resource definitions, meta values or library
    configuration
    """


class ClusterError(AppControllerFatalError):
    """Exception caused when a cluster operation fails in an unexpected way"""


class SelectorParseError(AppControllerFatalError):
    """Exception caused when a label selector expression is malformed"""

    def __init__(self, selector: str, reason: str = ""):
        self.selector = selector
        message = f"Invalid label selector [{selector}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ResourceFailedError(AppControllerFatalError):
    """A resource reported a terminal failure state (e.g. a Job that has
    exhausted its retries). This is distinct from a resource that is simply not
    ready yet.
    """

    def __init__(self, key: str, detail: str = ""):
        self.key = key
        self.detail = detail
        super().__init__(f"Resource [{key}] failed: {detail}")


## Expected Errors #############################################################


class AppControllerExpectedError(AppControllerError):
    """An AppControllerExpectedError indicates a condition that is expected to
    resolve on a subsequent poll
    """

    def __init__(self, message: str = ""):
        super().__init__(message=message, is_fatal_error=False)


class NotFoundError(AppControllerExpectedError):
    """The requested object does not exist in the cluster (yet)"""

    def __init__(self, kind: str, name: str, namespace: str = None):
        self.kind = kind
        self.name = name
        self.namespace = namespace
        super().__init__(f"[{kind}/{name}] not found in namespace [{namespace}]")


## Assertions ##################################################################


def assert_config(condition: bool, message: str = ""):
    """Raise a ConfigError unless the condition holds. Used when a resource
    definition, meta value or config entry is not usable.
    """
    if not condition:
        raise ConfigError(message)


def assert_cluster(condition: bool, message: str = ""):
    """Raise a ClusterError unless the condition holds. Used when a cluster
    operation (such as looking up the handle for a kind) does not succeed.
    """
    if not condition:
        raise ClusterError(message)
