"""
The base classes shared by every resource kind.

Every kind is a ManagedResource subclass registered with @register_kind. The
class itself serves as the kind: its class methods construct either variant of
the resource and evaluate readiness for a name. Instances of the class are the
"managed" variant, which owns a desired-state manifest. The "existing" variant
is an ExistingResource that only holds a name and composes the kind class.
"""

# Standard
from typing import Callable, Dict, List, Optional, Type
import abc

# First Party
import alog

# Local
from ..client import ClusterClientBase, KindClient
from ..constants import KEY_DELIM
from ..definition import ResourceDefinition
from ..exceptions import NotFoundError, assert_config
from ..report import REPORTER_TYPE, ReportingResource
from ..status import Readiness

log = alog.use_channel("RSRC")

# Registry of every supported kind, keyed by the tag used in resource keys
KINDS: Dict[str, Type["ManagedResource"]] = {}


def register_kind(
    tag: str,
    kind: str,
    accessor: str,
) -> Callable[[Type["ManagedResource"]], Type["ManagedResource"]]:
    """The @register_kind decorator attaches the identifying class attributes to
    a ManagedResource subclass and adds it to the KINDS registry.

    Args:
        tag:  str
            The prefix of resource keys and the name of the matching
            ResourceDefinition field (e.g. "service")
        kind:  str
            The kind name in the cluster (e.g. "Service")
        accessor:  str
            The ClusterClientBase property that returns the KindClient for this
            kind at its configured apiVersion (e.g. "services")

    Returns:
        decorator:  Callable[[Type[ManagedResource]], Type[ManagedResource]]
            The decorator function that will be invoked on construction of
            decorated classes
    """

    def decorator(cls: Type["ManagedResource"]) -> Type["ManagedResource"]:
        assert tag in ResourceDefinition.kind_tags(), f"No definition field for {tag}"
        cls.tag = tag
        cls.kind = kind
        cls.accessor = accessor
        KINDS[tag] = cls
        return cls

    return decorator


class Resource(abc.ABC):
    """The capability set every resource variant provides"""

    @property
    @abc.abstractmethod
    def key(self) -> str:
        """Stable "<tag>/<name>" identifier"""

    @abc.abstractmethod
    def create(self):
        """Make sure the object exists in the cluster"""

    @abc.abstractmethod
    def delete(self):
        """Remove the object from the cluster"""

    @abc.abstractmethod
    def status(self, meta: Optional[Dict[str, str]] = None) -> Readiness:
        """Evaluate readiness. The meta dict carries hints from the caller;
        unknown keys are ignored.
        """


Resource.register(ReportingResource)


class ManagedResource(Resource):
    """A resource constructed from a full manifest. It may create the object."""

    tag: str = None
    kind: str = None
    accessor: str = None

    def __init__(
        self,
        definition: dict,
        client: ClusterClientBase,
        meta: Optional[dict] = None,
    ):
        self.definition = definition
        self.client = client
        self.meta = dict(meta or {})

    @property
    def name(self) -> str:
        name = (self.definition.get("metadata") or {}).get("name")
        assert_config(name, f"[{self.tag}] definition has no metadata.name")
        return name

    @property
    def key(self) -> str:
        return self.make_key(self.name)

    def exists(self) -> bool:
        """Check whether an object with this name is already in the cluster.
        Only a not-found answer counts as absent; any other error propagates.
        """
        try:
            self._own_kind_client().get(self.name)
        except NotFoundError:
            return False
        return True

    def create(self):
        """Create the object unless it already exists. On creation, the held
        definition is replaced with the object the cluster returned.
        """
        if self.exists():
            log.debug("[%s] already exists. Not creating.", self.key)
            return
        log.debug2("Provisioning [%s]", self.key)
        self.definition = self._own_kind_client().create(self.definition)

    def delete(self):
        self._own_kind_client().delete(self.name)

    def status(self, meta: Optional[Dict[str, str]] = None) -> Readiness:
        return self.check_status(self.client, self.name, meta or {})

    def __repr__(self):
        return f"{type(self).__name__}({self.key})"

    def _own_kind_client(self) -> KindClient:
        # The manifest's own apiVersion wins over the configured one
        return self.kind_client(self.client, self.definition.get("apiVersion"))

    ## Kind Operations #########################################################

    @classmethod
    @abc.abstractmethod
    def check_status(
        cls,
        client: ClusterClientBase,
        name: str,
        meta: Dict[str, str],
    ) -> Readiness:
        """Evaluate the readiness of the named object of this kind"""

    @classmethod
    def kind_client(
        cls,
        client: ClusterClientBase,
        api_version: Optional[str] = None,
    ) -> KindClient:
        """Get the client for this kind, at the configured apiVersion unless
        one is given
        """
        if api_version:
            return client.kind_client(cls.kind, api_version)
        return getattr(client, cls.accessor)

    @classmethod
    def make_key(cls, name: str) -> str:
        return f"{cls.tag}{KEY_DELIM}{name}"

    @classmethod
    def name_matches(cls, definition: ResourceDefinition, name: str) -> bool:
        """True iff this kind's field of the definition is populated and its
        name is the given name
        """
        manifest = getattr(definition, cls.tag, None)
        return (
            manifest is not None
            and (manifest.get("metadata") or {}).get("name") == name
        )

    @classmethod
    def new(
        cls,
        definition: ResourceDefinition,
        client: ClusterClientBase,
        reporters: Optional[List[REPORTER_TYPE]] = None,
    ) -> Resource:
        """Construct the managed variant from a definition"""
        manifest = getattr(definition, cls.tag)
        assert_config(manifest is not None, f"Definition has no [{cls.tag}] field")
        return ReportingResource(cls(manifest, client, definition.meta), reporters)

    @classmethod
    def new_existing(
        cls,
        name: str,
        client: ClusterClientBase,
        reporters: Optional[List[REPORTER_TYPE]] = None,
    ) -> Resource:
        """Construct the existing variant that references an object by name"""
        return ReportingResource(ExistingResource(cls, name, client), reporters)


class ExistingResource(Resource):
    """A resource that is assumed to be provisioned by someone else. It is only
    observed and possibly deleted, never created.
    """

    def __init__(
        self,
        resource_kind: Type[ManagedResource],
        name: str,
        client: ClusterClientBase,
    ):
        self.resource_kind = resource_kind
        self.name = name
        self.client = client
        self.meta = {}

    @property
    def key(self) -> str:
        return self.resource_kind.make_key(self.name)

    def create(self):
        log.debug("[%s] is an existing resource. Nothing to create.", self.key)

    def delete(self):
        self.resource_kind.kind_client(self.client).delete(self.name)

    def status(self, meta: Optional[Dict[str, str]] = None) -> Readiness:
        return self.resource_kind.check_status(self.client, self.name, meta or {})

    def __repr__(self):
        return f"Existing{self.resource_kind.__name__}({self.key})"
