"""
This defines the base class for all cluster clients. A cluster client is the
transport that resources use to look up, list, create and delete objects.
"""

# Standard
from typing import List, Optional
import abc

# Local
from .. import config


class ClusterClientBase(abc.ABC):
    """
    Base class for namespace-scoped cluster clients. All name-based operations
    raise NotFoundError when the object does not exist. Any other failure is
    raised as whatever the underlying transport reports.
    """

    def __init__(self, namespace: Optional[str] = None):
        self.namespace = namespace or config.namespace

    @abc.abstractmethod
    def get_object(
        self,
        kind: str,
        name: str,
        api_version: Optional[str] = None,
    ) -> dict:
        """Fetch the current state of a single object by name

        Args:
            kind:  str
                The kind of the object to fetch
            name:  str
                The name of the object to fetch
            api_version:  Optional[str]
                The api_version of the resource kind to fetch

        Returns:
            current_state:  dict
                The dict representation of the object

        Raises:
            NotFoundError: No object with this name exists
        """

    @abc.abstractmethod
    def list_objects(
        self,
        kind: str,
        label_selector: Optional[str] = None,
        api_version: Optional[str] = None,
    ) -> List[dict]:
        """List all objects of a kind that match a label selector

        Args:
            kind:  str
                The kind of the objects to list
            label_selector:  Optional[str]
                The label selector to filter by. If None, all objects are
                returned.
            api_version:  Optional[str]
                The api_version of the resource kind to list

        Returns:
            objects:  List[dict]
                The matching objects, or an empty list if none match
        """

    @abc.abstractmethod
    def create_object(
        self,
        kind: str,
        definition: dict,
        api_version: Optional[str] = None,
    ) -> dict:
        """Create a new object

        Args:
            kind:  str
                The kind of the object to create
            definition:  dict
                The full desired state of the object
            api_version:  Optional[str]
                The api_version of the resource kind to create

        Returns:
            created:  dict
                The object as stored by the cluster, including any fields that
                the cluster assigned
        """

    @abc.abstractmethod
    def delete_object(
        self,
        kind: str,
        name: str,
        api_version: Optional[str] = None,
    ):
        """Delete an object by name

        Raises:
            NotFoundError: No object with this name exists
        """

    @abc.abstractmethod
    def is_enabled(self, group_version: str) -> bool:
        """Check whether the cluster serves the given api group version (e.g.
        "apps/v1")
        """

    ## Typed accessors #########################################################

    def kind_client(self, kind: str, api_version: str) -> "KindClient":
        """Get a client bound to a single kind"""
        return KindClient(self, kind, api_version)

    @property
    def services(self) -> "KindClient":
        return self.kind_client("Service", config.api_versions.service)

    @property
    def pods(self) -> "KindClient":
        return self.kind_client("Pod", config.api_versions.pod)

    @property
    def jobs(self) -> "KindClient":
        return self.kind_client("Job", config.api_versions.job)

    @property
    def replica_sets(self) -> "KindClient":
        return self.kind_client("ReplicaSet", config.api_versions.replica_set)

    @property
    def stateful_sets(self) -> "KindClient":
        return self.kind_client("StatefulSet", config.api_versions.stateful_set)

    @property
    def pet_sets(self) -> "KindClient":
        return self.kind_client("PetSet", config.api_versions.pet_set)


class KindClient:
    """A view of a cluster client that is bound to one kind/api_version"""

    def __init__(self, client: ClusterClientBase, kind: str, api_version: str):
        self.client = client
        self.kind = kind
        self.api_version = api_version

    def get(self, name: str) -> dict:
        return self.client.get_object(self.kind, name, api_version=self.api_version)

    def list(self, label_selector: Optional[str] = None) -> List[dict]:
        return self.client.list_objects(
            self.kind, label_selector=label_selector, api_version=self.api_version
        )

    def create(self, definition: dict) -> dict:
        return self.client.create_object(
            self.kind, definition, api_version=self.api_version
        )

    def delete(self, name: str):
        return self.client.delete_object(self.kind, name, api_version=self.api_version)

    def __repr__(self):
        return f"KindClient({self.api_version}/{self.kind})"
