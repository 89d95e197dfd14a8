"""
This cluster client delegates cluster operations to the openshift dynamic
client. It is the one used when running against a live cluster, either from
inside a pod or with a local kubeconfig.
"""

# Standard
from typing import Optional

# Third Party
from openshift.dynamic import DynamicClient
from openshift.dynamic.exceptions import NotFoundError as OpenshiftNotFoundError
from openshift.dynamic.exceptions import ResourceNotFoundError, ResourceNotUniqueError
from openshift.dynamic.resource import Resource
import kubernetes

# First Party
import alog

# Local
from ..constants import FIELD_MANAGER
from ..exceptions import NotFoundError, assert_cluster
from .base import ClusterClientBase

log = alog.use_channel("OSFTC")


class OpenshiftClusterClient(ClusterClientBase):
    """This client uses the openshift DynamicClient to interact with the
    cluster
    """

    def __init__(self, namespace: Optional[str] = None, client=None):
        """
        Args:
            namespace:  Optional[str]
                The namespace this client is scoped to
            client:  Optional[DynamicClient]
                A preconfigured dynamic client. If not given, one is created on
                first use.
        """
        super().__init__(namespace)
        self._client = client

    @property
    def client(self) -> DynamicClient:
        """Lazy property access to the client"""
        if self._client is None:
            self._client = self._setup_client()
        return self._client

    ## Interface ###############################################################

    def get_object(self, kind, name, api_version=None):
        handle = self._get_resource_handle(kind, api_version)
        log.debug2("Fetching [%s/%s] in [%s]", kind, name, self.namespace)
        try:
            return handle.get(name=name, namespace=self.namespace).to_dict()
        except OpenshiftNotFoundError as err:
            log.debug(
                "No object named [%s/%s] found in namespace [%s]",
                kind,
                name,
                self.namespace,
            )
            raise NotFoundError(kind, name, self.namespace) from err

    def list_objects(self, kind, label_selector=None, api_version=None):
        handle = self._get_resource_handle(kind, api_version)
        log.debug2(
            "Listing [%s] in [%s] with selector [%s]",
            kind,
            self.namespace,
            label_selector,
        )
        list_obj = handle.get(label_selector=label_selector, namespace=self.namespace)
        items = list_obj.to_dict().get("items", [])
        log.debug3("Found %d [%s] objects", len(items), kind)
        return items

    def create_object(self, kind, definition, api_version=None):
        handle = self._get_resource_handle(kind, api_version)
        log.debug2("Creating [%s] in [%s]", kind, self.namespace)
        return handle.create(
            body=definition,
            namespace=self.namespace,
            field_manager=FIELD_MANAGER,
        ).to_dict()

    def delete_object(self, kind, name, api_version=None):
        handle = self._get_resource_handle(kind, api_version)
        log.debug2("Deleting [%s/%s] from [%s]", kind, name, self.namespace)
        try:
            handle.delete(name=name, namespace=self.namespace)
        except OpenshiftNotFoundError as err:
            raise NotFoundError(kind, name, self.namespace) from err

    def is_enabled(self, group_version):
        served = self.client.resources.search(api_version=group_version)
        log.debug2("Group version [%s] served? %s", group_version, bool(served))
        return bool(served)

    ## Implementation Helpers ##################################################

    @staticmethod
    def _setup_client() -> DynamicClient:
        """Create a DynamicClient that will work based on where the library is
        running
        """
        try:
            log.debug2("Running with in-cluster config")
            kube_config = kubernetes.client.Configuration()
            kubernetes.config.load_incluster_config(client_configuration=kube_config)
            return DynamicClient(kubernetes.client.ApiClient(kube_config))
        except kubernetes.config.ConfigException:
            log.debug2("Running with out-of-cluster config")
            return DynamicClient(kubernetes.config.new_client_from_config())

    def _get_resource_handle(self, kind: str, api_version: Optional[str]) -> Resource:
        """Get the openshift resource handle for a specified kind and api_version"""
        handle = None
        try:
            search = {"kind": kind}
            if api_version:
                search["api_version"] = api_version
            handle = self.client.resources.get(**search)
        except (ResourceNotFoundError, ResourceNotUniqueError):
            log.debug(
                "No unique resource kind [%s] found for api version [%s]",
                kind,
                api_version,
            )
        assert_cluster(
            handle is not None,
            f"Failed to fetch resource handle for "
            f"{self.namespace}/{api_version}/{kind}",
        )
        return handle
