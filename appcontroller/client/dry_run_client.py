"""
The DryRunClusterClient implements the cluster client interface without a
cluster. The state of the "cluster" is held in a local map.
"""

# Standard
from datetime import datetime
from ipaddress import IPv4Address
from threading import RLock
from typing import Iterable, List, Optional
import copy
import random
import uuid

# First Party
import alog

# Local
from .. import config
from ..exceptions import ClusterError, NotFoundError, assert_config
from ..labels import parse_selector
from .base import ClusterClientBase

log = alog.use_channel("DRY-RUN")

# First address handed out to services that do not request one
SERVICE_IP_BASE = IPv4Address("10.96.0.10")


class DryRunClusterClient(ClusterClientBase):
    """
    Cluster client which doesn't talk to a cluster! Objects are identified by
    namespace, kind and name. The apiVersion is kept on each object, but any
    version of a kind addresses the same object, as on a live api server.
    """

    def __init__(
        self,
        resources: Optional[List[dict]] = None,
        namespace: Optional[str] = None,
        enabled_group_versions: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            resources:  Optional[List[dict]]
                Objects that are present in the cluster from the start
            namespace:  Optional[str]
                The namespace this client is scoped to
            enabled_group_versions:  Optional[Iterable[str]]
                The api group versions that is_enabled reports as served. By
                default this is every configured api version except the legacy
                PetSet one.
        """
        super().__init__(namespace)
        self._cluster_content = {}
        self._lock = RLock()
        self._next_service_ip = SERVICE_IP_BASE
        if enabled_group_versions is None:
            enabled_group_versions = {
                api_version
                for key, api_version in config.api_versions.items()
                if key != "pet_set"
            }
        self.enabled_group_versions = set(enabled_group_versions)

        for resource in resources or []:
            self._store(copy.deepcopy(resource))

    ## Interface ###############################################################

    def get_object(self, kind, name, api_version=None):
        log.debug2(
            "DRY RUN get_object of [%s/%s] in [%s]", kind, name, self.namespace
        )
        with self._lock:
            entries = self._kind_entries(kind)
            if name in entries:
                return copy.deepcopy(entries[name])
        raise NotFoundError(kind, name, self.namespace)

    def list_objects(self, kind, label_selector=None, api_version=None):
        log.debug2(
            "DRY RUN list_objects of [%s] in [%s] with selector [%s]",
            kind,
            self.namespace,
            label_selector,
        )
        selector = parse_selector(label_selector or "")
        matches = []
        with self._lock:
            for resource in self._kind_entries(kind).values():
                labels = resource.get("metadata", {}).get("labels", {})
                if selector.matches(labels):
                    matches.append(copy.deepcopy(resource))
        log.debug3("Found %d [%s] matches", len(matches), kind)
        return matches

    def create_object(self, kind, definition, api_version=None):
        resource = copy.deepcopy(definition)
        resource.setdefault("kind", kind)
        if api_version:
            resource.setdefault("apiVersion", api_version)
        metadata = resource.setdefault("metadata", {})
        metadata.setdefault("namespace", self.namespace)
        name = metadata.get("name")
        assert_config(name is not None, f"Cannot create [{kind}] without a name")

        with self._lock:
            if name in self._kind_entries(kind):
                raise ClusterError(f"[{kind}/{name}] already exists")
            log.debug("DRY RUN create [%s/%s] in [%s]", kind, name, self.namespace)
            metadata["uid"] = str(uuid.uuid4())
            metadata["creationTimestamp"] = datetime.now().isoformat()
            metadata["resourceVersion"] = str(random.randint(1, 1000)).zfill(5)
            if kind == "Service":
                spec = resource.setdefault("spec", {})
                if not spec.get("clusterIP"):
                    spec["clusterIP"] = str(self._next_service_ip)
                    self._next_service_ip += 1
            self._store(resource)
        return copy.deepcopy(resource)

    def delete_object(self, kind, name, api_version=None):
        log.debug("DRY RUN delete [%s/%s] in [%s]", kind, name, self.namespace)
        with self._lock:
            entries = self._kind_entries(kind)
            if name in entries:
                del entries[name]
                return
        raise NotFoundError(kind, name, self.namespace)

    def is_enabled(self, group_version):
        enabled = group_version in self.enabled_group_versions
        log.debug2("DRY RUN is_enabled [%s]: %s", group_version, enabled)
        return enabled

    ## Implementation Details ##################################################

    def _kind_entries(self, kind: str) -> dict:
        return self._cluster_content.setdefault(self.namespace, {}).setdefault(
            kind, {}
        )

    def _store(self, resource: dict):
        kind = resource.get("kind")
        api_version = resource.get("apiVersion")
        metadata = resource.setdefault("metadata", {})
        name = metadata.get("name")
        namespace = metadata.setdefault("namespace", self.namespace)
        assert_config(
            None not in [kind, api_version, name],
            "Cannot store resource without kind, apiVersion and name",
        )
        with self._lock:
            self._cluster_content.setdefault(namespace, {}).setdefault(
                kind, {}
            )[name] = resource
