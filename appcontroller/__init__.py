"""
Package exports
"""

# Local
from . import config, resources
from .client import ClusterClientBase, DryRunClusterClient, OpenshiftClusterClient
from .definition import ResourceDefinition
from .exceptions import assert_cluster, assert_config
from .report import ReportingResource, ResourceEvent, ResourceEventType
from .resources import (
    find_definition,
    new_existing_resource,
    new_resource,
    selector_status,
)
from .status import Readiness
