"""
The cluster client is the abstraction in charge of talking to the cluster to
look up, list, create and delete objects.
"""

# Local
from .base import ClusterClientBase, KindClient
from .dry_run_client import DryRunClusterClient
from .openshift_client import OpenshiftClusterClient
