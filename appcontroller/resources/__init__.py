"""
Every supported resource kind. Importing this package registers all kinds.
"""

# Local
from .base import KINDS, ExistingResource, ManagedResource, Resource, register_kind
from .factory import find_definition, new_existing_resource, new_resource
from .job import Job
from .pet_set import PetSet
from .pod import Pod
from .readiness import resource_list_ready, selector_status
from .replica_set import ReplicaSet
from .service import Service
from .stateful_set import StatefulSet
