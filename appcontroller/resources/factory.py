"""
Generic construction helpers for callers that do not know the kind of a
resource in advance
"""

# Standard
from typing import Iterable, List, Optional

# First Party
import alog

# Local
from ..client import ClusterClientBase
from ..constants import KEY_DELIM
from ..definition import ResourceDefinition
from ..exceptions import assert_config
from ..report import REPORTER_TYPE
from .base import KINDS, Resource

log = alog.use_channel("FCTRY")


def new_resource(
    definition: ResourceDefinition,
    client: ClusterClientBase,
    reporters: Optional[List[REPORTER_TYPE]] = None,
) -> Resource:
    """Construct the managed resource for a definition's populated kind"""
    return KINDS[definition.kind_tag].new(definition, client, reporters)


def new_existing_resource(
    key: str,
    client: ClusterClientBase,
    reporters: Optional[List[REPORTER_TYPE]] = None,
) -> Resource:
    """Construct an existing resource from a "<tag>/<name>" key"""
    tag, _, name = key.partition(KEY_DELIM)
    assert_config(tag in KINDS, f"Unknown resource kind [{tag}] in [{key}]")
    assert_config(name, f"No resource name in [{key}]")
    return KINDS[tag].new_existing(name, client, reporters)


def find_definition(
    definitions: Iterable[ResourceDefinition],
    name: str,
) -> Optional[ResourceDefinition]:
    """Find the first definition whose populated kind has the given name"""
    for definition in definitions:
        for resource_kind in KINDS.values():
            if resource_kind.name_matches(definition, name):
                log.debug3("Found [%s] definition", resource_kind.make_key(name))
                return definition
    return None
