"""
The ResourceDefinition is the user-facing description of a single resource. It
holds exactly one kind-specific manifest plus free-form meta values.
"""

# Standard
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional
import copy

# Local
from .exceptions import assert_config

# Map from cluster kind name to definition field
MANIFEST_KIND_TO_TAG = {
    "Service": "service",
    "Pod": "pod",
    "Job": "job",
    "ReplicaSet": "replicaset",
    "StatefulSet": "statefulset",
    "PetSet": "petset",
}


@dataclass
class ResourceDefinition:
    """A tagged union of the supported kinds. Only one of the kind fields is
    expected to be populated.
    """

    service: Optional[dict] = None
    pod: Optional[dict] = None
    job: Optional[dict] = None
    replicaset: Optional[dict] = None
    statefulset: Optional[dict] = None
    petset: Optional[dict] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def kind_tags(cls) -> List[str]:
        return [fld.name for fld in fields(cls) if fld.name != "meta"]

    @classmethod
    def from_dict(cls, definition: dict) -> "ResourceDefinition":
        """Parse the tagged form, e.g. {"service": {...}, "meta": {...}}. A
        plain manifest with a "kind" is routed with from_manifest.
        """
        if "kind" in definition:
            return cls.from_manifest(definition)
        unknown = set(definition) - set(cls.kind_tags()) - {"meta"}
        assert_config(not unknown, f"Unknown resource definition fields: {unknown}")
        kwargs = copy.deepcopy(dict(definition))
        kwargs["meta"] = kwargs.get("meta") or {}
        return cls(**kwargs)

    @classmethod
    def from_manifest(
        cls, manifest: dict, meta: Optional[Dict[str, Any]] = None
    ) -> "ResourceDefinition":
        """Wrap a plain cluster manifest, routing it by its kind"""
        kind = manifest.get("kind")
        tag = MANIFEST_KIND_TO_TAG.get(kind)
        assert_config(tag is not None, f"Unsupported kind [{kind}]")
        return cls(**{tag: copy.deepcopy(dict(manifest)), "meta": dict(meta or {})})

    def populated_kinds(self) -> List[str]:
        return [tag for tag in self.kind_tags() if getattr(self, tag) is not None]

    @property
    def kind_tag(self) -> str:
        """The single populated kind field"""
        populated = self.populated_kinds()
        assert_config(
            len(populated) == 1,
            f"Expected exactly one populated kind, found {populated}",
        )
        return populated[0]

    @property
    def manifest(self) -> dict:
        return getattr(self, self.kind_tag)

    @property
    def name(self) -> Optional[str]:
        return (self.manifest.get("metadata") or {}).get("name")
