"""Data models for project descriptors and parent lookups."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from constants import Constants

from .query_spec import QuerySpec

# Maven's own default; independent of the configured default for new files.
MAVEN_DEFAULT_PACKAGING = "jar"


@dataclass
class ParentRef:
    """The ``<parent>`` block of a descriptor."""
    group_id: str
    artifact_id: str
    version: str
    relative_path: Optional[str] = None


@dataclass
class ProjectDescriptor:
    """In-memory view of a ``pom.xml``.

    ``element`` is the XML root the descriptor was loaded from, or None for a
    new descriptor. Saving writes the fields back into it so that content this
    tool does not manage survives an update.
    """
    artifact_id: Optional[str] = None
    group_id: Optional[str] = None
    version: Optional[str] = None
    packaging: Optional[str] = None
    model_version: str = Constants.MODEL_VERSION
    parent: Optional[ParentRef] = None
    properties: Dict[str, str] = field(default_factory=dict)
    element: Optional[ET.Element] = field(default=None, repr=False, compare=False)

    @property
    def effective_group_id(self) -> Optional[str]:
        if self.group_id:
            return self.group_id
        return self.parent.group_id if self.parent else None

    @property
    def effective_version(self) -> Optional[str]:
        if self.version:
            return self.version
        return self.parent.version if self.parent else None

    @property
    def effective_packaging(self) -> str:
        return self.packaging or MAVEN_DEFAULT_PACKAGING

    def identity(self) -> Optional[QuerySpec]:
        """Coordinates as written, or None when no artifactId is declared."""
        if not self.artifact_id:
            return None
        return QuerySpec(self.group_id, self.artifact_id, self.version)

    def effective_identity(self) -> Optional[QuerySpec]:
        """Coordinates with group/version inherited from the parent block."""
        if not self.artifact_id:
            return None
        return QuerySpec(self.effective_group_id, self.artifact_id, self.effective_version)

    def project_id(self) -> str:
        """``"<packaging> <group>:<artifact>:<version>"``, absent coordinates omitted."""
        coords = (self.effective_group_id, self.artifact_id, self.effective_version)
        return " ".join(
            p for p in (self.effective_packaging, ":".join(c for c in coords if c)) if p
        )


@dataclass(frozen=True)
class ParentLookup:
    """A descriptor found above the target directory.

    ``depth`` counts directory hops from the target's directory, 1 being its
    immediate parent directory.
    """
    spec: QuerySpec
    depth: int
    pom_path: Path

    def relative_path(self) -> Optional[str]:
        """``<relativePath>`` value, None when Maven's default already points at it."""
        if self.depth <= 1:
            return None
        return "/".join([".."] * self.depth)

    def to_parent_ref(self) -> ParentRef:
        return ParentRef(
            group_id=self.spec.group_id,
            artifact_id=self.spec.artifact_id,
            version=self.spec.version,
            relative_path=self.relative_path(),
        )
