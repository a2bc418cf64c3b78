"""Create or update a project descriptor from an identity spec.

A run is either a creation (no descriptor at ``pom_path`` yet) or an update.
Creation resolves the identity, links an enclosing parent descriptor unless
standalone, applies defaults and detects the Java toolchain. Update only
overwrites the fields the caller supplied.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .errors import MissingIdentityError, ToolchainDetectionError
from .java_version import JavaVersionInfo, detect_java_version
from .models import ParentLookup, ProjectDescriptor
from .parent_locator import locate_parent
from .pom_io import load_pom, parse_pom, save_pom
from .query_spec import QuerySpec, merge_spec

logger = logging.getLogger(__name__)


class IdCommand:
    """Set or show the coordinates of the project at ``pom_path``.

    Attributes:
        pom_path: Descriptor file to create or update.
        id: Identity spec (``artifact``, ``group:artifact``,
            ``group:artifact:version`` or ``.`` for the directory name).
        as_: Packaging override.
        standalone: Skip parent discovery on creation.
    """

    def __init__(
        self,
        pom_path: Union[str, os.PathLike] = Constants.POM_XML_FILE,
        id: Optional[str] = None,  # pylint: disable=redefined-builtin
        as_: Optional[str] = None,
        standalone: bool = False,
        parent_locator: Callable[[Path], Optional[ParentLookup]] = locate_parent,
        version_detector: Callable[[], JavaVersionInfo] = detect_java_version,
    ):
        self.pom_path = Path(pom_path)
        self.id = id
        self.as_ = as_
        self.standalone = standalone
        self._parent_locator = parent_locator
        self._version_detector = version_detector

    @property
    def project_dir(self) -> Path:
        return Path(os.path.abspath(self.pom_path)).parent

    def requested_spec(self) -> Optional[QuerySpec]:
        """Parse ``id``; ``.`` names the artifact after the project directory.

        Raises:
            InvalidSpecError: When ``id`` is malformed.
        """
        if self.id is None or not self.id.strip():
            return None
        if self.id.strip() == Constants.CURRENT_DIR_SPEC:
            return QuerySpec(None, self.project_dir.name)
        return QuerySpec.of(self.id)

    def run(self) -> ProjectDescriptor:
        """Create or update the descriptor and return what was written.

        Raises:
            InvalidSpecError: When ``id`` is malformed.
            MissingIdentityError: When there is neither an ``id`` nor a file.
        """
        requested = self.requested_spec()
        existing = load_pom(self.pom_path)
        if existing is None:
            descriptor = self._create(requested)
        else:
            descriptor = self._update(existing, requested)

        save_pom(descriptor, self.pom_path)
        logger.info("Wrote %s: %s", self.pom_path, descriptor.project_id())
        return descriptor

    def _create(self, requested: Optional[QuerySpec]) -> ProjectDescriptor:
        if requested is None:
            raise MissingIdentityError(self.pom_path)

        descriptor = ProjectDescriptor(artifact_id=requested.artifact_id)

        lookup = None
        if self.standalone:
            logger.debug("Standalone project; skipping parent discovery")
        else:
            lookup = self._parent_locator(self.project_dir)

        if lookup is not None:
            descriptor.parent = lookup.to_parent_ref()
            # Inherited coordinates stay out of the file
            descriptor.group_id = requested.group_id
            descriptor.version = requested.version
            logger.info("Using parent %s from %s", lookup.spec, lookup.pom_path)
        else:
            descriptor.group_id = requested.group_id or Constants.DEFAULT_GROUP_ID
            descriptor.version = requested.version or Constants.DEFAULT_VERSION

        descriptor.packaging = self.as_ or Constants.DEFAULT_PACKAGING
        self._apply_toolchain(descriptor)

        if is_debug_enabled(logger):
            logger.debug("Created descriptor", extra=extra_context(
                event="decision", component="id_command", action="create",
                target=str(self.pom_path), outcome="created",
                has_parent=descriptor.parent is not None
            ))
        return descriptor

    def _update(self, descriptor: ProjectDescriptor,
                requested: Optional[QuerySpec]) -> ProjectDescriptor:
        current = QuerySpec(descriptor.group_id, descriptor.artifact_id, descriptor.version)
        merged = merge_spec(current, requested)
        if not merged.artifact_id:
            raise MissingIdentityError(self.pom_path)

        descriptor.group_id = merged.group_id
        descriptor.artifact_id = merged.artifact_id
        descriptor.version = merged.version
        if self.as_:
            descriptor.packaging = self.as_

        if is_debug_enabled(logger):
            logger.debug("Updated descriptor", extra=extra_context(
                event="decision", component="id_command", action="update",
                target=str(self.pom_path), outcome="updated"
            ))
        return descriptor

    def _apply_toolchain(self, descriptor: ProjectDescriptor) -> None:
        try:
            info = self._version_detector()
        except ToolchainDetectionError as e:
            logger.warning("Java version not detected, compiler properties not set: %s", e)
            return
        descriptor.properties.update(info.compiler_properties())

    def read_project_id(self) -> str:
        """``"<packaging> <group>:<artifact>:<version>"`` of the file on disk."""
        return parse_pom(self.pom_path).project_id()
