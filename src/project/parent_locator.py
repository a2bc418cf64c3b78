"""Discovery of an enclosing parent descriptor above a project directory."""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Union

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .models import ParentLookup
from .pom_io import parse_pom

logger = logging.getLogger(__name__)


def locate_parent(start_dir: Union[str, os.PathLike]) -> Optional[ParentLookup]:
    """Walk upward from ``start_dir`` and return the first usable descriptor.

    ``start_dir`` itself is never a candidate. Ancestor descriptors are only
    read. A descriptor that cannot be parsed, or that lacks a complete
    identity, is skipped and the walk continues above it.

    Returns:
        The lookup result, or None when no ancestor holds a descriptor.
    """
    start = Path(os.path.abspath(start_dir))
    for depth, directory in enumerate(start.parents, start=1):
        candidate = directory / Constants.POM_XML_FILE
        if not candidate.is_file():
            continue

        try:
            descriptor = parse_pom(candidate)
        except (OSError, ET.ParseError) as e:
            logger.warning("Ignoring unreadable parent candidate %s: %s", candidate, e)
            continue

        spec = descriptor.effective_identity()
        if spec is None or spec.group_id is None or spec.version is None:
            logger.warning("Ignoring parent candidate %s: incomplete coordinates", candidate)
            continue

        if is_debug_enabled(logger):
            logger.debug("Found parent descriptor", extra=extra_context(
                event="decision", component="parent_locator", action="locate",
                target=str(candidate), outcome="found", depth=depth
            ))
        return ParentLookup(spec=spec, depth=depth, pom_path=candidate)

    if is_debug_enabled(logger):
        logger.debug("No parent descriptor found", extra=extra_context(
            event="decision", component="parent_locator", action="locate",
            target=str(start), outcome="not_found"
        ))
    return None
