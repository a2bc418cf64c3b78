"""CLI entry point for the ``pomcli search`` command."""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

from constants import ExitCodes
from common import http_client
from cli_id import _setup_logging
from project.errors import InvalidSpecError
from project.query_spec import QuerySpec

logger = logging.getLogger(__name__)


def search_latest(spec: QuerySpec) -> Optional[QuerySpec]:
    """Return the first Maven Central match for ``spec``, or None.

    Network failures exit with CONNECTION_ERROR through ``get_json``.
    """
    data = http_client.get_json(spec.to_uri(), context="maven", params={"wt": "json"})
    if data is None:
        return None

    docs = (data.get("response") or {}).get("docs") or []
    if not docs:
        return None

    doc = docs[0]
    # Artifact-level hits carry latestVersion, GAV-level hits carry v
    version = doc.get("v") or doc.get("latestVersion")
    return QuerySpec(doc.get("g"), doc.get("a"), version)


def run_search_command(args: Any) -> None:
    """Entry point for the search command.

    Args:
        args: Parsed CLI arguments namespace.
    """
    _setup_logging(args)

    try:
        spec = QuerySpec.of(args.SPEC)
    except InvalidSpecError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.INVALID_INPUT.value)

    logger.info("Searching Maven Central for %s", spec)
    found = search_latest(spec)
    if found is None:
        logger.warning("No match for %s", spec)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if not getattr(args, "QUIET", False):
        print(found)
    sys.exit(ExitCodes.SUCCESS.value)
