"""Parsing and formatting of ``group:artifact:version`` identity specs."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from constants import Constants

from .errors import InvalidSpecError


@dataclass(frozen=True)
class QuerySpec:
    """Maven coordinates as typed by a user.

    ``group_id`` and ``version`` are None when not given; they are never
    empty strings.
    """
    group_id: Optional[str]
    artifact_id: str
    version: Optional[str] = None

    @classmethod
    def of(cls, spec: str) -> "QuerySpec":
        """Parse ``artifact``, ``group:artifact`` or ``group:artifact:version``.

        Raises:
            InvalidSpecError: When the segment count is not 1, 2 or 3, or the
                artifact segment is empty.
        """
        parts = [p.strip() for p in spec.strip().split(":")]
        if len(parts) == 1:
            group, artifact, version = None, parts[0], None
        elif len(parts) == 2:
            group, artifact, version = parts[0], parts[1], None
        elif len(parts) == 3:
            group, artifact, version = parts
        else:
            raise InvalidSpecError(spec)

        if not artifact:
            raise InvalidSpecError(spec)
        return cls(group or None, artifact, version or None)

    def format(self) -> str:
        """Join the present fields with ``:``."""
        return ":".join(p for p in (self.group_id, self.artifact_id, self.version) if p)

    def __str__(self) -> str:
        return self.format()

    def to_query(self) -> str:
        """Lucene query for the Maven Central search API."""
        clauses = []
        if self.group_id is not None:
            clauses.append("g:" + self.group_id)
        if self.artifact_id is not None:
            clauses.append("a:" + self.artifact_id)
        if self.version is not None:
            clauses.append("v:" + self.version)
        return " AND ".join(clauses)

    def to_uri(self, rows: int = 1) -> str:
        """Read-only search URL returning the first ``rows`` matches."""
        query = urlencode({"q": self.to_query(), "start": 0, "rows": rows})
        return f"{Constants.REGISTRY_URL_MAVEN}?{query}"


def merge_spec(base: Optional[QuerySpec], override: Optional[QuerySpec]) -> Optional[QuerySpec]:
    """Return ``base`` with every field present in ``override`` replaced.

    Either side may be None; absent fields of ``override`` keep the value
    from ``base``.
    """
    if override is None:
        return base
    if base is None:
        return override
    return QuerySpec(
        override.group_id if override.group_id is not None else base.group_id,
        override.artifact_id if override.artifact_id else base.artifact_id,
        override.version if override.version is not None else base.version,
    )
