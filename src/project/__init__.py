"""Project descriptor identity package.

- query_spec.py: parsing/formatting of group:artifact:version specs
- pom_io.py: pom.xml read/write preserving unmanaged content
- parent_locator.py: discovery of an enclosing parent pom.xml
- java_version.py: Java toolchain detection for compiler defaults
- id_command.py: create/update orchestration behind ``pomcli id``
"""

from .errors import InvalidSpecError, MissingIdentityError, PomCliError, ToolchainDetectionError
from .id_command import IdCommand
from .query_spec import QuerySpec, merge_spec

__all__ = [
    "IdCommand",
    "InvalidSpecError",
    "MissingIdentityError",
    "PomCliError",
    "QuerySpec",
    "ToolchainDetectionError",
    "merge_spec",
]
