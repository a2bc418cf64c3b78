"""Java toolchain detection for compiler defaults of new projects.

The process is run once and its merged output captured; turning that output
into compiler properties is pure and handled by :func:`parse_java_version`.
"""
from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled

from .errors import ToolchainDetectionError

logger = logging.getLogger(__name__)

# "1.8.0_372", "11.0.12", "17", "21-ea"
_VERSION_TOKEN_RE = re.compile(r'"(\d+(?:\.\d+)*(?:_\d+)?(?:-[\w.]+)?)"')
_LEGACY_MAX_MAJOR = 8


@dataclass(frozen=True)
class JavaVersionInfo:
    """A parsed ``java -version`` result."""
    raw: str
    major: int

    @property
    def legacy(self) -> bool:
        return self.major <= _LEGACY_MAX_MAJOR

    def compiler_properties(self) -> Dict[str, str]:
        """Maven compiler properties matching this toolchain."""
        if self.legacy:
            level = f"1.{self.major}"
            return {
                Constants.COMPILER_SOURCE_PROPERTY: level,
                Constants.COMPILER_TARGET_PROPERTY: level,
            }
        return {Constants.COMPILER_RELEASE_PROPERTY: str(self.major)}


def parse_java_version(output: str) -> JavaVersionInfo:
    """Extract the version from ``java -version`` output.

    Raises:
        ToolchainDetectionError: When no quoted version token is present.
    """
    match = _VERSION_TOKEN_RE.search(output or "")
    if match is None:
        raise ToolchainDetectionError("No Java version found in output")

    raw = match.group(1)
    numbers = re.split(r"[._\-+]", raw)
    major = int(numbers[0])
    if major == 1 and len(numbers) > 1 and numbers[1].isdigit():
        major = int(numbers[1])
    return JavaVersionInfo(raw=raw, major=major)


def java_command() -> List[str]:
    """Command line reporting the toolchain version."""
    if Constants.JAVA_COMMAND:
        executable = Constants.JAVA_COMMAND
    elif os.environ.get("JAVA_HOME"):
        executable = os.path.join(os.environ["JAVA_HOME"], "bin", "java")
    else:
        executable = "java"
    return [executable, "-version"]


def run_version_command(command: Sequence[str]) -> str:
    """Run ``command`` and return stdout and stderr merged, as text.

    Blocks until the process closes its output. No timeout is applied.

    Bytes that are not valid in the locale encoding are replaced.

    Raises:
        ToolchainDetectionError: When the process cannot be started or its
            output cannot be decoded.
    """
    try:
        result = subprocess.run(  # noqa: S603
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise ToolchainDetectionError(f"Unable to run {command[0]}: {e}") from e
    except ValueError as e:
        raise ToolchainDetectionError(f"Unreadable output from {command[0]}: {e}") from e
    return result.stdout or ""


def detect_java_version(command: Optional[Sequence[str]] = None) -> JavaVersionInfo:
    """Run the toolchain and parse the reported version.

    Raises:
        ToolchainDetectionError: When the process cannot run or reports no version.
    """
    cmd = list(command) if command else java_command()
    with Timer() as t:
        output = run_version_command(cmd)
    info = parse_java_version(output)
    if is_debug_enabled(logger):
        logger.debug("Detected Java toolchain", extra=extra_context(
            event="function_exit", component="java_version", action="detect",
            outcome="detected", version=info.raw, major=info.major,
            duration_ms=t.duration_ms()
        ))
    return info
