"""Tests for Java toolchain detection."""
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest

from constants import Constants
from project.errors import ToolchainDetectionError
from project.java_version import (
    JavaVersionInfo,
    detect_java_version,
    java_command,
    parse_java_version,
)

JAVA_8_OUT = """openjdk version "1.8.0_372"
OpenJDK Runtime Environment (Temurin)(build 1.8.0_372-b07)
OpenJDK 64-Bit Server VM (Temurin)(build 25.372-b07, mixed mode)
"""

JAVA_11_OUT = """openjdk version "11.0.12" 2021-07-20
OpenJDK Runtime Environment 18.9 (build 11.0.12+7)
OpenJDK 64-Bit Server VM 18.9 (build 11.0.12+7, mixed mode)
"""

JAVA_21_EA_OUT = """openjdk version "21-ea" 2023-09-19
OpenJDK Runtime Environment (build 21-ea+25-2212)
OpenJDK 64-Bit Server VM (build 21-ea+25-2212, mixed mode, sharing)
"""


@pytest.mark.parametrize(
    "output, raw, major, properties",
    [
        (JAVA_8_OUT, "1.8.0_372", 8,
         {"maven.compiler.source": "1.8", "maven.compiler.target": "1.8"}),
        (JAVA_11_OUT, "11.0.12", 11, {"maven.compiler.release": "11"}),
        (JAVA_21_EA_OUT, "21-ea", 21, {"maven.compiler.release": "21"}),
        ('java version "17" 2021-09-14 LTS\n', "17", 17, {"maven.compiler.release": "17"}),
    ],
)
def test_parse_java_version(output, raw, major, properties):
    info = parse_java_version(output)
    assert info.raw == raw
    assert info.major == major
    assert info.compiler_properties() == properties


def test_legacy_properties_keep_source_before_target():
    props = JavaVersionInfo(raw="1.8.0", major=8).compiler_properties()
    assert list(props) == ["maven.compiler.source", "maven.compiler.target"]


def test_parse_without_version_token_raises():
    with pytest.raises(ToolchainDetectionError):
        parse_java_version("bash: java: command not found\n")


def test_parse_empty_output_raises():
    with pytest.raises(ToolchainDetectionError):
        parse_java_version("")


def test_detect_merges_stderr_into_stdout():
    completed = MagicMock(stdout=JAVA_11_OUT, returncode=0)
    with patch("subprocess.run", return_value=completed) as mock_run:
        info = detect_java_version(["java", "-version"])
    assert info.major == 11
    args, kwargs = mock_run.call_args
    assert args[0] == ["java", "-version"]
    assert kwargs["stdout"] == subprocess.PIPE
    assert kwargs["stderr"] == subprocess.STDOUT


def test_detect_missing_executable_raises():
    with patch("subprocess.run", side_effect=FileNotFoundError("java")):
        with pytest.raises(ToolchainDetectionError):
            detect_java_version(["java", "-version"])


def test_java_command_prefers_configured(monkeypatch):
    monkeypatch.setattr(Constants, "JAVA_COMMAND", "/opt/jdk/bin/java")
    monkeypatch.setenv("JAVA_HOME", "/somewhere/else")
    assert java_command() == ["/opt/jdk/bin/java", "-version"]


def test_java_command_uses_java_home(monkeypatch, tmp_path):
    monkeypatch.setattr(Constants, "JAVA_COMMAND", None)
    monkeypatch.setenv("JAVA_HOME", str(tmp_path))
    assert java_command() == [str(tmp_path / "bin" / "java"), "-version"]


def test_java_command_defaults_to_path(monkeypatch):
    monkeypatch.setattr(Constants, "JAVA_COMMAND", None)
    monkeypatch.delenv("JAVA_HOME", raising=False)
    assert java_command() == ["java", "-version"]


def _fake_java(tmp_path, stderr_bytes):
    script = tmp_path / "java"
    script.write_bytes(b"#!/bin/sh\nprintf '" + stderr_bytes + b"\\n' >&2\n")
    script.chmod(0o755)
    return script


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script")
def test_detect_tolerates_undecodable_output(tmp_path):
    java = _fake_java(tmp_path, b'openjdk version "17" \\377')
    info = detect_java_version([str(java), "-version"])
    assert info.major == 17
    assert info.compiler_properties() == {"maven.compiler.release": "17"}


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script")
def test_descriptor_created_despite_undecodable_output(tmp_path):
    from project.id_command import IdCommand

    java = _fake_java(tmp_path, b'\\377 Picked up _JAVA_OPTIONS: -Xmx1g')
    pom = tmp_path / "app" / "pom.xml"
    cmd = IdCommand(pom_path=pom, id="com.example:app:1.0", standalone=True,
                    version_detector=lambda: detect_java_version([str(java), "-version"]))
    cmd.run()
    assert cmd.read_project_id() == "jar com.example:app:1.0"
    assert "maven.compiler" not in pom.read_text(encoding="utf-8")


def test_decode_failure_becomes_detection_error():
    with patch("subprocess.run", side_effect=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid")):
        with pytest.raises(ToolchainDetectionError):
            detect_java_version(["java", "-version"])
