"""Constants used in the project."""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    INVALID_INPUT = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    POM_XML_FILE = "pom.xml"
    POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
    POM_SCHEMA_LOCATION = "https://maven.apache.org/xsd/maven-4.0.0.xsd"
    MODEL_VERSION = "4.0.0"
    DEFAULT_GROUP_ID = "unnamed"
    DEFAULT_VERSION = "0.0.1-SNAPSHOT"
    DEFAULT_PACKAGING = "jar"
    CURRENT_DIR_SPEC = "."

    # Toolchain detection; None means "$JAVA_HOME/bin/java" or "java" on PATH
    JAVA_COMMAND = None
    COMPILER_SOURCE_PROPERTY = "maven.compiler.source"
    COMPILER_TARGET_PROPERTY = "maven.compiler.target"
    COMPILER_RELEASE_PROPERTY = "maven.compiler.release"

    REGISTRY_URL_MAVEN = "https://search.maven.org/solrsearch/select"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "POMCLI_LOG_LEVEL"
    ENV_CONFIG = "POMCLI_CONFIG"


def _default_config_path():
    """Return the config file path from env/XDG conventions."""
    explicit = os.environ.get(Constants.ENV_CONFIG)
    if explicit:
        return explicit
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, "pomcli", "pomcli.yml")


def _load_yaml_config(path=None):
    """Load YAML config overrides into Constants.

    Recognized layout::

        defaults:
          group_id: com.example
          version: 1.0.0-SNAPSHOT
          packaging: jar
          java_command: /opt/jdk-21/bin/java
        http:
          timeout: 10

    Missing files are ignored. Malformed files are logged and ignored so a bad
    config never breaks the CLI.

    Returns:
        dict: The parsed config (empty when nothing was loaded).
    """
    cfg_path = path or _default_config_path()
    if not os.path.isfile(cfg_path):
        if path:
            logger.warning("Config file not found: %s", cfg_path)
        return {}

    import yaml  # pylint: disable=import-outside-toplevel

    try:
        with open(cfg_path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config %s: %s", cfg_path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", cfg_path)
        return {}

    defaults = data.get("defaults") or {}
    if isinstance(defaults, dict):
        if defaults.get("group_id"):
            Constants.DEFAULT_GROUP_ID = str(defaults["group_id"])
        if defaults.get("version"):
            Constants.DEFAULT_VERSION = str(defaults["version"])
        if defaults.get("packaging"):
            Constants.DEFAULT_PACKAGING = str(defaults["packaging"])
        java_command = defaults.get("java_command")
        if isinstance(java_command, str) and java_command.strip():
            Constants.JAVA_COMMAND = java_command.strip()

    http = data.get("http") or {}
    if isinstance(http, dict) and http.get("timeout") is not None:
        try:
            Constants.REQUEST_TIMEOUT = int(http["timeout"])
        except (TypeError, ValueError):
            logger.warning("Ignoring non-integer http.timeout: %r", http["timeout"])

    logger.debug("Loaded config from %s", cfg_path)
    return data
