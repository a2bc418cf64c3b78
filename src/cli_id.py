"""CLI entry point for the ``pomcli id`` command.

Creates or updates the descriptor and prints the resulting project id.
"""

from __future__ import annotations

import logging
import os
import sys
import xml.etree.ElementTree as ET
from typing import Any

from constants import Constants, ExitCodes, _load_yaml_config
from common.logging_utils import configure_logging
from project.errors import InvalidSpecError, MissingIdentityError
from project.id_command import IdCommand

logger = logging.getLogger(__name__)


def _setup_logging(args: Any) -> None:
    """Configure logging and load config based on CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    # Honor CLI --loglevel
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()

    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)

    _load_yaml_config(getattr(args, "CONFIG", None))


def run_id_command(args: Any) -> None:
    """Entry point for the id command.

    Args:
        args: Parsed CLI arguments namespace.
    """
    _setup_logging(args)

    cmd = IdCommand(
        pom_path=getattr(args, "POM_FILE", None) or Constants.POM_XML_FILE,
        id=getattr(args, "SPEC", None),
        as_=getattr(args, "PACKAGING", None),
        standalone=bool(getattr(args, "STANDALONE", False)),
    )

    try:
        cmd.run()
    except InvalidSpecError as e:
        logger.error("%s. Expected artifactId, groupId:artifactId or groupId:artifactId:version.", e)
        sys.exit(ExitCodes.INVALID_INPUT.value)
    except MissingIdentityError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.INVALID_INPUT.value)
    except ET.ParseError as e:
        logger.error("Existing descriptor %s is not valid XML: %s", cmd.pom_path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except OSError as e:
        logger.error("Unable to write %s: %s", cmd.pom_path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if not getattr(args, "QUIET", False):
        print(cmd.read_project_id())
    sys.exit(ExitCodes.SUCCESS.value)
