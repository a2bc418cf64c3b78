"""Argument parsing functionality for pomcli."""

import argparse

from constants import Constants


def _add_common_options(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not print the result to the console.",
                        action="store_true")


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="pomcli",
        description="pomcli - manage pom.xml project descriptors from the command line",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="<command>")
    subparsers.required = True

    id_parser = subparsers.add_parser(
        "id",
        help="Set or show the project coordinates",
        description=(
            "Create or update pom.xml with the given coordinates. "
            "SPEC is artifactId, groupId:artifactId, groupId:artifactId:version, "
            "or '.' to use the directory name."
        ),
    )
    id_parser.add_argument("SPEC",
                           help="Project coordinates",
                           nargs="?",
                           default=None)
    id_parser.add_argument("--as",
                           dest="PACKAGING",
                           help="Packaging type, i.e: jar, war, pom",
                           action="store",
                           type=str)
    id_parser.add_argument("--standalone",
                           dest="STANDALONE",
                           help="Do not link a parent pom.xml found in an enclosing directory",
                           action="store_true")
    id_parser.add_argument("-f", "--file",
                           dest="POM_FILE",
                           help=f"Path to the descriptor (default: {Constants.POM_XML_FILE})",
                           action="store",
                           type=str,
                           default=Constants.POM_XML_FILE)
    _add_common_options(id_parser)

    search_parser = subparsers.add_parser(
        "search",
        help="Look up coordinates on Maven Central",
        description="Print the first Maven Central match for groupId:artifactId[:version].",
    )
    search_parser.add_argument("SPEC",
                               help="Coordinates to search for")
    _add_common_options(search_parser)

    return parser.parse_args(argv)
