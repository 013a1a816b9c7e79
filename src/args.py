"""Argument parsing functionality for debdep."""

import argparse


def _add_common_options(parser):
    """Options shared by every subcommand."""
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write JSON output to this file instead of stdout",
                        action="store",
                        type=str)
    parser.add_argument("--max-length",
                        dest="MAX_LENGTH",
                        help="Refuse field bodies longer than this many characters",
                        action="store",
                        type=int)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="debdep",
        description=(
            "debdep - Parse Debian relationship fields (Depends, Recommends, ...)"
        ),
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="ACTION")
    subparsers.required = True

    parse_cmd = subparsers.add_parser(
        "parse",
        help="Parse relationship field bodies given on the command line",
    )
    parse_cmd.add_argument("TEXTS",
                           help="Field body to parse; '-' reads it from stdin",
                           nargs="+",
                           type=str)
    _add_common_options(parse_cmd)

    inspect_cmd = subparsers.add_parser(
        "inspect",
        help="Read a .deb (path or http(s) URL) and parse its relationship fields",
    )
    inspect_cmd.add_argument("SOURCE",
                             help="Path or URL of a binary package archive",
                             type=str)
    inspect_cmd.add_argument("--field",
                             dest="FIELDS",
                             help="Relationship field to report (repeatable)",
                             action="append",
                             type=str,
                             default=[])
    inspect_cmd.add_argument("--timeout",
                             dest="TIMEOUT",
                             help="HTTP timeout in seconds for remote archives",
                             action="store",
                             type=float)
    _add_common_options(inspect_cmd)

    check_cmd = subparsers.add_parser(
        "check",
        help="Check a relationship field against available package versions",
    )
    check_cmd.add_argument("TEXT",
                           help="Field body to check; '-' reads it from stdin",
                           type=str)
    check_cmd.add_argument("--have",
                           dest="AVAILABLE",
                           help="Available package as NAME or NAME=VERSION (repeatable)",
                           action="append",
                           type=str,
                           default=[])
    check_cmd.add_argument("--arch",
                           dest="ARCH",
                           help="Host architecture used to filter [arch] qualifiers",
                           action="store",
                           type=str)
    _add_common_options(check_cmd)

    return parser.parse_args(argv)
