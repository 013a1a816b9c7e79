"""debdep - Debian relationship field parser

    Parses relationship fields (Depends, Recommends, ...) given on the command
    line or found in a binary package archive, and prints their structure as
    JSON.

    Returns:
        int: Exit code
"""
import json
import logging
import sys
import tempfile

from debian.debian_support import Version

from constants import ConfigError, Constants, ExitCodes
from common.http_client import DownloadError, download_file, is_remote
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from cli_config import config_log_level, load_and_apply
from args import parse_args
from control import ControlArchiveError, ControlDecodeError, decode_control, read_control_text
from relations import RelationParseError, parse, parse_arch, unsatisfied_relations

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """Raised for command-line input the tool refuses to process."""


def read_text(value):
    """Return ``value``, or stdin's content when it is '-'."""
    if value == "-":
        return sys.stdin.read()
    return value


def check_length(text, label="input"):
    """Enforce Constants.MAX_INPUT_LENGTH on a field body.

    Raises:
        InputError: If ``text`` is too long.
    """
    if len(text) > Constants.MAX_INPUT_LENGTH:
        raise InputError(
            f"{label} is {len(text)} characters long; limit is {Constants.MAX_INPUT_LENGTH}"
        )


def emit(data, path=None):
    """Write ``data`` as JSON to ``path`` or stdout.

    Args:
        data: JSON-compatible data.
        path (str, optional): Output file path.
    """
    rendered = json.dumps(data, indent=2)
    if path:
        with open(path, "w", encoding="utf-8") as file:
            file.write(rendered + "\n")
        logging.info("JSON output written to %s", path)
    else:
        print(rendered)


def parse_available(entries):
    """Turn ``NAME`` / ``NAME=VERSION`` entries into a name -> versions map.

    A bare ``NAME`` maps to None (present at any version) and wins over
    versioned entries for the same name.

    Raises:
        InputError: If an entry has an empty name or an invalid version.
    """
    available = {}
    for entry in entries:
        name, sep, version = entry.partition("=")
        name = name.strip()
        if not name:
            raise InputError(f"Empty package name in --have {entry!r}")
        if not sep:
            available[name] = None
            continue
        try:
            parsed = Version(version.strip())
        except ValueError as e:
            raise InputError(f"Invalid version in --have {entry!r}") from e
        versions = available.setdefault(name, [])
        if versions is not None:
            versions.append(parsed)
    return available


def run_parse(args):
    """Handle the ``parse`` subcommand."""
    results = []
    for raw in args.TEXTS:
        text = read_text(raw)
        check_length(text)
        dependency = parse(text)
        results.append({"input": text, "dependency": dependency.to_dict()})
    emit(results, args.OUTPUT)
    return ExitCodes.SUCCESS


def _inspect_path(path):
    limit = Constants.MAX_INPUT_LENGTH
    control = decode_control(read_control_text(path), max_field_length=limit)
    relationships = control.relationship_fields(Constants.DEPENDENCY_FIELDS, max_field_length=limit)
    return {
        "package": control.package,
        "version": str(control.version) if control.version is not None else None,
        "architecture": str(control.architecture) if control.architecture is not None else None,
        "installed_size": control.installed_size,
        "relationships": {name: dep.to_dict() for name, dep in relationships.items()},
    }


def run_inspect(args):
    """Handle the ``inspect`` subcommand."""
    source = args.SOURCE
    if is_remote(source):
        with tempfile.TemporaryDirectory(prefix="debdep-") as tmp:
            report = _inspect_path(download_file(source, tmp))
    else:
        report = _inspect_path(source)
    logging.info("Inspected %s (%d relationship fields)", report["package"], len(report["relationships"]))
    emit(report, args.OUTPUT)
    return ExitCodes.SUCCESS


def run_check(args):
    """Handle the ``check`` subcommand."""
    text = read_text(args.TEXT)
    check_length(text)
    dependency = parse(text)
    available = parse_available(args.AVAILABLE)
    arch = parse_arch(args.ARCH) if args.ARCH else None

    try:
        missing = unsatisfied_relations(dependency, available, arch)
    except ValueError as e:
        raise InputError(f"Cannot compare versions: {e}") from e
    if missing:
        logging.warning("%d of %d relations unsatisfied", len(missing), len(dependency))
    emit(
        {
            "satisfied": not missing,
            "unsatisfied": [r.to_dict() for r in missing],
        },
        args.OUTPUT,
    )
    return ExitCodes.UNSATISFIED if missing else ExitCodes.SUCCESS


ACTIONS = {
    "parse": run_parse,
    "inspect": run_inspect,
    "check": run_check,
}


def _setup_logging(args):
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.info("Logging to file: %s", log_file)


def run(args):
    """Dispatch a parsed command line; return an ExitCodes member."""
    try:
        cfg = load_and_apply(args)
    except ConfigError as e:
        logging.error("%s", e)
        return ExitCodes.CONFIG_ERROR

    # CLI --loglevel wins over the configuration file.
    level = config_log_level(cfg)
    if level and not getattr(args, "LOG_LEVEL", None):
        logging.getLogger().setLevel(getattr(logging, level, logging.INFO))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        return ACTIONS[args.action](args)
    except RelationParseError as e:
        logging.error("Parse error: %s", e)
        return ExitCodes.PARSE_ERROR
    except ControlDecodeError as e:
        logging.error("Invalid control field %s", e)
        return ExitCodes.PARSE_ERROR
    except InputError as e:
        logging.error("%s", e)
        return ExitCodes.PARSE_ERROR
    except DownloadError as e:
        logging.error("%s", e)
        return ExitCodes.CONNECTION_ERROR
    except ControlArchiveError as e:
        logging.error("%s", e)
        return ExitCodes.FILE_ERROR
    except OSError as e:
        logging.error("IO error: %s, aborting", e)
        return ExitCodes.FILE_ERROR


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    code = run(args)
    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action=args.action,
                outcome=code.name.lower(),
            )
        )
    sys.exit(code.value)


if __name__ == "__main__":
    main()
