"""
Command-line interface for inistream.

Usage:
    inistream settings.ini Section1 var1          # print raw value
    inistream settings.ini Section1.var2 -t int   # dotted name, typed
    inistream settings.ini --dump                 # print every section/key
    inistream settings.ini --check                # syntax check only
    inistream --config                            # show configuration
    inistream --version                           # show version
"""

import argparse
import sys

from ._version import __version__, get_display_version
from .errors import IniError, KeyNotFoundError

_TYPES = {"str": str, "int": int, "float": float}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    p = argparse.ArgumentParser(
        prog="inistream",
        description=(
            "Look up values in an INI file. "
            "The file is parsed character by character and syntax errors "
            "are reported with their row."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  inistream app.ini Section1 var1          # print raw value\n"
            "  inistream app.ini Section1.var2 -t int   # dotted name, as int\n"
            "  inistream app.ini --dump                 # print the whole table\n"
            "  inistream app.ini --check                # syntax check only\n"
        ),
    )

    p.add_argument(
        "file",
        nargs="?",
        metavar="FILE",
        help="INI file to read",
    )

    p.add_argument(
        "section",
        nargs="?",
        metavar="SECTION",
        help="section name, or SECTION.KEY",
    )

    p.add_argument(
        "key",
        nargs="?",
        metavar="KEY",
        help="key name (omit when SECTION is given as SECTION.KEY)",
    )

    p.add_argument(
        "-t", "--type",
        choices=sorted(_TYPES),
        default="str",
        dest="value_type",
        help="convert the value before printing (default: str)",
    )

    p.add_argument(
        "--dump",
        action="store_true",
        help="print every section and key",
    )

    p.add_argument(
        "--check",
        action="store_true",
        help="only check the file syntax",
    )

    p.add_argument(
        "--encoding",
        metavar="NAME",
        help="text encoding of FILE (default from config: utf-8)",
    )

    p.add_argument(
        "--complete-last-line",
        action="store_true",
        default=None,
        help="treat end of file as a final newline instead of dropping "
             "an unterminated last line",
    )

    p.add_argument(
        "--no-suggestions",
        action="store_true",
        help="don't list existing keys when a key is not found",
    )

    p.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="suppress informational messages",
    )

    p.add_argument(
        "--config",
        action="store_true",
        dest="show_config",
        help="show current configuration",
    )

    p.add_argument(
        "--version", "-V",
        action="version",
        version=f"inistream {get_display_version()} ({__version__})",
    )

    return p


def main(argv=None):
    """Main entry point.

    Dispatch priority: config → check → dump → lookup.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load config and apply CLI overrides
    from .config import load_config
    config = load_config()
    config = config.with_overrides(
        parser_encoding=args.encoding,
        parser_complete_last_line=args.complete_last_line,
        output_quiet=args.quiet or None,
        output_suggestions=False if args.no_suggestions else None,
    )

    # --config: show effective configuration
    if args.show_config:
        _cmd_config(config)
        return

    if args.file is None:
        parser.error("FILE is required")

    from .parser import IniParser
    ini = IniParser(args.file, config=config)

    try:
        if args.check:
            _cmd_check(ini, config)
            return

        if args.dump:
            _cmd_dump(ini)
            return

        _cmd_get(ini, parser, args)
    except KeyNotFoundError as e:
        msg = str(e) if config.output_suggestions else e.short_message()
        _fail(msg)
    except IniError as e:
        _fail(str(e))


def _cmd_config(config):
    """Show effective configuration."""
    from .config import format_config
    print(format_config(config))


def _cmd_check(ini, config):
    """Parse the whole file and report success."""
    ini.reload()
    if not config.output_quiet:
        count = sum(len(ini.keys(s)) for s in ini.sections())
        print(f"inistream: {ini.path}: ok "
              f"({len(ini.sections())} sections, {count} keys)")


def _cmd_dump(ini):
    """Print the parsed table in file order."""
    for section, pairs in ini.table.items():
        print(f"[{section}]")
        for key, value in pairs.items():
            print(f"{key} = {value}")


def _cmd_get(ini, parser, args):
    """Look up one value and print it."""
    if args.section is None:
        parser.error("SECTION and KEY are required (or use --dump/--check)")

    value_type = _TYPES[args.value_type]
    if args.key is None:
        try:
            value = ini.get_value(args.section, value_type)
        except ValueError as e:
            parser.error(str(e))
    else:
        value = ini.get_typed(args.section, args.key, value_type)

    print(value)


def _fail(msg: str) -> None:
    """Print an error to stderr and exit non-zero."""
    print(f"inistream: {msg}", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    main()
