"""Main CLI entry point for tracerelay.

Implements a Docker-style two-pass argument parser:
  1. First pass: extract global flags (--level, --listener, --config, ...)
  2. Second pass: dispatch to subcommand with shared parent args

Global flags can appear before OR after the subcommand:
  tracerelay --level verbose emit "hello"     # works
  tracerelay emit "hello" --level verbose     # also works

Subcommands self-register via register(subparsers, parents) convention.
"""

import argparse
import sys

from tracerelay._version import BASE_VERSION, VERSION
from tracerelay.output import print_error, set_quiet


# ---------------------------------------------------------------------------
# Global flags (Docker-style: can precede the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Path to global config file "
                         "(default: ~/.tracerelay/config.json)"},
    "--level": {"metavar": "LEVEL", "default": None,
                "help": "Open severity gates up to LEVEL "
                        "(off, error, warning, info, verbose)"},
    "--listener": {"action": "append", "metavar": "SPEC", "default": None,
                   "help": "Add a listener (console, stderr, memory, "
                           "file:PATH); repeatable"},
    "--auto-flush": {"action": "store_true", "default": False,
                     "help": "Flush listeners after every write"},
    "--mirror": {"action": "store_true", "default": False,
                 "help": "Mirror trace output into Python logging"},
    "--strict": {"action": "store_true", "default": False,
                 "help": "Fail when any listener fails"},
    "--disable": {"action": "store_true", "default": False,
                  "help": "Disable tracing entirely"},
    "--quiet": {"aliases": ["-q"], "action": "store_true", "default": False,
                "help": "Only print errors"},
}


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        global_parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


# ---------------------------------------------------------------------------
# Shared parent parser (inherited by all subcommands via parents=[])
# ---------------------------------------------------------------------------
def _build_common_parser():
    """Build the shared argument parser for project-scoped flags."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--project-dir", metavar="PATH",
                        help="Directory to search for .tracerelay.json "
                             "(default: current directory)")
    return common


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in tracerelay.commands must export:
      register(subparsers, parents) — add itself to the subparser
      run(args) — execute the command
    """
    from tracerelay.commands import emit, show
    return [emit, show]


def _build_parser(commands, common_parser):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="tracerelay",
        description="tracerelay — forward trace messages to listeners",
        epilog=(
            "Run 'tracerelay <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--level, --listener, --config, ...) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"tracerelay {BASE_VERSION} ({VERSION})",
    )

    # Add global flags to main parser too (for --help display)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[common_parser])

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for the tracerelay CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success, 1 = listener failure, 2 = bad configuration).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)
    set_quiet(global_args.quiet)

    # Pass 2: parse subcommand + shared/specific args
    common_parser = _build_common_parser()
    commands = _discover_commands()
    parser = _build_parser(commands, common_parser)

    if not remaining:
        parser.print_help()
        return 0

    args = parser.parse_args(remaining)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    # Pass 1 consumed every global flag, so its values are authoritative
    for key, value in vars(global_args).items():
        setattr(args, key, value)

    # Dispatch
    try:
        return args.func(args) or 0
    except ValueError as e:
        print_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
