"""tracerelay emit — send one message through the configured listeners.

Builds the process facade from the resolved configuration, writes the
message (gated by --severity when given), then closes every listener.
Without any configured listener the message goes to the console.

Examples::

    tracerelay emit "deploy started"
    tracerelay emit "disk almost full" --severity warning --category disk
    tracerelay --listener file:trace.log emit "nightly run" --indent 1
"""

import argparse

from tracerelay.config import resolve_options
from tracerelay.lib.trace_lib import (
    TraceDispatchError, init_trace, reset_trace,
)
from tracerelay.lib.trace_lib.levels import GATE_ATTRS, LEVEL_NAMES
from tracerelay.output import print_error, print_warn

DEFAULT_LISTENERS = ["console"]

SEVERITIES = [LEVEL_NAMES[level] for level in sorted(GATE_ATTRS)]


def register(subparsers, parents):
    """Register the 'emit' subcommand."""
    p = subparsers.add_parser(
        "emit",
        parents=parents,
        help="Write a message to every configured listener",
        description=(
            "Write MESSAGE to every configured listener, in order.\n"
            "With --severity the message is only written when that\n"
            "severity gate is open (see --level)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("message", help="Message text")
    p.add_argument("--category", metavar="NAME", default=None,
                   help="Category prefix for the message")
    p.add_argument("--severity", choices=SEVERITIES, default=None,
                   help="Gate the message on this severity")
    p.add_argument("--no-newline", action="store_true", default=False,
                   help="Write without a line terminator")
    p.add_argument("--indent", type=int, default=0, metavar="N",
                   help="Indent the message N levels")

    p.set_defaults(func=run)


def _write(facade, args):
    for _ in range(max(0, args.indent)):
        facade.indent()
    if args.no_newline:
        facade.write(args.message, args.category)
    elif args.severity:
        getattr(facade, f"write_line_{args.severity}")(
            args.message, args.category)
    else:
        facade.write_line(args.message, args.category)


def run(args):
    """Execute the emit command."""
    if args.no_newline and args.severity:
        print_error("--no-newline cannot be combined with --severity.")
        return 2

    options, _ = resolve_options(args)
    if not options.listener_specs:
        options.listener_specs = list(DEFAULT_LISTENERS)

    facade = init_trace(options)
    if not facade.enabled:
        print_warn("Tracing is disabled; nothing was written.")
    failed = False
    try:
        _write(facade, args)
    except TraceDispatchError as e:
        print_error(str(e))
        failed = True

    # Closing flushes; a strict facade can fail here too
    try:
        reset_trace()
    except TraceDispatchError as e:
        print_error(str(e))
        failed = True

    return 1 if failed or facade.failures else 0
