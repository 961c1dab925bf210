"""tracerelay show — print the resolved trace configuration.

Prints the options that the CLI layers resolve to, as JSON, together
with the project config file that contributed (if any). With --kinds,
lists the listener kinds usable in listener specs instead.
"""

import argparse
import json

from tracerelay.config import resolve_options
from tracerelay.lib.trace_lib import format_listener_kinds


def register(subparsers, parents):
    """Register the 'show' subcommand."""
    p = subparsers.add_parser(
        "show",
        parents=parents,
        help="Show the resolved trace configuration",
        description=(
            "Print the trace options resolved from CLI flags, the project\n"
            ".tracerelay.json and the global ~/.tracerelay/config.json."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--kinds", action="store_true", default=False,
                   help="List listener kinds instead")

    p.set_defaults(func=run)


def run(args):
    """Execute the show command."""
    if args.kinds:
        print(format_listener_kinds())
        return 0

    options, project_path = resolve_options(args)
    data = options.to_dict()
    data["project_config"] = str(project_path) if project_path else None
    print(json.dumps(data, indent=2))
    return 0
