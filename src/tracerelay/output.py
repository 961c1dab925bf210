"""Output formatting utilities for the tracerelay CLI.

Consistent message formatting across all commands. ``--quiet`` silences
everything except errors.

Also re-exports the trace_lib public API for convenience imports.
"""

import sys

# Re-export trace_lib public API: one-stop import for commands
from tracerelay.lib.trace_lib import (               # noqa: F401
    TraceFacade, TraceOptions, init_trace, get_trace, reset_trace, trace,
)

_quiet = False


def set_quiet(quiet):
    """Enable or disable quiet mode for print_warn()."""
    global _quiet
    _quiet = bool(quiet)


def print_warn(msg):
    """Print a warning message."""
    if not _quiet:
        print(f"  [WARN] {msg}")


def print_error(msg):
    """Print an error message to stderr (shown even in quiet mode)."""
    print(f"  ERROR: {msg}", file=sys.stderr)
