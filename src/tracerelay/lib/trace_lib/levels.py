"""
Severity level constants for the trace facade.

Each severity has its own boolean gate in TraceOptions. The gates are
independent, but setting a *level* turns on every gate up to and
including that level:

    off < error < warning < info < verbose

Mirrored lines are logged through the stdlib ``logging`` module at the
level in LOGGING_LEVELS. Ungated writes mirror at DEBUG.
"""

import logging
from typing import Dict, Union

OFF = 0
ERROR = 1
WARNING = 2
INFO = 3
VERBOSE = 4

LEVEL_NAMES: Dict[int, str] = {
    OFF: 'off',
    ERROR: 'error',
    WARNING: 'warning',
    INFO: 'info',
    VERBOSE: 'verbose',
}

# Option attribute that gates each severity
GATE_ATTRS: Dict[int, str] = {
    ERROR: 'trace_error',
    WARNING: 'trace_warning',
    INFO: 'trace_info',
    VERBOSE: 'trace_verbose',
}

LOGGING_LEVELS: Dict[int, int] = {
    ERROR: logging.ERROR,
    WARNING: logging.WARNING,
    INFO: logging.INFO,
    VERBOSE: logging.DEBUG,
}

# Level used when mirroring write()/write_line() calls that carry no severity
UNGATED_LOGGING_LEVEL = logging.DEBUG


def parse_level(value: Union[str, int]) -> int:
    """Parse a level name ('warning') or number (2) into a level constant.

    Raises:
        ValueError: if the name or number is not a known level.
    """
    if isinstance(value, bool):
        raise ValueError(f"Unknown trace level: {value!r}")
    if isinstance(value, int):
        if value in LEVEL_NAMES:
            return value
        raise ValueError(f"Unknown trace level: {value!r}")
    key = str(value).strip().lower()
    for level, name in LEVEL_NAMES.items():
        if name == key:
            return level
    if key.isdigit() and int(key) in LEVEL_NAMES:
        return int(key)
    raise ValueError(
        f"Unknown trace level: {value!r} "
        f"(expected one of: {', '.join(LEVEL_NAMES.values())})"
    )


def level_name(level: int) -> str:
    """Return the lowercase name for a level constant."""
    return LEVEL_NAMES[level]
