"""
Listener spec parsing — build listeners from short config strings.

Spec syntax (compact, positional):
    KIND[:LOCATION]

    Examples:
        console                 # stdout
        stderr                  # stderr
        memory                  # in-memory capture
        file:trace.log          # append to trace.log
        file:C:\\logs\\app.log    # Windows drive letter kept intact

Specs come from the ``listeners`` config key and the ``--listener`` CLI
flag.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from .listeners import (
    DEFAULT_INDENT_SIZE, ConsoleListener, FileListener, MemoryListener,
)

# Listener kinds recognized in specs
KNOWN_LISTENER_KINDS = {
    'console',      # stdout
    'stderr',       # stderr
    'file',         # append-mode file (needs a location)
    'memory',       # in-memory capture
}

LISTENER_KIND_DESCRIPTIONS = {
    'console': 'Standard output',
    'stderr':  'Standard error',
    'file':    'Append to a file (file:PATH)',
    'memory':  'Keep output in memory',
}

# Kinds that cannot be built without a location
LOCATION_REQUIRED = {'file'}


@dataclass
class ListenerSpec:
    """A parsed listener spec."""
    kind: str
    location: Optional[str] = None


def parse_listener_spec(spec: str) -> ListenerSpec:
    """Parse a listener spec string into a ListenerSpec.

    Only the first colon separates kind from location, so Windows drive
    letters survive ('file:C:\\x' has location 'C:\\x').

    Raises:
        ValueError: for an empty spec, an unknown kind, or a missing location
    """
    text = spec.strip()
    if not text:
        raise ValueError("Empty listener spec")
    kind, sep, location = text.partition(':')
    kind = kind.strip().lower()

    if kind not in KNOWN_LISTENER_KINDS:
        raise ValueError(
            f"Unknown listener kind {kind!r} in spec {spec!r} "
            f"(expected one of: {', '.join(sorted(KNOWN_LISTENER_KINDS))})"
        )
    location = location if sep and location else None
    if kind in LOCATION_REQUIRED and not location:
        raise ValueError(f"Listener kind {kind!r} needs a location: {kind}:PATH")
    return ListenerSpec(kind=kind, location=location)


def build_listener(spec, indent_size: int = DEFAULT_INDENT_SIZE) -> Any:
    """Create a listener from a spec string or ListenerSpec."""
    if isinstance(spec, str):
        spec = parse_listener_spec(spec)
    if spec.kind == 'console':
        return ConsoleListener(indent_size=indent_size)
    if spec.kind == 'stderr':
        return ConsoleListener(use_stderr=True, indent_size=indent_size)
    if spec.kind == 'memory':
        return MemoryListener(name=spec.location, indent_size=indent_size)
    return FileListener(spec.location, indent_size=indent_size)


def build_listeners(specs: List[str],
                    indent_size: int = DEFAULT_INDENT_SIZE) -> List[Any]:
    """Create listeners for a list of spec strings, in order."""
    return [build_listener(s, indent_size=indent_size) for s in specs]


def format_listener_kinds() -> str:
    """Format the known listener kinds for display.

    Returns:
        Formatted string listing all kinds with descriptions.
    """
    lines = ["Available listener kinds:"]
    max_name = max(len(name) for name in KNOWN_LISTENER_KINDS)
    for name in sorted(KNOWN_LISTENER_KINDS):
        desc = LISTENER_KIND_DESCRIPTIONS.get(name, '')
        lines.append(f"  {name:<{max_name}}  {desc}")
    return "\n".join(lines)
