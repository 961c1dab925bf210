"""
trace_lib — listener-broadcast trace facade.

A reusable tracing library providing:
- TraceFacade forwarding write/flush/indent calls to ordered listeners
- Independent error/warning/info/verbose gates
- Optional mirroring into the stdlib ``logging`` module
- A no-op facade for configuration-time disabling
- Function tracing decorator

Public API:
    TraceFacade        — broadcasts calls to registered listeners
    NullTraceFacade    — no-op facade with the same surface
    TraceOptions       — gates, auto-flush, mirroring
    ListenerRegistry   — ordered listener collection
    TraceListener      — base class for listeners
    init_trace         — singleton initialization
    get_trace          — access singleton
    parse_listener_spec — parse 'KIND[:LOCATION]' listener specs
    trace              — function tracing decorator
"""

from .errors import ListenerFailure, TraceDispatchError
from .facade import NullTraceFacade, TraceFacade, report_failures
from .listeners import (
    ConsoleListener, FileListener, MemoryListener, StreamListener,
    TraceListener,
)
from .manager import create_facade, get_trace, init_trace, reset_trace
from .options import TraceOptions
from .registry import ListenerRegistry
from .specs import (
    ListenerSpec, build_listener, build_listeners, format_listener_kinds,
    parse_listener_spec, KNOWN_LISTENER_KINDS,
)
from .system import SystemTraceSink
from .trace import trace

__all__ = [
    'TraceFacade', 'NullTraceFacade', 'report_failures',
    'TraceOptions', 'ListenerRegistry',
    'TraceListener', 'StreamListener', 'ConsoleListener', 'FileListener',
    'MemoryListener', 'SystemTraceSink',
    'ListenerFailure', 'TraceDispatchError',
    'create_facade', 'init_trace', 'get_trace', 'reset_trace',
    'ListenerSpec', 'parse_listener_spec', 'build_listener',
    'build_listeners', 'format_listener_kinds', 'KNOWN_LISTENER_KINDS',
    'trace',
]
