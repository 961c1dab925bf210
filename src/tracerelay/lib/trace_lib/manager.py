"""
Process-wide default facade.

Libraries that just want "the" trace facade call get_trace(). The
application decides, once at startup, what that facade is:

    init_trace(TraceOptions(level...), listeners=[...])

With ``options.enabled`` false, init_trace() installs a NullTraceFacade,
so every trace call in the process becomes a no-op without any per-call
check. Tests and embedders that need isolation construct their own
TraceFacade instead of touching the default.
"""

from typing import Any, Iterable, Optional, Union

from .facade import NullTraceFacade, TraceFacade
from .options import TraceOptions
from .specs import build_listeners

AnyFacade = Union[TraceFacade, NullTraceFacade]


def create_facade(options: Optional[TraceOptions] = None,
                  listeners: Optional[Iterable[Any]] = None,
                  **kwargs: Any) -> AnyFacade:
    """Build a facade for ``options``, real or no-op.

    When ``listeners`` is None they are built from
    ``options.listener_specs``. The facade applies the configured
    indent size to every listener.

    Args:
        options: Trace options (defaults if None)
        listeners: Listener objects to register, in dispatch order
        **kwargs: Passed to TraceFacade (system_sink, on_failure, ...)
    """
    options = options if options is not None else TraceOptions()
    if not options.enabled:
        return NullTraceFacade(options, listeners)

    if listeners is None:
        listeners = build_listeners(options.listener_specs,
                                    indent_size=options.indent_size)
    return TraceFacade(options, listeners, **kwargs)


# =============================================================================
# Module-level singleton
# =============================================================================

_facade: Optional[AnyFacade] = None


def init_trace(options: Optional[TraceOptions] = None,
               listeners: Optional[Iterable[Any]] = None,
               **kwargs: Any) -> AnyFacade:
    """Initialize the module-level facade.

    Call once at program startup. A facade installed earlier is closed
    first so its listeners release their resources.

    Returns:
        The initialized facade
    """
    global _facade
    if _facade is not None:
        _facade.close()
    _facade = create_facade(options, listeners, **kwargs)
    return _facade


def get_trace() -> AnyFacade:
    """Get the module-level facade, creating a default one if needed.

    The default has default options and no listeners.
    """
    global _facade
    if _facade is None:
        _facade = TraceFacade()
    return _facade


def reset_trace() -> None:
    """Close and discard the module-level facade."""
    global _facade
    if _facade is not None:
        _facade.close()
    _facade = None
