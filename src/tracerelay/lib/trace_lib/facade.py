"""
TraceFacade — forwards trace calls to every registered listener.

Control flow is a single layer:

    caller -> facade -> [system sink] -> listener 1 .. listener n -> [flush]

Dispatch order is registration order. Each call reaches every listener
exactly once, even when an earlier listener raises: failures are wrapped
in ListenerFailure, kept in a bounded history, handed to ``on_failure``
(default: one line each on stderr), and raised as TraceDispatchError only
when ``options.raise_on_failure`` is set. Tracing must never take the
calling application down unless it asks for that.

NullTraceFacade has the same surface and does nothing. It is selected
once at configuration time (see manager.create_facade) so that disabled
tracing costs one empty method call and no per-call flag checks.
"""

import contextlib
import sys
import threading
from collections import deque
from typing import Any, Callable, Iterable, List, Optional, TextIO

from . import levels
from .errors import ListenerFailure, TraceDispatchError
from .options import TraceOptions
from .registry import ListenerRegistry
from .system import SystemTraceSink

FailureHandler = Callable[[List[ListenerFailure]], None]

# Operations both facade variants expose
PUBLIC_OPERATIONS = (
    'write', 'write_line', 'write_if', 'write_line_if',
    'write_line_error', 'write_line_warning', 'write_line_info',
    'write_line_verbose', 'indent', 'unindent', 'indented',
    'flush', 'close', 'clear_failures',
)

DEFAULT_FAILURE_HISTORY = 100


def report_failures(failures: List[ListenerFailure],
                    file: Optional[TextIO] = None) -> None:
    """Default failure handler: one line per failure on stderr."""
    target = file if file is not None else sys.stderr
    for failure in failures:
        print(f"tracerelay: {failure}", file=target)


class TraceFacade:
    """Broadcasts write/flush/indent calls to an ordered listener registry.

    Usage::

        facade = TraceFacade(TraceOptions(auto_flush=True))
        facade.listeners.add(ConsoleListener())
        facade.write_line("starting", category="app")
        with facade.indented():
            facade.write_line_warning("disk almost full")
        facade.close()

    Args:
        options: TraceOptions read on every call (a default set if None)
        listeners: A ListenerRegistry to share, or an iterable of listeners
        system_sink: Mirror target used when mirror_to_system_trace is set
        on_failure: Called with the failures of each broadcast that had any;
            pass ``False`` to only record them
        failure_history: How many recent failures ``failures`` keeps
    """

    enabled = True

    def __init__(
        self,
        options: Optional[TraceOptions] = None,
        listeners: Optional[Iterable[Any]] = None,
        system_sink: Optional[SystemTraceSink] = None,
        on_failure: Optional[FailureHandler] = None,
        failure_history: int = DEFAULT_FAILURE_HISTORY,
    ):
        self.options = options if options is not None else TraceOptions()
        if isinstance(listeners, ListenerRegistry):
            self.listeners = listeners
        else:
            self.listeners = ListenerRegistry(listeners)
        self.system_sink = system_sink or SystemTraceSink(
            indent_size=self.options.indent_size)
        if on_failure is None:
            on_failure = report_failures
        self.on_failure = on_failure or None
        self._lock = threading.RLock()
        self._indent_level = 0
        self._indent_size = self.options.indent_size
        self._failures = deque(maxlen=failure_history)
        size = self._indent_size
        self._settle(self._broadcast(
            'indent_size', lambda t: setattr(t, 'indent_size', size)))

    # =====================================================================
    # Properties
    # =====================================================================

    @property
    def auto_flush(self) -> bool:
        return self.options.auto_flush

    @auto_flush.setter
    def auto_flush(self, value: bool) -> None:
        self.options.auto_flush = bool(value)

    @property
    def indent_level(self) -> int:
        """Indent level last set or reached through indent()/unindent().

        Listeners registered later keep their own level until the next
        assignment to this property.
        """
        return self._indent_level

    @indent_level.setter
    def indent_level(self, value: int) -> None:
        value = max(0, int(value))
        with self._lock:
            self._indent_level = value
            failures = self._broadcast(
                'indent_level', lambda t: setattr(t, 'indent_level', value))
        self._settle(failures)

    @property
    def indent_size(self) -> int:
        """Indent size sent to listeners at construction or by the setter."""
        return self._indent_size

    @indent_size.setter
    def indent_size(self, value: int) -> None:
        value = int(value)
        if value < 0:
            raise ValueError(f"indent_size must be >= 0, got {value}")
        with self._lock:
            self._indent_size = value
            failures = self._broadcast(
                'indent_size', lambda t: setattr(t, 'indent_size', value))
        self._settle(failures)

    @property
    def failures(self) -> List[ListenerFailure]:
        """Recent listener failures, oldest first."""
        return list(self._failures)

    def clear_failures(self) -> None:
        self._failures.clear()

    # =====================================================================
    # Write family
    # =====================================================================

    def write(self, value: Any, category: Optional[str] = None) -> None:
        """Write ``value`` (no line terminator) to every listener."""
        with self._lock:
            failures = self._broadcast(
                'write', lambda t: t.write(value, category))
            failures.extend(self._flush_if_needed())
        self._settle(failures)

    def write_line(self, value: Any, category: Optional[str] = None) -> None:
        """Write ``value`` followed by a line terminator to every listener."""
        self._write_line(value, category, None)

    def write_if(self, condition: bool, value: Any,
                 category: Optional[str] = None) -> None:
        if condition:
            self.write(value, category)

    def write_line_if(self, condition: bool, value: Any,
                      category: Optional[str] = None) -> None:
        if condition:
            self._write_line(value, category, None)

    def write_line_error(self, value: Any,
                         category: Optional[str] = None) -> None:
        if self.options.trace_error:
            self._write_line(value, category, levels.ERROR)

    def write_line_warning(self, value: Any,
                           category: Optional[str] = None) -> None:
        if self.options.trace_warning:
            self._write_line(value, category, levels.WARNING)

    def write_line_info(self, value: Any,
                        category: Optional[str] = None) -> None:
        if self.options.trace_info:
            self._write_line(value, category, levels.INFO)

    def write_line_verbose(self, value: Any,
                           category: Optional[str] = None) -> None:
        if self.options.trace_verbose:
            self._write_line(value, category, levels.VERBOSE)

    def _write_line(self, value: Any, category: Optional[str],
                    severity: Optional[int]) -> None:
        with self._lock:
            failures = self._broadcast(
                'write_line',
                lambda t: t.write_line(value, category),
                lambda s: s.write_line(value, category, severity=severity),
            )
            failures.extend(self._flush_if_needed())
        self._settle(failures)

    # =====================================================================
    # Formatting
    # =====================================================================

    def indent(self) -> None:
        """Increase every listener's indent level by one."""
        with self._lock:
            self._indent_level += 1
            failures = self._broadcast(
                'indent',
                lambda t: setattr(t, 'indent_level', t.indent_level + 1))
        self._settle(failures)

    def unindent(self) -> None:
        """Decrease every listener's indent level by one, stopping at zero."""
        with self._lock:
            self._indent_level = max(0, self._indent_level - 1)
            failures = self._broadcast(
                'unindent',
                lambda t: setattr(t, 'indent_level',
                                  max(0, t.indent_level - 1)))
        self._settle(failures)

    @contextlib.contextmanager
    def indented(self):
        """Context manager: indent() on entry, unindent() on exit."""
        self.indent()
        try:
            yield self
        finally:
            self.unindent()

    # =====================================================================
    # System functions
    # =====================================================================

    def flush(self) -> None:
        """Flush every listener."""
        with self._lock:
            failures = self._broadcast('flush', lambda t: t.flush())
        self._settle(failures)

    def close(self) -> None:
        """Flush and close every listener, then remove them from the registry.

        A listener whose flush fails is still closed. Listeners registered
        while close() runs stay registered for the next close().
        """
        failures: List[ListenerFailure] = []
        with self._lock:
            if self.options.mirror_to_system_trace:
                failures.extend(self._call(self.system_sink, 'flush',
                                           lambda s: s.flush()))
            closing = self.listeners.snapshot()
            for listener in closing:
                failures.extend(self._call(listener, 'flush',
                                           lambda t: t.flush()))
                failures.extend(self._call(listener, 'close',
                                           lambda t: t.close()))
            self.listeners.discard_all(closing)
        self._settle(failures)

    # =====================================================================
    # Dispatch
    # =====================================================================

    def _broadcast(self, operation: str, call: Callable[[Any], None],
                   system_call: Optional[Callable[[Any], None]] = None,
                   ) -> List[ListenerFailure]:
        """Invoke ``call`` on every listener in order, collecting failures.

        The system sink goes first when mirroring is on; it receives
        ``system_call`` if given, else ``call``.
        """
        failures: List[ListenerFailure] = []
        if self.options.mirror_to_system_trace:
            failures.extend(self._call(self.system_sink, operation,
                                       system_call or call))
        for listener in self.listeners.snapshot():
            failures.extend(self._call(listener, operation, call))
        return failures

    @staticmethod
    def _call(target: Any, operation: str,
              call: Callable[[Any], None]) -> List[ListenerFailure]:
        try:
            call(target)
        except Exception as exc:
            return [ListenerFailure(target, operation, exc)]
        return []

    def _flush_if_needed(self) -> List[ListenerFailure]:
        if self.options.auto_flush:
            return self._broadcast('flush', lambda t: t.flush())
        return []

    def _settle(self, failures: List[ListenerFailure]) -> None:
        if not failures:
            return
        self._failures.extend(failures)
        if self.on_failure is not None:
            self.on_failure(failures)
        if self.options.raise_on_failure:
            raise TraceDispatchError(failures)

    def __repr__(self):
        return (f"<{type(self).__name__} listeners={len(self.listeners)} "
                f"level={self.options.level!r}>")


class NullTraceFacade:
    """No-op facade with the same surface as TraceFacade.

    Listeners may still be registered (setup code does not need to know
    tracing is off), but no call ever reaches them.
    """

    enabled = False

    def __init__(self, options: Optional[TraceOptions] = None,
                 listeners: Optional[Iterable[Any]] = None, **_ignored: Any):
        self.options = options if options is not None else TraceOptions(
            enabled=False)
        if isinstance(listeners, ListenerRegistry):
            self.listeners = listeners
        else:
            self.listeners = ListenerRegistry(listeners)

    auto_flush = property(lambda self: self.options.auto_flush,
                          lambda self, value: None)
    indent_level = property(lambda self: 0, lambda self, value: None)
    indent_size = property(lambda self: self.options.indent_size,
                           lambda self, value: None)
    failures = property(lambda self: [])

    def write(self, value, category=None):
        pass

    def write_line(self, value, category=None):
        pass

    def write_if(self, condition, value, category=None):
        pass

    def write_line_if(self, condition, value, category=None):
        pass

    def write_line_error(self, value, category=None):
        pass

    def write_line_warning(self, value, category=None):
        pass

    def write_line_info(self, value, category=None):
        pass

    def write_line_verbose(self, value, category=None):
        pass

    def indent(self):
        pass

    def unindent(self):
        pass

    def indented(self):
        return contextlib.nullcontext(self)

    def flush(self):
        pass

    def close(self):
        pass

    def clear_failures(self):
        pass

    def __repr__(self):
        return f"<{type(self).__name__}>"
