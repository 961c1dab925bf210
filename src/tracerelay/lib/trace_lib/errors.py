"""
Error types raised and recorded by the trace facade.

A failing listener never interrupts a broadcast. Each failure is wrapped
in a ListenerFailure and collected; the facade raises TraceDispatchError
only when its options ask for strict mode.
"""

from typing import Any, List


class ListenerFailure(Exception):
    """A registered listener raised while handling a forwarded call.

    Attributes:
        listener: The listener (or system sink) that failed
        operation: Name of the listener operation ('write_line', 'flush', ...)
        error: The original exception, also set as ``__cause__``
    """

    def __init__(self, listener: Any, operation: str, error: BaseException):
        self.listener = listener
        self.operation = operation
        self.error = error
        self.__cause__ = error
        super().__init__(
            f"listener {listener_label(listener)} failed during {operation}: "
            f"{type(error).__name__}: {error}"
        )


class TraceDispatchError(Exception):
    """One or more listeners failed during a single facade call."""

    def __init__(self, failures: List[ListenerFailure]):
        self.failures = list(failures)
        count = len(self.failures)
        noun = "listener" if count == 1 else "listeners"
        detail = "; ".join(str(f) for f in self.failures)
        super().__init__(f"{count} {noun} failed: {detail}")


def listener_label(listener: Any) -> str:
    """Short display label for a listener: its name, else its class name."""
    name = getattr(listener, 'name', None)
    if name:
        return repr(name)
    return type(listener).__name__
