"""
Function tracing decorator.

Routes call tracing through the module-level facade as verbose lines in
the 'trace' category, indenting everything written while the call runs.
Nothing is formatted unless the facade's verbose gate is open.
"""

import functools
import inspect
from pathlib import Path

TRACE_CATEGORY = 'trace'

_MAX_STR = 50
_MAX_ITEMS = 3


def _format_value(value):
    """Short repr for trace lines: long strings and lists are abbreviated."""
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > _MAX_STR:
        return f"'{value[:_MAX_STR - 3]}...'"
    if isinstance(value, (list, tuple)) and len(value) > _MAX_ITEMS:
        return f"[...{len(value)} items...]"
    return repr(value)


def _format_args(func, args, kwargs):
    parts = []
    params = list(inspect.signature(func).parameters)
    # Methods show their receiver by parameter name only
    if args and params and params[0] in ('self', 'cls'):
        parts.append(params[0])
        args = args[1:]
    parts.extend(_format_value(a) for a in args)
    parts.extend(f"{k}={_format_value(v)}" for k, v in kwargs.items())
    return ', '.join(parts)


def trace(func):
    """Decorator to trace function calls via the module-level facade.

    Writes entry, return value (if not None) and exceptions when the
    'verbose' gate is open. The call body runs one indent level deeper.
    """
    module = inspect.getmodule(func)
    qualified = f"{module.__name__ if module else 'unknown'}.{func.__qualname__}"

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .manager import get_trace

        facade = get_trace()
        if not (facade.enabled and facade.options.trace_verbose):
            return func(*args, **kwargs)

        facade.write_line_verbose(
            f">> {qualified}({_format_args(func, args, kwargs)})",
            TRACE_CATEGORY)
        try:
            with facade.indented():
                result = func(*args, **kwargs)
        except Exception as e:
            facade.write_line_error(
                f"!! {qualified} raised: {type(e).__name__}: {e}",
                TRACE_CATEGORY)
            raise

        if result is not None:
            facade.write_line_verbose(
                f"<< {qualified} returned: {_format_value(result)}",
                TRACE_CATEGORY)
        return result

    return wrapper
