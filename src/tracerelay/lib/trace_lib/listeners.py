"""
Trace listeners — the sinks a TraceFacade forwards to.

Any object with the listener capability can be registered:

    write(value, category=None)
    write_line(value, category=None)
    flush()
    close()
    indent_level   (mutable int)
    indent_size    (mutable int)

TraceListener implements the shared formatting rules so that concrete
listeners only provide ``_write_raw(text)``:

- ``category`` is rendered as a ``"category: value"`` prefix
- ``None`` values render as an empty string
- indentation (indent_level * indent_size spaces) is written before the
  first text of every new line
- indent_level never goes below zero
"""

import io
import sys
from pathlib import Path
from typing import Any, List, Optional, TextIO

DEFAULT_INDENT_SIZE = 4

# Attributes an object must expose to be accepted as a listener
LISTENER_METHODS = ('write', 'write_line', 'flush', 'close')


def is_listener(obj: Any) -> bool:
    """True if obj exposes the listener capability."""
    if isinstance(obj, TraceListener):
        return True
    return (all(callable(getattr(obj, m, None)) for m in LISTENER_METHODS)
            and hasattr(obj, 'indent_level') and hasattr(obj, 'indent_size'))


def format_message(value: Any, category: Optional[str] = None) -> str:
    """Render a forwarded value the way every built-in listener does."""
    text = '' if value is None else str(value)
    if category:
        return f"{category}: {text}"
    return text


class TraceListener:
    """Base class for listeners with indentation and category handling.

    Subclasses override ``_write_raw`` and, where they hold a resource,
    ``flush`` and ``close``.
    """

    def __init__(self, name: Optional[str] = None,
                 indent_size: int = DEFAULT_INDENT_SIZE):
        self.name = name or ''
        self._indent_level = 0
        self._indent_size = 0
        self.indent_size = indent_size
        self._need_indent = True

    # -- indentation -------------------------------------------------------

    @property
    def indent_level(self) -> int:
        return self._indent_level

    @indent_level.setter
    def indent_level(self, value: int) -> None:
        self._indent_level = max(0, int(value))

    @property
    def indent_size(self) -> int:
        return self._indent_size

    @indent_size.setter
    def indent_size(self, value: int) -> None:
        value = int(value)
        if value < 0:
            raise ValueError(f"indent_size must be >= 0, got {value}")
        self._indent_size = value

    def _write_indent(self) -> None:
        self._need_indent = False
        pad = self._indent_level * self._indent_size
        if pad:
            self._write_raw(' ' * pad)

    # -- capability --------------------------------------------------------

    def write(self, value: Any, category: Optional[str] = None) -> None:
        if self._need_indent:
            self._write_indent()
        self._write_raw(format_message(value, category))

    def write_line(self, value: Any, category: Optional[str] = None) -> None:
        self.write(value, category)
        self._write_raw('\n')
        self._need_indent = True

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    def _write_raw(self, text: str) -> None:
        raise NotImplementedError

    def __repr__(self):
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{label}>"


class StreamListener(TraceListener):
    """Writes to any text stream.

    The stream is closed by ``close()`` only when ``owns_stream`` is set;
    borrowed streams are flushed and left open.
    """

    def __init__(self, stream: TextIO, name: Optional[str] = None,
                 owns_stream: bool = False,
                 indent_size: int = DEFAULT_INDENT_SIZE):
        super().__init__(name=name, indent_size=indent_size)
        self.stream = stream
        self.owns_stream = owns_stream

    def _write_raw(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        if self.stream is not None and not self.stream.closed:
            self.stream.flush()

    def close(self) -> None:
        if self.stream is None or self.stream.closed:
            return
        self.stream.flush()
        if self.owns_stream:
            self.stream.close()


class ConsoleListener(TraceListener):
    """Writes to stdout (default) or stderr.

    The target is looked up on every write so redirected or captured
    ``sys.stdout`` / ``sys.stderr`` are honored. The console is never closed.
    """

    def __init__(self, use_stderr: bool = False, name: Optional[str] = None,
                 indent_size: int = DEFAULT_INDENT_SIZE):
        super().__init__(name=name or ('stderr' if use_stderr else 'console'),
                         indent_size=indent_size)
        self.use_stderr = use_stderr

    @property
    def stream(self) -> TextIO:
        return sys.stderr if self.use_stderr else sys.stdout

    def _write_raw(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()


class FileListener(TraceListener):
    """Appends to a file, opened on the first write.

    Parent directories are created as needed. After ``close()`` a further
    write reopens the file in append mode.
    """

    def __init__(self, path, name: Optional[str] = None, mode: str = 'a',
                 encoding: str = 'utf-8',
                 indent_size: int = DEFAULT_INDENT_SIZE):
        self.path = Path(path)
        super().__init__(name=name or self.path.name, indent_size=indent_size)
        self.mode = mode
        self.encoding = encoding
        self._file: Optional[TextIO] = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def _open(self) -> TextIO:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, self.mode, encoding=self.encoding)
        # Later reopens must not truncate what was written before
        if self.mode == 'w':
            self.mode = 'a'
        return self._file

    def _write_raw(self, text: str) -> None:
        f = self._file if self._file is not None else self._open()
        f.write(text)

    def flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class MemoryListener(TraceListener):
    """Keeps everything written in memory.

    Useful for tests and for capturing trace output to attach elsewhere.
    ``flush_count`` and ``close_count`` record how often the facade
    flushed and closed this listener.
    """

    def __init__(self, name: Optional[str] = None,
                 indent_size: int = DEFAULT_INDENT_SIZE):
        super().__init__(name=name or 'memory', indent_size=indent_size)
        self._buffer = io.StringIO()
        self.flush_count = 0
        self.close_count = 0

    def _write_raw(self, text: str) -> None:
        self._buffer.write(text)

    def flush(self) -> None:
        self.flush_count += 1

    def close(self) -> None:
        self.close_count += 1

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    @property
    def lines(self) -> List[str]:
        """Completed lines written so far (a trailing partial line is excluded)."""
        text = self.getvalue()
        if not text:
            return []
        parts = text.split('\n')
        return parts[:-1]

    def clear(self) -> None:
        self._buffer = io.StringIO()
        self._need_indent = True
