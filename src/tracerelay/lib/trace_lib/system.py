"""
SystemTraceSink — mirrors facade calls into the stdlib ``logging`` module.

``logging`` is the platform trace system for Python programs, so with
``mirror_to_system_trace`` on, every facade call is duplicated here before
the listeners run. Text from ``write()`` is buffered until the line is
completed by ``write_line()`` or pushed out by ``flush()``; each completed
line becomes one log record on the 'tracerelay.system' logger.
"""

import logging
from typing import Any, List, Optional

from . import levels
from .listeners import TraceListener

SYSTEM_LOGGER_NAME = 'tracerelay.system'


class SystemTraceSink(TraceListener):
    """Listener-shaped adapter that turns trace lines into log records."""

    def __init__(self, logger: Optional[logging.Logger] = None,
                 indent_size: int = 4):
        super().__init__(name='system', indent_size=indent_size)
        self.logger = logger or logging.getLogger(SYSTEM_LOGGER_NAME)
        self._pending: List[str] = []

    def _write_raw(self, text: str) -> None:
        self._pending.append(text)

    def write_line(self, value: Any, category: Optional[str] = None,
                   severity: Optional[int] = None) -> None:
        self.write(value, category)
        self._emit(levels.LOGGING_LEVELS.get(severity,
                                             levels.UNGATED_LOGGING_LEVEL))
        self._need_indent = True

    def flush(self) -> None:
        if self._pending:
            self._emit(levels.UNGATED_LOGGING_LEVEL)
            self._need_indent = True
        for handler in self.logger.handlers:
            handler.flush()

    def close(self) -> None:
        self.flush()

    def _emit(self, log_level: int) -> None:
        line = ''.join(self._pending)
        self._pending = []
        self.logger.log(log_level, line)
