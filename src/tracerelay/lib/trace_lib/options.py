"""
TraceOptions — configuration read by the facade on every call.

Options are set once at startup (see tracerelay.config for the file
layers) and read on every facade call; there is no invariant beyond
"last write wins".

Severity gates are independent booleans. ``set_level('info')`` is a
shortcut that turns on error, warning and info and turns off verbose.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Union

from . import levels
from .listeners import DEFAULT_INDENT_SIZE


@dataclass
class TraceOptions:
    """Process-wide trace configuration.

    Attributes:
        enabled: False selects the no-op facade at configuration time
        auto_flush: Flush every listener after each write
        mirror_to_system_trace: Duplicate every call into the ``logging``
            logger 'tracerelay.system'
        trace_error: Gate for write_line_error()
        trace_warning: Gate for write_line_warning()
        trace_info: Gate for write_line_info()
        trace_verbose: Gate for write_line_verbose()
        indent_size: Spaces per indent level applied to listeners at setup
        raise_on_failure: Raise TraceDispatchError after a broadcast in
            which any listener failed
        listener_specs: Listener spec strings (e.g. 'console',
            'file:trace.log') built by init_trace()
    """
    enabled: bool = True
    auto_flush: bool = False
    mirror_to_system_trace: bool = False
    trace_error: bool = True
    trace_warning: bool = True
    trace_info: bool = False
    trace_verbose: bool = False
    indent_size: int = DEFAULT_INDENT_SIZE
    raise_on_failure: bool = False
    listener_specs: List[str] = field(default_factory=list)

    def gate(self, level: int) -> bool:
        """Return the gate for a severity level (OFF is always closed)."""
        if level == levels.OFF:
            return False
        return bool(getattr(self, levels.GATE_ATTRS[level]))

    def set_level(self, level: Union[str, int]) -> None:
        """Open every gate up to ``level`` and close the rest."""
        threshold = levels.parse_level(level)
        for lvl, attr in levels.GATE_ATTRS.items():
            setattr(self, attr, lvl <= threshold)

    @property
    def level(self) -> str:
        """Name of the most verbose open gate, or 'off'."""
        for lvl in sorted(levels.GATE_ATTRS, reverse=True):
            if self.gate(lvl):
                return levels.level_name(lvl)
        return levels.level_name(levels.OFF)

    def update(self, data: Dict[str, Any]) -> 'TraceOptions':
        """Apply a config mapping in place and return self.

        ``level`` is applied first so that explicit gate keys in the same
        mapping override it. ``listeners`` is accepted as an alias for
        ``listener_specs``. Unknown keys are ignored.

        Raises:
            ValueError: for an unknown level, a non-boolean flag, a
                negative or non-integer indent size, or listeners that
                are not spec strings
        """
        if data.get('level') is not None:
            self.set_level(data['level'])
        known = {f.name for f in fields(self)}
        for name, value in data.items():
            if name == 'level' or value is None:
                continue
            key = 'listener_specs' if name == 'listeners' else name
            if key not in known:
                continue
            if key == 'listener_specs':
                if isinstance(value, str):
                    value = [value]
                if (not isinstance(value, list)
                        or not all(isinstance(v, str) for v in value)):
                    raise ValueError(
                        f"{name} must be a spec string or a list of them, "
                        f"got {value!r}")
                value = list(value)
            elif key == 'indent_size':
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(
                        f"indent_size must be an integer, got {value!r}")
                if value < 0:
                    raise ValueError(f"indent_size must be >= 0, got {value}")
            elif not isinstance(value, bool):
                raise ValueError(f"{key} must be true or false, got {value!r}")
            setattr(self, key, value)
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TraceOptions':
        return cls().update(data)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['level'] = self.level
        return data
