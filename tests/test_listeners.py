"""Tests for trace_lib.listeners — formatting, indentation, concrete sinks."""

import io

import pytest

from tracerelay.lib.trace_lib.listeners import (
    ConsoleListener,
    FileListener,
    MemoryListener,
    StreamListener,
    TraceListener,
    format_message,
    is_listener,
)


class TestFormatMessage:
    """Shared value/category rendering."""

    def test_plain_value(self):
        assert format_message("hello") == "hello"

    def test_category_prefix(self):
        assert format_message("hello", "net") == "net: hello"

    def test_none_renders_empty(self):
        assert format_message(None) == ""
        assert format_message(None, "net") == "net: "

    def test_non_string_value(self):
        assert format_message(42) == "42"


class TestTraceListenerBase:
    """Indentation and line handling in the base class."""

    def test_base_write_raw_not_implemented(self):
        with pytest.raises(NotImplementedError):
            TraceListener().write("x")

    def test_indent_written_once_per_line(self):
        listener = MemoryListener(indent_size=2)
        listener.indent_level = 2
        listener.write("a")
        listener.write("b")
        listener.write_line("c")
        listener.write_line("d")
        assert listener.getvalue() == "    abc\n    d\n"

    def test_zero_indent_size(self):
        listener = MemoryListener(indent_size=0)
        listener.indent_level = 3
        listener.write_line("flat")
        assert listener.lines == ["flat"]

    def test_indent_level_clamped_at_zero(self):
        listener = MemoryListener()
        listener.indent_level = -5
        assert listener.indent_level == 0

    def test_negative_indent_size_rejected(self):
        listener = MemoryListener()
        with pytest.raises(ValueError):
            listener.indent_size = -1

    def test_default_indent_size_is_four(self):
        assert MemoryListener().indent_size == 4

    def test_category_with_indent(self):
        listener = MemoryListener(indent_size=1)
        listener.indent_level = 1
        listener.write_line("up", "net")
        assert listener.lines == [" net: up"]

    def test_repr_includes_name(self):
        assert "'audit'" in repr(MemoryListener(name="audit"))


class TestIsListener:
    """Capability detection used by the registry."""

    def test_trace_listener_subclass(self):
        assert is_listener(MemoryListener())

    def test_duck_typed_listener(self, make_listener):
        assert is_listener(make_listener("duck"))

    def test_missing_methods(self):
        assert not is_listener(object())

    def test_missing_indent_attributes(self):
        class NoIndent:
            def write(self, v, c=None): pass
            def write_line(self, v, c=None): pass
            def flush(self): pass
            def close(self): pass
        assert not is_listener(NoIndent())


class TestStreamListener:
    """StreamListener writes to a borrowed or owned stream."""

    def test_writes_lines(self):
        buf = io.StringIO()
        listener = StreamListener(buf)
        listener.write_line("one")
        listener.write("two", "cat")
        assert buf.getvalue() == "one\ncat: two"

    def test_borrowed_stream_left_open(self):
        buf = io.StringIO()
        listener = StreamListener(buf)
        listener.close()
        assert not buf.closed

    def test_owned_stream_closed(self):
        buf = io.StringIO()
        listener = StreamListener(buf, owns_stream=True)
        listener.close()
        assert buf.closed

    def test_flush_after_close_is_safe(self):
        buf = io.StringIO()
        listener = StreamListener(buf, owns_stream=True)
        listener.close()
        listener.flush()
        listener.close()


class TestConsoleListener:
    """ConsoleListener targets stdout or stderr at write time."""

    def test_stdout(self, capsys):
        listener = ConsoleListener()
        listener.write_line("to stdout")
        captured = capsys.readouterr()
        assert captured.out == "to stdout\n"
        assert captured.err == ""

    def test_stderr(self, capsys):
        listener = ConsoleListener(use_stderr=True)
        listener.write_line("to stderr")
        captured = capsys.readouterr()
        assert captured.err == "to stderr\n"

    def test_default_names(self):
        assert ConsoleListener().name == "console"
        assert ConsoleListener(use_stderr=True).name == "stderr"

    def test_close_does_not_close_console(self, capsys):
        listener = ConsoleListener()
        listener.close()
        listener.write_line("still open")
        assert "still open" in capsys.readouterr().out


class TestFileListener:
    """FileListener opens lazily and appends."""

    def test_lazy_open(self, tmp_path):
        listener = FileListener(tmp_path / "trace.log")
        assert not listener.is_open
        assert not (tmp_path / "trace.log").exists()

    def test_writes_and_creates_parents(self, tmp_path):
        path = tmp_path / "logs" / "deep" / "trace.log"
        listener = FileListener(path)
        listener.write_line("hello")
        listener.close()
        assert path.read_text(encoding="utf-8") == "hello\n"

    def test_appends_across_reopen(self, tmp_path):
        path = tmp_path / "trace.log"
        listener = FileListener(path)
        listener.write_line("first")
        listener.close()
        listener.write_line("second")
        listener.close()
        assert path.read_text(encoding="utf-8") == "first\nsecond\n"

    def test_write_mode_truncates_once(self, tmp_path):
        path = tmp_path / "trace.log"
        path.write_text("old\n", encoding="utf-8")
        listener = FileListener(path, mode="w")
        listener.write_line("new")
        listener.close()
        listener.write_line("more")
        listener.close()
        assert path.read_text(encoding="utf-8") == "new\nmore\n"

    def test_flush_makes_content_visible(self, tmp_path):
        path = tmp_path / "trace.log"
        listener = FileListener(path)
        listener.write_line("flushed")
        listener.flush()
        assert path.read_text(encoding="utf-8") == "flushed\n"
        listener.close()

    def test_default_name_is_file_name(self, tmp_path):
        assert FileListener(tmp_path / "audit.log").name == "audit.log"


class TestMemoryListener:
    """MemoryListener capture helpers."""

    def test_lines_exclude_partial(self):
        listener = MemoryListener()
        listener.write_line("done")
        listener.write("partial")
        assert listener.lines == ["done"]
        assert listener.getvalue() == "done\npartial"

    def test_empty(self):
        assert MemoryListener().lines == []

    def test_counters(self):
        listener = MemoryListener()
        listener.flush()
        listener.flush()
        listener.close()
        assert listener.flush_count == 2
        assert listener.close_count == 1

    def test_clear(self):
        listener = MemoryListener()
        listener.write("half")
        listener.clear()
        listener.write_line("fresh")
        assert listener.lines == ["fresh"]
