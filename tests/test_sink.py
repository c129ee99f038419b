"""test_sink.py - Unit tests for the output backends.

Covers:
    - StreamSink line / block-open / block-close formats
    - StreamSink resolves sys.stderr at write time by default
    - StreamSink swallows write failures on a closed stream
    - ConsoleSink uses native group/groupEnd when the host offers both
    - ConsoleSink falls back to brace lines through log()
    - ConsoleSink swallows host exceptions
    - default_sink() picks the backend from sys.platform
"""

import io
import sys

from debug_log import sink as sink_module
from debug_log.sink import ConsoleSink, StreamSink, default_sink


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class RecordingConsole:
    """Host console with log() only."""

    def __init__(self):
        self.calls = []

    def log(self, s):
        self.calls.append(("log", s))


class GroupingConsole(RecordingConsole):
    """Host console with native grouping, like the browser console."""

    def group(self, s):
        self.calls.append(("group", s))

    def groupEnd(self):
        self.calls.append(("groupEnd",))


class BrokenConsole:
    def log(self, s):
        raise RuntimeError("host went away")


# ---------------------------------------------------------------------------
# StreamSink
# ---------------------------------------------------------------------------


class TestStreamSink:
    def setup_method(self):
        self.buf = io.StringIO()
        self.sink = StreamSink(self.buf)

    def test_stream_sink_write_line_appends_newline(self):
        self.sink.write_line("[a.py:1] hello")
        assert self.buf.getvalue() == "[a.py:1] hello\n"

    def test_stream_sink_block_open_appends_brace(self):
        self.sink.write_block_open("    A")
        assert self.buf.getvalue() == "    A {\n"

    def test_stream_sink_block_close_writes_indented_brace(self):
        self.sink.write_block_close("    ")
        assert self.buf.getvalue() == "    }\n"

    def test_stream_sink_block_close_defaults_to_no_indent(self):
        self.sink.write_block_close()
        assert self.buf.getvalue() == "}\n"

    def test_stream_sink_has_no_native_grouping(self):
        assert self.sink.native_grouping is False

    def test_stream_sink_swallows_closed_stream_error(self):
        """Writing to a closed stream neither raises nor stops later writes."""
        closed = io.StringIO()
        closed.close()
        sink = StreamSink(closed)

        sink.write_line("lost")
        sink.write_block_open("lost")
        sink.write_block_close()

    def test_stream_sink_defaults_to_current_stderr(self, capsys):
        """Without a stream, the sink writes to whatever sys.stderr is now."""
        StreamSink().write_line("to stderr")
        captured = capsys.readouterr()
        assert captured.err == "to stderr\n"
        assert captured.out == ""


# ---------------------------------------------------------------------------
# ConsoleSink
# ---------------------------------------------------------------------------


class TestConsoleSink:
    def test_console_sink_native_grouping_detected(self):
        assert ConsoleSink(GroupingConsole()).native_grouping is True
        assert ConsoleSink(RecordingConsole()).native_grouping is False

    def test_console_sink_uses_native_group_calls(self):
        console = GroupingConsole()
        sink = ConsoleSink(console)

        sink.write_block_open("A")
        sink.write_line("[a.py:2] x")
        sink.write_block_close()

        assert console.calls == [
            ("group", "A"),
            ("log", "[a.py:2] x"),
            ("groupEnd",),
        ]

    def test_console_sink_falls_back_to_brace_lines(self):
        """Without group/groupEnd the same bracket lines go through log()."""
        console = RecordingConsole()
        sink = ConsoleSink(console)

        sink.write_block_open("    B")
        sink.write_block_close("    ")

        assert console.calls == [("log", "    B {"), ("log", "    }")]

    def test_console_sink_swallows_host_errors(self):
        sink = ConsoleSink(BrokenConsole())
        sink.write_line("ignored")
        sink.write_block_open("ignored")
        sink.write_block_close()


# ---------------------------------------------------------------------------
# default_sink()
# ---------------------------------------------------------------------------


class TestDefaultSink:
    def test_default_sink_is_stream_sink_on_native_platforms(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux")
        assert isinstance(default_sink(), StreamSink)

    def test_default_sink_is_console_sink_under_pyodide(self, monkeypatch):
        """On emscripten the sink binds to the host console (js.console)."""
        console = GroupingConsole()
        fake_js = type(sys)("js")
        fake_js.console = console
        monkeypatch.setattr(sys, "platform", "emscripten")
        monkeypatch.setitem(sys.modules, "js", fake_js)

        chosen = default_sink()

        assert isinstance(chosen, ConsoleSink)
        chosen.write_line("hi")
        assert console.calls == [("log", "hi")]

    def test_sink_module_logger_is_package_scoped(self):
        assert sink_module.logger.name == "debug_log.sink"
