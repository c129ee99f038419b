"""test_api.py - Tests for the module-level call-site functions.

Covers:
    - debug_log() tags lines with the caller's file:line
    - debug_dbg() renders ``expression = value`` using the caller's source
    - debug_dbg() return values (single, tuple, none)
    - group() / grouped() open groups at the right location
    - grouped() re-raises and still closes
    - set_debug() toggles output at runtime; filter selects by path
    - callsite helpers: display_path, argument_sources fallback
"""

import io
import os
import sys

import pytest

import debug_log
from debug_log import debug_dbg, group, grouped, set_debug, set_sink
from debug_log.callsite import (
    UNKNOWN_NAME,
    argument_sources,
    caller_location,
    display_path,
)
from debug_log.sink import StreamSink


THIS_FILE = os.path.basename(__file__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _ApiTestBase:
    def setup_method(self):
        self.engine = debug_log.get_engine()
        self._saved_sink = self.engine.sink
        self._saved_filter = debug_log.get_debug()
        self.stream = io.StringIO()
        set_sink(StreamSink(self.stream))
        set_debug("*")

    def teardown_method(self):
        set_debug(self._saved_filter)
        set_sink(self._saved_sink)

    def lines(self):
        return self.stream.getvalue().splitlines()


def _next_line() -> int:
    """Line number of the statement following the caller's."""
    return sys._getframe(1).f_lineno + 1


# ---------------------------------------------------------------------------
# debug_log()
# ---------------------------------------------------------------------------


class TestDebugLog(_ApiTestBase):
    def test_debug_log_tags_caller_location(self):
        line = _next_line()
        debug_log.debug_log("hello %s", "world")

        (out,) = self.lines()
        assert out.endswith(f"{THIS_FILE}:{line}] hello world")
        assert out.startswith("[")

    def test_debug_log_disabled_writes_nothing(self):
        set_debug(None)
        debug_log.debug_log("hidden")
        assert self.stream.getvalue() == ""

    def test_debug_log_filter_matches_file_name(self):
        set_debug(THIS_FILE)
        debug_log.debug_log("shown")
        set_debug("no_such_module")
        debug_log.debug_log("hidden")

        assert len(self.lines()) == 1
        assert self.lines()[0].endswith("] shown")


# ---------------------------------------------------------------------------
# debug_dbg()
# ---------------------------------------------------------------------------


class TestDebugDbg(_ApiTestBase):
    def test_debug_dbg_renders_expression_text(self):
        items = [1, 2, 3]
        line = _next_line()
        result = debug_dbg(items)

        assert result is items
        assert self.lines() == [f"[{self._loc(line)}] items = [1, 2, 3]"]

    def test_debug_dbg_multiple_values_one_line_each(self):
        a, b = 2, "x"
        result = debug_dbg(a + 1, b)

        assert result == (3, "x")
        out = self.lines()
        assert len(out) == 2
        assert out[0].endswith("] a + 1 = 3")
        assert out[1].endswith("] b = 'x'")

    def test_debug_dbg_without_args_writes_bare_location(self):
        line = _next_line()
        result = debug_dbg()

        assert result is None
        assert self.lines() == [f"[{self._loc(line)}]"]

    def test_debug_dbg_returns_value_when_disabled(self):
        set_debug("")
        value = object()
        assert debug_dbg(value) is value
        assert self.stream.getvalue() == ""

    def test_debug_dbg_inside_group_is_indented(self):
        data = {"rows": 3}
        with group("load"):
            debug_dbg(data)

        out = self.lines()
        assert out[0] == "load {"
        assert out[1].startswith("    [")
        assert out[1].endswith("] data = {'rows': 3}")
        assert out[2] == "}"

    def _loc(self, line: int) -> str:
        return f"{display_path(__file__)}:{line}"


# ---------------------------------------------------------------------------
# group() / grouped
# ---------------------------------------------------------------------------


class TestGroupApi(_ApiTestBase):
    def test_group_api_nested_layout(self):
        with group("A"):
            with group("B %d", 2):
                debug_log.debug_log("x")

        out = self.lines()
        assert out[0] == "A {"
        assert out[1] == "    B 2 {"
        assert out[2].startswith("        [")
        assert out[2].endswith("] x")
        assert out[3:] == ["    }", "}"]
        assert self.engine.depth() == 0

    def test_group_api_disabled_is_inert(self):
        set_debug(None)
        with group("A") as g:
            debug_log.debug_log("x")
        assert g.active is False
        assert self.stream.getvalue() == ""
        assert self.engine.depth() == 0

    def test_grouped_labels_with_qualname(self):
        @grouped
        def step(n):
            debug_log.debug_log("n=%d", n)
            return n * 2

        assert step(4) == 8
        out = self.lines()
        assert out[0].endswith("step {")
        assert out[1].endswith("] n=4")
        assert out[2] == "}"

    def test_grouped_custom_label(self):
        @grouped(label="parse")
        def parse():
            return None

        parse()
        assert self.lines() == ["parse {", "}"]

    def test_grouped_reraises_and_closes(self):
        @grouped
        def explode():
            raise RuntimeError("original message")

        with pytest.raises(RuntimeError, match="original message"):
            explode()

        assert self.lines()[-1] == "}"
        assert self.engine.depth() == 0

    def test_grouped_preserves_function_metadata(self):
        @grouped
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."


# ---------------------------------------------------------------------------
# callsite helpers
# ---------------------------------------------------------------------------


class TestCallsite:
    def test_display_path_relative_inside_cwd(self):
        path = os.path.join(os.getcwd(), "pkg", "mod.py")
        assert display_path(path) == "pkg/mod.py"

    def test_display_path_outside_cwd_kept(self):
        outside = os.path.abspath(os.path.join(os.getcwd(), os.pardir, "elsewhere.py"))
        assert display_path(outside) == outside

    def test_caller_location_uses_frame_line(self):
        frame = sys._getframe()
        assert caller_location(frame) == f"{display_path(__file__)}:{frame.f_lineno}"

    def test_argument_sources_unrecoverable_returns_none(self):
        """Source that cannot be matched to the call yields None, not an error."""
        namespace = {}
        exec(
            "import sys\n"
            "def probe(*a):\n"
            "    return sys._getframe(1)\n"
            "frame = probe(1)\n",
            namespace,
        )
        assert argument_sources(namespace["frame"], 1, "probe") is None

    def test_unknown_name_placeholder(self):
        assert UNKNOWN_NAME == "<expr>"
