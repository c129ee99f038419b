"""sink.py - Output backends for rendered debug lines.

This module defines the OutputSink interface and its two implementations:

    StreamSink:  writes lines to a text stream (default: the current
                 ``sys.stderr``), flushing after every line.
    ConsoleSink: forwards lines to a host console object, such as the
                 browser's ``console`` when running under Pyodide. Uses the
                 host's native ``group``/``groupEnd`` when available.

The active sink is chosen once, at import time, by ``default_sink()``. Hosts
and test harnesses can swap it with ``set_sink()``.

Writing is fire-and-forget: a broken stream or a failing host API is reported
through this module's logger at DEBUG level and otherwise ignored, so a debug
line can never change the behaviour of the program being traced.

Typical usage::

    import io
    from debug_log import set_sink
    from debug_log.sink import StreamSink

    buf = io.StringIO()
    set_sink(StreamSink(buf))
"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Optional, TextIO

from .formatter import CLOSE_BRACE, OPEN_BRACE

logger = logging.getLogger(__name__)


class OutputSink(ABC):
    """Abstract base class for every debug output destination.

    Attributes:
        native_grouping (bool): True when the destination indents nested
            blocks by itself. The engine then renders every line at depth 0
            instead of adding its own indentation.
    """

    native_grouping = False

    @abstractmethod
    def write_line(self, s: str) -> None:
        """Emit one rendered line (which may itself contain newlines)."""

    @abstractmethod
    def write_block_open(self, s: str) -> None:
        """Emit the opening line of a group.

        Args:
            s: The group label, already indented to the depth in effect
                before the group opens.
        """

    @abstractmethod
    def write_block_close(self, s: str = "") -> None:
        """Emit the closing line of a group.

        Args:
            s: The indentation in effect after the group has closed.
        """


class StreamSink(OutputSink):
    """Write debug lines to a text stream.

    Output format::

        outer {
            [app.py:12] x = 1
        }

    Attributes:
        _stream: The stream given at construction, or None to resolve
            ``sys.stderr`` on every write (so redirections made after import,
            e.g. by pytest's ``capsys``, are honoured).

    Example:
        >>> import io
        >>> buf = io.StringIO()
        >>> StreamSink(buf).write_line("[a.py:1] hello")
        >>> buf.getvalue()
        '[a.py:1] hello\\n'
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def write_line(self, s: str) -> None:
        self._write(s)

    def write_block_open(self, s: str) -> None:
        self._write(s + OPEN_BRACE)

    def write_block_close(self, s: str = "") -> None:
        self._write(s + CLOSE_BRACE)

    def _write(self, line: str) -> None:
        stream = self.stream
        try:
            stream.write(line + "\n")
            stream.flush()
        except (OSError, ValueError):
            # Closed or broken stream: the line is lost, the caller carries on.
            logger.debug("failed to write debug line to %r", stream, exc_info=True)


class ConsoleSink(OutputSink):
    """Forward debug lines to a host-provided console API.

    The console object needs a ``log(str)`` method. If it also offers both
    ``group(str)`` and ``groupEnd()`` (as the browser console does), groups are
    opened and closed natively and the host takes care of indentation;
    otherwise the brace lines are sent through ``log`` like any other line.

    Args:
        console: The host console. Defaults to ``js.console``, which only
            exists inside Pyodide.

    Example:
        >>> class Recorder:
        ...     def __init__(self):
        ...         self.calls = []
        ...     def log(self, s):
        ...         self.calls.append(s)
        >>> sink = ConsoleSink(Recorder())
        >>> sink.native_grouping
        False
    """

    def __init__(self, console: Any = None) -> None:
        if console is None:
            from js import console  # Pyodide's bridge to the browser console
        self._console = console
        self.native_grouping = callable(getattr(console, "group", None)) and callable(
            getattr(console, "groupEnd", None)
        )

    def write_line(self, s: str) -> None:
        self._call("log", s)

    def write_block_open(self, s: str) -> None:
        if self.native_grouping:
            self._call("group", s)
        else:
            self._call("log", s + OPEN_BRACE)

    def write_block_close(self, s: str = "") -> None:
        if self.native_grouping:
            self._call("groupEnd")
        else:
            self._call("log", s + CLOSE_BRACE)

    def _call(self, method: str, *args: str) -> None:
        try:
            getattr(self._console, method)(*args)
        except Exception:
            logger.debug("host console %s() failed", method, exc_info=True)


def default_sink() -> OutputSink:
    """Return the sink for the current platform.

    Under Pyodide (``sys.platform == "emscripten"``) there is no useful
    stderr, so output goes to the browser console; everywhere else it goes to
    stderr.
    """
    if sys.platform == "emscripten":
        return ConsoleSink()
    return StreamSink()
