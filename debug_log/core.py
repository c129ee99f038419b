"""core.py - The DebugLog engine.

DebugLog ties together the three pieces of state a debug line depends on:

    Filter        decides whether a call site prints at all.
    LevelTracker  says how deep the output is currently nested.
    OutputSink    is where the rendered line goes.

Every entry point takes the call site's location tag (``"file:line"``) as a
plain string; capturing it is the job of ``debug_log.callsite`` and the
module-level functions in ``debug_log.api``.

One re-entrant lock serialises rendering and writing, so a multi-line value
is never torn by another thread, and a group's brace line is always written
at the depth that matches its push or pop.
"""

import threading
from typing import Any, Optional, TypeVar

from .filter import Filter, get_filter
from .formatter import (
    expression_prefix,
    format_message,
    indentation,
    location_tag,
    message_prefix,
    pretty,
    render_block,
    render_line,
)
from .group import Group
from .level import LevelTracker
from .sink import OutputSink, default_sink

T = TypeVar("T")


class DebugLog:
    """Indented, location-filtered debug output.

    Example:
        >>> import io
        >>> from debug_log.filter import Filter
        >>> from debug_log.sink import StreamSink
        >>> buf = io.StringIO()
        >>> dl = DebugLog(filter=Filter("*"), sink=StreamSink(buf))
        >>> with dl.group("a.py:1", "A"):
        ...     dl.log("a.py:2", "x")
        >>> print(buf.getvalue(), end="")
        A {
            [a.py:2] x
        }
    """

    def __init__(
        self,
        filter: Optional[Filter] = None,
        tracker: Optional[LevelTracker] = None,
        sink: Optional[OutputSink] = None,
    ) -> None:
        """Create an engine.

        Args:
            filter: Enablement filter. Defaults to the process-wide filter
                seeded from ``DEBUG``.
            tracker: Nesting depth tracker. Defaults to a fresh one.
            sink: Output destination. Defaults to ``default_sink()``.
        """
        self.filter = filter if filter is not None else get_filter()
        self.tracker = tracker if tracker is not None else LevelTracker()
        self.sink = sink if sink is not None else default_sink()
        self._lock = threading.RLock()

    # ---------------------------------------------------------------------- #
    # Queries
    # ---------------------------------------------------------------------- #

    def is_enabled(self, location: str) -> bool:
        return self.filter.is_enabled(location)

    def depth(self) -> int:
        return self.tracker.depth()

    # ---------------------------------------------------------------------- #
    # Output
    # ---------------------------------------------------------------------- #

    def log(self, location: str, msg: Any, *args: Any) -> None:
        """Write ``[location] <msg % args>`` if the location is enabled."""
        if not self.is_enabled(location):
            return
        text = format_message(msg, args)
        with self._lock:
            self.sink.write_line(
                render_block(text, self._render_depth(), message_prefix(location))
            )

    def dbg(self, location: str, name: str, value: T) -> T:
        """Write ``[location] name = <pretty value>`` and return ``value``.

        Args:
            location: Call site location tag.
            name: Source text of the expression that produced ``value``.
            value: The value to dump.
        """
        if self.is_enabled(location):
            with self._lock:
                self.sink.write_line(
                    render_block(
                        pretty(value),
                        self._render_depth(),
                        expression_prefix(location, name),
                    )
                )
        return value

    def mark(self, location: str) -> None:
        """Write the bare ``[location]`` tag, a "reached here" marker."""
        if not self.is_enabled(location):
            return
        with self._lock:
            self.sink.write_line(render_line(location_tag(location), self._render_depth()))

    # ---------------------------------------------------------------------- #
    # Groups
    # ---------------------------------------------------------------------- #

    def group(self, location: str, label: Any = "", *args: Any) -> Group:
        """Open a group and return its handle.

        The opening line is written at the current depth, then the depth is
        increased. If ``location`` is filtered out, an inert Group is
        returned and nothing is written or counted.

        Args:
            location: Call site location tag.
            label: Group label, ``%``-formatted with ``args`` like a message.
        """
        if not self.is_enabled(location):
            return Group()
        text = format_message(label, args)
        with self._lock:
            self.sink.write_block_open(render_line(text, self._render_depth()))
            self.tracker.push(text)
        return Group(self)

    def _close_group(self) -> None:
        with self._lock:
            self.tracker.pop()
            self.sink.write_block_close(indentation(self._render_depth()))

    def _render_depth(self) -> int:
        if self.sink.native_grouping:
            return 0
        return self.tracker.depth()
