"""api.py - Module-level call-site functions backed by a process-wide engine.

These are the functions application code calls. Each one looks one frame up
to find its caller's ``file:line`` (and, for ``debug_dbg``, the source text of
its arguments) and hands those plain strings to the shared DebugLog engine.

Usage::

    from debug_log import debug_dbg, debug_log, group, grouped

    @grouped
    def solve(board):
        debug_dbg(board)
        with group("row %d", 3):
            debug_log("trying %s", move)

Run with ``DEBUG=*`` to print everything, ``DEBUG=solver`` to print only call
sites whose path contains ``solver``, or call ``set_debug()`` at runtime.
"""

import sys
from functools import wraps
from typing import Any, Callable, Optional

from .callsite import UNKNOWN_NAME, argument_sources, caller_location, definition_location
from .core import DebugLog
from .filter import get_debug, set_debug
from .group import Group
from .sink import OutputSink

_engine = DebugLog()


def get_engine() -> DebugLog:
    """Return the engine behind the module-level functions."""
    return _engine


def set_sink(sink: OutputSink) -> None:
    """Route all subsequent module-level output to ``sink``."""
    _engine.sink = sink


def debug_log(msg: Any, *args: Any) -> None:
    """Write ``[file:line] <msg % args>`` at the current nesting depth.

    Args:
        msg: Message, ``%``-formatted with ``args`` like a ``logging`` call.
        *args: Values interpolated into ``msg``.
    """
    _engine.log(caller_location(sys._getframe(1)), msg, *args)


def debug_dbg(*values: Any) -> Any:
    """Dump each value as ``[file:line] <expression> = <value>``.

    The expression text is read from the caller's source. Calling with no
    arguments writes only ``[file:line]``.

    Returns:
        The single value when called with one argument, a tuple of all
        values when called with several, otherwise None. This lets a call be
        wrapped around an expression in place: ``total = debug_dbg(a + b)``.
    """
    frame = sys._getframe(1)
    location = caller_location(frame)
    if _engine.is_enabled(location):
        if not values:
            _engine.mark(location)
        else:
            names = argument_sources(frame, len(values), "debug_dbg")
            if names is None:
                names = [UNKNOWN_NAME] * len(values)
            for name, value in zip(names, values):
                _engine.dbg(location, name, value)
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def group(label: Any = "", *args: Any) -> Group:
    """Open a group at the caller's location.

    Use as a context manager so the group closes on every exit path::

        with group("request %s", request_id):
            ...
    """
    location = caller_location(sys._getframe(1))
    return _engine.group(location, label, *args)


def grouped(func: Optional[Callable] = None, *, label: Optional[str] = None):
    """Decorator that wraps every call of a function in a group.

    The group is labelled with the function's ``__qualname__`` (or ``label``)
    and filtered by the function's definition ``file:line``. It closes when
    the call returns or raises; exceptions propagate unchanged.

    Can be used bare (``@grouped``) or with arguments
    (``@grouped(label="parse")``).

    Example:
        >>> @grouped
        ... def step(n):
        ...     debug_log("n=%d", n)
        >>> step(1)   # with DEBUG=* prints:  step {  /  [..] n=1  /  }
    """

    def decorate(fn: Callable) -> Callable:
        location = definition_location(fn)
        text = label if label is not None else fn.__qualname__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            with _engine.group(location, text):
                return fn(*args, **kwargs)

        return wrapper

    if func is not None:
        return decorate(func)
    return decorate


__all__ = [
    "debug_log",
    "debug_dbg",
    "group",
    "grouped",
    "set_debug",
    "get_debug",
    "set_sink",
    "get_engine",
]
