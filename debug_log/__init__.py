"""debug_log/__init__.py - Public API for the debug_log package.

debug_log is an opt-in tracing aid for development runs. It prints nested,
indented lines tagged with their source location, filtered by a substring of
that location, and disappears entirely when Python runs with ``-O``.

Quick start:
    from debug_log import debug_log, debug_dbg, group

    def load(path):
        with group("load %s", path):          # "load cfg.toml {" ... "}"
            data = read(path)
            debug_dbg(len(data))              # "    [app.py:6] len(data) = 812"
            debug_log("parsed %d keys", 14)   # "    [app.py:7] parsed 14 keys"

    $ DEBUG='*' python app.py        # everything
    $ DEBUG='loader/' python app.py  # only call sites whose path contains "loader/"
    $ python app.py                  # nothing
    $ python -O app.py               # nothing, and no work done at all

Exported names:
    debug_log:        Write a %-formatted message line.
    debug_dbg:        Dump values as ``expression = value`` and return them.
    group:            Open an indented group; use as a context manager.
    grouped:          Decorator wrapping each call of a function in a group.
    set_debug:        Replace the location filter at runtime.
    get_debug:        Read the location filter.
    set_sink:         Send output somewhere other than the platform default.
    DebugLogHandler:  logging.Handler that routes records into the trace.
"""

if __debug__:
    from .api import (
        debug_dbg,
        debug_log,
        get_debug,
        get_engine,
        group,
        grouped,
        set_debug,
        set_sink,
    )
    from .handler import DebugLogHandler
else:
    from .noop import (
        DebugLogHandler,
        debug_dbg,
        debug_log,
        get_debug,
        get_engine,
        group,
        grouped,
        set_debug,
        set_sink,
    )

__all__ = [
    "debug_log",
    "debug_dbg",
    "group",
    "grouped",
    "set_debug",
    "get_debug",
    "set_sink",
    "get_engine",
    "DebugLogHandler",
]
__version__ = "0.1.0"
