"""noop.py - Inert stand-ins for the public API, used under ``python -O``.

When the interpreter runs with optimisations (``__debug__`` is False) the
package exports these instead of the functions in ``debug_log.api``. They
keep the same signatures and return values, hold no state and write nothing,
so call sites need no changes between development and optimised runs.
"""

import logging
from typing import Any, Callable, Optional


class _InertGroup:
    """Reusable context manager that does nothing."""

    __slots__ = ()
    active = False

    def close(self) -> None:
        pass

    def __enter__(self) -> "_InertGroup":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


_INERT_GROUP = _InertGroup()


class DebugLogHandler(logging.Handler):
    """Handler that discards every record."""

    def __init__(self, engine: Any = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)

    def emit(self, record: logging.LogRecord) -> None:
        pass


def debug_log(msg: Any, *args: Any) -> None:
    pass


def debug_dbg(*values: Any) -> Any:
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def group(label: Any = "", *args: Any) -> _InertGroup:
    return _INERT_GROUP


def grouped(func: Optional[Callable] = None, *, label: Optional[str] = None):
    if func is not None:
        return func
    return lambda fn: fn


def set_debug(value: Optional[str]) -> None:
    pass


def get_debug() -> Optional[str]:
    return None


def set_sink(sink: Any) -> None:
    pass


def get_engine() -> None:
    """There is no engine in an optimised run."""
    return None


__all__ = [
    "DebugLogHandler",
    "debug_log",
    "debug_dbg",
    "group",
    "grouped",
    "set_debug",
    "get_debug",
    "set_sink",
    "get_engine",
]
