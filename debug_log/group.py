"""group.py - Scope guard that brackets nested debug output.

A Group is returned by ``DebugLog.group()`` (and by the module-level
``debug_log.group()``). While it is open, every line written through the same
engine is indented one level deeper. It closes exactly once, whichever way
the enclosing block is left::

    with group("load %s", path):
        debug_log("reading")
        if not data:
            return           # closes here
        parse(data)          # or here, if parse() raises

Output::

    load config.toml {
        [app.py:14] reading
    }

A Group created while the call site is filtered out is inert: it never
touched the shared depth, so closing it does nothing either.
"""

from types import TracebackType
from typing import TYPE_CHECKING, Optional, Type

if TYPE_CHECKING:
    from .core import DebugLog


class Group:
    """Handle for one open (or inert) group.

    Attributes:
        _engine: The engine that opened the group, or None once the group has
            been closed or when it was never opened.
    """

    __slots__ = ("_engine",)

    def __init__(self, engine: Optional["DebugLog"] = None) -> None:
        self._engine = engine

    @property
    def active(self) -> bool:
        """True while the group is open and still owes its closing line."""
        return self._engine is not None

    def close(self) -> None:
        """Close the group: drop one nesting level and write ``}``.

        Safe to call any number of times; only the first call on an active
        group has an effect. The filter is not consulted again, so a group
        opened while logging was enabled still closes after it is disabled.
        """
        engine, self._engine = self._engine, None
        if engine is not None:
            engine._close_group()

    def __enter__(self) -> "Group":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __del__(self) -> None:
        # A handle bound to a plain local closes when the local goes away.
        try:
            self.close()
        except Exception:
            pass

    def __repr__(self) -> str:  # pragma: no cover
        return f"Group(active={self.active})"
