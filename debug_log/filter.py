"""filter.py - Location-substring filter that decides which call sites print.

The filter holds a single optional string, shared by the whole process:

    None / ""   Logging is disabled everywhere.
    "*"         Every call site is enabled.
    anything    A call site is enabled iff its location tag (``"file:line"``)
                contains the string as a plain substring.

The process-wide value is seeded once at import time from the ``DEBUG``
environment variable and can be replaced later with ``set_debug()``, which is
how embedding hosts (notebooks, Pyodide pages) switch output on without
touching the environment of the running process.
"""

import logging
import os
import threading
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEBUG_ENV_VAR = "DEBUG"
WILDCARD = "*"


class Filter:
    """Thread-safe holder for the enablement string.

    Example:
        >>> f = Filter("mod1")
        >>> f.is_enabled("mod1/file.py:10")
        True
        >>> f.is_enabled("mod2/file.py:20")
        False
        >>> f.set("*")
        >>> f.is_enabled("anything:1")
        True
    """

    def __init__(self, value: Optional[str] = None) -> None:
        self._lock = threading.Lock()
        self._value = value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Filter":
        """Build a filter from the ``DEBUG`` environment variable.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            A Filter holding the variable's value, or None when it is unset.
        """
        if environ is None:
            environ = os.environ
        return cls(environ.get(DEBUG_ENV_VAR))

    def get(self) -> Optional[str]:
        """Return the current enablement string (None when never configured)."""
        with self._lock:
            return self._value

    def set(self, value: Optional[str]) -> None:
        """Replace the enablement string.

        Args:
            value: New filter. None or ``""`` disables output, ``"*"`` enables
                every call site, any other string is a location substring.
        """
        with self._lock:
            self._value = value
        logger.debug("debug filter set to %r", value)

    def is_enabled(self, location: str) -> bool:
        """Return True if the call site at ``location`` should produce output.

        Args:
            location: The call site's location tag, conventionally ``"file:line"``.
        """
        value = self.get()
        if not value:
            return False
        if value == WILDCARD:
            return True
        return value in location


_filter = Filter.from_env()


def get_filter() -> Filter:
    """Return the process-wide Filter seeded from ``DEBUG``."""
    return _filter


def set_debug(value: Optional[str]) -> None:
    """Replace the process-wide filter string at runtime."""
    _filter.set(value)


def get_debug() -> Optional[str]:
    """Return the process-wide filter string."""
    return _filter.get()
