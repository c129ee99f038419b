"""handler.py - Bridge from the standard logging module into debug output.

DebugLogHandler lets existing ``logging`` calls take part in the indented
debug trace. Each record is treated like a ``debug_log()`` call made at the
record's ``pathname:lineno``:

    - It is subject to the same location filter (``DEBUG`` / ``set_debug()``).
    - It is indented by the groups currently open.
    - It goes to the same sink as every other debug line.

Typical usage::

    import logging
    from debug_log import DebugLogHandler, group

    logging.getLogger().addHandler(DebugLogHandler())
    logger = logging.getLogger(__name__)

    with group("import"):
        logger.info("loaded %d rows", 42)   # ->     [app.py:9] loaded 42 rows
"""

import logging
from typing import Optional

from .api import get_engine
from .callsite import display_path
from .core import DebugLog

_OWN_LOGGER_PREFIX = __name__.split(".")[0]


class _SkipOwnRecords(logging.Filter):
    """Reject records from this package's loggers (e.g. sink failure reports).

    Filters run before ``Handler.handle`` takes the handler lock, so a report
    logged while the engine lock is held never waits on this handler.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        return not (name == _OWN_LOGGER_PREFIX or name.startswith(_OWN_LOGGER_PREFIX + "."))


class DebugLogHandler(logging.Handler):
    """A logging.Handler that writes records as filtered, indented debug lines.

    The default formatter renders only the record's message, so a line looks
    exactly like one produced by ``debug_log()``. Pass a ``logging.Formatter``
    via ``setFormatter()`` to include level names or timestamps.

    Attributes:
        _engine (DebugLog): Engine providing the filter, depth and sink.

    Example:
        >>> import logging
        >>> from debug_log import DebugLogHandler
        >>> logging.getLogger("myapp").addHandler(DebugLogHandler())
    """

    def __init__(self, engine: Optional[DebugLog] = None, level: int = logging.NOTSET) -> None:
        """Initialise the handler.

        Args:
            engine: Engine to write through. Defaults to the process-wide
                engine used by the module-level functions.
            level: Minimum record level, as for any ``logging.Handler``.
        """
        super().__init__(level)
        self._engine = engine if engine is not None else get_engine()
        self.addFilter(_SkipOwnRecords())

    def emit(self, record: logging.LogRecord) -> None:
        """Write ``record`` through the engine if its location is enabled."""
        try:
            location = self._location(record)
            if self._engine.is_enabled(location):
                self._engine.log(location, self.format(record))
        except Exception:
            self.handleError(record)

    def _location(self, record: logging.LogRecord) -> str:
        return f"{display_path(record.pathname)}:{record.lineno}"
