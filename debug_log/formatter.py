"""formatter.py - Indentation-aware rendering of debug lines.

Every line written by debug_log has the shape::

    <indent>[<file>:<line>] <payload>

where ``<indent>`` is ``INDENT`` repeated once per open group. Payloads that
span several lines (a pretty-printed dict, a multi-line message) keep their
own relative layout; each continuation line is simply shifted right by the
same indent so the whole block stays inside its group.
"""

import logging
import pprint
from typing import Any, Mapping, Tuple

logger = logging.getLogger(__name__)

INDENT = "    "
OPEN_BRACE = " {"
CLOSE_BRACE = "}"


def indentation(depth: int) -> str:
    """Return the indent string for ``depth`` open groups."""
    return INDENT * depth


def render_line(prefix: str, depth: int) -> str:
    """Return ``prefix`` indented to ``depth``."""
    return indentation(depth) + prefix


def render_block(value_repr: str, depth: int, prefix: str = "") -> str:
    """Re-indent a possibly multi-line representation.

    The first line is attached to ``prefix`` and both are indented to
    ``depth``; every following line gets the same indent. One trailing
    newline is dropped so the sink's own line terminator does not produce a
    blank line.

    Args:
        value_repr: The text to render, e.g. the output of ``pretty()``.
        depth: Current nesting depth.
        prefix: Text placed in front of the first line, e.g. ``"[a.py:3] x = "``.

    Returns:
        The rendered block without a trailing newline. It has exactly as many
        lines as ``value_repr`` (after the trailing newline is dropped).

    Example:
        >>> print(render_block("[\\n 1,\\n 2]", 1, "[a.py:1] v = "))
            [a.py:1] v = [
             1,
             2]
    """
    if value_repr.endswith("\n"):
        value_repr = value_repr[:-1]
    pad = indentation(depth)
    first, *rest = value_repr.split("\n")
    lines = [pad + prefix + first]
    lines.extend(pad + line for line in rest)
    return "\n".join(lines)


def location_tag(location: str) -> str:
    return f"[{location}]"


def message_prefix(location: str) -> str:
    """Prefix of a free-form message line: ``"[<location>] "``."""
    return f"{location_tag(location)} "


def expression_prefix(location: str, name: str) -> str:
    """Prefix of an expression dump: ``"[<location>] <name> = "``."""
    return f"{location_tag(location)} {name} = "


def pretty(value: Any) -> str:
    """Return the multi-line debug representation of ``value``.

    Strings are shown quoted, like any other repr, so ``x = 'abc'`` can be
    told apart from ``x = abc``. Containers are laid out by ``pprint``,
    which breaks long structures across lines.

    Falls back to ``object.__repr__`` when the value's own repr raises.
    """
    try:
        if isinstance(value, str):
            return repr(value)
        return pprint.pformat(value)
    except Exception as exc:
        logger.debug("repr of %s failed", type(value).__name__, exc_info=True)
        return f"{object.__repr__(value)} (repr failed: {type(exc).__name__})"


def format_message(msg: Any, args: Tuple[Any, ...]) -> str:
    """Interpolate ``args`` into ``msg`` the way ``logging`` does.

    Without args the message is used verbatim, so a literal ``%`` is safe. A
    single mapping argument is used for ``%(name)s`` lookups. If the
    arguments do not fit the format, the raw message is shown followed by the
    repr of the arguments.
    """
    msg = str(msg)
    if not args:
        return msg
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return msg % args
    except (TypeError, ValueError, KeyError):
        logger.debug("cannot format %r with %r", msg, args, exc_info=True)
        return f"{msg} {args!r}"
