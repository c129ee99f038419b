"""callsite.py - Recover a caller's location and argument source text.

``debug_dbg(items)`` prints ``[app.py:12] items = [...]``. Both the location
and the text ``items`` come from the caller's frame:

    Location   ``co_filename`` and ``f_lineno`` of the frame, with the path
               made relative to the working directory when possible.
    Arguments  On Python 3.11+, the source span of the instruction being
               executed (``co_positions``) is the call expression itself; it
               is parsed with ``ast`` and each argument's text sliced out.
               Older interpreters, or frames whose span is unusable, fall back
               to parsing the caller's source line and picking the call by
               name and argument count.

Nothing here raises: when the text cannot be recovered, ``argument_sources``
returns None and the caller shows ``UNKNOWN_NAME`` instead.
"""

import ast
import linecache
import os
from types import FrameType
from typing import List, Optional

UNKNOWN_NAME = "<expr>"


def display_path(filename: str) -> str:
    """Return ``filename`` relative to the working directory, ``/``-separated.

    Files outside the working directory keep their original path.
    """
    try:
        rel = os.path.relpath(filename)
    except ValueError:  # different drive on Windows
        return filename
    if rel.startswith(os.pardir):
        return filename
    return rel.replace(os.sep, "/")


def caller_location(frame: FrameType) -> str:
    """Return the ``"file:line"`` location tag of ``frame``."""
    return f"{display_path(frame.f_code.co_filename)}:{frame.f_lineno}"


def definition_location(func) -> str:
    """Return the ``"file:line"`` where ``func`` is defined."""
    code = func.__code__
    return f"{display_path(code.co_filename)}:{code.co_firstlineno}"


def argument_sources(
    frame: FrameType, count: int, func_name: str
) -> Optional[List[str]]:
    """Return the source text of the ``count`` positional arguments in the
    call currently being executed by ``frame``.

    Args:
        frame: The caller's frame, paused on the call.
        count: Number of positional arguments the call received.
        func_name: Name the call is expected to use; only consulted by the
            line-based fallback.

    Returns:
        One string per argument, or None if the text could not be recovered.
    """
    try:
        names = _from_positions(frame, count)
        if names is None:
            names = _from_line(frame, count, func_name)
    except (SyntaxError, ValueError, IndexError, UnicodeDecodeError):
        return None
    return names


def _from_positions(frame: FrameType, count: int) -> Optional[List[str]]:
    code = frame.f_code
    if not hasattr(code, "co_positions") or frame.f_lasti < 0:
        return None
    index = frame.f_lasti // 2
    for i, position in enumerate(code.co_positions()):
        if i == index:
            break
    else:
        return None
    lineno, end_lineno, col, end_col = position
    if None in position:
        return None
    lines = linecache.getlines(code.co_filename, frame.f_globals)
    if not lines or end_lineno > len(lines):
        return None
    source = _slice_source(lines[lineno - 1 : end_lineno], col, end_col)
    call = ast.parse(source, mode="eval").body
    if not isinstance(call, ast.Call):
        return None
    return _arg_texts(source, call, count)


def _slice_source(lines: List[str], col: int, end_col: int) -> str:
    # Column offsets from co_positions are UTF-8 byte offsets.
    encoded = [line.encode("utf-8") for line in lines]
    if len(encoded) == 1:
        return encoded[0][col:end_col].decode("utf-8")
    encoded[0] = encoded[0][col:]
    encoded[-1] = encoded[-1][:end_col]
    return b"".join(encoded).decode("utf-8")


def _from_line(frame: FrameType, count: int, func_name: str) -> Optional[List[str]]:
    line = linecache.getline(frame.f_code.co_filename, frame.f_lineno, frame.f_globals)
    source = line.strip()
    if not source:
        return None
    tree = ast.parse(source)
    candidates = [
        node
        for node in ast.walk(tree)
        if isinstance(node, ast.Call) and len(node.args) == count
    ]
    for node in candidates:
        if _call_name(node) == func_name:
            return _arg_texts(source, node, count)
    if len(candidates) == 1:
        return _arg_texts(source, candidates[0], count)
    return None


def _call_name(call: ast.Call) -> Optional[str]:
    func = call.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _arg_texts(source: str, call: ast.Call, count: int) -> Optional[List[str]]:
    if len(call.args) != count or any(isinstance(a, ast.Starred) for a in call.args):
        return None
    texts = [ast.get_source_segment(source, arg) for arg in call.args]
    if any(text is None for text in texts):
        return None
    return texts
