"""level.py - Process-wide nesting depth for indented debug output.

LevelTracker keeps a stack of the labels of every open group. The depth used
for indentation is simply the length of that stack. Unlike a per-context
counter, the stack is deliberately shared by every thread in the process:
output from concurrent threads interleaves its depth changes, which is the
documented behaviour for a development-only trace.

Only Group open/close mutates the tracker.
"""

import threading
from typing import List, Optional


class LevelTracker:
    """Lock-protected stack of open group labels.

    Example:
        >>> tracker = LevelTracker()
        >>> tracker.push("outer")
        >>> tracker.push("inner")
        >>> tracker.depth()
        2
        >>> tracker.pop()
        'inner'
        >>> tracker.depth()
        1
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._labels: List[str] = []

    def depth(self) -> int:
        """Return the number of currently open groups."""
        with self._lock:
            return len(self._labels)

    def push(self, label: str) -> None:
        """Record a newly opened group, increasing the depth by one.

        Args:
            label: The group's rendered label. Kept only so that ``labels()``
                can report which groups are open.
        """
        with self._lock:
            self._labels.append(label)

    def pop(self) -> Optional[str]:
        """Remove the most recently opened group and return its label.

        Popping an empty tracker is a no-op that returns None, so a stray close
        can never raise inside the host program or drive the depth negative.
        """
        with self._lock:
            if not self._labels:
                return None
            return self._labels.pop()

    def labels(self) -> List[str]:
        """Return a snapshot of the open labels, outermost first."""
        with self._lock:
            return list(self._labels)
