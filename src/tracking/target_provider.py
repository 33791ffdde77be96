"""
Target point supplied by pointer input.

The input side (mouse callback) writes, the tick reads once per frame. A
read that is one tick stale is fine, so no locking is done.
"""

from typing import Optional

from src.common.types import Point


class TargetProvider:
    """Holds the most recent target point in frame coordinates."""

    def __init__(self, initial: Optional[Point] = None):
        self._target = initial

    def current(self) -> Optional[Point]:
        """Latest target, or None until the first input event."""
        return self._target

    def update(self, x: float, y: float) -> None:
        """Set the target in frame coordinates."""
        self._target = Point(x=x, y=y)

    def clear(self) -> None:
        self._target = None
