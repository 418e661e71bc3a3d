"""Screen rectangles expressed as an origin plus a width and a height."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Rect:
    """A rectangle where ``right`` is the width and ``bottom`` the height."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @classmethod
    def from_corners(cls, left: int, top: int, right: int, bottom: int) -> Rect:
        """Build a rect from absolute corner coordinates."""
        return cls(left=left, top=top, right=right - left, bottom=bottom - top)

    def add_padding(self, padding: int | None) -> None:
        """Shrink the rect in place by ``padding`` on every side."""
        if padding is None:
            return
        self.left += padding
        self.top += padding
        self.right -= padding * 2
        self.bottom -= padding * 2

    def contains_point(self, point: tuple[int, int]) -> bool:
        """Return whether ``point`` lies inside the rect, edges included."""
        x, y = point
        return (
            self.left <= x <= self.left + self.right
            and self.top <= y <= self.top + self.bottom
        )