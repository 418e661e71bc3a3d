"""Enumerations shared by the layout engine and its command messages."""

from __future__ import annotations

import re
from enum import Enum

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _snake_case(text: str) -> str:
    return _WORD_BOUNDARY.sub("_", text).lower()


class _SnakeEnum(str, Enum):
    """String enum displayed in snake case that also parses CamelCase names."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            key = _snake_case(value)
            for member in cls:
                if member.value == key:
                    return member
        return None


class Axis(_SnakeEnum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    HORIZONTAL_AND_VERTICAL = "horizontal_and_vertical"


class CycleDirection(_SnakeEnum):
    PREVIOUS = "previous"
    NEXT = "next"

    def next_idx(self, idx: int, length: int) -> int:
        """Return the index after ``idx`` in this direction, wrapping around."""
        if length < 1:
            raise ValueError("length must be at least 1")
        if self is CycleDirection.PREVIOUS:
            return length - 1 if idx == 0 else idx - 1
        return 0 if idx == length - 1 else idx + 1


class OperationDirection(_SnakeEnum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    def opposite(self) -> OperationDirection:
        """Return the direction pointing the other way."""
        return _OPPOSITES[self]

    def flip(self, layout_flip: Axis | None) -> OperationDirection:
        """Mirror this direction according to a layout flip."""
        if layout_flip is None:
            return self
        horizontal = layout_flip in (Axis.HORIZONTAL, Axis.HORIZONTAL_AND_VERTICAL)
        vertical = layout_flip in (Axis.VERTICAL, Axis.HORIZONTAL_AND_VERTICAL)
        if self in (OperationDirection.LEFT, OperationDirection.RIGHT) and horizontal:
            return self.opposite()
        if self in (OperationDirection.UP, OperationDirection.DOWN) and vertical:
            return self.opposite()
        return self


_OPPOSITES = {
    OperationDirection.LEFT: OperationDirection.RIGHT,
    OperationDirection.RIGHT: OperationDirection.LEFT,
    OperationDirection.UP: OperationDirection.DOWN,
    OperationDirection.DOWN: OperationDirection.UP,
}


class Sizing(_SnakeEnum):
    INCREASE = "increase"
    DECREASE = "decrease"

    def adjust_by(self, value: int, adjustment: int) -> int:
        """Apply ``adjustment`` to ``value``; decreasing never goes below zero."""
        if self is Sizing.INCREASE:
            return value + adjustment
        if value > 0 and value - adjustment >= 0:
            return value - adjustment
        return value


class WindowKind(_SnakeEnum):
    SINGLE = "single"
    STACK = "stack"
    MONOCLE = "monocle"


class StateQuery(_SnakeEnum):
    FOCUSED_MONITOR_INDEX = "focused_monitor_index"
    FOCUSED_WORKSPACE_INDEX = "focused_workspace_index"
    FOCUSED_CONTAINER_INDEX = "focused_container_index"
    FOCUSED_WINDOW_INDEX = "focused_window_index"


class ApplicationIdentifier(_SnakeEnum):
    EXE = "exe"
    CLASS = "class"
    TITLE = "title"


class FocusFollowsMouseImplementation(_SnakeEnum):
    # A custom implementation (slightly more CPU-intensive)
    KOMOREBI = "komorebi"
    # The native (legacy) Windows implementation
    WINDOWS = "windows"


class WindowContainerBehaviour(_SnakeEnum):
    # Create a new container for each new window
    CREATE = "create"
    # Append new windows to the focused window container
    APPEND = "append"


class MoveBehaviour(_SnakeEnum):
    # Swap with the container at the edge of the adjacent monitor
    SWAP = "swap"
    # Insert into the focused workspace on the adjacent monitor
    INSERT = "insert"


class HidingBehaviour(_SnakeEnum):
    HIDE = "hide"
    MINIMIZE = "minimize"
    CLOAK = "cloak"


class OperationBehaviour(_SnakeEnum):
    # Process commands on temporarily unmanaged/floated windows
    OP = "op"
    # Ignore commands on temporarily unmanaged/floated windows
    NO_OP = "no_op"