"""The built-in tiling layouts and their resize rules."""

from __future__ import annotations

from dataclasses import replace

from tilekit.kinds import OperationDirection, Sizing, _SnakeEnum
from tilekit.rect import Rect

_MAX_DIVISOR = 1.005


class DefaultLayout(_SnakeEnum):
    BSP = "bsp"
    COLUMNS = "columns"
    ROWS = "rows"
    VERTICAL_STACK = "vertical_stack"
    HORIZONTAL_STACK = "horizontal_stack"
    ULTRAWIDE_VERTICAL_STACK = "ultrawide_vertical_stack"

    def resize(
        self,
        unaltered: Rect,
        resize: Rect | None,
        edge: OperationDirection,
        sizing: Sizing,
        delta: int,
    ) -> Rect | None:
        """Return the new resize adjustment for one edge, or None if there is none.

        Only BSP and ultrawide layouts support resizing; other layouts yield None.
        A step that would push an edge past the window's own size is ignored.
        """
        if self not in (DefaultLayout.BSP, DefaultLayout.ULTRAWIDE_VERTICAL_STACK):
            return None

        r = replace(resize) if resize is not None else Rect()
        increase = sizing is Sizing.INCREASE
        max_width = unaltered.right / _MAX_DIVISOR
        max_height = unaltered.bottom / _MAX_DIVISOR

        if edge is OperationDirection.LEFT:
            step = -delta if increase else delta
            if abs(r.left + step) < max_width:
                r.left += step
        elif edge is OperationDirection.UP:
            probe = r.top + delta if increase else r.top - delta
            if abs(probe) < max_height:
                r.top += -delta if increase else delta
        elif edge is OperationDirection.RIGHT:
            step = delta if increase else -delta
            if abs(r.right + step) < max_width:
                r.right += step
        else:
            step = delta if increase else -delta
            if abs(r.bottom + step) < max_height:
                r.bottom += step

        return None if r == Rect() else r

    def cycle_next(self) -> DefaultLayout:
        """Return the layout after this one, wrapping around."""
        order = list(DefaultLayout)
        return order[(order.index(self) + 1) % len(order)]

    def cycle_previous(self) -> DefaultLayout:
        """Return the layout before this one, wrapping around."""
        order = list(DefaultLayout)
        return order[(order.index(self) - 1) % len(order)]