"""Neighbour lookup for containers within default and custom layouts."""

from __future__ import annotations

from functools import singledispatch
from typing import Callable

from tilekit.custom_layout import (
    Column,
    ColumnKind,
    ColumnSplit,
    ColumnSplitWithCapacity,
    CustomLayout,
)
from tilekit.default_layout import DefaultLayout
from tilekit.kinds import Axis, OperationDirection


def _no_neighbour(layout: object, direction: str) -> ValueError:
    return ValueError(f"the {layout} layout has no container {direction} of this one")


def _checked(value: int) -> int:
    if value < 0:
        raise ValueError("there is no container in that direction")
    return value


def _stacks_vertically(column: Column) -> bool:
    config = column.configuration
    if column.kind is ColumnKind.SECONDARY:
        return (
            isinstance(config, ColumnSplitWithCapacity)
            and config.split is ColumnSplit.HORIZONTAL
        )
    return column.kind is ColumnKind.TERTIARY and config is ColumnSplit.HORIZONTAL


@singledispatch
def is_valid_direction(layout, op_direction, idx, count) -> bool:
    """Return whether container ``idx`` of ``count`` has a neighbour in ``op_direction``."""
    raise TypeError(f"unsupported layout type: {type(layout).__name__}")


@is_valid_direction.register(DefaultLayout)
def _default_is_valid(
    layout: DefaultLayout, op_direction: OperationDirection, idx: int, count: int
) -> bool:
    if op_direction is OperationDirection.UP:
        match layout:
            case DefaultLayout.BSP:
                return count > 2 and idx not in (0, 1)
            case DefaultLayout.COLUMNS:
                return False
            case DefaultLayout.ROWS | DefaultLayout.HORIZONTAL_STACK:
                return idx != 0
            case DefaultLayout.VERTICAL_STACK:
                return idx not in (0, 1)
            case _:
                return idx > 2
    if op_direction is OperationDirection.DOWN:
        match layout:
            case DefaultLayout.BSP:
                return count > 2 and idx != count - 1 and idx % 2 != 0
            case DefaultLayout.COLUMNS:
                return False
            case DefaultLayout.ROWS:
                return idx != count - 1
            case DefaultLayout.VERTICAL_STACK:
                return idx != 0 and idx != count - 1
            case DefaultLayout.HORIZONTAL_STACK:
                return idx == 0
            case _:
                return idx > 1 and idx != count - 1
    if op_direction is OperationDirection.LEFT:
        match layout:
            case DefaultLayout.BSP:
                return count > 1 and idx != 0
            case DefaultLayout.COLUMNS | DefaultLayout.VERTICAL_STACK:
                return idx != 0
            case DefaultLayout.ROWS:
                return False
            case DefaultLayout.HORIZONTAL_STACK:
                return idx not in (0, 1)
            case _:
                return count > 1 and idx != 1
    match layout:
        case DefaultLayout.BSP:
            return count > 1 and idx % 2 == 0 and idx != count - 1
        case DefaultLayout.COLUMNS:
            return idx != count - 1
        case DefaultLayout.ROWS:
            return False
        case DefaultLayout.VERTICAL_STACK:
            return idx == 0
        case DefaultLayout.HORIZONTAL_STACK:
            return idx != 0 and idx != count - 1
        case _:
            if count < 2:
                return False
            return idx != 0 if count == 2 else idx < 2


@is_valid_direction.register(CustomLayout)
def _custom_is_valid(
    layout: CustomLayout, op_direction: OperationDirection, idx: int, count: int
) -> bool:
    if count <= len(layout):
        return is_valid_direction(DefaultLayout.COLUMNS, op_direction, idx, count)

    if op_direction is OperationDirection.LEFT:
        return idx != 0 and layout.column_for_container_idx(idx) != 0
    if op_direction is OperationDirection.RIGHT:
        return idx != count - 1 and layout.column_for_container_idx(idx) != len(layout) - 1

    if op_direction is OperationDirection.UP:
        if idx == 0:
            return False
        neighbour = idx - 1
    else:
        if idx == count - 1:
            return False
        neighbour = idx + 1

    column_idx, column = layout.column_with_idx(idx)
    return (
        column is not None
        and _stacks_vertically(column)
        and layout.column_for_container_idx(neighbour) == column_idx
    )


@singledispatch
def up_index(layout, idx) -> int:
    """Return the index of the container above ``idx``."""
    raise TypeError(f"unsupported layout type: {type(layout).__name__}")


@up_index.register(DefaultLayout)
def _default_up(layout: DefaultLayout, idx: int) -> int:
    match layout:
        case DefaultLayout.BSP:
            return _checked(idx - 1 if idx % 2 == 0 else idx - 2)
        case DefaultLayout.COLUMNS:
            raise _no_neighbour(layout, "above")
        case DefaultLayout.HORIZONTAL_STACK:
            return 0
        case _:
            return _checked(idx - 1)


@up_index.register(CustomLayout)
def _custom_up(layout: CustomLayout, idx: int) -> int:
    return _checked(idx - 1)


@singledispatch
def down_index(layout, idx) -> int:
    """Return the index of the container below ``idx``."""
    raise TypeError(f"unsupported layout type: {type(layout).__name__}")


@down_index.register(DefaultLayout)
def _default_down(layout: DefaultLayout, idx: int) -> int:
    match layout:
        case DefaultLayout.COLUMNS:
            raise _no_neighbour(layout, "below")
        case DefaultLayout.HORIZONTAL_STACK:
            return 1
        case _:
            return idx + 1


@down_index.register(CustomLayout)
def _custom_down(layout: CustomLayout, idx: int) -> int:
    return idx + 1


@singledispatch
def left_index(layout, idx) -> int:
    """Return the index of the container to the left of ``idx``."""
    raise TypeError(f"unsupported layout type: {type(layout).__name__}")


@left_index.register(DefaultLayout)
def _default_left(layout: DefaultLayout, idx: int) -> int:
    match layout:
        case DefaultLayout.BSP:
            return _checked(idx - 2 if idx % 2 == 0 else idx - 1)
        case DefaultLayout.COLUMNS | DefaultLayout.HORIZONTAL_STACK:
            return _checked(idx - 1)
        case DefaultLayout.ROWS:
            raise _no_neighbour(layout, "left")
        case DefaultLayout.VERTICAL_STACK:
            return 0
        case _:
            if idx == 1:
                raise _no_neighbour(layout, "left")
            return 1 if idx == 0 else 0


@left_index.register(CustomLayout)
def _custom_left(layout: CustomLayout, idx: int) -> int:
    column_idx = layout.column_for_container_idx(idx)
    if column_idx == 0:
        raise _no_neighbour("custom", "left")
    if column_idx - 1 == 0:
        return 0
    return layout.first_container_idx(column_idx - 1)


@singledispatch
def right_index(layout, idx) -> int:
    """Return the index of the container to the right of ``idx``."""
    raise TypeError(f"unsupported layout type: {type(layout).__name__}")


@right_index.register(DefaultLayout)
def _default_right(layout: DefaultLayout, idx: int) -> int:
    match layout:
        case DefaultLayout.ROWS:
            raise _no_neighbour(layout, "right")
        case DefaultLayout.VERTICAL_STACK:
            return 1
        case DefaultLayout.ULTRAWIDE_VERTICAL_STACK:
            if idx == 1:
                return 0
            if idx == 0:
                return 2
            raise _no_neighbour(layout, "right")
        case _:
            return idx + 1


@right_index.register(CustomLayout)
def _custom_right(layout: CustomLayout, idx: int) -> int:
    return layout.first_container_idx(layout.column_for_container_idx(idx) + 1)


_STEPS: dict[OperationDirection, Callable[[object, int], int]] = {
    OperationDirection.LEFT: left_index,
    OperationDirection.RIGHT: right_index,
    OperationDirection.UP: up_index,
    OperationDirection.DOWN: down_index,
}


def index_in_direction(
    layout: DefaultLayout | CustomLayout,
    op_direction: OperationDirection,
    idx: int,
    count: int,
) -> int | None:
    """Return the neighbour of container ``idx`` in ``op_direction``, or None."""
    if isinstance(layout, CustomLayout) and count <= len(layout):
        layout = DefaultLayout.COLUMNS
    if not is_valid_direction(layout, op_direction, idx, count):
        return None
    return _STEPS[op_direction](layout, idx)


def destination(
    op_direction: OperationDirection,
    layout: DefaultLayout | CustomLayout,
    layout_flip: Axis | None,
    idx: int,
    length: int,
) -> int | None:
    """Return where a move from ``idx`` lands once the layout flip is applied."""
    if length < 1:
        raise ValueError("length must be at least 1")
    return index_in_direction(layout, op_direction.flip(layout_flip), idx, length)