"""Turn a layout and a work area into one rectangle per container."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from tilekit.custom_layout import (
    ColumnKind,
    ColumnSplit,
    ColumnSplitWithCapacity,
    ColumnWidth,
    CustomLayout,
)
from tilekit.default_layout import DefaultLayout
from tilekit.kinds import Axis
from tilekit.rect import Rect

_HORIZONTAL_FLIPS = (Axis.HORIZONTAL, Axis.HORIZONTAL_AND_VERTICAL)
_VERTICAL_FLIPS = (Axis.VERTICAL, Axis.HORIZONTAL_AND_VERTICAL)


def _div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def columns(area: Rect, length: int) -> list[Rect]:
    """Split ``area`` into ``length`` side-by-side columns of equal width."""
    if length < 1:
        raise ValueError("length must be at least 1")
    width = _div(area.right, length)
    return [
        Rect(left=area.left + width * i, top=area.top, right=width, bottom=area.bottom)
        for i in range(length)
    ]


def rows(area: Rect, length: int) -> list[Rect]:
    """Split ``area`` into ``length`` stacked rows of equal height."""
    if length < 1:
        raise ValueError("length must be at least 1")
    height = _div(area.bottom, length)
    return [
        Rect(left=area.left, top=area.top + height * i, right=area.right, bottom=height)
        for i in range(length)
    ]


def _previous_range(i: int, odd_takes_one: bool) -> range:
    if i == 1:
        return range(0, 1)
    if (i % 2 == 1) == odd_takes_one:
        return range(i - 1, i)
    return range(i - 2, i)


def calculate_resize_adjustments(
    resize_dimensions: Sequence[Rect | None],
) -> list[Rect | None]:
    """Move left/top resizes onto the neighbours that own those edges in a BSP layout.

    The input is left untouched; adjustments that cancel out become None.
    """
    adjustments = [None if r is None else replace(r) for r in resize_dimensions]

    for i, resize_ref in enumerate(resize_dimensions):
        if resize_ref is None or i == 0:
            continue

        if resize_ref.left != 0:
            for n in _previous_range(i, odd_takes_one=True):
                if n % 2 == 0:
                    adjacent = adjustments[n]
                    if adjacent is not None:
                        adjacent.right += resize_ref.left
                    else:
                        adjustments[n] = Rect(right=resize_ref.left)
            if adjustments[i] is not None:
                adjustments[i].left = 0

        if resize_ref.top != 0:
            for n in _previous_range(i, odd_takes_one=False):
                if n % 2 != 0:
                    adjacent = adjustments[n]
                    if adjacent is not None:
                        adjacent.bottom += resize_ref.top
                    else:
                        adjustments[n] = Rect(bottom=resize_ref.top)
            if adjustments[i] is not None:
                adjustments[i].top = 0

    return [None if a is None or a == Rect() else a for a in adjustments]


def _fibonacci(
    count: int,
    area: Rect,
    layout_flip: Axis | None,
    adjustments: Sequence[Rect | None],
) -> list[Rect]:
    result: list[Rect] = []
    for idx in range(count):
        adjustment = adjustments[idx] if idx < len(adjustments) else None
        if adjustment is None:
            resized = replace(area)
        else:
            resized = Rect(
                left=area.left + adjustment.left,
                top=area.top + adjustment.top,
                right=area.right + adjustment.right,
                bottom=area.bottom + adjustment.bottom,
            )

        half_width = _div(area.right, 2)
        half_height = _div(area.bottom, 2)
        half_resized_width = _div(resized.right, 2)
        half_resized_height = _div(resized.bottom, 2)

        main_x = resized.left
        alt_x = resized.left + half_resized_width
        main_y = resized.top
        alt_y = resized.top + half_resized_height
        if layout_flip in _HORIZONTAL_FLIPS:
            main_x = resized.left + half_width + (half_width - half_resized_width)
            alt_x = resized.left
        if layout_flip in _VERTICAL_FLIPS:
            main_y = resized.top + half_height + (half_height - half_resized_height)
            alt_y = resized.top

        if idx == count - 1:
            result.append(resized)
            break

        if idx % 2 != 0:
            result.append(
                Rect(
                    left=resized.left,
                    top=main_y,
                    right=resized.right,
                    bottom=half_resized_height,
                )
            )
            area = Rect(
                left=area.left,
                top=alt_y,
                right=area.right,
                bottom=area.bottom - half_resized_height,
            )
        else:
            result.append(
                Rect(
                    left=main_x,
                    top=resized.top,
                    right=half_resized_width,
                    bottom=resized.bottom,
                )
            )
            area = Rect(
                left=alt_x,
                top=area.top,
                right=area.right - half_resized_width,
                bottom=area.bottom,
            )
    return result


def _vertical_stack(area: Rect, length: int, layout_flip: Axis | None) -> list[Rect]:
    primary_right = area.right if length == 1 else _div(area.right, 2)
    main_left = area.left
    stack_left = area.left + primary_right
    if layout_flip in _HORIZONTAL_FLIPS and length > 1:
        main_left = area.left + area.right - primary_right
        stack_left = area.left

    layouts = [Rect(left=main_left, top=area.top, right=primary_right, bottom=area.bottom)]
    if length > 1:
        stack = Rect(
            left=stack_left,
            top=area.top,
            right=area.right - primary_right,
            bottom=area.bottom,
        )
        layouts.extend(rows(stack, length - 1))
    return layouts


def _horizontal_stack(area: Rect, length: int, layout_flip: Axis | None) -> list[Rect]:
    bottom = area.bottom if length == 1 else _div(area.bottom, 2)
    main_top = area.top
    stack_top = area.top + bottom
    if layout_flip in _VERTICAL_FLIPS and length > 1:
        main_top = area.top + area.bottom - bottom
        stack_top = area.top

    layouts = [Rect(left=area.left, top=main_top, right=area.right, bottom=bottom)]
    if length > 1:
        stack = Rect(
            left=area.left,
            top=stack_top,
            right=area.right,
            bottom=area.bottom - bottom,
        )
        layouts.extend(columns(stack, length - 1))
    return layouts


def _resize_left(rect: Rect, resize: int) -> None:
    rect.left += _div(resize, 2)
    rect.right += _div(-resize, 2)


def _resize_right(rect: Rect, resize: int) -> None:
    rect.right += _div(resize, 2)


def _resize_top(rect: Rect, resize: int) -> None:
    rect.top += _div(resize, 2)
    rect.bottom += _div(-resize, 2)


def _resize_bottom(rect: Rect, resize: int) -> None:
    rect.bottom += _div(resize, 2)


def _ultrawide_adjustment(resize_dimensions: Sequence[Rect | None]) -> list[Rect]:
    result = [Rect() for _ in resize_dimensions]
    if len(result) < 2:
        return result

    primary, secondary = result[0], result[1]
    first, second = resize_dimensions[0], resize_dimensions[1]

    if len(result) == 2:
        # With two containers, container 0 is on the right
        if first is not None:
            _resize_left(primary, first.left)
            _resize_right(secondary, first.left)
        if second is not None:
            _resize_left(primary, second.right)
            _resize_right(secondary, second.right)
        return result

    tertiary = result[2:]
    # Container 0 is in the centre
    if first is not None:
        _resize_left(primary, first.left)
        _resize_right(primary, first.right)
        _resize_right(secondary, first.left)
        for element in tertiary:
            _resize_left(element, first.right)

    # Container 1 is on the left
    if second is not None:
        _resize_left(primary, second.right)
        _resize_right(secondary, second.right)

    # The stack is on the right
    for i, rect in enumerate(resize_dimensions[2:]):
        if rect is None:
            continue
        _resize_right(primary, rect.left)
        for element in tertiary:
            _resize_left(element, rect.left)
        if i != 0:
            _resize_bottom(tertiary[i - 1], rect.top)
            _resize_top(tertiary[i], rect.top)
        if i != len(tertiary) - 1:
            _resize_bottom(tertiary[i], rect.bottom)
            _resize_top(tertiary[i + 1], rect.bottom)

    return result


def _ultrawide(
    area: Rect,
    length: int,
    layout_flip: Axis | None,
    resize_dimensions: Sequence[Rect | None],
) -> list[Rect]:
    primary_right = area.right if length == 1 else _div(area.right, 2)
    if length == 1:
        secondary_right = 0
    elif length == 2:
        secondary_right = area.right - primary_right
    else:
        secondary_right = _div(area.right - primary_right, 2)

    flipped = layout_flip in _HORIZONTAL_FLIPS
    if length == 1:
        primary_left, secondary_left, stack_left = area.left, 0, 0
    elif length == 2:
        if flipped:
            primary_left, secondary_left = area.left, area.left + primary_right
        else:
            primary_left, secondary_left = area.left + secondary_right, area.left
        stack_left = 0
    else:
        primary_left = area.left + secondary_right
        far_right = area.left + primary_right + secondary_right
        if flipped:
            secondary_left, stack_left = far_right, area.left
        else:
            secondary_left, stack_left = area.left, far_right

    layouts = [Rect(left=primary_left, top=area.top, right=primary_right, bottom=area.bottom)]
    if length >= 2:
        layouts.append(
            Rect(left=secondary_left, top=area.top, right=secondary_right, bottom=area.bottom)
        )
    if length > 2:
        stack = Rect(left=stack_left, top=area.top, right=secondary_right, bottom=area.bottom)
        layouts.extend(rows(stack, length - 2))

    for layout, adjustment in zip(layouts, _ultrawide_adjustment(resize_dimensions)):
        layout.top += adjustment.top
        layout.bottom += adjustment.bottom
        layout.left += adjustment.left
        layout.right += adjustment.right

    return layouts


def _default_arrangement(
    layout: DefaultLayout,
    area: Rect,
    length: int,
    layout_flip: Axis | None,
    resize_dimensions: Sequence[Rect | None],
) -> list[Rect]:
    if layout is DefaultLayout.BSP:
        return _fibonacci(
            length, area, layout_flip, calculate_resize_adjustments(resize_dimensions)
        )
    if layout is DefaultLayout.COLUMNS:
        return columns(area, length)
    if layout is DefaultLayout.ROWS:
        return rows(area, length)
    if layout is DefaultLayout.VERTICAL_STACK:
        return _vertical_stack(area, length, layout_flip)
    if layout is DefaultLayout.HORIZONTAL_STACK:
        return _horizontal_stack(area, length, layout_flip)
    return _ultrawide(area, length, layout_flip, resize_dimensions)


def _custom_arrangement(layout: CustomLayout, area: Rect, length: int) -> list[Rect]:
    column_count = len(layout)
    if length < column_count:
        return columns(area, length)

    counts = layout.column_container_counts()
    # The tertiary column is never in the counts, so it is left out of the threshold
    tertiary_threshold = sum(counts[i] for i in range(column_count - 1))

    # Until there are enough containers to fill the tertiary column, leave it out
    # so that no empty column takes up screen space
    offset = None if length > tertiary_threshold else 1

    percentage = layout.primary_width_percentage()
    if percentage is None:
        primary_right = _div(area.right, column_count)
    else:
        primary_right = _div(area.right, 100) * int(percentage)

    dimensions: list[Rect] = []
    for idx, column in enumerate(layout):
        if idx >= column_count - (offset or 0):
            continue

        last_column = None if idx == 0 else dimensions[layout.first_container_idx(idx - 1)]
        column_area = CustomLayout.column_area_with_last(
            column_count, area, primary_right, last_column, offset
        )
        config = column.configuration

        if column.kind is ColumnKind.PRIMARY and isinstance(config, ColumnWidth):
            dimensions.append(CustomLayout.main_column_area(area, primary_right, last_column))
        elif column.kind is ColumnKind.TERTIARY:
            remaining = length - tertiary_threshold
            if config is ColumnSplit.HORIZONTAL:
                dimensions.extend(rows(column_area, remaining))
            else:
                dimensions.extend(columns(column_area, remaining))
        elif isinstance(config, ColumnSplitWithCapacity):
            if config.split is ColumnSplit.HORIZONTAL:
                dimensions.extend(rows(column_area, config.capacity))
            else:
                dimensions.extend(columns(column_area, config.capacity))
        else:
            dimensions.append(column_area)

    return dimensions


def calculate(
    layout: DefaultLayout | CustomLayout,
    area: Rect,
    length: int,
    container_padding: int | None = None,
    layout_flip: Axis | None = None,
    resize_dimensions: Sequence[Rect | None] = (),
) -> list[Rect]:
    """Return the rectangle of each of ``length`` containers tiled over ``area``."""
    if length < 1:
        raise ValueError("length must be at least 1")

    if isinstance(layout, DefaultLayout):
        dimensions = _default_arrangement(
            layout, area, length, layout_flip, list(resize_dimensions)
        )
    elif isinstance(layout, CustomLayout):
        dimensions = _custom_arrangement(layout, area, length)
    else:
        raise TypeError(f"unsupported layout type: {type(layout).__name__}")

    for rect in dimensions:
        rect.add_padding(container_padding)
    return dimensions