import pytest

from tilekit.custom_layout import (
    Column,
    ColumnKind,
    ColumnSplit,
    ColumnSplitWithCapacity,
    CustomLayout,
)
from tilekit.default_layout import DefaultLayout
from tilekit.direction import (
    destination,
    down_index,
    index_in_direction,
    is_valid_direction,
    left_index,
    right_index,
    up_index,
)
from tilekit.kinds import Axis, OperationDirection

LEFT = OperationDirection.LEFT
RIGHT = OperationDirection.RIGHT
UP = OperationDirection.UP
DOWN = OperationDirection.DOWN


def _custom() -> CustomLayout:
    return CustomLayout(
        [
            Column(ColumnKind.PRIMARY),
            Column(
                ColumnKind.SECONDARY,
                ColumnSplitWithCapacity(ColumnSplit.HORIZONTAL, 2),
            ),
            Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL),
        ]
    )


@pytest.mark.parametrize("layout", list(DefaultLayout))
@pytest.mark.parametrize("count", range(2, 7))
def test_default_results_match_validity_and_stay_in_range(layout, count):
    for direction in OperationDirection:
        for idx in range(count):
            result = index_in_direction(layout, direction, idx, count)
            valid = is_valid_direction(layout, direction, idx, count)
            assert (result is None) == (not valid)
            if result is not None:
                assert 0 <= result < count
                assert result != idx


@pytest.mark.parametrize("count", range(7, 12))
def test_custom_results_match_validity_and_stay_in_range(count):
    layout = _custom()
    for direction in OperationDirection:
        for idx in range(count):
            result = index_in_direction(layout, direction, idx, count)
            valid = is_valid_direction(layout, direction, idx, count)
            assert (result is None) == (not valid)
            if result is not None:
                assert 0 <= result < count
                assert result != idx


@pytest.mark.parametrize("count", range(2, 7))
def test_rows_up_and_down_are_inverse(count):
    for idx in range(1, count):
        above = index_in_direction(DefaultLayout.ROWS, UP, idx, count)
        assert index_in_direction(DefaultLayout.ROWS, DOWN, above, count) == idx


@pytest.mark.parametrize("count", range(2, 7))
def test_columns_left_and_right_are_inverse(count):
    for idx in range(1, count):
        left = index_in_direction(DefaultLayout.COLUMNS, LEFT, idx, count)
        assert index_in_direction(DefaultLayout.COLUMNS, RIGHT, left, count) == idx


@pytest.mark.parametrize("idx", range(5))
def test_columns_have_no_vertical_neighbours(idx):
    assert index_in_direction(DefaultLayout.COLUMNS, UP, idx, 5) is None
    assert index_in_direction(DefaultLayout.COLUMNS, DOWN, idx, 5) is None
    assert index_in_direction(DefaultLayout.ROWS, LEFT, idx, 5) is None
    assert index_in_direction(DefaultLayout.ROWS, RIGHT, idx, 5) is None


def test_bsp_down_then_up_returns():
    below = index_in_direction(DefaultLayout.BSP, DOWN, 1, 4)
    assert index_in_direction(DefaultLayout.BSP, UP, below, 4) == 1


def test_bsp_top_containers_cannot_move_up():
    assert index_in_direction(DefaultLayout.BSP, UP, 0, 5) is None
    assert index_in_direction(DefaultLayout.BSP, UP, 1, 5) is None
    assert is_valid_direction(DefaultLayout.BSP, UP, 2, 2) is False


def test_vertical_stack_left_goes_to_main():
    assert index_in_direction(DefaultLayout.VERTICAL_STACK, LEFT, 3, 5) == 0


def test_horizontal_stack_up_goes_to_main():
    assert index_in_direction(DefaultLayout.HORIZONTAL_STACK, UP, 3, 5) == 0


def test_ultrawide_left_and_right_of_centre_are_inverse():
    layout = DefaultLayout.ULTRAWIDE_VERTICAL_STACK
    assert right_index(layout, left_index(layout, 0)) == 0


@pytest.mark.parametrize(
    "step, layout, idx",
    [
        (up_index, DefaultLayout.COLUMNS, 1),
        (down_index, DefaultLayout.COLUMNS, 1),
        (left_index, DefaultLayout.ROWS, 1),
        (right_index, DefaultLayout.ROWS, 1),
        (left_index, DefaultLayout.ULTRAWIDE_VERTICAL_STACK, 1),
        (right_index, DefaultLayout.ULTRAWIDE_VERTICAL_STACK, 3),
        (up_index, DefaultLayout.BSP, 0),
    ],
)
def test_missing_neighbours_raise(step, layout, idx):
    with pytest.raises(ValueError):
        step(layout, idx)


def test_unsupported_layout_type():
    with pytest.raises(TypeError):
        is_valid_direction("bsp", UP, 0, 3)
    with pytest.raises(TypeError):
        left_index(object(), 1)


@pytest.mark.parametrize("count", range(1, 4))
def test_small_custom_layout_behaves_like_columns(count):
    layout = _custom()
    for direction in OperationDirection:
        for idx in range(count):
            assert index_in_direction(layout, direction, idx, count) == index_in_direction(
                DefaultLayout.COLUMNS, direction, idx, count
            )


def test_custom_right_moves_to_next_column():
    layout = _custom()
    result = index_in_direction(layout, RIGHT, 0, 6)
    column = layout.column_for_container_idx(0)
    assert layout.column_for_container_idx(result) == column + 1
    assert result == layout.first_container_idx(column + 1)


def test_custom_left_moves_to_first_of_previous_column():
    layout = _custom()
    column = layout.column_for_container_idx(4)
    result = index_in_direction(layout, LEFT, 4, 6)
    assert result == layout.first_container_idx(column - 1)
    assert layout.column_for_container_idx(result) == column - 1


def test_custom_left_from_second_column_reaches_primary():
    layout = _custom()
    assert index_in_direction(layout, LEFT, 1, 6) == layout.first_container_idx(0)


def test_custom_edges_have_no_horizontal_neighbours():
    layout = _custom()
    assert index_in_direction(layout, LEFT, 0, 6) is None
    assert index_in_direction(layout, RIGHT, 5, 6) is None
    assert index_in_direction(layout, RIGHT, 3, 6) is None


def test_custom_vertical_moves_stay_in_column():
    layout = _custom()
    assert index_in_direction(layout, UP, 2, 6) == 2 - 1
    below = index_in_direction(layout, DOWN, 3, 6)
    assert index_in_direction(layout, UP, below, 6) == 3


def test_custom_vertical_moves_do_not_cross_columns():
    layout = _custom()
    assert index_in_direction(layout, UP, 1, 6) is None
    assert index_in_direction(layout, DOWN, 2, 6) is None
    assert index_in_direction(layout, DOWN, 0, 6) is None
    assert index_in_direction(layout, UP, 0, 6) is None


def test_custom_left_index_from_first_column_raises():
    with pytest.raises(ValueError):
        left_index(_custom(), 0)


def test_destination_horizontal_flip_mirrors_left_and_right():
    assert destination(LEFT, DefaultLayout.COLUMNS, Axis.HORIZONTAL, 2, 5) == (
        index_in_direction(DefaultLayout.COLUMNS, RIGHT, 2, 5)
    )
    assert destination(UP, DefaultLayout.ROWS, Axis.HORIZONTAL, 2, 5) == (
        index_in_direction(DefaultLayout.ROWS, UP, 2, 5)
    )


def test_destination_vertical_flip_mirrors_up_and_down():
    assert destination(UP, DefaultLayout.ROWS, Axis.VERTICAL, 2, 5) == (
        index_in_direction(DefaultLayout.ROWS, DOWN, 2, 5)
    )
    assert destination(LEFT, DefaultLayout.COLUMNS, Axis.VERTICAL, 2, 5) == (
        index_in_direction(DefaultLayout.COLUMNS, LEFT, 2, 5)
    )


@pytest.mark.parametrize("direction", list(OperationDirection))
def test_destination_without_flip_matches_lookup(direction):
    assert destination(direction, DefaultLayout.BSP, None, 2, 5) == index_in_direction(
        DefaultLayout.BSP, direction, 2, 5
    )


def test_destination_requires_positive_length():
    with pytest.raises(ValueError):
        destination(LEFT, DefaultLayout.COLUMNS, None, 0, 0)