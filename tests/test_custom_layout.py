import json

import pytest
import yaml

from tilekit.custom_layout import (
    Column,
    ColumnKind,
    ColumnSplit,
    ColumnSplitWithCapacity,
    ColumnWidth,
    CustomLayout,
    InvalidLayoutError,
)
from tilekit.rect import Rect


def _layout() -> CustomLayout:
    return CustomLayout(
        [
            Column(ColumnKind.PRIMARY, ColumnWidth(45.0)),
            Column(
                ColumnKind.SECONDARY,
                ColumnSplitWithCapacity(ColumnSplit.HORIZONTAL, 2),
            ),
            Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL),
        ]
    )


@pytest.mark.parametrize(
    "column",
    [
        Column(ColumnKind.PRIMARY),
        Column(ColumnKind.PRIMARY, ColumnWidth(30.5)),
        Column(ColumnKind.SECONDARY),
        Column(ColumnKind.SECONDARY, ColumnSplitWithCapacity(ColumnSplit.VERTICAL, 3)),
        Column(ColumnKind.TERTIARY, ColumnSplit.VERTICAL),
    ],
)
def test_column_round_trip(column):
    assert Column.from_data(column.to_data()) == column


def test_column_to_data_shape():
    assert Column(ColumnKind.PRIMARY).to_data() == {
        "column": "Primary",
        "configuration": None,
    }
    assert Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL).to_data() == {
        "column": "Tertiary",
        "configuration": "Horizontal",
    }
    secondary = Column(
        ColumnKind.SECONDARY, ColumnSplitWithCapacity(ColumnSplit.HORIZONTAL, 2)
    )
    assert secondary.to_data() == {
        "column": "Secondary",
        "configuration": {"Horizontal": 2},
    }


def test_column_from_data_without_configuration():
    column = Column.from_data({"column": "Secondary"})
    assert column.kind is ColumnKind.SECONDARY
    assert column.configuration is None


def test_column_from_data_integer_width_becomes_float():
    column = Column.from_data(
        {"column": "Primary", "configuration": {"WidthPercentage": 45}}
    )
    assert column.configuration == ColumnWidth(45.0)


@pytest.mark.parametrize(
    "data",
    [
        {"column": "Quaternary"},
        {"configuration": "Horizontal"},
        {"column": "Tertiary"},
        {"column": "Tertiary", "configuration": "Diagonal"},
        {"column": "Secondary", "configuration": {"Horizontal": -1}},
        {"column": "Secondary", "configuration": {"Diagonal": 2}},
        {"column": "Secondary", "configuration": {"Horizontal": True}},
        {"column": "Primary", "configuration": {"WidthPercentage": "wide"}},
        {"column": "Primary", "configuration": {"Height": 50}},
        "Primary",
    ],
)
def test_column_from_data_rejects_bad_input(data):
    with pytest.raises(InvalidLayoutError):
        Column.from_data(data)


def test_column_rejects_mismatched_configuration():
    with pytest.raises(InvalidLayoutError):
        Column(ColumnKind.TERTIARY, None)
    with pytest.raises(InvalidLayoutError):
        Column(ColumnKind.PRIMARY, ColumnSplit.HORIZONTAL)


def test_layout_round_trip():
    layout = _layout()
    assert CustomLayout.from_data(layout.to_data()) == layout


def test_layout_from_data_requires_list():
    with pytest.raises(InvalidLayoutError):
        CustomLayout.from_data({"column": "Primary"})


def test_from_path_json(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps(_layout().to_data()), encoding="utf-8")
    assert CustomLayout.from_path(path) == _layout()


@pytest.mark.parametrize("suffix", ["yaml", "yml"])
def test_from_path_yaml(tmp_path, suffix):
    path = tmp_path / f"layout.{suffix}"
    path.write_text(yaml.safe_dump(_layout().to_data()), encoding="utf-8")
    assert CustomLayout.from_path(path) == _layout()


@pytest.mark.parametrize("name", ["layout.toml", "layout"])
def test_from_path_rejects_other_files(tmp_path, name):
    path = tmp_path / name
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(InvalidLayoutError, match="json or yaml"):
        CustomLayout.from_path(path)


def test_from_path_rejects_invalid_layout(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps([{"column": "Primary"}]), encoding="utf-8")
    with pytest.raises(InvalidLayoutError, match="invalid"):
        CustomLayout.from_path(path)


def test_from_path_rejects_malformed_json(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(InvalidLayoutError):
        CustomLayout.from_path(path)


def test_from_path_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CustomLayout.from_path(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "columns, expected",
    [
        ([], False),
        (
            [
                Column(ColumnKind.PRIMARY),
                Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL),
            ],
            True,
        ),
        (
            [
                Column(ColumnKind.PRIMARY),
                Column(ColumnKind.TERTIARY, ColumnSplit.VERTICAL),
            ],
            False,
        ),
        (
            [
                Column(ColumnKind.PRIMARY),
                Column(
                    ColumnKind.SECONDARY,
                    ColumnSplitWithCapacity(ColumnSplit.VERTICAL, 2),
                ),
                Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL),
            ],
            False,
        ),
        (
            [
                Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL),
                Column(ColumnKind.PRIMARY),
            ],
            False,
        ),
        (
            [
                Column(ColumnKind.PRIMARY),
                Column(ColumnKind.PRIMARY),
                Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL),
            ],
            False,
        ),
        (
            [
                Column(ColumnKind.SECONDARY),
                Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL),
            ],
            False,
        ),
    ],
)
def test_is_valid(columns, expected):
    assert CustomLayout(columns).is_valid() is expected


def test_sample_layout_is_valid():
    assert _layout().is_valid() is True


def test_primary_idx_points_at_primary():
    layout = CustomLayout(
        [
            Column(ColumnKind.SECONDARY),
            Column(ColumnKind.PRIMARY),
            Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL),
        ]
    )
    assert layout[layout.primary_idx()].kind is ColumnKind.PRIMARY
    assert CustomLayout([Column(ColumnKind.SECONDARY)]).primary_idx() is None


def test_primary_width_percentage_get_and_set():
    layout = _layout()
    assert layout.primary_width_percentage() == 45.0
    layout.set_primary_width_percentage(60.0)
    assert layout.primary_width_percentage() == 60.0


def test_set_primary_width_percentage_ignores_unset_width():
    layout = CustomLayout(
        [Column(ColumnKind.PRIMARY), Column(ColumnKind.TERTIARY, ColumnSplit.HORIZONTAL)]
    )
    layout.set_primary_width_percentage(60.0)
    assert layout.primary_width_percentage() is None


def test_column_container_counts_skip_tertiary():
    assert _layout().column_container_counts() == {0: 1, 1: 2}


def test_first_container_and_column_lookup_agree():
    layout = _layout()
    for col in range(len(layout)):
        assert layout.column_for_container_idx(layout.first_container_idx(col)) == col


def test_overflow_containers_land_in_last_column():
    layout = _layout()
    assert layout.column_for_container_idx(100) == len(layout) - 1


def test_column_with_idx_returns_matching_column():
    layout = _layout()
    for idx in range(6):
        column_idx, column = layout.column_with_idx(idx)
        assert column is layout[column_idx]


def test_column_for_container_idx_on_empty_layout():
    with pytest.raises(InvalidLayoutError):
        CustomLayout().column_for_container_idx(0)


def test_column_area_columns_are_adjacent():
    layout = _layout()
    work_area = Rect(left=100, top=20, right=1900, bottom=1000)
    first = layout.column_area(work_area, 0, None)
    assert first.left == work_area.left
    for idx in range(1, len(layout)):
        area = layout.column_area(work_area, idx, None)
        assert area.left == work_area.left + idx * first.right
        assert area.right == first.right
        assert (area.top, area.bottom) == (work_area.top, work_area.bottom)
    assert first.right * len(layout) <= work_area.right


def test_column_area_offset_widens_columns():
    layout = _layout()
    work_area = Rect(0, 0, 1900, 1000)
    assert layout.column_area(work_area, 0, 1).right > layout.column_area(
        work_area, 0, None
    ).right


def test_column_area_with_last_follows_previous_column():
    work_area = Rect(left=50, top=10, right=1600, bottom=900)
    last = Rect(left=50, top=10, right=700, bottom=900)
    area = CustomLayout.column_area_with_last(3, work_area, 700, last, None)
    assert area.left == last.left + last.right
    assert (area.top, area.bottom) == (work_area.top, work_area.bottom)
    first = CustomLayout.column_area_with_last(3, work_area, 700, None, None)
    assert first.left == work_area.left
    widened = CustomLayout.column_area_with_last(3, work_area, 700, last, 1)
    assert widened.right > area.right


def test_main_column_area_uses_primary_width():
    work_area = Rect(left=50, top=10, right=1600, bottom=900)
    last = Rect(left=50, top=10, right=400, bottom=900)
    area = CustomLayout.main_column_area(work_area, 720, last)
    assert area.right == 720
    assert area.left == last.left + last.right
    assert CustomLayout.main_column_area(work_area, 720, None).left == work_area.left