"""Column-based custom layouts loaded from JSON or YAML files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Any, Union

import yaml

from tilekit.rect import Rect


class InvalidLayoutError(ValueError):
    """Raised when a custom layout cannot be read or is not usable."""


class ColumnKind(str, Enum):
    PRIMARY = "Primary"
    SECONDARY = "Secondary"
    TERTIARY = "Tertiary"


class ColumnSplit(str, Enum):
    HORIZONTAL = "Horizontal"
    VERTICAL = "Vertical"


@dataclass(frozen=True)
class ColumnWidth:
    """A primary column's width as a percentage of the work area."""

    width_percentage: float

    def to_data(self) -> dict[str, float]:
        return {"WidthPercentage": self.width_percentage}


@dataclass(frozen=True)
class ColumnSplitWithCapacity:
    """A secondary column split in one direction holding a fixed number of containers."""

    split: ColumnSplit
    capacity: int

    def to_data(self) -> dict[str, int]:
        return {self.split.value: self.capacity}


ColumnConfiguration = Union[ColumnWidth, ColumnSplitWithCapacity, ColumnSplit, None]

_ALLOWED_CONFIGURATIONS: dict[ColumnKind, tuple[type, ...]] = {
    ColumnKind.PRIMARY: (ColumnWidth, type(None)),
    ColumnKind.SECONDARY: (ColumnSplitWithCapacity, type(None)),
    ColumnKind.TERTIARY: (ColumnSplit,),
}


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _single_entry(value: object, what: str) -> tuple[str, Any]:
    if not isinstance(value, Mapping) or len(value) != 1:
        raise InvalidLayoutError(f"{what} must be a mapping with exactly one key")
    ((key, inner),) = value.items()
    return key, inner


def _parse_split(value: object) -> ColumnSplit:
    try:
        return ColumnSplit(value)
    except (ValueError, TypeError):
        raise InvalidLayoutError(f"unknown column split: {value!r}") from None


def _parse_width(value: object) -> ColumnWidth:
    key, inner = _single_entry(value, "a column width")
    if key != "WidthPercentage" or not _is_number(inner):
        raise InvalidLayoutError(f"invalid column width: {value!r}")
    return ColumnWidth(float(inner))


def _parse_capacity(value: object) -> ColumnSplitWithCapacity:
    key, inner = _single_entry(value, "a column split with capacity")
    split = _parse_split(key)
    if not isinstance(inner, int) or isinstance(inner, bool) or inner < 0:
        raise InvalidLayoutError(f"invalid column capacity: {inner!r}")
    return ColumnSplitWithCapacity(split, inner)


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


@dataclass
class Column:
    """One column of a custom layout and its configuration."""

    kind: ColumnKind
    configuration: ColumnConfiguration = None

    def __post_init__(self) -> None:
        self.kind = ColumnKind(self.kind)
        if not isinstance(self.configuration, _ALLOWED_CONFIGURATIONS[self.kind]):
            raise InvalidLayoutError(
                f"{self.kind.value} column cannot take configuration {self.configuration!r}"
            )

    @classmethod
    def from_data(cls, data: object) -> Column:
        """Build a column from its ``{"column": ..., "configuration": ...}`` form."""
        if not isinstance(data, Mapping) or "column" not in data:
            raise InvalidLayoutError(f"invalid column: {data!r}")
        try:
            kind = ColumnKind(data["column"])
        except (ValueError, TypeError):
            raise InvalidLayoutError(f"unknown column kind: {data['column']!r}") from None

        raw = data.get("configuration")
        configuration: ColumnConfiguration
        if kind is ColumnKind.PRIMARY:
            configuration = None if raw is None else _parse_width(raw)
        elif kind is ColumnKind.SECONDARY:
            configuration = None if raw is None else _parse_capacity(raw)
        else:
            if raw is None:
                raise InvalidLayoutError("a tertiary column needs a split")
            configuration = _parse_split(raw)
        return cls(kind, configuration)

    def to_data(self) -> dict[str, Any]:
        """Return the column in its serialisable form."""
        config = self.configuration
        if config is None:
            payload: Any = None
        elif isinstance(config, ColumnSplit):
            payload = config.value
        else:
            payload = config.to_data()
        return {"column": self.kind.value, "configuration": payload}


class CustomLayout(list):
    """An ordered list of columns describing a user-defined layout."""

    @classmethod
    def from_data(cls, data: object) -> CustomLayout:
        """Build a layout from a list of column mappings."""
        if not isinstance(data, list):
            raise InvalidLayoutError("a custom layout must be a list of columns")
        return cls(Column.from_data(item) for item in data)

    def to_data(self) -> list[dict[str, Any]]:
        """Return the layout in its serialisable form."""
        return [column.to_data() for column in self]

    @classmethod
    def from_path(cls, path: str | PathLike[str]) -> CustomLayout:
        """Load and validate a layout from a ``.json``, ``.yaml`` or ``.yml`` file."""
        path = Path(path)
        try:
            if path.suffix in (".yaml", ".yml"):
                with path.open(encoding="utf-8") as handle:
                    data = yaml.safe_load(handle)
            elif path.suffix == ".json":
                with path.open(encoding="utf-8") as handle:
                    data = json.load(handle)
            else:
                raise InvalidLayoutError("custom layouts must be json or yaml files")
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise InvalidLayoutError(f"could not parse {path}: {exc}") from exc

        layout = cls.from_data(data)
        if not layout.is_valid():
            raise InvalidLayoutError("the layout file provided was invalid")
        return layout

    def column_with_idx(self, idx: int) -> tuple[int, Column | None]:
        """Return the column index holding container ``idx`` and that column."""
        column_idx = self.column_for_container_idx(idx)
        column = self[column_idx] if 0 <= column_idx < len(self) else None
        return column_idx, column

    def primary_idx(self) -> int | None:
        """Return the index of the primary column, if any."""
        return next(
            (i for i, column in enumerate(self) if column.kind is ColumnKind.PRIMARY),
            None,
        )

    def primary_width_percentage(self) -> float | None:
        """Return the width percentage of the primary column, if one is set."""
        for column in self:
            if column.kind is ColumnKind.PRIMARY and isinstance(
                column.configuration, ColumnWidth
            ):
                return column.configuration.width_percentage
        return None

    def set_primary_width_percentage(self, percentage: float) -> None:
        """Change the width percentage of every primary column that has one."""
        for column in self:
            if column.kind is ColumnKind.PRIMARY and isinstance(
                column.configuration, ColumnWidth
            ):
                column.configuration = ColumnWidth(percentage)

    def is_valid(self) -> bool:
        """Return whether the layout can be used for tiling."""
        if not self:
            return False

        for column in self:
            config = column.configuration
            if column.kind is ColumnKind.TERTIARY and config is ColumnSplit.VERTICAL:
                return False
            if (
                column.kind is ColumnKind.SECONDARY
                and isinstance(config, ColumnSplitWithCapacity)
                and config.split is ColumnSplit.VERTICAL
            ):
                return False

        if self[-1].kind is not ColumnKind.TERTIARY:
            return False

        primaries = sum(1 for c in self if c.kind is ColumnKind.PRIMARY)
        tertiaries = sum(1 for c in self if c.kind is ColumnKind.TERTIARY)
        return primaries == 1 and tertiaries == 1

    def column_container_counts(self) -> dict[int, int]:
        """Map each fixed-capacity column index to the containers it holds."""
        counts: dict[int, int] = {}
        for idx, column in enumerate(self):
            if column.kind is ColumnKind.TERTIARY:
                continue
            config = column.configuration
            counts[idx] = config.capacity if isinstance(config, ColumnSplitWithCapacity) else 1
        return counts

    def first_container_idx(self, col_idx: int) -> int:
        """Return the index of the first container placed in column ``col_idx``."""
        counts = self.column_container_counts()
        return sum(counts.get(i, 0) for i in range(col_idx))

    def column_for_container_idx(self, idx: int) -> int:
        """Return the index of the column that holds container ``idx``."""
        if not self:
            raise InvalidLayoutError("the layout has no columns")
        counts = self.column_container_counts()
        accumulated = 0
        for i in range(len(self) - 1):
            if i in counts:
                accumulated += counts[i]
                if accumulated > idx:
                    return i
        return len(self) - 1

    def column_area(self, work_area: Rect, idx: int, offset: int | None) -> Rect:
        """Return the area of column ``idx`` when all columns share the width equally."""
        divisor = len(self) if offset is None else len(self) - offset
        equal_width = _trunc_div(work_area.right, divisor)
        return Rect(
            left=work_area.left + equal_width * idx,
            top=work_area.top,
            right=equal_width,
            bottom=work_area.bottom,
        )

    @staticmethod
    def column_area_with_last(
        length: int,
        work_area: Rect,
        primary_right: int,
        last_column: Rect | None,
        offset: int | None,
    ) -> Rect:
        """Return a non-primary column's area placed right after ``last_column``."""
        divisor = length - 1 if offset is None else length - offset - 1
        equal_width = _trunc_div(work_area.right - primary_right, divisor)
        left = work_area.left if last_column is None else last_column.left + last_column.right
        return Rect(left=left, top=work_area.top, right=equal_width, bottom=work_area.bottom)

    @staticmethod
    def main_column_area(
        work_area: Rect, primary_right: int, last_column: Rect | None
    ) -> Rect:
        """Return the primary column's area placed right after ``last_column``."""
        left = work_area.left if last_column is None else last_column.left + last_column.right
        return Rect(left=left, top=work_area.top, right=primary_right, bottom=work_area.bottom)