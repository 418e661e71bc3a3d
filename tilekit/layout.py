"""A layout that is either one of the built-in layouts or a custom one."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from tilekit import arrangement, direction
from tilekit.custom_layout import CustomLayout
from tilekit.default_layout import DefaultLayout
from tilekit.kinds import Axis, OperationDirection
from tilekit.rect import Rect

_SERIALISED_NAMES = {
    DefaultLayout.BSP: "BSP",
    DefaultLayout.COLUMNS: "Columns",
    DefaultLayout.ROWS: "Rows",
    DefaultLayout.VERTICAL_STACK: "VerticalStack",
    DefaultLayout.HORIZONTAL_STACK: "HorizontalStack",
    DefaultLayout.ULTRAWIDE_VERTICAL_STACK: "UltrawideVerticalStack",
}
_BY_SERIALISED_NAME = {name: layout for layout, name in _SERIALISED_NAMES.items()}


@dataclass
class Layout:
    """Wraps a built-in or custom layout behind one interface."""

    layout: DefaultLayout | CustomLayout

    def __post_init__(self) -> None:
        if not isinstance(self.layout, (DefaultLayout, CustomLayout)):
            raise TypeError(f"unsupported layout type: {type(self.layout).__name__}")

    @classmethod
    def from_data(cls, data: object) -> Layout:
        """Build a layout from ``{"Default": name}`` or ``{"Custom": [columns]}``."""
        if not isinstance(data, Mapping) or len(data) != 1:
            raise ValueError("a layout must be a mapping with exactly one key")
        ((key, value),) = data.items()
        if key == "Default":
            try:
                return cls(_BY_SERIALISED_NAME[value])
            except (KeyError, TypeError):
                raise ValueError(f"unknown default layout: {value!r}") from None
        if key == "Custom":
            return cls(CustomLayout.from_data(value))
        raise ValueError(f"unknown layout kind: {key!r}")

    def to_data(self) -> dict[str, Any]:
        """Return the layout in its serialisable form."""
        if isinstance(self.layout, DefaultLayout):
            return {"Default": _SERIALISED_NAMES[self.layout]}
        return {"Custom": self.layout.to_data()}

    def calculate(
        self,
        area: Rect,
        length: int,
        container_padding: int | None = None,
        layout_flip: Axis | None = None,
        resize_dimensions: Sequence[Rect | None] = (),
    ) -> list[Rect]:
        """Return the rectangle of each of ``length`` containers tiled over ``area``."""
        return arrangement.calculate(
            self.layout, area, length, container_padding, layout_flip, resize_dimensions
        )

    def index_in_direction(
        self, op_direction: OperationDirection, idx: int, count: int
    ) -> int | None:
        """Return the neighbour of container ``idx`` in ``op_direction``, or None."""
        return direction.index_in_direction(self.layout, op_direction, idx, count)