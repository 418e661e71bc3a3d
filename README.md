# tilekit

tilekit is a library for tiling window managers. It works out where windows
go on a screen. It finds which window lies next to another in a given
direction. It also produces the command and configuration text that such a
window manager uses.

## Modules

- `tilekit.rect`: `Rect` is a rectangle stored as `left`, `top`, `right` and
  `bottom`. Here `right` is the width and `bottom` is the height.
  - `Rect.from_corners` builds one from absolute corner coordinates.
  - `add_padding` shrinks it in place on every side.
  - `contains_point` tests a point, edges included.
- `tilekit.kinds`: the shared string enums.
  - `Axis` and `Sizing`.
  - `CycleDirection`, with `next_idx`, which wraps around.
  - `OperationDirection`, with `opposite` and `flip`.
  - `WindowKind`, `StateQuery` and `ApplicationIdentifier`.
  - The behaviour enums.
  - `str()` of a member gives its snake-case value. Lookup also accepts
    CamelCase names, so `Axis("HorizontalAndVertical")` works.
- `tilekit.default_layout`: `DefaultLayout` has six built-in layouts: BSP,
  columns, rows, vertical stack, horizontal stack and ultrawide vertical stack.
  - `cycle_next` and `cycle_previous` step through them.
  - `resize` returns the new resize adjustment for one edge. Only BSP and the
    ultrawide layout support resizing; every other layout returns `None`.
- `tilekit.custom_layout`: `CustomLayout` is a list of `Column` objects. Each
  column is primary, secondary or tertiary.
  - A primary column may have a `ColumnWidth`.
  - A secondary column may have a `ColumnSplitWithCapacity`.
  - A tertiary column has a `ColumnSplit`.
  - The class has helpers that map container indices to columns and compute
    column areas.
- `tilekit.arrangement`: `calculate(layout, area, length, container_padding,
  layout_flip, resize_dimensions)` returns one `Rect` per container, for
  either kind of layout. `columns`, `rows` and `calculate_resize_adjustments`
  are also public.
- `tilekit.direction`: `index_in_direction`, `is_valid_direction`, the
  `up_index`/`down_index`/`left_index`/`right_index` helpers, and `destination`.
  `destination` applies a layout flip before the lookup.
- `tilekit.layout`: `Layout` wraps a `DefaultLayout` or a `CustomLayout`.
  - It offers `calculate` and `index_in_direction`.
  - It converts to and from `{"Default": "BSP"}` or `{"Custom": [...]}` with
    `to_data` and `from_data`.
- `tilekit.config_generation`: loads a YAML list of application rules and
  turns them into scripts (see below).
- `tilekit.socket_message`: `SocketMessage` holds a command name and its
  arguments, checked against that command's signature. It converts to and
  from compact JSON.
- `tilekit.ahk`: generates AutoHotkey functions that wrap the `komorebic.exe`
  command-line client.

## Arranging windows

```python
from tilekit.rect import Rect
from tilekit.default_layout import DefaultLayout
from tilekit.arrangement import calculate

area = Rect(left=0, top=0, right=1920, bottom=1080)
for rect in calculate(DefaultLayout.VERTICAL_STACK, area, 3, 10, None, []):
    print(rect)
```

In this example:

- The first window takes the left half of the area.
- The other two windows split the right half as rows.
- Each rectangle is then inset by the padding.

`length` must be at least 1; otherwise `ValueError` is raised.

## Custom layouts

```python
from tilekit.custom_layout import CustomLayout

layout = CustomLayout.from_path("layout.json")
print(layout.primary_idx(), layout.column_for_container_idx(4))
```

A layout file is a list of entries such as
`{"column": "Primary", "configuration": {"WidthPercentage": 45}}` or
`{"column": "Tertiary", "configuration": "Horizontal"}`.

`from_path` raises `InvalidLayoutError` in these cases:

- the file does not end in `.json`, `.yaml` or `.yml`;
- the file cannot be parsed, or its columns are malformed;
- the layout is empty;
- the layout uses a vertical split;
- the last column is not the tertiary column;
- the layout does not have exactly one primary column and exactly one
  tertiary column.

## Moving focus

```python
from tilekit.default_layout import DefaultLayout
from tilekit.direction import destination
from tilekit.kinds import OperationDirection

target = destination(OperationDirection.RIGHT, DefaultLayout.BSP, None, 0, 4)
```

`target` is the index of the neighbouring window. It is `None` if there is no
window in that direction.

## Generating configuration scripts

```python
from pathlib import Path
from tilekit.config_generation import format_configuration, generate_ahk, generate_pwsh

base = Path("applications.yaml").read_text()
print("\n".join(generate_pwsh(base, None)))
print("\n".join(generate_ahk(base, None)))
print(format_configuration(base))
```

When an override document is passed as the second argument, its entries
replace base entries that have the same name. Entries with new names are
appended.

The output is sorted by application name. A float rule that appears more than
once is written only the first time.

`format_configuration` returns the document as YAML, sorted by name. An exe
identifier that has no matching strategy is given `Equals`.

A document that cannot be read raises `ConfigurationError`.

## Socket messages

```python
from tilekit.socket_message import SocketMessage

message = SocketMessage.from_str('{"type": "FocusWindow", "content": "Left"}')
payload = message.as_bytes()
```

Messages can also be built directly, for example
`SocketMessage("EnsureWorkspaces", 0, 3)`. An unknown command name or a
badly typed argument raises `ValueError`.

## AutoHotkey libraries

```python
from tilekit.ahk import AhkFunction, generate_ahk_library

library = generate_ahk_library([
    "Stop",
    AhkFunction("FocusWindow", arguments=("operation_direction",)),
])
```

In `generate_ahk_library`:

- A plain name becomes a function that takes no arguments.
- An `AhkFunction` also passes its arguments and its `--long` flags through to
  the command.

## What it does not do

tilekit only does calculation and text generation. It does not:

- manage, move or hide real windows;
- talk to an operating system;
- run a socket server, or send messages anywhere;
- provide a command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```