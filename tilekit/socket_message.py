"""Command messages sent to the window manager over its socket."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from tilekit.default_layout import DefaultLayout
from tilekit.kinds import (
    ApplicationIdentifier,
    Axis,
    CycleDirection,
    FocusFollowsMouseImplementation,
    HidingBehaviour,
    MoveBehaviour,
    OperationBehaviour,
    OperationDirection,
    Sizing,
    StateQuery,
    WindowKind,
)
from tilekit.rect import Rect

_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1
_U32_MAX = 2**32 - 1
_USIZE_MAX = 2**64 - 1


@dataclass(frozen=True)
class _Arg:
    label: str
    coerce: Callable[[Any], Any]
    encode: Callable[[Any], Any]
    decode: Callable[[Any], Any]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _integer(label: str, low: int, high: int) -> _Arg:
    def check(value: object) -> int:
        if not _is_int(value) or not low <= value <= high:  # type: ignore[operator]
            raise ValueError(f"expected {label}, got {value!r}")
        return value  # type: ignore[return-value]

    return _Arg(label, check, lambda value: value, check)


def _check_bool(value: object) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected a boolean, got {value!r}")
    return value


def _check_str(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _coerce_path(value: object) -> Path:
    if not isinstance(value, (str, os.PathLike)):
        raise ValueError(f"expected a path, got {value!r}")
    return Path(value)


def _decode_path(value: object) -> Path:
    return Path(_check_str(value))


def _coerce_rect(value: object) -> Rect:
    if not isinstance(value, Rect):
        raise ValueError(f"expected a Rect, got {value!r}")
    return _rect_from_fields(value.left, value.top, value.right, value.bottom)


def _rect_from_fields(*fields: object) -> Rect:
    for field in fields:
        if not _is_int(field) or not _I32_MIN <= field <= _I32_MAX:  # type: ignore[operator]
            raise ValueError(f"rect fields must be 32-bit integers, got {field!r}")
    return Rect(*fields)  # type: ignore[arg-type]


def _encode_rect(rect: Rect) -> dict[str, int]:
    return {"left": rect.left, "top": rect.top, "right": rect.right, "bottom": rect.bottom}


def _decode_rect(value: object) -> Rect:
    if not isinstance(value, Mapping):
        raise ValueError(f"expected a rect object, got {value!r}")
    try:
        return _rect_from_fields(*(value[key] for key in ("left", "top", "right", "bottom")))
    except KeyError as exc:
        raise ValueError(f"rect is missing the field {exc.args[0]!r}") from None


def _coerce_strings(value: object) -> tuple[str, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ValueError(f"expected a list of strings, got {value!r}")
    return tuple(_check_str(item) for item in value)


def _decode_strings(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"expected a list of strings, got {value!r}")
    return _coerce_strings(value)


def _serde_name(member: Enum) -> str:
    if member is DefaultLayout.BSP:
        return "BSP"
    return "".join(part.capitalize() for part in member.name.split("_"))


def _enum(cls: type[Enum], aliases: bool = False) -> _Arg:
    names = {member: _serde_name(member) for member in cls}
    lookup: dict[str, Enum] = {name: member for member, name in names.items()}
    if aliases:
        lookup.update({member.value: member for member in cls})

    def coerce(value: object) -> Enum:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            raise ValueError(f"expected {cls.__name__}, got {value!r}") from None

    def decode(value: object) -> Enum:
        try:
            return lookup[value]  # type: ignore[index]
        except (KeyError, TypeError):
            raise ValueError(f"expected {cls.__name__}, got {value!r}") from None

    return _Arg(cls.__name__, coerce, names.__getitem__, decode)


_USIZE = _integer("an unsigned integer", 0, _USIZE_MAX)
_I32 = _integer("a 32-bit integer", _I32_MIN, _I32_MAX)
_U32 = _integer("an unsigned 32-bit integer", 0, _U32_MAX)
_BOOL = _Arg("bool", _check_bool, lambda value: value, _check_bool)
_STR = _Arg("string", _check_str, lambda value: value, _check_str)
_PATH = _Arg("path", _coerce_path, os.fspath, _decode_path)
_RECT = _Arg("rect", _coerce_rect, _encode_rect, _decode_rect)
_STRINGS = _Arg("strings", _coerce_strings, list, _decode_strings)

_OD = _enum(OperationDirection)
_CD = _enum(CycleDirection)
_SIZING = _enum(Sizing)
_AXIS = _enum(Axis)
_LAYOUT = _enum(DefaultLayout)
_APP = _enum(ApplicationIdentifier, aliases=True)
_FFM = _enum(FocusFollowsMouseImplementation)

_SCHEMA: dict[str, tuple[_Arg, ...]] = {
    # Window / container commands
    "FocusWindow": (_OD,),
    "MoveWindow": (_OD,),
    "CycleFocusWindow": (_CD,),
    "CycleMoveWindow": (_CD,),
    "StackWindow": (_OD,),
    "ResizeWindowEdge": (_OD, _SIZING),
    "ResizeWindowAxis": (_AXIS, _SIZING),
    "UnstackWindow": (),
    "CycleStack": (_CD,),
    "MoveContainerToMonitorNumber": (_USIZE,),
    "CycleMoveContainerToMonitor": (_CD,),
    "MoveContainerToWorkspaceNumber": (_USIZE,),
    "MoveContainerToNamedWorkspace": (_STR,),
    "CycleMoveContainerToWorkspace": (_CD,),
    "SendContainerToMonitorNumber": (_USIZE,),
    "CycleSendContainerToMonitor": (_CD,),
    "SendContainerToWorkspaceNumber": (_USIZE,),
    "CycleSendContainerToWorkspace": (_CD,),
    "SendContainerToMonitorWorkspaceNumber": (_USIZE, _USIZE),
    "SendContainerToNamedWorkspace": (_STR,),
    "MoveWorkspaceToMonitorNumber": (_USIZE,),
    "SwapWorkspacesToMonitorNumber": (_USIZE,),
    "ForceFocus": (),
    "Close": (),
    "Minimize": (),
    "Promote": (),
    "PromoteFocus": (),
    "ToggleFloat": (),
    "ToggleMonocle": (),
    "ToggleMaximize": (),
    "ToggleWindowContainerBehaviour": (),
    "WindowHidingBehaviour": (_enum(HidingBehaviour),),
    "ToggleCrossMonitorMoveBehaviour": (),
    "CrossMonitorMoveBehaviour": (_enum(MoveBehaviour),),
    "UnmanagedWindowOperationBehaviour": (_enum(OperationBehaviour),),
    # Current workspace commands
    "ManageFocusedWindow": (),
    "UnmanageFocusedWindow": (),
    "AdjustContainerPadding": (_SIZING, _I32),
    "AdjustWorkspacePadding": (_SIZING, _I32),
    "ChangeLayout": (_LAYOUT,),
    "CycleLayout": (_CD,),
    "ChangeLayoutCustom": (_PATH,),
    "FlipLayout": (_AXIS,),
    # Monitor and workspace commands
    "MonitorIndexPreference": (_USIZE, _I32, _I32, _I32, _I32),
    "EnsureWorkspaces": (_USIZE, _USIZE),
    "EnsureNamedWorkspaces": (_USIZE, _STRINGS),
    "NewWorkspace": (),
    "ToggleTiling": (),
    "Stop": (),
    "TogglePause": (),
    "Retile": (),
    "QuickSave": (),
    "QuickLoad": (),
    "Save": (_PATH,),
    "Load": (_PATH,),
    "CycleFocusMonitor": (_CD,),
    "CycleFocusWorkspace": (_CD,),
    "FocusMonitorNumber": (_USIZE,),
    "FocusWorkspaceNumber": (_USIZE,),
    "FocusWorkspaceNumbers": (_USIZE,),
    "FocusMonitorWorkspaceNumber": (_USIZE, _USIZE),
    "FocusNamedWorkspace": (_STR,),
    "ContainerPadding": (_USIZE, _USIZE, _I32),
    "NamedWorkspaceContainerPadding": (_STR, _I32),
    "FocusedWorkspaceContainerPadding": (_I32,),
    "WorkspacePadding": (_USIZE, _USIZE, _I32),
    "NamedWorkspacePadding": (_STR, _I32),
    "FocusedWorkspacePadding": (_I32,),
    "WorkspaceTiling": (_USIZE, _USIZE, _BOOL),
    "NamedWorkspaceTiling": (_STR, _BOOL),
    "WorkspaceName": (_USIZE, _USIZE, _STR),
    "WorkspaceLayout": (_USIZE, _USIZE, _LAYOUT),
    "NamedWorkspaceLayout": (_STR, _LAYOUT),
    "WorkspaceLayoutCustom": (_USIZE, _USIZE, _PATH),
    "NamedWorkspaceLayoutCustom": (_STR, _PATH),
    "WorkspaceLayoutRule": (_USIZE, _USIZE, _USIZE, _LAYOUT),
    "NamedWorkspaceLayoutRule": (_STR, _USIZE, _LAYOUT),
    "WorkspaceLayoutCustomRule": (_USIZE, _USIZE, _USIZE, _PATH),
    "NamedWorkspaceLayoutCustomRule": (_STR, _USIZE, _PATH),
    "ClearWorkspaceLayoutRules": (_USIZE, _USIZE),
    "ClearNamedWorkspaceLayoutRules": (_STR,),
    # Configuration
    "ReloadConfiguration": (),
    "ReloadStaticConfiguration": (_PATH,),
    "WatchConfiguration": (_BOOL,),
    "CompleteConfiguration": (),
    "AltFocusHack": (_BOOL,),
    "ActiveWindowBorder": (_BOOL,),
    "ActiveWindowBorderColour": (_enum(WindowKind), _U32, _U32, _U32),
    "ActiveWindowBorderWidth": (_I32,),
    "ActiveWindowBorderOffset": (_I32,),
    "InvisibleBorders": (_RECT,),
    "WorkAreaOffset": (_RECT,),
    "MonitorWorkAreaOffset": (_USIZE, _RECT),
    "ResizeDelta": (_I32,),
    "InitialWorkspaceRule": (_APP, _STR, _USIZE, _USIZE),
    "InitialNamedWorkspaceRule": (_APP, _STR, _STR),
    "WorkspaceRule": (_APP, _STR, _USIZE, _USIZE),
    "NamedWorkspaceRule": (_APP, _STR, _STR),
    "FloatRule": (_APP, _STR),
    "ManageRule": (_APP, _STR),
    "IdentifyObjectNameChangeApplication": (_APP, _STR),
    "IdentifyTrayApplication": (_APP, _STR),
    "IdentifyLayeredApplication": (_APP, _STR),
    "IdentifyBorderOverflowApplication": (_APP, _STR),
    "State": (),
    "Query": (_enum(StateQuery),),
    "FocusFollowsMouse": (_FFM, _BOOL),
    "ToggleFocusFollowsMouse": (_FFM,),
    "MouseFollowsFocus": (_BOOL,),
    "ToggleMouseFollowsFocus": (),
    "RemoveTitleBar": (_APP, _STR),
    "ToggleTitleBars": (),
    "AddSubscriber": (_STR,),
    "RemoveSubscriber": (_STR,),
    "NotificationSchema": (),
    "SocketSchema": (),
    "StaticConfigSchema": (),
    "GenerateStaticConfig": (),
}


class SocketMessage:
    """A named command and its arguments, checked against the command's signature."""

    __slots__ = ("name", "args")

    def __init__(self, name: str, *args: Any) -> None:
        try:
            fields = _SCHEMA[name]
        except (KeyError, TypeError):
            raise ValueError(f"unknown socket message: {name!r}") from None
        if len(args) != len(fields):
            raise ValueError(
                f"{name} takes {len(fields)} argument(s), {len(args)} given"
            )
        self.name = name
        self.args = tuple(field.coerce(arg) for field, arg in zip(fields, args))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SocketMessage):
            return NotImplemented
        return self.name == other.name and self.args == other.args

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rendered = "".join(f", {arg!r}" for arg in self.args)
        return f"SocketMessage({self.name!r}{rendered})"

    def __str__(self) -> str:
        return self.name

    def to_json(self) -> str:
        """Return the compact JSON form with ``type`` and ``content`` keys."""
        fields = _SCHEMA[self.name]
        data: dict[str, Any] = {"type": self.name}
        if len(fields) == 1:
            data["content"] = fields[0].encode(self.args[0])
        elif fields:
            data["content"] = [field.encode(arg) for field, arg in zip(fields, self.args)]
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    def as_bytes(self) -> bytes:
        """Return the JSON form encoded as UTF-8."""
        return self.to_json().encode("utf-8")

    @classmethod
    def from_str(cls, text: str) -> SocketMessage:
        """Parse a message from its JSON form."""
        data = json.loads(text)
        if not isinstance(data, dict) or "type" not in data:
            raise ValueError("a socket message must be an object with a 'type' key")
        name = data["type"]
        try:
            fields = _SCHEMA[name]
        except (KeyError, TypeError):
            raise ValueError(f"unknown socket message: {name!r}") from None

        content = data.get("content")
        if not fields:
            if content is not None:
                raise ValueError(f"{name} takes no content")
            return cls(name)
        if "content" not in data:
            raise ValueError(f"{name} is missing its content")
        if len(fields) == 1:
            return cls(name, fields[0].decode(content))
        if not isinstance(content, list) or len(content) != len(fields):
            raise ValueError(f"{name} expects a list of {len(fields)} values")
        return cls(name, *(field.decode(value) for field, value in zip(fields, content)))