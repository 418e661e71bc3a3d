"""AutoHotkey wrapper functions for the command line client."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_COMMAND = "komorebic.exe"
_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")
_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_kebab_case(name: str) -> str:
    """Convert a CamelCase or snake_case name to kebab-case."""
    words = [
        word
        for chunk in _SEPARATORS.split(name)
        if chunk
        for word in _BOUNDARY.split(chunk)
        if word
    ]
    return "-".join(word.lower() for word in words)


def _identifiers(names: Iterable[str], what: str) -> tuple[str, ...]:
    result = tuple(names)
    for name in result:
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError(f"invalid {what} name: {name!r}")
    return result


@dataclass(frozen=True)
class AhkFunction:
    """A command with positional arguments and ``--long`` flags."""

    name: str
    arguments: tuple[str, ...] = ()
    flags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.isidentifier():
            raise ValueError(f"invalid command name: {self.name!r}")
        object.__setattr__(self, "arguments", _identifiers(self.arguments, "argument"))
        object.__setattr__(self, "flags", _identifiers(self.flags, "flag"))

    def generate(self) -> str:
        """Return the AutoHotkey function that runs this command."""
        command = to_kebab_case(self.name)
        called = " ".join(f"%{argument}%" for argument in self.arguments)
        if not self.flags:
            parameters = ", ".join(self.arguments)
            invocation = f"{command} {called}"
        else:
            parameters = ", ".join((*self.arguments, *self.flags))
            flags = " ".join(
                f"--{flag.replace('_', '-')} %{flag}%" for flag in self.flags
            )
            invocation = f"{command} {called} {flags}"
        return (
            f"\n{self.name}({parameters}) {{\n"
            f"    RunWait, {_COMMAND} {invocation}, , Hide\n"
            "}"
        )


def _unit_function(name: str) -> str:
    if not isinstance(name, str) or not name.isidentifier():
        raise ValueError(f"invalid command name: {name!r}")
    return f"\n{name}() {{\n    RunWait, {_COMMAND} {to_kebab_case(name)}, , Hide\n}}"


def generate_ahk_library(entries: Iterable[AhkFunction | str]) -> str:
    """Return a library of functions; plain names become argument-less commands."""
    parts = [f"; Generated by {_COMMAND}"]
    for entry in entries:
        parts.append(entry.generate() if isinstance(entry, AhkFunction) else _unit_function(entry))
    return "\n".join(parts)