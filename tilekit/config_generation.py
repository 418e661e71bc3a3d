"""Application configuration files and the scripts generated from them."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import yaml

from tilekit.kinds import ApplicationIdentifier, _SnakeEnum

_COMMAND = "komorebic.exe"
_TRAY_NOTE = (
    "If you have disabled minimize/close to tray for this application, "
    "you can delete/comment out the next line"
)

_IDENTIFIER_NAMES = {
    ApplicationIdentifier.EXE: "Exe",
    ApplicationIdentifier.CLASS: "Class",
    ApplicationIdentifier.TITLE: "Title",
}
_IDENTIFIER_LOOKUP = {
    **{name: kind for kind, name in _IDENTIFIER_NAMES.items()},
    **{kind.value: kind for kind in ApplicationIdentifier},
}


class ConfigurationError(ValueError):
    """Raised when an application configuration document cannot be used."""


class ApplicationOptions(_SnakeEnum):
    OBJECT_NAME_CHANGE = "object_name_change"
    LAYERED = "layered"
    BORDER_OVERFLOW = "border_overflow"
    TRAY_AND_MULTI_WINDOW = "tray_and_multi_window"
    FORCE = "force"

    def raw_cfgen(self, kind: ApplicationIdentifier, id: str) -> str:
        """Return the command line that applies this option to an application."""
        return f'{_COMMAND} {_OPTION_COMMANDS[self]} {kind} "{id}"'

    def cfgen(self, kind: ApplicationIdentifier, id: str) -> str:
        """Return the command wrapped in an AutoHotkey ``RunWait`` call."""
        return f"RunWait('{self.raw_cfgen(kind, id)}', , \"Hide\")"


_OPTION_COMMANDS = {
    ApplicationOptions.OBJECT_NAME_CHANGE: "identify-object-name-change-application",
    ApplicationOptions.LAYERED: "identify-layered-application",
    ApplicationOptions.BORDER_OVERFLOW: "identify-border-overflow-application",
    ApplicationOptions.TRAY_AND_MULTI_WINDOW: "identify-tray-application",
    ApplicationOptions.FORCE: "manage-rule",
}
_OPTION_LOOKUP = {option.value: option for option in ApplicationOptions}


class MatchingStrategy(str, Enum):
    LEGACY = "Legacy"
    EQUALS = "Equals"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"
    CONTAINS = "Contains"
    REGEX = "Regex"


_STRATEGY_LOOKUP = {strategy.value: strategy for strategy in MatchingStrategy}


def _lookup(table: Mapping[str, Any], value: object, what: str) -> Any:
    try:
        return table[value]  # type: ignore[index]
    except (KeyError, TypeError):
        raise ConfigurationError(f"unknown {what}: {value!r}") from None


def _mapping(value: object, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{what} must be a mapping")
    return value


def _required_str(data: Mapping[str, Any], key: str, what: str) -> str:
    if key not in data:
        raise ConfigurationError(f"{what} is missing the field {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise ConfigurationError(f"{what} field {key!r} must be a string")
    return value


def _optional_list(data: Mapping[str, Any], key: str, what: str) -> list[Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ConfigurationError(f"{what} field {key!r} must be a list")
    return value


def _optional_strategy(data: Mapping[str, Any]) -> MatchingStrategy | None:
    value = data.get("matching_strategy")
    if value is None:
        return None
    return _lookup(_STRATEGY_LOOKUP, value, "matching strategy")


@dataclass
class IdWithIdentifier:
    """An application identified by exe name, window class or title."""

    kind: ApplicationIdentifier
    id: str
    matching_strategy: MatchingStrategy | None = None


@dataclass
class IdWithIdentifierAndComment:
    """An application identifier with an optional explanatory comment."""

    kind: ApplicationIdentifier
    id: str
    comment: str | None = None
    matching_strategy: MatchingStrategy | None = None

    def to_id_with_identifier(self) -> IdWithIdentifier:
        """Return the identifier without its comment."""
        return IdWithIdentifier(self.kind, self.id, self.matching_strategy)


def _identifier_from_data(value: object) -> IdWithIdentifier:
    data = _mapping(value, "an identifier")
    kind = _lookup(_IDENTIFIER_LOOKUP, data.get("kind"), "application identifier")
    return IdWithIdentifier(
        kind=kind,
        id=_required_str(data, "id", "an identifier"),
        matching_strategy=_optional_strategy(data),
    )


def _identifier_to_data(identifier: IdWithIdentifier) -> dict[str, Any]:
    data: dict[str, Any] = {
        "kind": _IDENTIFIER_NAMES[identifier.kind],
        "id": identifier.id,
    }
    if identifier.matching_strategy is not None:
        data["matching_strategy"] = identifier.matching_strategy.value
    return data


def _float_from_data(value: object) -> IdWithIdentifierAndComment:
    data = _mapping(value, "a float identifier")
    kind = _lookup(_IDENTIFIER_LOOKUP, data.get("kind"), "application identifier")
    comment = data.get("comment")
    if comment is not None and not isinstance(comment, str):
        raise ConfigurationError("a float identifier comment must be a string")
    return IdWithIdentifierAndComment(
        kind=kind,
        id=_required_str(data, "id", "a float identifier"),
        comment=comment,
        matching_strategy=_optional_strategy(data),
    )


def _float_to_data(identifier: IdWithIdentifierAndComment) -> dict[str, Any]:
    data: dict[str, Any] = {
        "kind": _IDENTIFIER_NAMES[identifier.kind],
        "id": identifier.id,
    }
    if identifier.comment is not None:
        data["comment"] = identifier.comment
    if identifier.matching_strategy is not None:
        data["matching_strategy"] = identifier.matching_strategy.value
    return data


@dataclass
class ApplicationConfiguration:
    """The rules that apply to one named application."""

    name: str
    identifier: IdWithIdentifier
    options: list[ApplicationOptions] | None = None
    float_identifiers: list[IdWithIdentifierAndComment] | None = None

    @classmethod
    def from_data(cls, data: object) -> ApplicationConfiguration:
        """Build a configuration from its parsed YAML form."""
        mapping = _mapping(data, "an application configuration")
        name = _required_str(mapping, "name", "an application configuration")
        if "identifier" not in mapping:
            raise ConfigurationError(f"application {name!r} has no identifier")
        options = _optional_list(mapping, "options", "an application configuration")
        floats = _optional_list(mapping, "float_identifiers", "an application configuration")
        return cls(
            name=name,
            identifier=_identifier_from_data(mapping["identifier"]),
            options=None
            if options is None
            else [_lookup(_OPTION_LOOKUP, item, "application option") for item in options],
            float_identifiers=None
            if floats is None
            else [_float_from_data(item) for item in floats],
        )

    def to_data(self) -> dict[str, Any]:
        """Return the configuration in its serialisable form, omitting unset fields."""
        data: dict[str, Any] = {
            "name": self.name,
            "identifier": _identifier_to_data(self.identifier),
        }
        if self.options is not None:
            data["options"] = [option.value for option in self.options]
        if self.float_identifiers is not None:
            data["float_identifiers"] = [_float_to_data(f) for f in self.float_identifiers]
        return data

    def populate_default_matching_strategies(self) -> None:
        """Give exe identifiers without a strategy the ``Equals`` strategy."""
        if (
            self.identifier.matching_strategy is None
            and self.identifier.kind is ApplicationIdentifier.EXE
        ):
            self.identifier.matching_strategy = MatchingStrategy.EQUALS


def load(content: str) -> list[ApplicationConfiguration]:
    """Parse a YAML document holding a list of application configurations."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"could not parse configuration: {exc}") from exc
    if not isinstance(data, list):
        raise ConfigurationError("the configuration must be a list of applications")
    return [ApplicationConfiguration.from_data(item) for item in data]


def format_configuration(content: str) -> str:
    """Return the document sorted by name with default matching strategies filled in."""
    configs = load(content)
    for config in configs:
        config.populate_default_matching_strategies()
    configs.sort(key=lambda config: config.name)
    return yaml.safe_dump(
        [config.to_data() for config in configs], sort_keys=False, allow_unicode=True
    )


def _merge(base_content: str, override_content: str) -> list[ApplicationConfiguration]:
    base = load(base_content)
    merged = list(base)
    for entry in load(override_content):
        matches = [idx for idx, existing in enumerate(base) if existing.name == entry.name]
        if matches:
            merged[matches[-1]] = entry
        else:
            merged.append(entry)
    return merged


def _selected(base_content: str, override_content: str | None) -> list[ApplicationConfiguration]:
    configs = (
        load(base_content)
        if override_content is None
        else _merge(base_content, override_content)
    )
    configs.sort(key=lambda config: config.name)
    return configs


def _render(
    configs: Iterable[ApplicationConfiguration],
    comment: str,
    option_line: Callable[[ApplicationOptions, IdWithIdentifier], str],
    float_line: Callable[[IdWithIdentifierAndComment], str],
) -> list[str]:
    lines = [f"{comment} Generated by {_COMMAND}", ""]
    seen: set[str] = set()
    for app in configs:
        lines.append(f"{comment} {app.name}")
        for option in app.options or ():
            if option is ApplicationOptions.TRAY_AND_MULTI_WINDOW:
                lines.append(f"{comment} {_TRAY_NOTE}")
            lines.append(option_line(option, app.identifier))

        for floating in app.float_identifiers or ():
            rule = float_line(floating)
            # Each float rule is sent once, however many applications list it
            if rule in seen:
                continue
            seen.add(rule)
            if floating.comment is not None:
                lines.append(f"{comment} {floating.comment}")
            lines.append(rule)

        lines.append("")
    return lines


def generate_pwsh(base_content: str, override_content: str | None = None) -> list[str]:
    """Return the lines of a PowerShell script applying the configuration."""
    return _render(
        _selected(base_content, override_content),
        "#",
        lambda option, ident: option.raw_cfgen(ident.kind, ident.id),
        lambda floating: f'{_COMMAND} float-rule {floating.kind} "{floating.id}"',
    )


def generate_ahk(base_content: str, override_content: str | None = None) -> list[str]:
    """Return the lines of an AutoHotkey script applying the configuration."""
    return _render(
        _selected(base_content, override_content),
        ";",
        lambda option, ident: option.cfgen(ident.kind, ident.id),
        lambda floating: (
            f"RunWait('{_COMMAND} float-rule {floating.kind} \"{floating.id}\"', , \"Hide\")"
        ),
    )