from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from .const import (
    CONF_INPUTS,
    CONF_MUTE_OFF,
    CONF_MUTE_ON,
    CONF_POWER_OFF,
    CONF_POWER_ON,
    CONF_REMOTE_KEYS,
    CONF_VOLUME_DOWN,
    CONF_VOLUME_UP,
)
from .lib.lirc import parse_token

_SPLIT_RE = re.compile(r"[,\n]")


@dataclass(slots=True)
class DeviceCommands:
    """Token lists for every action a device can perform."""

    power_on: list[str] = field(default_factory=list)
    power_off: list[str] = field(default_factory=list)
    mute_on: list[str] = field(default_factory=list)
    mute_off: list[str] = field(default_factory=list)
    volume_up: list[str] = field(default_factory=list)
    volume_down: list[str] = field(default_factory=list)
    inputs: dict[str, list[str]] = field(default_factory=dict)
    remote_keys: dict[str, list[str]] = field(default_factory=dict)

    @property
    def volume_supported(self) -> bool:
        # speaker controls only make sense when all four are configured
        return bool(self.mute_on and self.mute_off and self.volume_up and self.volume_down)

    @property
    def source_list(self) -> list[str]:
        return list(self.inputs)


def parse_command_list(raw: Any) -> list[str]:
    """Split ``"KEY_A, DELAY|500, KEY_B"`` into validated tokens.

    Lists are accepted too, so YAML style values pass straight through.
    Raises ``InvalidCommandError`` for a malformed token.
    """

    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        items = [str(item) for item in raw]
    else:
        items = _SPLIT_RE.split(str(raw))

    tokens: list[str] = []
    for item in items:
        item = item.strip()
        if not item:
            continue
        parse_token(item)
        tokens.append(item)
    return tokens


def parse_mapping(raw: Any) -> dict[str, list[str]]:
    """Parse ``Name: tokens`` lines into an ordered name → tokens mapping."""

    if not raw:
        return {}
    if isinstance(raw, Mapping):
        return {str(name).strip(): parse_command_list(cmds) for name, cmds in raw.items()}

    result: dict[str, list[str]] = {}
    for lineno, line in enumerate(str(raw).splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        name, sep, cmds = line.partition(":")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Line {lineno}: expected 'Name: commands', got {line!r}")
        result[name] = parse_command_list(cmds)
    return result


def format_command_list(tokens: list[str] | None) -> str:
    return ", ".join(tokens or [])


def format_mapping(mapping: Mapping[str, list[str]] | None) -> str:
    return "\n".join(
        f"{name}: {format_command_list(tokens)}" for name, tokens in (mapping or {}).items()
    )


def build_device_commands(options: Mapping[str, Any]) -> DeviceCommands:
    return DeviceCommands(
        power_on=parse_command_list(options.get(CONF_POWER_ON)),
        power_off=parse_command_list(options.get(CONF_POWER_OFF)),
        mute_on=parse_command_list(options.get(CONF_MUTE_ON)),
        mute_off=parse_command_list(options.get(CONF_MUTE_OFF)),
        volume_up=parse_command_list(options.get(CONF_VOLUME_UP)),
        volume_down=parse_command_list(options.get(CONF_VOLUME_DOWN)),
        inputs=parse_mapping(options.get(CONF_INPUTS)),
        remote_keys=parse_mapping(options.get(CONF_REMOTE_KEYS)),
    )
