from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Optional

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.dispatcher import async_dispatcher_send

from .command_config import DeviceCommands
from .const import (
    CONF_MANUFACTURER,
    CONF_MODEL,
    DEFAULT_MANUFACTURER,
    DEFAULT_MODEL,
    signal_state,
)
from .lib.lirc import LircController, LircError

_LOGGER = logging.getLogger(__name__)


def get_device_manufacturer(entry: ConfigEntry) -> str:
    return entry.data.get(CONF_MANUFACTURER) or DEFAULT_MANUFACTURER


def get_device_model(entry: ConfigEntry) -> str:
    return entry.data.get(CONF_MODEL) or DEFAULT_MODEL


class LircTelevision:
    """One infrared-controlled television and its assumed state.

    State is never read back from the TV: it is whatever the last successful
    command sequence implies, and it is lost on restart.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        entry_id: str,
        name: str,
        controller: LircController,
        commands: DeviceCommands,
    ) -> None:
        self.hass = hass
        self.entry_id = entry_id
        self.name = name
        self.controller = controller
        self.commands = commands

        self.is_on: bool = False
        self.source: Optional[str] = None
        self.is_muted: bool = False

        # one sequence on the wire at a time per device
        self._lock = asyncio.Lock()

        _LOGGER.debug(
            "[%s] Created LIRC device %s (%s:%s remote=%s)",
            self.entry_id,
            name,
            controller.host,
            controller.port,
            controller.remote,
        )

    # ------------------------------------------------------------------
    # actions
    # ------------------------------------------------------------------
    async def async_turn_on(self) -> None:
        if not self.commands.power_on:
            raise HomeAssistantError(f"{self.name}: power on has not been configured")
        await self._async_run("power on", self.commands.power_on)
        self.is_on = True
        self._notify()

    async def async_turn_off(self) -> None:
        if not self.commands.power_off:
            raise HomeAssistantError(f"{self.name}: power off has not been configured")
        await self._async_run("power off", self.commands.power_off)
        self.is_on = False
        self._notify()

    async def async_select_source(self, source: str) -> None:
        if source not in self.commands.inputs:
            raise HomeAssistantError(f"Unknown input: {source}")
        await self._async_run(f"input {source}", self.commands.inputs[source])
        self.source = source
        self._notify()

    async def async_set_mute(self, mute: bool) -> None:
        await self._async_run(
            "mute on" if mute else "mute off",
            self.commands.mute_on if mute else self.commands.mute_off,
        )
        self.is_muted = mute
        self._notify()

    async def async_volume_up(self) -> None:
        await self._async_run("volume up", self.commands.volume_up)

    async def async_volume_down(self) -> None:
        await self._async_run("volume down", self.commands.volume_down)

    def has_remote_key(self, name: str) -> bool:
        return name in self.commands.remote_keys

    async def async_send_remote_key(self, name: str) -> None:
        if not self.has_remote_key(name):
            raise HomeAssistantError(f"This remote key has not been configured: {name}")
        await self._async_run(f"remote key {name}", self.commands.remote_keys[name])

    async def async_send_commands(self, tokens: Iterable[str]) -> None:
        await self._async_run("raw commands", list(tokens))

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    async def _async_run(self, action: str, tokens: list[str]) -> None:
        async with self._lock:
            _LOGGER.debug("[%s] %s -> %s", self.entry_id, action, tokens)
            try:
                await self.controller.async_send_commands(tokens)
            except LircError as err:
                _LOGGER.error("[%s] %s failed: %s", self.entry_id, action, err)
                raise HomeAssistantError(f"{self.name}: {action} failed: {err}") from err

    def _notify(self) -> None:
        async_dispatcher_send(self.hass, signal_state(self.entry_id))

    def as_dict(self) -> dict[str, Any]:
        return {
            "is_on": self.is_on,
            "source": self.source,
            "is_muted": self.is_muted,
            "sources": self.commands.source_list,
            "remote_keys": list(self.commands.remote_keys),
            "volume_supported": self.commands.volume_supported,
            "port": self.controller.port,
            "remote": self.controller.remote,
            "delay": self.controller.delay,
            "timeout": self.controller.timeout,
        }
