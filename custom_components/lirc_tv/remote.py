from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any

from homeassistant.components.remote import (
    ATTR_DELAY_SECS,
    ATTR_NUM_REPEATS,
    DEFAULT_DELAY_SECS,
    RemoteEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.dispatcher import async_dispatcher_connect
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN, signal_state
from .device import LircTelevision, get_device_manufacturer, get_device_model


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    device: LircTelevision = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([LircRemote(device, entry)])


class LircRemote(RemoteEntity):
    _attr_has_entity_name = True
    _attr_should_poll = False
    _attr_assumed_state = True

    def __init__(self, device: LircTelevision, entry: ConfigEntry) -> None:
        self._device = device
        self._entry = entry
        self._attr_name = "Remote"
        self._attr_unique_id = f"{entry.entry_id}_remote"

    @property
    def device_info(self) -> DeviceInfo:
        return DeviceInfo(
            identifiers={(DOMAIN, self._entry.entry_id)},
            name=self._device.name,
            manufacturer=get_device_manufacturer(self._entry),
            model=get_device_model(self._entry),
        )

    @property
    def is_on(self) -> bool:
        return self._device.is_on

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {
            "remote": self._device.controller.remote,
            "remote_keys": list(self._device.commands.remote_keys),
        }

    async def async_added_to_hass(self) -> None:
        self.async_on_remove(
            async_dispatcher_connect(
                self.hass,
                signal_state(self._device.entry_id),
                self._schedule_update,
            )
        )

    @callback
    def _schedule_update(self) -> None:
        self.async_write_ha_state()

    async def async_turn_on(self, **kwargs: Any) -> None:
        await self._device.async_turn_on()

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self._device.async_turn_off()

    async def async_send_command(self, command: Iterable[str], **kwargs: Any) -> None:
        """Send configured remote keys, or raw lircd tokens for anything else."""
        if isinstance(command, str):
            commands = [command]
        else:
            commands = list(command)

        num_repeats = kwargs.get(ATTR_NUM_REPEATS, 1)
        delay_secs = kwargs.get(ATTR_DELAY_SECS, DEFAULT_DELAY_SECS)

        for repeat in range(num_repeats):
            for idx, cmd in enumerate(commands):
                if repeat or idx:
                    await asyncio.sleep(delay_secs)
                if self._device.has_remote_key(cmd):
                    await self._device.async_send_remote_key(cmd)
                else:
                    await self._device.async_send_commands([cmd])
