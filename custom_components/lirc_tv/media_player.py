# custom_components/lirc_tv/media_player.py
from __future__ import annotations

from homeassistant.components.media_player import (
    MediaPlayerDeviceClass,
    MediaPlayerEntity,
    MediaPlayerEntityFeature,
    MediaPlayerState,
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
    async_add_entities([LircMediaPlayer(device, entry)])


class LircMediaPlayer(MediaPlayerEntity):
    _attr_has_entity_name = True
    _attr_name = None
    _attr_should_poll = False
    _attr_assumed_state = True
    _attr_device_class = MediaPlayerDeviceClass.TV

    def __init__(self, device: LircTelevision, entry: ConfigEntry) -> None:
        self._device = device
        self._entry = entry
        self._attr_unique_id = f"{entry.entry_id}_media_player"

        features = MediaPlayerEntityFeature(0)
        if device.commands.power_on:
            features |= MediaPlayerEntityFeature.TURN_ON
        if device.commands.power_off:
            features |= MediaPlayerEntityFeature.TURN_OFF
        if device.commands.inputs:
            features |= MediaPlayerEntityFeature.SELECT_SOURCE
        if device.commands.volume_supported:
            features |= MediaPlayerEntityFeature.VOLUME_MUTE | MediaPlayerEntityFeature.VOLUME_STEP
        self._attr_supported_features = features

    @property
    def device_info(self) -> DeviceInfo:
        return DeviceInfo(
            identifiers={(DOMAIN, self._entry.entry_id)},
            name=self._device.name,
            manufacturer=get_device_manufacturer(self._entry),
            model=get_device_model(self._entry),
        )

    @property
    def state(self) -> MediaPlayerState:
        return MediaPlayerState.ON if self._device.is_on else MediaPlayerState.OFF

    @property
    def source(self) -> str | None:
        return self._device.source

    @property
    def source_list(self) -> list[str]:
        return self._device.commands.source_list

    @property
    def is_volume_muted(self) -> bool | None:
        if not self._device.commands.volume_supported:
            return None
        return self._device.is_muted

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

    async def async_turn_on(self) -> None:
        await self._device.async_turn_on()

    async def async_turn_off(self) -> None:
        await self._device.async_turn_off()

    async def async_select_source(self, source: str) -> None:
        await self._device.async_select_source(source)

    async def async_mute_volume(self, mute: bool) -> None:
        await self._device.async_set_mute(mute)

    async def async_volume_up(self) -> None:
        await self._device.async_volume_up()

    async def async_volume_down(self) -> None:
        await self._device.async_volume_down()
