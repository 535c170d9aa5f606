from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryError

from .command_config import build_device_commands
from .const import (
    CONF_DELAY,
    CONF_HOST,
    CONF_NAME,
    CONF_PORT,
    CONF_REMOTE,
    CONF_TIMEOUT,
    DEFAULT_DELAY,
    DEFAULT_NAME,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DOMAIN,
    PLATFORMS,
)
from .device import LircTelevision
from .lib.lirc import LircController, LircError

_LOGGER = logging.getLogger(__name__)


def create_device(hass: HomeAssistant, entry: ConfigEntry) -> LircTelevision:
    data = entry.data
    opts = entry.options

    controller = LircController(
        host=data[CONF_HOST],
        port=data.get(CONF_PORT, DEFAULT_PORT),
        remote=data[CONF_REMOTE],
        delay=data.get(CONF_DELAY, DEFAULT_DELAY),
        timeout=opts.get(CONF_TIMEOUT, DEFAULT_TIMEOUT),
    )
    try:
        commands = build_device_commands(opts)
    except (LircError, ValueError) as err:
        raise ConfigEntryError(f"Invalid command configuration: {err}") from err

    return LircTelevision(
        hass=hass,
        entry_id=entry.entry_id,
        name=data.get(CONF_NAME, DEFAULT_NAME),
        controller=controller,
        commands=commands,
    )


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    device = create_device(hass, entry)

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = device

    # command lists live in options, rebuild everything when they change
    entry.async_on_unload(entry.add_update_listener(async_update_options))

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Called when user changes options in the UI."""
    _LOGGER.debug("[%s] Options changed, reloading", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id, None)
        if not hass.data[DOMAIN]:
            hass.data.pop(DOMAIN)
    return unload_ok
