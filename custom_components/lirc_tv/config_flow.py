from __future__ import annotations

import logging
from typing import Any, Dict

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import callback
from homeassistant.helpers.selector import TextSelector, TextSelectorConfig

from .command_config import (
    format_command_list,
    format_mapping,
    parse_command_list,
    parse_mapping,
)
from .const import (
    COMMAND_LIST_OPTIONS,
    CONF_DELAY,
    CONF_HOST,
    CONF_MANUFACTURER,
    CONF_MODEL,
    CONF_NAME,
    CONF_PORT,
    CONF_REMOTE,
    CONF_TIMEOUT,
    DEFAULT_DELAY,
    DEFAULT_MANUFACTURER,
    DEFAULT_MODEL,
    DEFAULT_NAME,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DOMAIN,
    MAPPING_OPTIONS,
)
from .lib.lirc import LircError

_LOGGER = logging.getLogger(__name__)

PORT_VALIDATOR = vol.All(vol.Coerce(int), vol.Range(min=1, max=65535))
DELAY_VALIDATOR = vol.All(vol.Coerce(int), vol.Range(min=0))
TIMEOUT_VALIDATOR = vol.All(vol.Coerce(float), vol.Range(min=0))

_MULTILINE = TextSelector(TextSelectorConfig(multiline=True))


def build_unique_id(host: str, port: int, remote: str) -> str:
    return f"{host.strip().lower()}:{port}:{remote.strip()}"


def validate_command_options(user_input: Dict[str, Any]) -> tuple[Dict[str, Any], Dict[str, str]]:
    """Parse the options form; return (normalized options, errors by field)."""

    options: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    for key in COMMAND_LIST_OPTIONS:
        try:
            options[key] = parse_command_list(user_input.get(key))
        except LircError as err:
            _LOGGER.debug("Rejected %s: %s", key, err)
            errors[key] = "invalid_commands"

    for key in MAPPING_OPTIONS:
        try:
            options[key] = parse_mapping(user_input.get(key))
        except ValueError as err:
            _LOGGER.debug("Rejected %s: %s", key, err)
            errors[key] = "invalid_mapping"

    options[CONF_TIMEOUT] = user_input.get(CONF_TIMEOUT, DEFAULT_TIMEOUT)
    return options, errors


class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    VERSION = 1

    # ------------------------------------------------------------------
    # step user: daemon address + remote profile
    # ------------------------------------------------------------------
    async def async_step_user(self, user_input: Dict[str, Any] | None = None):
        errors: Dict[str, str] = {}

        if user_input is not None:
            host = user_input[CONF_HOST].strip()
            remote = user_input[CONF_REMOTE].strip()
            if not host:
                errors[CONF_HOST] = "required"
            if not remote or any(ch.isspace() for ch in remote):
                errors[CONF_REMOTE] = "invalid_remote"

            if not errors:
                port = user_input[CONF_PORT]
                await self.async_set_unique_id(build_unique_id(host, port, remote))
                self._abort_if_unique_id_configured()

                name = user_input.get(CONF_NAME) or DEFAULT_NAME
                _LOGGER.info("Adding LIRC device %s at %s:%s (remote %s)", name, host, port, remote)
                return self.async_create_entry(
                    title=name,
                    data={
                        CONF_NAME: name,
                        CONF_HOST: host,
                        CONF_PORT: port,
                        CONF_REMOTE: remote,
                        CONF_DELAY: user_input.get(CONF_DELAY, DEFAULT_DELAY),
                        CONF_MANUFACTURER: user_input.get(CONF_MANUFACTURER) or DEFAULT_MANUFACTURER,
                        CONF_MODEL: user_input.get(CONF_MODEL) or DEFAULT_MODEL,
                    },
                    options={},
                )

        schema = vol.Schema({
            vol.Required(CONF_NAME, default=DEFAULT_NAME): str,
            vol.Required(CONF_HOST): str,
            vol.Required(CONF_PORT, default=DEFAULT_PORT): PORT_VALIDATOR,
            vol.Required(CONF_REMOTE): str,
            vol.Optional(CONF_DELAY, default=DEFAULT_DELAY): DELAY_VALIDATOR,
            vol.Optional(CONF_MANUFACTURER, default=DEFAULT_MANUFACTURER): str,
            vol.Optional(CONF_MODEL, default=DEFAULT_MODEL): str,
        })
        return self.async_show_form(
            step_id="user",
            data_schema=schema,
            errors=errors,
            description_placeholders={
                "help": (
                    "Enter the address of the lircd TCP listener and the name of the "
                    "remote registered with it. The default port is 8765."
                )
            },
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the options flow for this entry."""
        return LircOptionsFlowHandler(config_entry)


# ----------------------------------------------------------------------
# options flow: command lists per action
# ----------------------------------------------------------------------
class LircOptionsFlowHandler(config_entries.OptionsFlow):
    def __init__(self, entry: config_entries.ConfigEntry) -> None:
        self.entry = entry

    async def async_step_init(self, user_input: Dict[str, Any] | None = None):
        errors: Dict[str, str] = {}
        current: Dict[str, Any] = dict(self.entry.options)

        if user_input is not None:
            options, errors = validate_command_options(user_input)
            if not errors:
                return self.async_create_entry(title="", data=options)
            # keep what the user typed so they can fix it
            current = dict(user_input)

        def _text(key: str) -> str:
            value = current.get(key)
            if isinstance(value, str):
                return value
            if key in MAPPING_OPTIONS:
                return format_mapping(value)
            return format_command_list(value)

        fields: Dict[Any, Any] = {}
        for key in COMMAND_LIST_OPTIONS:
            fields[vol.Optional(key, default=_text(key))] = str
        for key in MAPPING_OPTIONS:
            fields[vol.Optional(key, default=_text(key))] = _MULTILINE
        fields[
            vol.Optional(CONF_TIMEOUT, default=current.get(CONF_TIMEOUT, DEFAULT_TIMEOUT))
        ] = TIMEOUT_VALIDATOR

        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(fields),
            errors=errors,
            description_placeholders={
                "explain": (
                    "Commands are lircd key names separated by commas, sent in order. "
                    "Use DELAY|<ms> to wait between keys, e.g. KEY_POWER, DELAY|2000, KEY_OK. "
                    "Inputs and remote keys take one 'Name: commands' per line. "
                    "A timeout of 0 waits for lircd forever."
                )
            },
        )
