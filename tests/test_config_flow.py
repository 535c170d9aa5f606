import asyncio
from types import SimpleNamespace

from custom_components.lirc_tv.config_flow import (
    ConfigFlow,
    build_unique_id,
    validate_command_options,
)
from custom_components.lirc_tv.const import CONF_PORT, CONF_REMOTE, DOMAIN


def _run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _flow() -> ConfigFlow:
    flow = ConfigFlow()
    flow.hass = SimpleNamespace(data={DOMAIN: {}})
    flow.context = {}
    return flow


def _options_flow(options: dict):
    return ConfigFlow.async_get_options_flow(
        SimpleNamespace(entry_id="entry-1", data={"name": "TV"}, options=options)
    )


def test_user_step_shows_form_with_default_port() -> None:
    result = _run(_flow().async_step_user())

    assert result["type"] == "form"
    assert result["step_id"] == "user"
    schema = {str(key): key for key in result["data_schema"].schema}
    assert schema[CONF_PORT].default() == 8765
    assert CONF_REMOTE in schema


def test_user_step_rejects_remote_with_spaces() -> None:
    result = _run(
        _flow().async_step_user(
            {"name": "TV", "host": "10.0.0.5", "port": 8765, "remote": "my remote", "delay": 0}
        )
    )

    assert result["type"] == "form"
    assert result["errors"] == {"remote": "invalid_remote"}


def test_build_unique_id_normalizes_host() -> None:
    assert build_unique_id(" LircPi.local ", 8765, "samsung") == "lircpi.local:8765:samsung"


def test_validate_command_options_normalizes_text() -> None:
    options, errors = validate_command_options(
        {
            "power_on": "KEY_POWER",
            "power_off": "KEY_POWER, DELAY|1000, KEY_POWER",
            "inputs": "HDMI 1: KEY_INPUT, KEY_1",
            "remote_keys": "",
            "timeout": 2.5,
        }
    )

    assert errors == {}
    assert options["power_off"] == ["KEY_POWER", "DELAY|1000", "KEY_POWER"]
    assert options["inputs"] == {"HDMI 1": ["KEY_INPUT", "KEY_1"]}
    assert options["remote_keys"] == {}
    assert options["mute_on"] == []
    assert options["timeout"] == 2.5


def test_options_flow_creates_entry() -> None:
    flow = _options_flow({})

    result = _run(flow.async_step_init({"power_on": "KEY_POWER", "timeout": 0}))

    assert result["type"] == "create_entry"
    assert result["data"]["power_on"] == ["KEY_POWER"]
    assert result["data"]["timeout"] == 0


def test_options_flow_reports_invalid_fields() -> None:
    flow = _options_flow({})

    result = _run(
        flow.async_step_init(
            {"power_on": "KEY_POWER, DELAY|soon", "inputs": "no separator here"}
        )
    )

    assert result["type"] == "form"
    assert result["errors"] == {"power_on": "invalid_commands", "inputs": "invalid_mapping"}


def test_options_flow_prefills_stored_lists() -> None:
    flow = _options_flow(
        {
            "power_on": ["KEY_POWER", "DELAY|500"],
            "remote_keys": {"ARROW_UP": ["KEY_UP"]},
        }
    )

    result = _run(flow.async_step_init())

    defaults = {str(key): key.default() for key in result["data_schema"].schema}
    assert defaults["power_on"] == "KEY_POWER, DELAY|500"
    assert defaults["remote_keys"] == "ARROW_UP: KEY_UP"
    assert defaults["mute_on"] == ""
