import asyncio
from types import SimpleNamespace

import pytest
from homeassistant.exceptions import ConfigEntryError

from custom_components.lirc_tv import create_device
from custom_components.lirc_tv.const import DOMAIN
from custom_components.lirc_tv.diagnostics import async_get_config_entry_diagnostics


def _entry(options=None, **data):
    base = {"name": "Bedroom TV", "host": "10.0.0.5", "remote": "lg"}
    base.update(data)
    return SimpleNamespace(
        entry_id="entry-1",
        title=base["name"],
        data=base,
        options=options or {},
    )


def test_create_device_applies_defaults() -> None:
    device = create_device(SimpleNamespace(), _entry())

    assert device.name == "Bedroom TV"
    assert device.controller.port == 8765
    assert device.controller.delay == 0
    assert device.controller.timeout is None
    assert device.commands.power_on == []


def test_create_device_reads_options() -> None:
    device = create_device(
        SimpleNamespace(),
        _entry(
            options={"power_on": ["KEY_POWER"], "inputs": {"HDMI 1": ["KEY_1"]}, "timeout": 3},
            port=9000,
            delay=250,
        ),
    )

    assert device.controller.port == 9000
    assert device.controller.delay == 250
    assert device.controller.timeout == 3
    assert device.commands.source_list == ["HDMI 1"]


def test_create_device_rejects_broken_options() -> None:
    with pytest.raises(ConfigEntryError):
        create_device(SimpleNamespace(), _entry(options={"power_on": ["DELAY|x"]}))


def test_diagnostics_redacts_host() -> None:
    entry = _entry(options={"power_on": ["KEY_POWER"]})
    device = create_device(SimpleNamespace(), entry)
    hass = SimpleNamespace(data={DOMAIN: {"entry-1": device}})

    result = asyncio.run(async_get_config_entry_diagnostics(hass, entry))

    assert result["entry"]["data"]["host"] == "**REDACTED**"
    assert result["entry"]["data"]["remote"] == "lg"
    assert result["device"]["is_on"] is False
    assert result["device"]["port"] == 8765
