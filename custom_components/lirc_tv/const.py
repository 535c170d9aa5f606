# const.py
from .lib.lirc import DEFAULT_PORT as LIRC_DEFAULT_PORT

DOMAIN = "lirc_tv"

CONF_HOST = "host"
CONF_PORT = "port"
CONF_NAME = "name"
CONF_REMOTE = "remote"
CONF_DELAY = "delay"
CONF_TIMEOUT = "timeout"
CONF_MANUFACTURER = "manufacturer"
CONF_MODEL = "model"

# options: comma separated token lists
CONF_POWER_ON = "power_on"
CONF_POWER_OFF = "power_off"
CONF_MUTE_ON = "mute_on"
CONF_MUTE_OFF = "mute_off"
CONF_VOLUME_UP = "volume_up"
CONF_VOLUME_DOWN = "volume_down"
# options: one "Name: tokens" per line
CONF_INPUTS = "inputs"
CONF_REMOTE_KEYS = "remote_keys"

COMMAND_LIST_OPTIONS = (
    CONF_POWER_ON,
    CONF_POWER_OFF,
    CONF_MUTE_ON,
    CONF_MUTE_OFF,
    CONF_VOLUME_UP,
    CONF_VOLUME_DOWN,
)
MAPPING_OPTIONS = (CONF_INPUTS, CONF_REMOTE_KEYS)

DEFAULT_NAME = "LIRC TV"
DEFAULT_PORT = LIRC_DEFAULT_PORT
DEFAULT_DELAY = 0
DEFAULT_TIMEOUT = 0
DEFAULT_MANUFACTURER = "Unknown"
DEFAULT_MODEL = "Unknown"

PLATFORMS = ["media_player", "remote"]


def signal_state(entry_id: str) -> str:
    return f"{DOMAIN}_{entry_id}_state"
