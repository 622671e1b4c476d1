"""Constants for the Airproce integration."""

from enum import StrEnum
from typing import Final

# Integration domain
DOMAIN: Final = "airproce"

# Configuration keys
CONF_HASH: Final = "hash"
CONF_USER_ID: Final = "user_id"
CONF_DEVICE_ID: Final = "device_id"
CONF_SEGMENT: Final = "segment"
CONF_DEVICE_KIND: Final = "device_kind"
CONF_SCAN_INTERVAL: Final = "scan_interval"

# Default values
DEFAULT_NAME: Final = "Airproce"
DEFAULT_SEGMENT: Final = 5
DEFAULT_SCAN_INTERVAL: Final = 30  # seconds
MAX_SEGMENT: Final = 10

# API endpoints
API_BASE_URL: Final = "https://wx.airproce.com"
API_CONTROL_STATUS_ENDPOINT: Final = "/appAPI/controlStatus"
API_TIMEOUT: Final = 10  # seconds

# Request parameters
PARAM_USER_ID: Final = "userId"
PARAM_DEVICE_ID: Final = "deviceId"
PARAM_RANK: Final = "rank"
PARAM_MODE: Final = "mode"
PARAM_FUNCTION: Final = "function"
PARAM_TIME: Final = "time"
PARAM_LANG: Final = "lang"
PARAM_SIGNATURE: Final = "sec"

# Fixed request values
FUNCTION_CODE: Final = "021300000000"
LANG: Final = "zh-CN"
SIGNATURE_LENGTH: Final = 8

# Mode codes
MODE_ON: Final = 0
MODE_OFF: Final = 16
MODE_SET_SPEED: Final = 1

# Response fields
RESPONSE_CONTROL: Final = "control"
RESPONSE_RANK: Final = "rank"

# Device registry metadata
MANUFACTURER: Final = "emeiziying"
MODEL: Final = "Airproce"
SERIAL_NUMBER: Final = "001"

# Extra state attributes
ATTR_PURIFIER_STATE: Final = "purifier_state"
ATTR_TARGET_PURIFIER_STATE: Final = "target_purifier_state"
ATTR_SPEED_RANK: Final = "speed_rank"


class DeviceKind(StrEnum):
    """Device class selected at configuration time."""

    PURIFIER = "purifier"
    FAN = "fan"


class PurifierState(StrEnum):
    """Reported purifier activity."""

    INACTIVE = "inactive"
    PURIFYING = "purifying"


TARGET_PURIFIER_STATE: Final = "auto"
