"""Identify button for Airproce integration."""

from __future__ import annotations

from homeassistant.components.button import ButtonDeviceClass, ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import CONF_DEVICE_ID, DOMAIN
from .controller import AirproceDeviceController
from .fan import build_device_info


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the identify button from a config entry."""
    controller = hass.data[DOMAIN][config_entry.entry_id]["controller"]
    async_add_entities([AirproceIdentifyButton(controller, config_entry)])


class AirproceIdentifyButton(ButtonEntity):
    """Button forwarding identify requests to the device controller."""

    _attr_has_entity_name = True
    _attr_device_class = ButtonDeviceClass.IDENTIFY
    _attr_entity_category = EntityCategory.CONFIG

    def __init__(
        self, controller: AirproceDeviceController, config_entry: ConfigEntry
    ) -> None:
        """Initialize the button."""
        self._controller = controller
        self._attr_unique_id = f"{DOMAIN}_{config_entry.data[CONF_DEVICE_ID]}_identify"
        self._attr_device_info = build_device_info(config_entry)

    async def async_press(self) -> None:
        """Handle the button press."""
        self._controller.identify()
