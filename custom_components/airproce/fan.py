"""Fan platform for Airproce integration."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.fan import FanEntity, FanEntityFeature
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_NAME
from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import (
    ATTR_PURIFIER_STATE,
    ATTR_SPEED_RANK,
    ATTR_TARGET_PURIFIER_STATE,
    CONF_DEVICE_ID,
    DEFAULT_NAME,
    DOMAIN,
    MANUFACTURER,
    MODEL,
    SERIAL_NUMBER,
    DeviceKind,
)
from .controller import AirproceDeviceController

_LOGGER = logging.getLogger(DOMAIN)


def build_device_info(config_entry: ConfigEntry) -> DeviceInfo:
    """Return the device registry entry shared by all Airproce entities."""
    return DeviceInfo(
        identifiers={(DOMAIN, config_entry.data[CONF_DEVICE_ID])},
        name=config_entry.data.get(CONF_NAME, DEFAULT_NAME),
        manufacturer=MANUFACTURER,
        model=MODEL,
        serial_number=SERIAL_NUMBER,
    )


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Airproce fan entity from a config entry."""
    data = hass.data[DOMAIN][config_entry.entry_id]

    async_add_entities(
        [
            AirproceFan(
                coordinator=data["coordinator"],
                controller=data["controller"],
                config_entry=config_entry,
            )
        ]
    )


class AirproceFan(CoordinatorEntity, FanEntity):
    """Representation of an Airproce air purifier."""

    _attr_has_entity_name = True
    _attr_name = None
    _attr_supported_features = (
        FanEntityFeature.SET_SPEED
        | FanEntityFeature.TURN_ON
        | FanEntityFeature.TURN_OFF
    )

    def __init__(
        self,
        coordinator,
        controller: AirproceDeviceController,
        config_entry: ConfigEntry,
    ) -> None:
        """Initialize the fan entity.

        Args:
            coordinator: Data update coordinator.
            controller: Device controller owning the cached state.
            config_entry: Config entry.
        """
        super().__init__(coordinator)

        self._controller = controller
        self._attr_unique_id = f"{DOMAIN}_{config_entry.data[CONF_DEVICE_ID]}"
        self._attr_device_info = build_device_info(config_entry)
        self._attr_speed_count = controller.segment

    @property
    def is_on(self) -> bool:
        """Return true if the purifier is on."""
        return self._controller.state.power

    @property
    def percentage(self) -> int:
        """Return the cached speed as a percentage."""
        return self._controller.speed_percentage

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the raw rank, plus the purifier state for purifiers."""
        attributes: dict[str, Any] = {
            ATTR_SPEED_RANK: self._controller.state.speed_rank,
        }
        if self._controller.device_kind is DeviceKind.PURIFIER:
            attributes[ATTR_PURIFIER_STATE] = self._controller.purifier_state
            attributes[ATTR_TARGET_PURIFIER_STATE] = (
                self._controller.target_purifier_state
            )
        return attributes

    async def async_turn_on(
        self,
        percentage: int | None = None,
        preset_mode: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Turn the purifier on, optionally at a given speed."""
        _LOGGER.debug("Turning on %s (percentage=%s)", self.entity_id, percentage)

        await self._controller.async_set_power(True)
        if percentage is not None:
            await self._controller.async_set_speed_percentage(percentage)

        self.coordinator.async_push_state()

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn the purifier off."""
        _LOGGER.debug("Turning off %s", self.entity_id)

        await self._controller.async_set_power(False)
        self.coordinator.async_push_state()

    async def async_set_percentage(self, percentage: int) -> None:
        """Set the speed of the purifier."""
        await self._controller.async_set_speed_percentage(percentage)
        self.coordinator.async_push_state()
