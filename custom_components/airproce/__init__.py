"""The Airproce integration."""

from __future__ import annotations

import logging
from datetime import timedelta

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .api import AirproceApiClient
from .const import (
    CONF_DEVICE_ID,
    CONF_DEVICE_KIND,
    CONF_HASH,
    CONF_SCAN_INTERVAL,
    CONF_SEGMENT,
    CONF_USER_ID,
    DEFAULT_SCAN_INTERVAL,
    DOMAIN,
    DeviceKind,
)
from .controller import AirproceDeviceController, DeviceState

_LOGGER = logging.getLogger(DOMAIN)

PLATFORMS: list[Platform] = [Platform.BUTTON, Platform.FAN]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Airproce from a config entry.

    Args:
        hass: Home Assistant instance.
        entry: Config entry.

    Returns:
        True if setup was successful.
    """
    _LOGGER.debug("Setting up Airproce integration")

    session = async_get_clientsession(hass)
    api_client = AirproceApiClient(
        entry.data[CONF_USER_ID],
        entry.data[CONF_DEVICE_ID],
        entry.data[CONF_HASH],
        session,
    )
    controller = AirproceDeviceController(
        api_client,
        segment=entry.data[CONF_SEGMENT],
        device_kind=DeviceKind(
            entry.data.get(CONF_DEVICE_KIND, DeviceKind.PURIFIER)
        ),
    )

    scan_interval = entry.options.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL)

    coordinator = AirproceDataUpdateCoordinator(
        hass,
        entry,
        controller=controller,
        scan_interval=scan_interval,
    )

    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "coordinator": coordinator,
        "controller": controller,
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_update_options))

    _LOGGER.info("Airproce finished initializing")
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    _LOGGER.debug("Unloading Airproce integration")

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id)

        if not hass.data[DOMAIN]:
            hass.data.pop(DOMAIN)

    return unload_ok


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options update."""
    _LOGGER.debug("Options updated, reloading Airproce integration")
    await hass.config_entries.async_reload(entry.entry_id)


class AirproceDataUpdateCoordinator(DataUpdateCoordinator[DeviceState]):
    """Coordinator polling the device state.

    The vendor API has no push channel, so every poll is a status query.
    Failed queries are not reported as update failures; the controller
    already reports the device off in that case.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        entry: ConfigEntry,
        controller: AirproceDeviceController,
        scan_interval: int,
    ) -> None:
        """Initialize the coordinator.

        Args:
            hass: Home Assistant instance.
            entry: Config entry owning the coordinator.
            controller: Device controller owning the cached state.
            scan_interval: Update interval in seconds.
        """
        super().__init__(
            hass,
            _LOGGER,
            config_entry=entry,
            name=DOMAIN,
            update_interval=timedelta(seconds=scan_interval),
        )
        self.controller = controller

    async def _async_update_data(self) -> DeviceState:
        """Refresh the device state from the Airproce API."""
        _LOGGER.debug("Fetching device state from Airproce API")
        await self.controller.async_get_power()
        return self.controller.state

    def async_push_state(self) -> None:
        """Publish the controller state after a command."""
        self.async_set_updated_data(self.controller.state)
