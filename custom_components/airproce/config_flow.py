"""Config flow for Airproce integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.const import CONF_NAME
from homeassistant.core import callback
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import (
    AirproceApiClient,
    AirproceApiError,
    AirproceConnectionError,
    AirproceResponseError,
)
from .const import (
    CONF_DEVICE_ID,
    CONF_DEVICE_KIND,
    CONF_HASH,
    CONF_SCAN_INTERVAL,
    CONF_SEGMENT,
    CONF_USER_ID,
    DEFAULT_NAME,
    DEFAULT_SCAN_INTERVAL,
    DEFAULT_SEGMENT,
    DOMAIN,
    MAX_SEGMENT,
    DeviceKind,
)

_LOGGER = logging.getLogger(DOMAIN)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Required(CONF_HASH): str,
        vol.Required(CONF_USER_ID): str,
        vol.Required(CONF_DEVICE_ID): str,
        vol.Optional(CONF_SEGMENT, default=DEFAULT_SEGMENT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=MAX_SEGMENT)
        ),
        vol.Optional(CONF_DEVICE_KIND, default=DeviceKind.PURIFIER.value): vol.In(
            [kind.value for kind in DeviceKind]
        ),
    }
)


class AirproceConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Airproce."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            try:
                await self._validate_credentials(user_input)
            except AirproceConnectionError:
                errors["base"] = "cannot_connect"
            except AirproceResponseError:
                errors["base"] = "invalid_response"
            except AirproceApiError:
                errors["base"] = "unknown"
            except ValueError:
                errors["base"] = "invalid_config"
            except Exception:
                _LOGGER.exception("Unexpected exception during config validation")
                errors["base"] = "unknown"
            else:
                await self.async_set_unique_id(user_input[CONF_DEVICE_ID])
                self._abort_if_unique_id_configured()

                return self.async_create_entry(
                    title=user_input[CONF_NAME],
                    data=user_input,
                    options={CONF_SCAN_INTERVAL: DEFAULT_SCAN_INTERVAL},
                )

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )

    async def _validate_credentials(self, user_input: dict[str, Any]) -> bool:
        """Validate the credentials with a status request.

        Raises:
            AirproceApiError: If the request fails or the body is unusable.
            ValueError: If an identifier or the secret is empty.
        """
        session = async_get_clientsession(self.hass)
        client = AirproceApiClient(
            user_input[CONF_USER_ID],
            user_input[CONF_DEVICE_ID],
            user_input[CONF_HASH],
            session,
        )
        return await client.async_validate()

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> AirproceOptionsFlow:
        """Get the options flow for this handler."""
        return AirproceOptionsFlow(config_entry)


class AirproceOptionsFlow(config_entries.OptionsFlow):
    """Handle options flow for Airproce."""

    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        """Initialize options flow."""
        self._entry = config_entry

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Manage the polling interval."""
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        current_options = self._entry.options

        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(
                {
                    vol.Optional(
                        CONF_SCAN_INTERVAL,
                        default=current_options.get(
                            CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL
                        ),
                    ): vol.All(vol.Coerce(int), vol.Range(min=10, max=300)),
                }
            ),
        )
