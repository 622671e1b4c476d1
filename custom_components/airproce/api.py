"""Airproce cloud API client for the integration."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import time
from collections.abc import Mapping
from typing import Any

import aiohttp
from aiohttp import ClientError, ClientResponseError, ClientTimeout

from .const import (
    API_BASE_URL,
    API_CONTROL_STATUS_ENDPOINT,
    API_TIMEOUT,
    DOMAIN,
    FUNCTION_CODE,
    LANG,
    PARAM_DEVICE_ID,
    PARAM_FUNCTION,
    PARAM_LANG,
    PARAM_MODE,
    PARAM_RANK,
    PARAM_SIGNATURE,
    PARAM_TIME,
    PARAM_USER_ID,
    RESPONSE_CONTROL,
    RESPONSE_RANK,
    SIGNATURE_LENGTH,
)

_LOGGER = logging.getLogger(DOMAIN)


class AirproceApiError(Exception):
    """Base exception for Airproce API errors."""


class AirproceConnectionError(AirproceApiError):
    """Connection error with Airproce API."""


class AirproceResponseError(AirproceApiError):
    """The Airproce API returned a body without a usable control state."""


def format_param_value(value: Any) -> str:
    """Render a parameter value the way the vendor serializes it.

    Booleans become 1/0 and whole floats lose their fractional part, so the
    signed string matches the query string the server reconstructs.
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def sign_request(params: Mapping[str, Any], secret: str) -> str:
    """Compute the request signature.

    Args:
        params: Request parameters, with or without an existing signature.
        secret: Shared device pairing key.

    Returns:
        The first 8 lowercase hex characters of the SHA-1 digest.
    """
    payload = secret + "".join(
        f"{key}{format_param_value(params[key])}"
        for key in sorted(params)
        if key != PARAM_SIGNATURE
    )
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()
    return digest[:SIGNATURE_LENGTH]


def _extract_rank(data: Any) -> int:
    """Return control.rank from a response body or raise AirproceResponseError."""
    if not isinstance(data, dict):
        raise AirproceResponseError("Response body is not a JSON object")

    control = data.get(RESPONSE_CONTROL)
    if not isinstance(control, dict):
        raise AirproceResponseError("Response has no control section")

    rank = control.get(RESPONSE_RANK)
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise AirproceResponseError(f"Invalid control rank: {rank!r}")

    return rank


class AirproceApiClient:
    """Client to interact with the Airproce cloud API."""

    def __init__(
        self,
        user_id: str,
        device_id: str,
        secret: str,
        session: aiohttp.ClientSession,
    ) -> None:
        """Initialize the API client.

        Args:
            user_id: Airproce account user id.
            device_id: Device id of the purifier.
            secret: Shared device pairing key used to sign requests.
            session: aiohttp ClientSession for making requests.

        Raises:
            ValueError: If any of the identifiers or the secret is empty.
        """
        for field, value in (
            ("user_id", user_id),
            ("device_id", device_id),
            ("secret", secret),
        ):
            if not value:
                raise ValueError(f"{field} must not be empty")

        self._user_id = user_id
        self._device_id = device_id
        self._secret = secret
        self._session = session
        self._timeout = ClientTimeout(total=API_TIMEOUT)

    @property
    def _identity(self) -> dict[str, Any]:
        """Return the parameters every request carries."""
        return {
            PARAM_USER_ID: self._user_id,
            PARAM_DEVICE_ID: self._device_id,
        }

    def _signed_query(self, params: Mapping[str, Any]) -> dict[str, str]:
        """Return the query string parameters with the signature appended last."""
        query = {
            key: format_param_value(value)
            for key, value in params.items()
            if key != PARAM_SIGNATURE
        }
        query[PARAM_SIGNATURE] = sign_request(query, self._secret)
        return query

    async def _request(self, params: Mapping[str, Any]) -> Any:
        """Make a signed API request.

        Args:
            params: Unsigned request parameters.

        Returns:
            Decoded JSON body.

        Raises:
            AirproceConnectionError: If connection fails.
            AirproceResponseError: If the body is not valid JSON.
            AirproceApiError: For other API errors.
        """
        url = f"{API_BASE_URL}{API_CONTROL_STATUS_ENDPOINT}"
        query = self._signed_query(params)

        try:
            async with self._session.request(
                "GET",
                url,
                params=query,
                timeout=self._timeout,
            ) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    _LOGGER.error(
                        "Airproce API error: status=%s, response=%s",
                        response.status,
                        error_text,
                    )
                    raise AirproceApiError(
                        f"API request failed with status {response.status}"
                    )

                # The vendor does not always label its JSON bodies
                return await response.json(content_type=None)

        except asyncio.TimeoutError as err:
            _LOGGER.warning("Timeout connecting to Airproce API")
            raise AirproceConnectionError("Connection timeout") from err
        except ClientResponseError as err:
            _LOGGER.error("HTTP error from Airproce API: %s", err)
            raise AirproceApiError(f"HTTP error: {err}") from err
        except ClientError as err:
            _LOGGER.warning("Connection error to Airproce API: %s", err)
            raise AirproceConnectionError(f"Connection error: {err}") from err
        except ValueError as err:
            _LOGGER.error("Malformed response from Airproce API: %s", err)
            raise AirproceResponseError(f"Malformed response: {err}") from err

    async def async_fetch_status(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Call controlStatus and validate the returned control state.

        Raises:
            AirproceApiError: If the request or the body is unusable.
        """
        data = await self._request(params)
        _extract_rank(data)
        return data

    async def async_control_status(
        self, params: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        """Call controlStatus, returning None on any failure."""
        try:
            return await self.async_fetch_status(params)
        except AirproceApiError as err:
            _LOGGER.debug("controlStatus failed for %s: %s", self._device_id, err)
            return None

    async def async_get_status(self) -> dict[str, Any] | None:
        """Query the current device state."""
        _LOGGER.debug("Querying status of device %s", self._device_id)
        return await self.async_control_status(self._identity)

    async def async_send_command(
        self, mode: int, rank: int | None = None
    ) -> dict[str, Any] | None:
        """Send a control command to the device.

        Args:
            mode: Vendor mode code (on, off or set speed).
            rank: Speed rank, only sent with the set speed mode.

        Returns:
            The response body, or None if the call failed.
        """
        params: dict[str, Any] = self._identity
        if rank is not None:
            params[PARAM_RANK] = rank
        params[PARAM_MODE] = mode
        params[PARAM_FUNCTION] = FUNCTION_CODE
        params[PARAM_TIME] = int(time.time() * 1000)
        params[PARAM_LANG] = LANG

        _LOGGER.debug(
            "Sending command to device %s: mode=%s rank=%s",
            self._device_id,
            mode,
            rank,
        )
        return await self.async_control_status(params)

    async def async_validate(self) -> bool:
        """Validate the credentials by making a status request.

        Raises:
            AirproceApiError: If the request fails.
        """
        await self.async_fetch_status(self._identity)
        return True
