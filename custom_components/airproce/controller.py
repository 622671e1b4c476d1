"""Device state synchronization for the Airproce integration."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from .api import AirproceApiClient
from .const import (
    DOMAIN,
    MODE_OFF,
    MODE_ON,
    MODE_SET_SPEED,
    RESPONSE_CONTROL,
    RESPONSE_RANK,
    TARGET_PURIFIER_STATE,
    DeviceKind,
    PurifierState,
)

_LOGGER = logging.getLogger(DOMAIN)


@dataclass
class DeviceState:
    """Last known remote state of the device."""

    power: bool = False
    speed_rank: int = 0


class AirproceDeviceController:
    """Mirror the remote device state and translate get/set requests.

    Every remote call and the reconciliation of its response run under a
    per-device lock, so the cached state always reflects the latest request
    issued rather than whichever response happened to arrive last.
    """

    def __init__(
        self,
        api_client: AirproceApiClient,
        segment: int,
        device_kind: DeviceKind = DeviceKind.PURIFIER,
    ) -> None:
        """Initialize the controller.

        Args:
            api_client: Airproce API client bound to one device.
            segment: Number of discrete speed steps of the device.
            device_kind: Whether the device reports purifier semantics.

        Raises:
            ValueError: If segment is not a positive integer.
        """
        if isinstance(segment, bool) or not isinstance(segment, int) or segment < 1:
            raise ValueError(f"segment must be a positive integer, got {segment!r}")

        self._api_client = api_client
        self._segment = segment
        self._device_kind = DeviceKind(device_kind)
        self._lock = asyncio.Lock()
        self.state = DeviceState()

    @property
    def segment(self) -> int:
        """Return the number of speed steps."""
        return self._segment

    @property
    def device_kind(self) -> DeviceKind:
        """Return the configured device kind."""
        return self._device_kind

    def reconcile(self, response: dict[str, Any] | None) -> None:
        """Apply a controlStatus response to the cached state.

        A missing response means the call failed; the device is then
        reported off at rank 0.
        """
        if response is None:
            self.state.power = False
            self.state.speed_rank = 0
            return

        rank = response[RESPONSE_CONTROL][RESPONSE_RANK]
        if not 0 <= rank <= self._segment:
            _LOGGER.debug(
                "Rank %s outside of 0..%s reported by the device", rank, self._segment
            )
        self.state.power = rank != 0
        self.state.speed_rank = rank

    async def _async_call(
        self,
        request: Callable[..., Awaitable[dict[str, Any] | None]],
        *args: Any,
        **kwargs: Any,
    ) -> DeviceState:
        async with self._lock:
            response = await request(*args, **kwargs)
            self.reconcile(response)
        return self.state

    async def async_refresh(self) -> DeviceState:
        """Query the remote state and reconcile it."""
        return await self._async_call(self._api_client.async_get_status)

    async def async_get_power(self) -> bool:
        """Return the power state after a fresh status query."""
        _LOGGER.debug("Triggered GET power")
        await self.async_refresh()
        return self.state.power

    async def async_set_power(self, value: bool) -> None:
        """Switch the device on or off."""
        _LOGGER.debug("Triggered SET power: %s", value)
        self.state.power = bool(value)
        mode = MODE_ON if value else MODE_OFF
        await self._async_call(self._api_client.async_send_command, mode)

    @property
    def speed_percentage(self) -> int:
        """Return the cached speed as a percentage.

        Rounded down, so feeding the value back through percentage_to_rank
        gives the same rank.
        """
        rank = min(max(self.state.speed_rank, 0), self._segment)
        return rank * 100 // self._segment

    def percentage_to_rank(self, percentage: float) -> int:
        """Convert a percentage to the nearest rank at or above it."""
        # Same as ceil(percentage / step) without the float division error
        return math.ceil(percentage * self._segment / 100)

    async def async_set_speed_percentage(self, percentage: float) -> None:
        """Apply a speed given as a percentage."""
        rank = self.percentage_to_rank(percentage)
        _LOGGER.debug("Triggered SET speed: %s%% (rank %s)", percentage, rank)
        await self._async_call(
            self._api_client.async_send_command, MODE_SET_SPEED, rank=rank
        )

    @property
    def purifier_state(self) -> PurifierState:
        """Return whether the purifier is currently purifying."""
        return PurifierState.PURIFYING if self.state.power else PurifierState.INACTIVE

    @property
    def target_purifier_state(self) -> str:
        """Return the target purifier state, which is always automatic."""
        return TARGET_PURIFIER_STATE

    def identify(self) -> None:
        """Handle an identify request."""
        _LOGGER.info("Identify!")
