"""Tests for the Airproce data update coordinator."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from custom_components.airproce import AirproceDataUpdateCoordinator
from custom_components.airproce.const import DOMAIN
from custom_components.airproce.controller import AirproceDeviceController


@pytest.fixture
def config_entry() -> MagicMock:
    entry = MagicMock()
    entry.entry_id = "entry1"
    return entry


def _coordinator(
    controller: AirproceDeviceController,
    config_entry: MagicMock,
    scan_interval: int = 30,
) -> AirproceDataUpdateCoordinator:
    return AirproceDataUpdateCoordinator(
        MagicMock(),
        config_entry,
        controller=controller,
        scan_interval=scan_interval,
    )


def test_coordinator_wiring(fake_api: MagicMock, config_entry: MagicMock) -> None:
    controller = AirproceDeviceController(fake_api, segment=5)

    coordinator = _coordinator(controller, config_entry, scan_interval=45)

    assert coordinator.name == DOMAIN
    assert coordinator.update_interval == timedelta(seconds=45)
    assert coordinator.config_entry is config_entry
    assert coordinator.controller is controller


@pytest.mark.asyncio
async def test_update_queries_status(
    fake_api: MagicMock, config_entry: MagicMock
) -> None:
    controller = AirproceDeviceController(fake_api, segment=5)
    coordinator = _coordinator(controller, config_entry)

    state = await coordinator._async_update_data()

    fake_api.async_get_status.assert_awaited_once_with()
    assert state.power is True
    assert state.speed_rank == 1


@pytest.mark.asyncio
async def test_failed_update_reports_off_without_raising(
    fake_api: MagicMock, config_entry: MagicMock
) -> None:
    """Transport failures are not surfaced as update failures."""
    fake_api.async_get_status.return_value = None
    controller = AirproceDeviceController(fake_api, segment=5)
    controller.state.power = True
    coordinator = _coordinator(controller, config_entry)

    state = await coordinator._async_update_data()

    assert state.power is False
    assert state.speed_rank == 0


def test_push_state_publishes_controller_state(
    fake_api: MagicMock, config_entry: MagicMock
) -> None:
    controller = AirproceDeviceController(fake_api, segment=5)
    coordinator = _coordinator(controller, config_entry)
    coordinator.async_set_updated_data = MagicMock()

    coordinator.async_push_state()

    coordinator.async_set_updated_data.assert_called_once_with(controller.state)
