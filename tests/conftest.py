"""Shared fixtures for the Airproce integration tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from custom_components.airproce.api import AirproceApiClient


def make_response(status: int = 200, body=None, text: str = "") -> MagicMock:
    """Build a fake aiohttp response."""
    response = MagicMock()
    response.status = status
    if isinstance(body, Exception):
        response.json = AsyncMock(side_effect=body)
    else:
        response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture
def session() -> MagicMock:
    """Return a fake aiohttp session answering rank 2."""
    session = MagicMock()
    session.request.return_value.__aenter__.return_value = make_response(
        body={"control": {"rank": 2}}
    )
    session.request.return_value.__aexit__.return_value = False
    return session


@pytest.fixture
def api_client(session: MagicMock) -> AirproceApiClient:
    """Return an API client using the fake session."""
    return AirproceApiClient("u1", "d1", "abc", session)


@pytest.fixture
def fake_api() -> MagicMock:
    """Return a stand-in for the API client with async methods."""
    api = MagicMock()
    api.async_get_status = AsyncMock(return_value={"control": {"rank": 1}})
    api.async_send_command = AsyncMock(return_value={"control": {"rank": 1}})
    return api
