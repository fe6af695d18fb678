# backend/tests/conftest.py
"""Shared fixtures for the slot availability test suite."""

import pytest

from drivebook.core.config import Settings
from tests.helpers.slot_factories import RecordingTravelCalculator


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, travel_provider="simple", maps_api_key="")


@pytest.fixture
def zero_travel() -> RecordingTravelCalculator:
    return RecordingTravelCalculator()
