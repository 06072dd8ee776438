"""Pytest configuration and shared fixtures."""

import os

# Set test environment variables before any imports
# Use valid-format token to pass aiogram validation
os.environ["BOT_TOKEN"] = "123456789:ABCdefGHIjklMNOpqrsTUVwxyz"
os.environ["BOT_MODE"] = "polling"
os.environ["RECS_SERVICE_URL"] = "http://recs.test/recommendations"

import pytest


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
def comedy_payload():
    """Single-item success body as the service sends it."""
    return [
        {
            "title": "X",
            "year": 2020,
            "rating": 8.1,
            "description": "d",
            "genre": ["Comedy"],
            "where_to_watch": ["ServiceA"],
        }
    ]
