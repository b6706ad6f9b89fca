"""Pytest configuration and fixtures for unit tests."""

import pytest
import structlog

from tag_validator import Validator, new_validator


@pytest.fixture
def validator() -> Validator:
    """A fresh, unfrozen validator with the built-in rules."""
    return new_validator()


@pytest.fixture
def reset_structlog():
    """Restore structlog defaults after a test reconfigures it."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def order_payload() -> dict:
    """Field values that pass every rule on the Order test model."""
    return {
        "quantity": "12",
        "price": "3.14",
        "placed_on": "2024-01-15",
        "shipped_at": "2024-01-15T10:30:00Z",
    }
