"""
Pytest configuration and shared fixtures for gymnarium testing.

This module provides common fixtures and Hypothesis profiles for all tests,
with focus on reproducible JAX sampling.
"""

from __future__ import annotations

import jax
import pytest
from hypothesis import settings
from loguru import logger

from gymnarium.spaces import DimensionBoundaries, Format, Space

# Set JAX to use CPU for testing to ensure reproducibility
jax.config.update("jax_platform_name", "cpu")

settings.register_profile("ci", max_examples=50, deadline=5000)
settings.register_profile("dev", max_examples=10, deadline=None)
settings.load_profile("dev")


@pytest.fixture(scope="session")
def jax_key():
    """Provide a consistent JAX PRNG key for all tests."""
    return jax.random.PRNGKey(42)


@pytest.fixture
def split_key(jax_key):
    """Provide a function to split JAX keys consistently."""

    def _split_key(num_keys: int = 2):
        return jax.random.split(jax_key, num_keys)

    return _split_key


@pytest.fixture
def gameboy_space():
    """D-pad (0..4) plus the A and B buttons (0..1)."""
    return Space.simple(
        [
            DimensionBoundaries.from_scalar(4),
            DimensionBoundaries.from_scalar(1),
            DimensionBoundaries.from_scalar(1),
        ]
    )


@pytest.fixture
def sensor_format():
    """Format with a float sensor block followed by an integer controller."""
    space_format = Format()
    space_format.add("sensors.position", (3,))
    space_format.add("sensors.camera", (2, 2, 3))
    space_format.add("ext_controller", (3,))
    return space_format


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(handler_id)
