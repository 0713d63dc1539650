"""gymnarium utilities package.

Helpers that support the core spaces but are not part of them.
"""

from __future__ import annotations

from .jax_types import (
    INT32_MAX,
    INT32_MIN,
    UINT32_MAX,
    FloatSamples,
    IntegerSamples,
    PRNGKey,
)
from .logging import configure_logging

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "UINT32_MAX",
    "FloatSamples",
    "IntegerSamples",
    "PRNGKey",
    "configure_logging",
]
