"""
Essential JAX type definitions for gymnarium.

Only the array aliases the sampling code actually exchanges with JAX live
here: PRNG keys and the flat per-kind sample vectors drawn by
``Space.sample_with``.
"""

from __future__ import annotations

from typing import TypeAlias

from jaxtyping import Array, Float, Int, UInt

# =============================================================================
# Random Number Generation
# =============================================================================

PRNGKey: TypeAlias = UInt[Array, "2"]
"""Raw (legacy, threefry) JAX PRNG key array with shape (2,)."""

# =============================================================================
# Flat Sample Vectors
# =============================================================================

IntegerSamples: TypeAlias = Int[Array, "cells"]
"""Integer draws for every INTEGER cell of a space, in flat storage order."""

FloatSamples: TypeAlias = Float[Array, "cells"]
"""Float32 draws for every FLOAT cell of a space, in flat storage order."""

# =============================================================================
# Constants
# =============================================================================

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1
