"""
Seed conversions for reproducible random sources.

A ``Seed`` holds an arbitrary byte string and folds it into fixed-size byte
arrays (8, 16 or 32 bytes) or a 64-bit integer. Folding iterates the input
bytes in order and adds each one, wrapping at 256, into ``output[i % width]``.
The fold order and modulus are part of the seed-compatibility contract and must
not change.

Examples:
    ```python
    from gymnarium import Seed

    Seed.from_value("12345678").fold(8)      # b"12345678"
    int(Seed.from_value(bytes([1, 2, 3, 4])))  # 72623859706101760
    key = Seed.from_value("gymnarium").to_prng_key()
    ```
"""

from __future__ import annotations

from collections.abc import Iterable

import chex
import jax.numpy as jnp
import numpy as np

from gymnarium.utils.jax_types import PRNGKey

SEED_WIDTHS = (8, 16, 32)
RANDOM_SEED_LENGTH = 32


@chex.dataclass(frozen=True)
class Seed:
    """
    Byte-string seed with wraparound folding.

    Attributes:
        seed_value: The raw seed bytes, in the order they are folded.
    """

    seed_value: bytes

    @classmethod
    def from_value(cls, value: Seed | bytes | bytearray | str | int | Iterable[int]) -> Seed:
        """Convert a string, byte sequence or unsigned 64-bit integer into a seed.

        Strings are encoded as UTF-8. Integers are stored as their eight
        big-endian bytes and must fit into an unsigned 64-bit integer.
        """
        if isinstance(value, Seed):
            return value
        if isinstance(value, str):
            return cls(seed_value=value.encode("utf-8"))
        if isinstance(value, (bytes, bytearray)):
            return cls(seed_value=bytes(value))
        if isinstance(value, bool):
            msg = f"Cannot create a seed from boolean {value!r}"
            raise TypeError(msg)
        if isinstance(value, (int, np.integer)):
            value = int(value)
            if not 0 <= value < 2**64:
                msg = f"Integer seed must fit into 64 unsigned bits, got {value}"
                raise ValueError(msg)
            return cls(seed_value=value.to_bytes(8, "big"))
        if isinstance(value, Iterable):
            return cls(seed_value=bytes(value))
        msg = f"Cannot create a seed from {type(value).__name__}"
        raise TypeError(msg)

    @classmethod
    def new_random(cls) -> Seed:
        """Create a seed of 32 bytes drawn from operating system entropy."""
        rng = np.random.default_rng()
        data = rng.integers(0, 256, size=RANDOM_SEED_LENGTH, dtype=np.uint8)
        return cls(seed_value=data.tobytes())

    def fold(self, width: int) -> bytes:
        """Fold the seed bytes into ``width`` bytes with wraparound addition."""
        if width not in SEED_WIDTHS:
            msg = f"width must be one of {SEED_WIDTHS}, got {width}"
            raise ValueError(msg)
        output = [0] * width
        for index, byte in enumerate(self.seed_value):
            output[index % width] = (output[index % width] + byte) % 256
        return bytes(output)

    def __int__(self) -> int:
        return int.from_bytes(self.fold(8), "big")

    def to_prng_key(self) -> PRNGKey:
        """Derive a raw JAX PRNG key from the 64-bit fold of this seed.

        The key layout is ``[high 32 bits, low 32 bits]``, which is what
        ``jax.random.PRNGKey`` produces for the same integer.
        """
        word = int(self)
        return jnp.array([word >> 32, word & 0xFFFFFFFF], dtype=jnp.uint32)

    def __repr__(self) -> str:
        return f"Seed({self.seed_value.hex()})"
