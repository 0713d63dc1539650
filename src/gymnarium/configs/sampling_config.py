from __future__ import annotations

import equinox as eqx
from omegaconf import DictConfig

from gymnarium.seed import Seed
from gymnarium.utils.jax_types import PRNGKey

from .validation import check_hashable


class SamplingConfig(eqx.Module):
    """Where sampling randomness comes from.

    A ``seed`` of None draws from operating system entropy; any string is
    folded through ``Seed``.
    """

    seed: str | None = None

    def validate(self) -> tuple[str, ...]:
        if self.seed is not None and not isinstance(self.seed, str):
            return (f"seed must be a string or null, got {type(self.seed).__name__}",)
        return ()

    def make_seed(self) -> Seed:
        if self.seed is None:
            return Seed.new_random()
        return Seed.from_value(self.seed)

    def prng_key(self) -> PRNGKey:
        return self.make_seed().to_prng_key()

    def __check_init__(self):
        check_hashable(self, "SamplingConfig")

    @classmethod
    def from_hydra(cls, cfg: DictConfig) -> SamplingConfig:
        seed = cfg.get("seed")
        return cls(seed=None if seed is None else str(seed))
