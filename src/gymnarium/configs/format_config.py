"""
Declarative formats: named regions and their boundaries.

```yaml
format:
  entries:
    - key: sensors.position
      shape: [3]
      boundaries:
        - {kind: float, minimum: -100.0, maximum: 100.0}
    - key: ext_controller
      shape: [3]
      boundaries:
        - {kind: integer, minimum: 0, maximum: 4}
        - {kind: integer, minimum: 0, maximum: 1}
        - {kind: integer, minimum: 0, maximum: 1}
```

An entry lists either one boundary, used for every cell of its region, or
exactly one boundary per cell in flat storage order.
"""

from __future__ import annotations

import math
from typing import Any

import equinox as eqx
from loguru import logger
from omegaconf import DictConfig

from gymnarium.spaces import DimensionBoundaries, Format, Space
from gymnarium.utils.jax_types import INT32_MAX, INT32_MIN

from .validation import (
    ConfigValidationError,
    check_hashable,
    ensure_tuple,
    validate_number,
    validate_shape,
    validate_string_choice,
)

BOUNDARY_KINDS = ("integer", "float")


class BoundaryConfig(eqx.Module):
    """Inclusive boundaries of one cell."""

    kind: str = "integer"
    minimum: int | float = 0
    maximum: int | float = 0

    def validate(self) -> tuple[str, ...]:
        errors: list[str] = []

        try:
            validate_string_choice(self.kind, "kind", BOUNDARY_KINDS)
            validate_number(self.minimum, "minimum")
            validate_number(self.maximum, "maximum")
        except ConfigValidationError as e:
            errors.append(str(e))
            return tuple(errors)

        if self.kind == "integer" and not (
            isinstance(self.minimum, int) and isinstance(self.maximum, int)
        ):
            errors.append(
                f"integer boundaries need integer limits, got [{self.minimum}, {self.maximum}]"
            )
        elif self.kind == "integer" and not all(
            INT32_MIN <= limit <= INT32_MAX for limit in (self.minimum, self.maximum)
        ):
            errors.append(
                f"integer limits must fit into int32, got [{self.minimum}, {self.maximum}]"
            )
        if self.minimum > self.maximum:
            errors.append(
                f"minimum must not exceed maximum, got [{self.minimum}, {self.maximum}]"
            )

        return tuple(errors)

    def to_boundaries(self) -> DimensionBoundaries:
        if self.kind == "float":
            return DimensionBoundaries.float32(self.minimum, self.maximum)
        return DimensionBoundaries.integer(self.minimum, self.maximum)

    def __check_init__(self):
        check_hashable(self, "BoundaryConfig")

    @classmethod
    def from_hydra(cls, cfg: DictConfig) -> BoundaryConfig:
        return cls(
            kind=str(cfg.get("kind", "integer")).lower(),
            minimum=cfg.get("minimum", 0),
            maximum=cfg.get("maximum", 0),
        )


class EntryConfig(eqx.Module):
    """One named region of a format."""

    key: str
    shape: tuple[int, ...]
    boundaries: tuple[BoundaryConfig, ...]

    def __init__(
        self,
        key: str,
        shape: Any = (1,),
        boundaries: Any = None,
    ):
        self.key = key
        self.shape = ensure_tuple(shape, default=(1,), of_type=int)
        self.boundaries = ensure_tuple(
            boundaries, default=(BoundaryConfig(),), of_type=BoundaryConfig
        )

    @property
    def length(self) -> int:
        return math.prod(self.shape)

    def validate(self) -> tuple[str, ...]:
        errors: list[str] = []

        if not isinstance(self.key, str) or not self.key.strip():
            errors.append("key must be a non-empty string")
        name = f"'{self.key}'"
        errors.extend(validate_shape(self.shape, f"{name}.shape"))
        if not self.boundaries:
            errors.append(f"{name}.boundaries cannot be empty")
        elif not errors and len(self.boundaries) not in (1, self.length):
            errors.append(
                f"{name}.boundaries must hold 1 or {self.length} entries, "
                f"got {len(self.boundaries)}"
            )
        for i, boundary in enumerate(self.boundaries):
            errors.extend(
                f"{name}.boundaries[{i}]: {error}" for error in boundary.validate()
            )

        return tuple(errors)

    def to_space(self) -> Space:
        """Space of this region shaped by ``shape``."""
        if len(self.boundaries) == 1:
            return Space.all(self.boundaries[0].to_boundaries(), self.shape)
        return Space([b.to_boundaries() for b in self.boundaries], self.shape)

    def __check_init__(self):
        check_hashable(self, "EntryConfig")

    @classmethod
    def from_hydra(cls, cfg: DictConfig) -> EntryConfig:
        boundaries = cfg.get("boundaries")
        return cls(
            key=cfg.get("key", ""),
            shape=cfg.get("shape", (1,)),
            boundaries=None
            if boundaries is None
            else tuple(BoundaryConfig.from_hydra(b) for b in boundaries),
        )


class FormatConfig(eqx.Module):
    """Ordered regions making up one flat space."""

    entries: tuple[EntryConfig, ...] = ()

    def __init__(self, entries: Any = ()):
        self.entries = ensure_tuple(entries, default=(), of_type=EntryConfig)

    def validate(self) -> tuple[str, ...]:
        errors: list[str] = []

        for entry in self.entries:
            errors.extend(entry.validate())

        keys = [entry.key for entry in self.entries]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            errors.append(f"entries contain duplicate keys: {duplicates}")
        if not self.entries:
            logger.warning("Format configuration has no entries")

        return tuple(errors)

    def build_format(self) -> Format:
        space_format = Format()
        for entry in self.entries:
            space_format.add(entry.key, entry.shape)
        return space_format

    def build_space(self, space_format: Format | None = None) -> Space:
        """Allocate the flat space of ``space_format`` and fill every region."""
        if space_format is None:
            space_format = self.build_format()
        space = space_format.new_space()
        for entry in self.entries:
            space_format.set_subspace(space, entry.key, entry.to_space())
        unpopulated = space_format.unpopulated_keys(space)
        if unpopulated:
            logger.warning(f"Regions with INTEGER[0, 0] boundaries only: {unpopulated}")
        return space

    def __check_init__(self):
        check_hashable(self, "FormatConfig")

    @classmethod
    def from_hydra(cls, cfg: DictConfig) -> FormatConfig:
        entries = cfg.get("entries") or ()
        return cls(entries=tuple(EntryConfig.from_hydra(entry) for entry in entries))
