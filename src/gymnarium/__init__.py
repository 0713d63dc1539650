"""gymnarium: shaped spaces, positions and named formats for reinforcement learning.

gymnarium describes what an environment observes and what an agent may do as a
``Space``: a flat list of inclusive per-cell boundaries plus a shape. Points in
a space are ``Position``s, drawn reproducibly with JAX PRNG keys. A ``Format``
names regions of one flat space so that irregular, nested observations fit a
single buffer.

Key Features:
- Integer and float32 cells with inclusive bounds
- Deterministic, vectorized sampling from JAX PRNG keys
- Named sub-regions through ``Format``
- Byte-folding seeds compatible across implementations
- Environment/Agent interfaces and a rollout driver

Examples:
    ```python
    from gymnarium import DimensionBoundaries, Format, Seed, Space

    space_format = Format()
    space_format.add("joystick", (2,))
    space_format.add("buttons", (4,))

    space = space_format.new_space()
    space_format.set_subspace(
        space, "joystick", Space.all(DimensionBoundaries.from_range(-1.0, 1.0), (2,))
    )
    space_format.set_subspace(
        space, "buttons", Space.all(DimensionBoundaries.from_scalar(1), (4,))
    )

    action = space.sample_with(Seed.from_value("demo").to_prng_key())
    pressed = space_format.get_subposition(action, "buttons")
    ```
"""

from __future__ import annotations

from ._version import version as __version__
from .configs import GymnariumConfig
from .environment import (
    ActionSpace,
    Agent,
    AgentAction,
    Environment,
    EnvironmentState,
    ObservationSpace,
    Reward,
    ToActionMapper,
    reward_value,
)
from .rollout import ActionOutOfSpaceError, EpisodeResult, run_episode
from .seed import Seed
from .spaces import (
    DimensionBoundaries,
    DimensionKind,
    DimensionValue,
    Format,
    FormatError,
    Position,
    Space,
    SpaceError,
    calculate_index,
)

__all__ = [
    "ActionOutOfSpaceError",
    "ActionSpace",
    "Agent",
    "AgentAction",
    "DimensionBoundaries",
    "DimensionKind",
    "DimensionValue",
    "Environment",
    "EnvironmentState",
    "EpisodeResult",
    "Format",
    "FormatError",
    "GymnariumConfig",
    "ObservationSpace",
    "Position",
    "Reward",
    "Seed",
    "Space",
    "SpaceError",
    "ToActionMapper",
    "__version__",
    "calculate_index",
    "reward_value",
    "run_episode",
]
