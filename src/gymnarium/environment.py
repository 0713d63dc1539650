"""
Interfaces binding environments to agents.

An ``Environment`` owns its state and exposes it as a ``Position`` inside its
observation space; an ``Agent`` answers every state with a ``Position`` inside
the environment's action space. Both accept an optional seed so that their
internal randomness can be reproduced.

Concrete environments and agents live in downstream packages. This module only
fixes the contract that ``gymnarium.rollout.run_episode`` drives.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, TypeAlias, runtime_checkable

from .seed import Seed
from .spaces import Position, Space

ObservationSpace: TypeAlias = Space
ActionSpace: TypeAlias = Space
EnvironmentState: TypeAlias = Position
AgentAction: TypeAlias = Position

SeedValue: TypeAlias = "Seed | bytes | str | int"


@runtime_checkable
class Reward(Protocol):
    """Anything that can be reduced to a scalar reward."""

    def value(self) -> float: ...


def reward_value(reward: Reward | float) -> float:
    """Scalar value of ``reward``; plain numbers are their own value."""
    if isinstance(reward, Reward):
        return float(reward.value())
    return float(reward)


@runtime_checkable
class ToActionMapper(Protocol):
    """Maps arbitrary input (keyboard state, controller, ...) to an action."""

    def map(self, input: Any) -> AgentAction: ...


class Environment(ABC):
    """
    Base class for environments.

    Subclasses implement the spaces, ``reseed``, ``reset``, ``state`` and
    ``step``. Snapshots through ``load``/``store`` are optional.
    """

    @abstractmethod
    def action_space(self) -> ActionSpace:
        """Space every action passed to ``step`` has to lie in."""

    @abstractmethod
    def observation_space(self) -> ObservationSpace:
        """Space every state returned by ``reset``/``step`` lies in."""

    def suggested_episode_steps_count(self) -> int | None:
        """Number of steps an episode should usually be limited to, if any."""
        return None

    @abstractmethod
    def reseed(self, seed: SeedValue | None = None) -> None:
        """Reinitialize the random source, from OS entropy if ``seed`` is None."""

    def reset(self, seed: SeedValue | None = None) -> EnvironmentState:
        """Start a new episode and return its first state.

        A given seed is applied through ``reseed`` before ``_reset`` runs.
        """
        if seed is not None:
            self.reseed(seed)
        return self._reset()

    @abstractmethod
    def _reset(self) -> EnvironmentState: ...

    @abstractmethod
    def state(self) -> EnvironmentState:
        """Current state without advancing the environment."""

    @abstractmethod
    def step(
        self, action: AgentAction
    ) -> tuple[EnvironmentState, Reward | float, bool, dict[str, Any]]:
        """Apply ``action`` and return ``(state, reward, done, info)``."""

    def load(self, data: Any) -> None:
        msg = f"{type(self).__name__} does not support loading snapshots"
        raise NotImplementedError(msg)

    def store(self) -> Any:
        msg = f"{type(self).__name__} does not support storing snapshots"
        raise NotImplementedError(msg)

    def close(self) -> None:
        """Release held resources."""
        return


class Agent(ABC):
    """Base class for agents acting in an ``Environment``."""

    @abstractmethod
    def reseed(self, seed: SeedValue | None = None) -> None: ...

    def reset(self, seed: SeedValue | None = None) -> None:
        """Forget the last episode, reseeding first if ``seed`` is given."""
        if seed is not None:
            self.reseed(seed)

    @abstractmethod
    def choose_action(self, state: EnvironmentState) -> AgentAction: ...

    @abstractmethod
    def process_reward(
        self,
        old_state: EnvironmentState,
        last_action: AgentAction,
        new_state: EnvironmentState,
        reward: Reward | float,
        is_done: bool,
    ) -> None:
        """Learn from one transition."""

    def load(self, data: Any) -> None:
        msg = f"{type(self).__name__} does not support loading snapshots"
        raise NotImplementedError(msg)

    def store(self) -> Any:
        msg = f"{type(self).__name__} does not support storing snapshots"
        raise NotImplementedError(msg)

    def close(self) -> None:
        return


__all__ = [
    "ActionSpace",
    "Agent",
    "AgentAction",
    "Environment",
    "EnvironmentState",
    "ObservationSpace",
    "Reward",
    "SeedValue",
    "ToActionMapper",
    "reward_value",
]
