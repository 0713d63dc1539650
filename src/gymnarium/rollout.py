"""Driving a single environment/agent episode."""

from __future__ import annotations

import chex
from loguru import logger

from .environment import (
    Agent,
    AgentAction,
    Environment,
    EnvironmentState,
    SeedValue,
    reward_value,
)


class ActionOutOfSpaceError(ValueError):
    """Raised when an agent chooses an action outside the action space."""

    def __init__(self, action: AgentAction, step: int):
        self.action = action
        self.step = step
        super().__init__(f"Action {action!r} chosen at step {step} is not in the action space")


@chex.dataclass(frozen=True)
class EpisodeResult:
    """
    Outcome of ``run_episode``.

    Attributes:
        steps: Number of ``step`` calls performed
        total_reward: Sum of the scalar values of all rewards
        done: Whether the environment reported the end of the episode, as
            opposed to the step budget running out
        final_state: State returned by the last ``step`` (or ``reset``)
    """

    steps: int
    total_reward: float
    done: bool
    final_state: EnvironmentState


def run_episode(
    environment: Environment,
    agent: Agent,
    seed: SeedValue | None = None,
    max_steps: int | None = None,
    validate_actions: bool = False,
) -> EpisodeResult:
    """Run one episode of ``agent`` in ``environment``.

    Both sides are reset with the same ``seed``. Every step the agent chooses an
    action for the current state, the environment applies it and the agent is
    told about the transition. The episode stops when the environment reports
    ``done`` or after ``max_steps`` steps; without ``max_steps`` the
    environment's ``suggested_episode_steps_count`` is used and, if that is
    None too, the episode only ends through ``done``.

    Args:
        environment: Environment to act in
        agent: Agent choosing the actions
        seed: Seed passed to both ``reset`` calls
        max_steps: Step budget, overriding the environment's suggestion
        validate_actions: Check every action against ``action_space()``

    Raises:
        ActionOutOfSpaceError: If ``validate_actions`` is set and an action
            is not contained in the action space.
    """
    if max_steps is None:
        max_steps = environment.suggested_episode_steps_count()
    if max_steps is not None and max_steps < 0:
        msg = f"max_steps must be non-negative, got {max_steps}"
        raise ValueError(msg)

    state = environment.reset(seed)
    agent.reset(seed)
    action_space = environment.action_space() if validate_actions else None
    logger.debug(
        f"Starting episode with {type(environment).__name__} and "
        f"{type(agent).__name__} (max_steps={max_steps})"
    )

    steps = 0
    total_reward = 0.0
    done = False
    while not done and (max_steps is None or steps < max_steps):
        action = agent.choose_action(state)
        if action_space is not None and not action_space.contains(action):
            raise ActionOutOfSpaceError(action, steps)
        new_state, reward, done, _info = environment.step(action)
        agent.process_reward(state, action, new_state, reward, done)
        total_reward += reward_value(reward)
        state = new_state
        steps += 1

    logger.info(
        f"Episode finished after {steps} steps with total reward {total_reward:.4f}"
        f" ({'done' if done else 'step budget exhausted'})"
    )
    return EpisodeResult(
        steps=steps, total_reward=total_reward, done=bool(done), final_state=state
    )


__all__ = ["ActionOutOfSpaceError", "EpisodeResult", "run_episode"]
