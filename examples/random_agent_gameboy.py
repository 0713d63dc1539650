#!/usr/bin/env python3
"""
Random agent on a toy handheld console environment.

The environment's observation format is read from ``gameboy.yaml``. Each step
the agent presses a random D-pad direction and buttons; the environment
rewards the agent for pressing A while the screen is bright.

Usage:
    python examples/random_agent_gameboy.py
"""

from __future__ import annotations

from pathlib import Path

import jax
from rich.console import Console
from rich.table import Table

from gymnarium import (
    Agent,
    DimensionValue,
    Environment,
    GymnariumConfig,
    Position,
    Seed,
    Space,
    run_episode,
)
from gymnarium.utils import configure_logging

CONFIG_PATH = Path(__file__).with_name("gameboy.yaml")

console = Console()


class GameboyEnvironment(Environment):
    def __init__(self, config: GymnariumConfig):
        self.format = config.format.build_format()
        self.space = config.format.build_space(self.format)
        self.key = Seed.new_random().to_prng_key()
        self.observation = self.format.new_position()

    def action_space(self) -> Space:
        return self.format.get_subspace(self.space, "ext_controller")

    def observation_space(self) -> Space:
        return self.space

    def suggested_episode_steps_count(self) -> int:
        return 20

    def reseed(self, seed=None) -> None:
        seed = Seed.new_random() if seed is None else Seed.from_value(seed)
        self.key = seed.to_prng_key()

    def _reset(self) -> Position:
        self.key, subkey = jax.random.split(self.key)
        self.observation = self.space.sample_with(subkey)
        return self.state()

    def state(self) -> Position:
        return self.observation.copy()

    def step(self, action):
        brightness = sum(
            value.expect_integer()
            for value in self.format.get_subposition(self.observation, "screen")
        )
        pressed_a = action.get_value(1).expect_integer() == 1
        reward = brightness / 24.0 if pressed_a else 0.0

        self.key, subkey = jax.random.split(self.key)
        self.observation = self.space.sample_with(subkey)
        self.format.set_subposition(self.observation, "ext_controller", action)
        return self.state(), reward, False, {"brightness": brightness}


class RandomAgent(Agent):
    def __init__(self, action_space: Space):
        self.action_space = action_space
        self.key = Seed.new_random().to_prng_key()
        self.rewards: list[float] = []

    def reseed(self, seed=None) -> None:
        seed = Seed.new_random() if seed is None else Seed.from_value(seed)
        self.key = seed.to_prng_key()

    def choose_action(self, state):
        self.key, subkey = jax.random.split(self.key)
        return self.action_space.sample_with(subkey)

    def process_reward(self, old_state, last_action, new_state, reward, is_done):
        self.rewards.append(float(reward))


def main():
    config = GymnariumConfig.from_yaml_file(CONFIG_PATH)
    configure_logging(config.logging)

    environment = GameboyEnvironment(config)
    agent = RandomAgent(environment.action_space())

    console.print(f"Observation format: {environment.format}")
    console.print(f"Action space: {environment.action_space()}")

    result = run_episode(environment, agent, seed=config.sampling.seed)

    table = Table(title="Episode summary")
    table.add_column("Steps", justify="right")
    table.add_column("Total reward", justify="right")
    table.add_column("Best step reward", justify="right")
    table.add_row(str(result.steps), f"{result.total_reward:.3f}", f"{max(agent.rewards):.3f}")
    console.print(table)

    controller = environment.format.get_subposition(result.final_state, "ext_controller")
    pressed = DimensionValue.integer(1)
    console.print(
        f"Last controller state: {controller}, A pressed: {controller.get_value(1) == pressed}"
    )


if __name__ == "__main__":
    main()
