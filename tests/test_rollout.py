"""
Tests for the environment/agent interfaces and the rollout driver.
"""

from __future__ import annotations

import jax
import pytest

from gymnarium import (
    ActionOutOfSpaceError,
    Agent,
    DimensionBoundaries,
    DimensionValue,
    Environment,
    Position,
    Reward,
    Seed,
    Space,
    ToActionMapper,
    reward_value,
    run_episode,
)


class CounterEnvironment(Environment):
    """Counts up by the chosen action until the target is reached."""

    def __init__(self, target: int = 10, suggested_steps: int | None = None):
        self.target = target
        self.suggested_steps = suggested_steps
        self.seeds: list[Seed] = []
        self.counter = 0
        self.closed = False

    def action_space(self) -> Space:
        return Space.simple([DimensionBoundaries.integer(0, 2)])

    def observation_space(self) -> Space:
        return Space.simple([DimensionBoundaries.integer(0, self.target)])

    def suggested_episode_steps_count(self):
        return self.suggested_steps

    def reseed(self, seed=None) -> None:
        self.seeds.append(Seed.new_random() if seed is None else Seed.from_value(seed))

    def _reset(self) -> Position:
        self.counter = 0
        return self.state()

    def state(self) -> Position:
        return Position.simple([DimensionValue.integer(self.counter)])

    def step(self, action):
        self.counter = min(self.counter + action.get_value(0).expect_integer(), self.target)
        done = self.counter == self.target
        return self.state(), 1.0, done, {"counter": self.counter}

    def close(self) -> None:
        self.closed = True


class ScoredReward:
    def __init__(self, score: float):
        self.score = score

    def value(self) -> float:
        return self.score


class ConstantAgent(Agent):
    """Always chooses the same action and records every transition."""

    def __init__(self, action: int = 1):
        self.action = action
        self.seeds: list[Seed] = []
        self.transitions: list[tuple] = []

    def reseed(self, seed=None) -> None:
        self.seeds.append(Seed.new_random() if seed is None else Seed.from_value(seed))

    def choose_action(self, state):
        return Position.simple([DimensionValue.integer(self.action)])

    def process_reward(self, old_state, last_action, new_state, reward, is_done):
        self.transitions.append((old_state, last_action, new_state, reward, is_done))


class RandomAgent(ConstantAgent):
    """Samples from the action space with a key derived from its seed."""

    def __init__(self, action_space: Space):
        super().__init__()
        self.action_space = action_space
        self.key = None

    def reseed(self, seed=None) -> None:
        super().reseed(seed)
        self.key = self.seeds[-1].to_prng_key()

    def choose_action(self, state):
        self.key, subkey = jax.random.split(self.key)
        return self.action_space.sample_with(subkey)


class TestInterfaces:
    """Test the abstract base classes and protocols."""

    def test_environment_is_abstract(self):
        with pytest.raises(TypeError):
            Environment()

    def test_defaults(self):
        environment = CounterEnvironment()
        agent = ConstantAgent()

        assert Environment.suggested_episode_steps_count(environment) is None
        with pytest.raises(NotImplementedError, match="CounterEnvironment"):
            environment.store()
        with pytest.raises(NotImplementedError):
            agent.load({})

    def test_reset_reseeds_only_with_seed(self):
        environment = CounterEnvironment()

        environment.reset()
        assert environment.seeds == []

        environment.reset("abc")
        assert environment.seeds == [Seed.from_value("abc")]

    def test_reward_protocol(self):
        assert isinstance(ScoredReward(2.0), Reward)
        assert reward_value(ScoredReward(2.5)) == 2.5
        assert reward_value(3) == 3.0

    def test_to_action_mapper_protocol(self):
        class KeyboardMapper:
            def map(self, input):
                return Position.simple([DimensionValue.integer(1 if input == "up" else 0)])

        mapper = KeyboardMapper()

        assert isinstance(mapper, ToActionMapper)
        assert mapper.map("up").get_value(0) == DimensionValue.integer(1)


class TestRunEpisode:
    """Test episode termination and bookkeeping."""

    def test_runs_until_done(self):
        environment = CounterEnvironment(target=4)
        agent = ConstantAgent(action=1)

        result = run_episode(environment, agent)

        assert result.steps == 4
        assert result.done is True
        assert result.total_reward == 4.0
        assert result.final_state == Position.simple([DimensionValue.integer(4)])
        assert len(agent.transitions) == 4
        assert agent.transitions[-1][4] is True

    def test_transitions_chain_states(self):
        agent = ConstantAgent(action=2)

        run_episode(CounterEnvironment(target=4), agent)

        (old, action, new, reward, done), second = agent.transitions
        assert old.get_value(0) == DimensionValue.integer(0)
        assert action.get_value(0) == DimensionValue.integer(2)
        assert new == second[0]
        assert reward == 1.0
        assert done is False

    def test_max_steps_limits_episode(self):
        result = run_episode(CounterEnvironment(target=100), ConstantAgent(), max_steps=3)

        assert result.steps == 3
        assert result.done is False

    def test_suggested_steps_are_used(self):
        environment = CounterEnvironment(target=100, suggested_steps=5)

        assert run_episode(environment, ConstantAgent()).steps == 5
        assert run_episode(environment, ConstantAgent(), max_steps=2).steps == 2

    def test_zero_steps(self):
        result = run_episode(CounterEnvironment(), ConstantAgent(), max_steps=0)

        assert result.steps == 0
        assert result.final_state == Position.simple([DimensionValue.integer(0)])

    def test_negative_max_steps(self):
        with pytest.raises(ValueError, match="max_steps"):
            run_episode(CounterEnvironment(), ConstantAgent(), max_steps=-1)

    def test_seed_reaches_both_sides(self):
        environment = CounterEnvironment()
        agent = ConstantAgent()

        run_episode(environment, agent, seed=7)

        assert environment.seeds == [Seed.from_value(7)]
        assert agent.seeds == [Seed.from_value(7)]

    def test_seeded_episodes_are_reproducible(self):
        environment = CounterEnvironment(target=20)
        first_agent = RandomAgent(environment.action_space())
        second_agent = RandomAgent(environment.action_space())

        first = run_episode(environment, first_agent, seed="episode")
        second = run_episode(environment, second_agent, seed="episode")

        assert first.steps == second.steps
        assert [t[1] for t in first_agent.transitions] == [t[1] for t in second_agent.transitions]

    def test_invalid_action(self):
        with pytest.raises(ActionOutOfSpaceError) as excinfo:
            run_episode(
                CounterEnvironment(), ConstantAgent(action=5), validate_actions=True
            )

        assert excinfo.value.step == 0

    def test_invalid_action_unchecked_by_default(self):
        result = run_episode(CounterEnvironment(target=10), ConstantAgent(action=5))

        assert result.steps == 2

    def test_reward_objects_are_summed(self):
        class ScoringEnvironment(CounterEnvironment):
            def step(self, action):
                state, _, done, info = super().step(action)
                return state, ScoredReward(0.5), done, info

        result = run_episode(ScoringEnvironment(target=3), ConstantAgent())

        assert result.total_reward == 1.5

    def test_logs_episode_summary(self, log_messages):
        run_episode(CounterEnvironment(target=2), ConstantAgent())

        assert any("Episode finished after 2 steps" in message for message in log_messages)
