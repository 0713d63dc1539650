"""
Tests for Equinox-based configuration classes.
"""

from __future__ import annotations

import json

import pytest
from loguru import logger
from omegaconf import OmegaConf

from gymnarium.configs import (
    BoundaryConfig,
    ConfigValidationError,
    EntryConfig,
    FormatConfig,
    GymnariumConfig,
    LoggingConfig,
    SamplingConfig,
)
from gymnarium.spaces import DimensionBoundaries, Format, KeyNotFoundInFormatError, Space
from gymnarium.utils import configure_logging

CONFIG_YAML = """
logging:
  log_level: debug
  log_format: text
  colorize: false
sampling:
  seed: "gymnarium"
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
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_default_creation(self):
        config = LoggingConfig()

        assert config.log_level == "INFO"
        assert config.log_format == "text"
        assert config.colorize is True
        assert config.validate() == ()

    def test_validation_errors(self):
        errors = LoggingConfig(log_level="LOUD").validate()

        assert any("log_level must be one of" in error for error in errors)

    def test_from_hydra_normalizes_level(self):
        config = LoggingConfig.from_hydra(OmegaConf.create({"log_level": "warning"}))

        assert config.log_level == "WARNING"
        assert config.log_format == "text"

    def test_hashable(self):
        assert hash(LoggingConfig()) == hash(LoggingConfig())


class TestSamplingConfig:
    """Test SamplingConfig class."""

    def test_seeded_key_is_reproducible(self):
        config = SamplingConfig(seed="abc")

        assert config.prng_key().tolist() == config.prng_key().tolist()

    def test_numeric_seed_becomes_text(self):
        config = SamplingConfig.from_hydra(OmegaConf.create({"seed": 42}))

        assert config.seed == "42"

    def test_unseeded(self):
        assert SamplingConfig().validate() == ()
        assert len(SamplingConfig().make_seed().seed_value) == 32


class TestFormatConfig:
    """Test boundary, entry and format configs."""

    def test_boundary_to_boundaries(self):
        assert BoundaryConfig(kind="float", minimum=-1.0, maximum=1.0).to_boundaries() == (
            DimensionBoundaries.float32(-1.0, 1.0)
        )
        assert BoundaryConfig(kind="integer", minimum=0, maximum=3).to_boundaries() == (
            DimensionBoundaries.integer(0, 3)
        )

    @pytest.mark.parametrize(
        ("boundary", "message"),
        [
            (BoundaryConfig(kind="complex"), "kind must be one of"),
            (BoundaryConfig(kind="integer", minimum=0, maximum=1.5), "integer limits"),
            (BoundaryConfig(kind="float", minimum=2.0, maximum=1.0), "must not exceed"),
            (BoundaryConfig(kind="float", minimum="a", maximum=1.0), "must be a number"),
        ],
    )
    def test_boundary_validation(self, boundary, message):
        assert any(message in error for error in boundary.validate())

    def test_entry_lists_become_tuples(self):
        entry = EntryConfig(key="a", shape=[2, 2], boundaries=[BoundaryConfig()])

        assert entry.shape == (2, 2)
        assert isinstance(entry.boundaries, tuple)
        assert entry.length == 4

    def test_entry_with_single_boundary_fills_region(self):
        entry = EntryConfig(
            key="image",
            shape=(2, 3),
            boundaries=(BoundaryConfig(kind="integer", minimum=0, maximum=255),),
        )

        assert entry.to_space() == Space.all(DimensionBoundaries.integer(0, 255), (2, 3))

    def test_entry_boundary_count(self):
        entry = EntryConfig(key="a", shape=(3,), boundaries=(BoundaryConfig(),) * 2)

        assert any("must hold 1 or 3 entries" in error for error in entry.validate())

    def test_entry_shape_validation(self):
        errors = EntryConfig(key="a", shape=(2, 0)).validate()

        assert any("shape[1] must be positive" in error for error in errors)

    def test_duplicate_keys(self):
        config = FormatConfig(entries=(EntryConfig(key="a"), EntryConfig(key="a")))

        assert any("duplicate keys" in error for error in config.validate())

    def test_build_space(self):
        config = GymnariumConfig.from_hydra(OmegaConf.create(CONFIG_YAML))
        space_format = config.format.build_format()

        space = config.format.build_space(space_format)

        assert space_format.keys() == ["sensors.position", "ext_controller"]
        assert space.dimensions == (6,)
        assert space_format.get_subspace(space, "ext_controller") == Space.simple(
            [DimensionBoundaries.from_scalar(n) for n in (4, 1, 1)]
        )

    def test_build_space_uses_given_empty_format(self):
        config = FormatConfig(entries=(EntryConfig(key="a", shape=(2,)),))

        with pytest.raises(KeyNotFoundInFormatError):
            config.build_space(Format())

    def test_integer_limits_outside_int32(self):
        errors = BoundaryConfig(kind="integer", minimum=0, maximum=2**31).validate()

        assert any("must fit into int32" in error for error in errors)

    def test_build_space_warns_about_placeholders(self, log_messages):
        config = FormatConfig(
            entries=(
                EntryConfig(
                    key="zero", shape=(2,), boundaries=(BoundaryConfig(kind="integer"),)
                ),
            )
        )

        config.build_space()

        assert any("Regions with INTEGER[0, 0] boundaries only" in m for m in log_messages)


class TestGymnariumConfig:
    """Test the unified configuration."""

    def test_default_creation(self):
        config = GymnariumConfig()

        assert config.logging == LoggingConfig()
        assert config.format.entries == ()

    def test_from_yaml_file(self, config_file):
        config = GymnariumConfig.from_yaml_file(config_file)

        assert config.logging.log_level == "DEBUG"
        assert config.logging.colorize is False
        assert config.sampling.seed == "gymnarium"
        assert len(config.format.entries) == 2
        assert config.format.entries[0].boundaries[0].minimum == -100.0
        assert config.validate() == ()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigValidationError, match="does not exist"):
            GymnariumConfig.from_yaml_file(tmp_path / "missing.yaml")

    def test_yaml_round_trip(self, config_file, tmp_path):
        config = GymnariumConfig.from_yaml_file(config_file)
        out = tmp_path / "nested" / "out.yaml"

        config.to_yaml_file(out)

        assert GymnariumConfig.from_yaml_file(out) == config

    def test_to_yaml_contains_sections(self):
        text = GymnariumConfig().to_yaml()

        assert "logging:" in text
        assert "sampling:" in text
        assert "format:" in text

    def test_validate_collects_sub_config_errors(self):
        config = GymnariumConfig(
            logging=LoggingConfig(log_format="xml"),
            format=FormatConfig(entries=(EntryConfig(key="", shape=(1,)),)),
        )

        errors = config.validate()

        assert any("log_format" in error for error in errors)
        assert any("key must be a non-empty string" in error for error in errors)

    def test_invalid_structure_is_wrapped(self):
        with pytest.raises(ConfigValidationError, match="Failed to create configuration"):
            GymnariumConfig.from_hydra(OmegaConf.create({"format": {"entries": 5}}))


class TestConfigureLogging:
    """Test loguru sink setup from LoggingConfig."""

    def test_text_sink_respects_level(self):
        messages: list[str] = []
        handler_id = configure_logging(
            LoggingConfig(log_level="WARNING", colorize=False), sink=messages.append
        )
        try:
            logger.info("hidden")
            logger.warning("shown")
        finally:
            logger.remove(handler_id)

        assert len(messages) == 1
        assert "shown" in messages[0]

    def test_json_sink_serializes_records(self):
        messages: list[str] = []
        handler_id = configure_logging(
            LoggingConfig(log_format="json"), sink=messages.append
        )
        try:
            logger.info("hello")
        finally:
            logger.remove(handler_id)

        record = json.loads(messages[0])["record"]
        assert record["message"] == "hello"
        assert record["level"]["name"] == "INFO"
