from __future__ import annotations

from pathlib import Path
from typing import Any

import equinox as eqx
import yaml
from loguru import logger
from omegaconf import DictConfig, OmegaConf

from .format_config import FormatConfig
from .logging_config import LoggingConfig
from .sampling_config import SamplingConfig
from .validation import ConfigValidationError, check_hashable


class GymnariumConfig(eqx.Module):
    """Unified configuration for gymnarium using Equinox.

    Main container for logging, sampling and the format of the space.
    """

    logging: LoggingConfig
    sampling: SamplingConfig
    format: FormatConfig

    def __init__(
        self,
        logging: LoggingConfig | None = None,
        sampling: SamplingConfig | None = None,
        format: FormatConfig | None = None,
    ):
        self.logging = logging or LoggingConfig()
        self.sampling = sampling or SamplingConfig()
        self.format = format or FormatConfig()

    def __check_init__(self):
        check_hashable(self, "GymnariumConfig")

    # Sub-config field names for iteration
    _SUB_CONFIGS = ("logging", "sampling", "format")

    def validate(self) -> tuple[str, ...]:
        """Validate all components and cross-config consistency."""
        all_errors: list[str] = []
        for name in self._SUB_CONFIGS:
            all_errors.extend(getattr(self, name).validate())
        all_errors.extend(self._validate_cross_config_consistency())
        return tuple(all_errors)

    def _validate_cross_config_consistency(self) -> tuple[str, ...]:
        warnings: list[str] = []

        if self.sampling.seed is None and self.logging.log_level in ("TRACE", "DEBUG"):
            warnings.append(
                "Debug logging without a sampling seed - sampled positions cannot be reproduced"
            )

        for warning in warnings:
            logger.warning(warning)

        return ()

    def to_yaml(self) -> str:
        try:
            config_dict = {
                name: self._config_to_dict(getattr(self, name))
                for name in self._SUB_CONFIGS
            }
            return yaml.dump(
                config_dict,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
                encoding=None,
            )
        except Exception as e:
            msg = f"Failed to export configuration to YAML: {e}"
            raise ConfigValidationError(msg) from e

    def to_yaml_file(self, yaml_path: str | Path) -> None:
        try:
            yaml_path = Path(yaml_path)
            yaml_path.parent.mkdir(parents=True, exist_ok=True)

            yaml_content = self.to_yaml()
            with yaml_path.open("w", encoding="utf-8") as f:
                f.write(yaml_content)
        except ConfigValidationError:
            raise
        except OSError as e:
            msg = f"Failed to save configuration to YAML file: {e}"
            raise ConfigValidationError(msg) from e

    def _config_to_dict(self, config: eqx.Module) -> dict[str, Any]:
        return {
            name: self._serialize_value(getattr(config, name))
            for name in getattr(type(config), "__annotations__", {})
            if not name.startswith("_") and hasattr(config, name)
        }

    def _serialize_value(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (str, int, float, bool)):
            return value
        if isinstance(value, eqx.Module):
            return self._config_to_dict(value)
        if isinstance(value, (list, tuple)):
            return [self._serialize_value(item) for item in value]
        if isinstance(value, dict):
            return {k: self._serialize_value(v) for k, v in value.items()}
        return str(value)

    @classmethod
    def from_hydra(cls, hydra_config: DictConfig) -> GymnariumConfig:
        try:
            cfg_classes = {
                "logging": LoggingConfig,
                "sampling": SamplingConfig,
                "format": FormatConfig,
            }
            sub_cfgs = {
                name: cfg_cls.from_hydra(hydra_config.get(name) or DictConfig({}))
                for name, cfg_cls in cfg_classes.items()
            }
            return cls(**sub_cfgs)
        except ConfigValidationError:
            raise
        except Exception as e:
            msg = f"Failed to create configuration from OmegaConf: {e}"
            raise ConfigValidationError(msg) from e

    @classmethod
    def from_yaml_file(cls, yaml_path: str | Path) -> GymnariumConfig:
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            msg = f"Configuration file does not exist: {yaml_path}"
            raise ConfigValidationError(msg)
        cfg = OmegaConf.load(yaml_path)
        if not isinstance(cfg, DictConfig):
            msg = f"Configuration file must hold a mapping: {yaml_path}"
            raise ConfigValidationError(msg)
        logger.debug(f"Loaded configuration from {yaml_path}")
        return cls.from_hydra(cfg)
