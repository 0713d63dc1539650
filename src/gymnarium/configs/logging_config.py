from __future__ import annotations

import equinox as eqx
from omegaconf import DictConfig

from .validation import ConfigValidationError, check_hashable, validate_string_choice

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


class LoggingConfig(eqx.Module):
    """Console logging behavior.

    Attributes:
        log_level: Minimum loguru level written to stderr
        log_format: ``text`` for human-readable lines, ``json`` for one
            serialized record per line
        colorize: Colorize text output
    """

    log_level: str = "INFO"
    log_format: str = "text"
    colorize: bool = True

    def validate(self) -> tuple[str, ...]:
        """Validate logging configuration and return tuple of errors."""
        errors: list[str] = []

        try:
            validate_string_choice(self.log_level, "log_level", LOG_LEVELS)
            validate_string_choice(self.log_format, "log_format", LOG_FORMATS)
        except ConfigValidationError as e:
            errors.append(str(e))

        if not isinstance(self.colorize, bool):
            errors.append(
                f"colorize must be a boolean, got {type(self.colorize).__name__}"
            )

        return tuple(errors)

    def __check_init__(self):
        check_hashable(self, "LoggingConfig")

    @classmethod
    def from_hydra(cls, cfg: DictConfig) -> LoggingConfig:
        """Create logging config from an OmegaConf DictConfig."""
        return cls(
            log_level=str(cfg.get("log_level", "INFO")).upper(),
            log_format=cfg.get("log_format", "text"),
            colorize=cfg.get("colorize", True),
        )
