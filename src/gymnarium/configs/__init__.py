"""Equinox configuration modules loaded from YAML through OmegaConf."""

from __future__ import annotations

from .format_config import BoundaryConfig, EntryConfig, FormatConfig
from .logging_config import LoggingConfig
from .main_config import GymnariumConfig
from .sampling_config import SamplingConfig
from .validation import ConfigValidationError

__all__ = [
    "BoundaryConfig",
    "ConfigValidationError",
    "EntryConfig",
    "FormatConfig",
    "GymnariumConfig",
    "LoggingConfig",
    "SamplingConfig",
]
