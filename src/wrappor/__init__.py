"""wrappor: client-side RAPPOR encoding with permanent and instantaneous randomized response."""

from __future__ import annotations

from .core import ParamValidationError, RuntimeConfig, configure, get_config, get_logger
from .rappor import (
    ConfigurationError,
    EncoderConfig,
    InMemoryPRRCache,
    NoiseMaskSource,
    PRRCache,
    RapporEncoder,
    ReportingMode,
    SecureMaskSource,
    SeededMaskSource,
    BaseSignaller,
    bit_string,
)

__version__ = "0.1.0"

__all__ = [
    "ParamValidationError",
    "RuntimeConfig",
    "configure",
    "get_config",
    "get_logger",
    "ConfigurationError",
    "EncoderConfig",
    "InMemoryPRRCache",
    "NoiseMaskSource",
    "PRRCache",
    "RapporEncoder",
    "ReportingMode",
    "SecureMaskSource",
    "SeededMaskSource",
    "BaseSignaller",
    "bit_string",
]
