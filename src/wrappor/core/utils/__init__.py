"""Shared utility helpers used across the library."""

from .random import (
    create_rng,
    reseed_rng,
)
from .config import (
    RuntimeConfig,
    get_config,
    configure,
)
from .serialization import (
    serialize_to_json,
    mask_sensitive_data,
)
from .logging import (
    PrivacyFilter,
    get_logger,
    configure_logging,
)
from .param_validation import (
    ensure_type,
    validate_arguments,
    ParamValidationError,
)

__all__ = [
    "create_rng",
    "reseed_rng",
    "RuntimeConfig",
    "get_config",
    "configure",
    "serialize_to_json",
    "mask_sensitive_data",
    "PrivacyFilter",
    "get_logger",
    "configure_logging",
    "ensure_type",
    "validate_arguments",
    "ParamValidationError",
]
