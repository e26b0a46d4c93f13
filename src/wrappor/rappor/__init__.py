"""RAPPOR client-side encoder: Signal, PRR and IRR stages."""

from .exceptions import ConfigurationError, RapporError
from .rappor_utils import (
    bit_string,
    mask_to_array,
    mask_to_bitvector,
    parse_bit_string,
    to_big_endian_bytes,
)
from .types import ClientContext, EncodedReport, EncoderConfig, ReportingMode
from .encoders import BaseSignaller, BloomSignaller, build_bloom, compute_bloom, signal_positions
from .mechanisms import (
    NoiseMaskSource,
    SecureMaskSource,
    SeededMaskSource,
    compute_irr,
    compute_prr,
    derive_prr_masks,
)
from .cache import InMemoryPRRCache, PRRCache
from .encoder import RapporEncoder
from .privacy import epsilon_one_report, epsilon_permanent, privacy_summary

__all__ = [
    "ConfigurationError",
    "RapporError",
    "bit_string",
    "mask_to_array",
    "mask_to_bitvector",
    "parse_bit_string",
    "to_big_endian_bytes",
    "ClientContext",
    "EncodedReport",
    "EncoderConfig",
    "ReportingMode",
    "BaseSignaller",
    "BloomSignaller",
    "build_bloom",
    "compute_bloom",
    "signal_positions",
    "NoiseMaskSource",
    "SecureMaskSource",
    "SeededMaskSource",
    "compute_irr",
    "compute_prr",
    "derive_prr_masks",
    "PRRCache",
    "InMemoryPRRCache",
    "RapporEncoder",
    "epsilon_one_report",
    "epsilon_permanent",
    "privacy_summary",
]
