"""RAPPOR randomization stages."""

from .random_source import NoiseMaskSource, SecureMaskSource, SeededMaskSource
from .prr import compute_prr, derive_prr_masks
from .irr import compute_irr

__all__ = [
    "NoiseMaskSource",
    "SecureMaskSource",
    "SeededMaskSource",
    "compute_prr",
    "derive_prr_masks",
    "compute_irr",
]
