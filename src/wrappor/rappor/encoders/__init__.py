"""Unified entry point for RAPPOR signal sources."""

from __future__ import annotations

from .base import BaseSignaller, SignalValue
from .bloom_filter import BloomSignaller, build_bloom, compute_bloom, signal_positions

__all__ = [
    "BaseSignaller",
    "SignalValue",
    "BloomSignaller",
    "build_bloom",
    "compute_bloom",
    "signal_positions",
]
