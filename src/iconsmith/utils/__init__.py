"""Utility functions for iconsmith.

This module provides utility functions including:

- Logging setup and configuration
- Synthesis statistics and progress reporting helpers
"""

from iconsmith.utils.logging import (
    SynthesisLogger,
    SynthesisStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "SynthesisLogger",
    "SynthesisStats",
    "configure_logging",
    "get_logger",
]
