"""
Runtime Configuration Module

Provides configuration loading and management for trees and provers.
"""

from .runtime import (
    ProverConfig,
    SmtConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
    setup_logging,
)

__all__ = [
    "ProverConfig",
    "SmtConfig",
    "TreeConfig",
    "get_default_config",
    "set_default_config",
    "setup_logging",
]
