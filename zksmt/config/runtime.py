"""
Runtime Configuration

Central configuration for tree construction, hashing and proving.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from zksmt.circuits.insert.backend import BACKENDS, DEFAULT_BACKEND, MIN_RANDOMNESS_BYTES
from zksmt.crypto.hashing import DEFAULT_HASHER, HASHERS
from zksmt.merkle.tree import DEFAULT_TREE_DEPTH, validate_depth
from zksmt.schemas.errors import InvalidConfigurationException

load_dotenv()

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TreeConfig:
    """Configuration for new trees."""
    depth: int = DEFAULT_TREE_DEPTH
    hasher: str = DEFAULT_HASHER

    def __post_init__(self):
        validate_depth(self.depth)
        if self.hasher not in HASHERS:
            raise InvalidConfigurationException(
                f"Unknown hasher: {self.hasher!r}",
                field_path="tree.hasher",
                details={"supported": sorted(HASHERS)},
            )


@dataclass
class ProverConfig:
    """Configuration for insertion proofs."""
    backend: str = DEFAULT_BACKEND
    randomness_bytes: int = 32

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise InvalidConfigurationException(
                f"Unknown proving backend: {self.backend!r}",
                field_path="prover.backend",
                details={"supported": sorted(BACKENDS)},
            )
        if self.randomness_bytes < MIN_RANDOMNESS_BYTES:
            raise InvalidConfigurationException(
                f"randomness_bytes must be at least {MIN_RANDOMNESS_BYTES}",
                field_path="prover.randomness_bytes",
            )


@dataclass
class SmtConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    prover: ProverConfig = field(default_factory=ProverConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise InvalidConfigurationException(
                f"Unknown log level: {self.log_level!r}",
                field_path="log_level",
            )

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - ZKSMT_TREE_DEPTH: Depth of new trees
        - ZKSMT_HASHER: Merge primitive (poseidon, sha256)
        - ZKSMT_PROVING_BACKEND: Proving backend name
        - ZKSMT_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv("ZKSMT_TREE_DEPTH"):
            raw = os.getenv("ZKSMT_TREE_DEPTH", "")
            try:
                overrides.setdefault("tree", {})["depth"] = int(raw)
            except ValueError:
                raise InvalidConfigurationException(
                    f"ZKSMT_TREE_DEPTH must be an integer, got {raw!r}",
                    field_path="tree.depth",
                ) from None
        if os.getenv("ZKSMT_HASHER"):
            overrides.setdefault("tree", {})["hasher"] = os.getenv("ZKSMT_HASHER")

        if os.getenv("ZKSMT_PROVING_BACKEND"):
            overrides.setdefault("prover", {})["backend"] = os.getenv("ZKSMT_PROVING_BACKEND")

        if os.getenv("ZKSMT_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("ZKSMT_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "SmtConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SmtConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SmtConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {})
        prover_data = data.get("prover", {})

        try:
            tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
            prover = ProverConfig(**prover_data) if prover_data else ProverConfig()
        except TypeError as e:
            raise InvalidConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            tree=tree,
            prover=prover,
            log_level=data.get("log_level", "INFO"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "SmtConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        data = self.to_dict()
        for section in ("tree", "prover"):
            data[section].update(overrides.get(section, {}))
        if "log_level" in overrides:
            data["log_level"] = overrides["log_level"]
        data["extra"] = copy.deepcopy(self.extra)
        return self.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "depth": self.tree.depth,
                "hasher": self.tree.hasher,
            },
            "prover": {
                "backend": self.prover.backend,
                "randomness_bytes": self.prover.randomness_bytes,
            },
            "log_level": self.log_level,
            "extra": self.extra,
        }


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure logging for applications embedding the tree.

    Args:
        level: Log level name; the default config's log_level when None
        log_file: Optional file to log to in addition to stderr
    """
    if level is None:
        level = get_default_config().log_level
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


# Global default configuration
_default_config: Optional[SmtConfig] = None


def get_default_config() -> SmtConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = SmtConfig.from_env()
    return _default_config


def set_default_config(config: Optional[SmtConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
