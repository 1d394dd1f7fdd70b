"""Configuration management for the skey CLI.

Manages an optional YAML file at ~/.config/skey/config.yaml:

    default_hash: otp-md5     # algorithm used when none is given
    lowercase_seed: false     # lowercase seeds before hashing (RFC 2289 section 6)
    verify_checksum: false    # skey-read rejects words with a bad checksum
    log_level: WARNING

Environment Variables:
    SKEY_CONFIG: Path to the config file
    SKEY_HASH: Overrides default_hash
    SKEY_LOG_LEVEL: Overrides log_level
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import SkeyConfigError, UnknownHashAlgorithm
from .hashes import DEFAULT_ALGORITHM, HashAlgorithm

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "skey"


def get_config_path() -> Path:
    """Get the config file path, honouring SKEY_CONFIG."""
    env_path = os.environ.get("SKEY_CONFIG")
    if env_path:
        return Path(env_path)
    return get_config_dir() / "config.yaml"


@dataclass
class SkeyConfig:
    """CLI configuration."""

    default_hash: str = DEFAULT_ALGORITHM.token
    lowercase_seed: bool = False
    verify_checksum: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Validate field types and values."""
        try:
            HashAlgorithm.from_token(self.default_hash)
        except (UnknownHashAlgorithm, AttributeError):
            raise SkeyConfigError(
                f"default_hash must be one of {', '.join(HashAlgorithm.tokens())}, "
                f"got {self.default_hash!r}"
            ) from None

        for name in ("lowercase_seed", "verify_checksum"):
            if not isinstance(getattr(self, name), bool):
                raise SkeyConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")

        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise SkeyConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        self.log_level = self.log_level.upper()

    @property
    def algorithm(self) -> HashAlgorithm:
        """The default hash algorithm."""
        return HashAlgorithm.from_token(self.default_hash)

    @property
    def logging_level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "default_hash": self.default_hash,
            "lowercase_seed": self.lowercase_seed,
            "verify_checksum": self.verify_checksum,
            "log_level": self.log_level,
        }

    def save(self) -> Path:
        """Save config to file and return its path."""
        path = get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        return path

    @classmethod
    def load(cls) -> "SkeyConfig":
        """Load config from file, or return defaults, then apply env overrides."""
        path = get_config_path()
        data: dict[str, Any] = {}

        if path.exists():
            with open(path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise SkeyConfigError(f"Could not parse {path}: {e}") from e
            if not isinstance(data, dict):
                raise SkeyConfigError(f"{path} must contain a mapping")

        unknown = set(data) - {"default_hash", "lowercase_seed", "verify_checksum", "log_level"}
        if unknown:
            raise SkeyConfigError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")

        env_hash = os.environ.get("SKEY_HASH")
        if env_hash:
            data["default_hash"] = env_hash

        env_level = os.environ.get("SKEY_LOG_LEVEL")
        if env_level:
            data["log_level"] = env_level

        return cls(**data)

    @classmethod
    def exists(cls) -> bool:
        """Check if config file exists."""
        return get_config_path().exists()
