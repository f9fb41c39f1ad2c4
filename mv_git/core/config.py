"""
Configuration management for mv-git.

Provides centralized configuration for scanning and transfer with
sensible defaults. Values come from defaults, an optional JSON file,
environment variables (a .env file is honoured) and finally CLI flags.
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from mv_git.core.exceptions import ConfigurationError

ENV_PREFIX = "MVGIT_"

_TRUE_VALUES = ("true", "1", "yes", "on")


@dataclass
class TransferConfig:
    """Configuration for repository transfer."""

    # Copy instead of move
    copy_mode: bool = False

    # Report planned transfers without touching the filesystem
    dry_run: bool = False

    # Preserve timestamps and permission bits on copied files
    preserve_metadata: bool = True

    # Try os.rename before copy+remove when moving
    use_rename: bool = True

    # Apply the repository's root .gitignore while copying
    honor_gitignore: bool = True

    # Patterns applied to every repository in addition to .gitignore
    extra_ignore_patterns: List[str] = field(default_factory=list)

    # Read branch and commit through the git executable
    collect_git_info: bool = False

    # Timeout for git subprocess calls (seconds)
    git_timeout: int = 10


@dataclass
class RelocatorConfig:
    """Master configuration for a relocation run."""

    transfer: TransferConfig = field(default_factory=TransferConfig)

    # Enable verbose logging
    verbose: bool = False

    # Optional log file
    log_file: Optional[str] = None


class Config:
    """
    Central configuration manager providing access to all settings.

    Supports loading from environment variables and configuration files.
    """

    _instance: Optional["Config"] = None
    _config: RelocatorConfig = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = RelocatorConfig()
        return cls._instance

    @classmethod
    def get(cls) -> RelocatorConfig:
        """Get the current configuration."""
        if cls._instance is None:
            cls()
        return cls._instance._config

    @classmethod
    def reset(cls) -> RelocatorConfig:
        """Restore default configuration."""
        instance = cls()
        instance._config = RelocatorConfig()
        return instance._config

    @classmethod
    def load_from_file(cls, config_path: str) -> RelocatorConfig:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file.

        Returns:
            Loaded RelocatorConfig instance.

        Raises:
            ConfigurationError: If the file is missing or malformed.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                details={"path": str(config_path)},
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            config = cls._dict_to_config(data)
        except (OSError, ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid configuration file {config_path}: {e}",
                details={"path": str(config_path)},
            )

        instance = cls()
        instance._config = config
        return instance._config

    @classmethod
    def load_from_env(cls, dotenv_path: Optional[str] = None) -> RelocatorConfig:
        """
        Load configuration from environment variables.

        Environment variables are prefixed with MVGIT_. Values from a
        .env file, searched upwards from the working directory, are
        loaded first without overriding the real environment.

        Returns:
            RelocatorConfig with environment overrides applied.
        """
        if dotenv_path is None:
            dotenv_path = find_dotenv(usecwd=True)
        load_dotenv(dotenv_path=dotenv_path, override=False)

        instance = cls()
        config = instance._config

        if os.getenv(f"{ENV_PREFIX}COPY"):
            config.transfer.copy_mode = _env_flag("COPY")

        if os.getenv(f"{ENV_PREFIX}DRY_RUN"):
            config.transfer.dry_run = _env_flag("DRY_RUN")

        if os.getenv(f"{ENV_PREFIX}PRESERVE_METADATA"):
            config.transfer.preserve_metadata = _env_flag("PRESERVE_METADATA")

        if os.getenv(f"{ENV_PREFIX}EXTRA_IGNORE"):
            config.transfer.extra_ignore_patterns = [
                p.strip()
                for p in os.getenv(f"{ENV_PREFIX}EXTRA_IGNORE").split(",")
                if p.strip()
            ]

        if os.getenv(f"{ENV_PREFIX}VERBOSE"):
            config.verbose = _env_flag("VERBOSE")

        return config

    @staticmethod
    def _dict_to_config(data: dict) -> RelocatorConfig:
        """Convert a dictionary to RelocatorConfig."""
        config = RelocatorConfig()

        if "transfer" in data:
            config.transfer = TransferConfig(**data["transfer"])
            if not isinstance(config.transfer.extra_ignore_patterns, list):
                raise TypeError("extra_ignore_patterns must be a list of patterns")

        if "verbose" in data:
            config.verbose = data["verbose"]

        if "log_file" in data:
            config.log_file = data["log_file"]

        return config

    @classmethod
    def save_to_file(cls, config_path: str) -> None:
        """
        Save current configuration to a JSON file.

        Args:
            config_path: Path to save the configuration file.
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = cls._config_to_dict(cls.get())

        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def _config_to_dict(config: RelocatorConfig) -> dict:
        """Convert RelocatorConfig to a dictionary."""
        return {
            "transfer": {
                "copy_mode": config.transfer.copy_mode,
                "dry_run": config.transfer.dry_run,
                "preserve_metadata": config.transfer.preserve_metadata,
                "use_rename": config.transfer.use_rename,
                "honor_gitignore": config.transfer.honor_gitignore,
                "extra_ignore_patterns": config.transfer.extra_ignore_patterns,
                "collect_git_info": config.transfer.collect_git_info,
                "git_timeout": config.transfer.git_timeout,
            },
            "verbose": config.verbose,
            "log_file": config.log_file,
        }


def _env_flag(name: str) -> bool:
    return os.getenv(f"{ENV_PREFIX}{name}", "").lower() in _TRUE_VALUES
