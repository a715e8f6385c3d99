"""Configuration file loading utilities.

This module reads the TOML command definitions into a plain dictionary.
Turning that dictionary into a command tree is done by `srun.commands.tree`.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import CONFIG_FILE, SRUN_CONFIG
from .models import ConfigError
from .utils import merge

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


class ConfigLoader:
    """Handles loading and merging configuration files.

    Supports:
    - A single TOML file
    - Directory-based config (every .toml file merged, in name order)
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self._config: dict[str, Any] = {}

    @property
    def config(self) -> dict[str, Any]:
        """Return the loaded configuration."""
        return self._config

    def resolve_path(self, config_filename: str = "") -> Path:
        """Return the path to load.

        Args:
            config_filename: Explicit file or directory. When empty, SRUN_CONFIG
                           then the default CONFIG_FILE location are used.
        """
        config_filename = config_filename or SRUN_CONFIG
        if config_filename:
            return Path(os.path.expandvars(config_filename)).expanduser()
        return CONFIG_FILE

    def load(self, config_filename: str = "") -> dict[str, Any]:
        """Load configuration from file or directory.

        Args:
            config_filename: Optional path to config file or directory.

        Returns:
            The loaded and merged configuration dictionary.

        Raises:
            ConfigError: If config file not found or has syntax errors.
        """
        fname = self.resolve_path(config_filename)
        config = self._load_config_directory(fname) if fname.is_dir() else self._load_config_file(fname)
        merge(self._config, config)
        return self._config

    def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        """Load and merge all .toml files from a directory.

        Args:
            directory: Path to directory containing .toml files

        Returns:
            Merged configuration from all files
        """
        config: dict[str, Any] = {}
        toml_files = sorted(f.name for f in directory.iterdir() if f.name.endswith(".toml"))
        if not toml_files:
            self.log.warning("No .toml file found in %s", directory)
        for toml_file in toml_files:
            merge(config, self._load_config_file(directory / toml_file))
        return config

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single configuration file.

        Args:
            fname: Path to the configuration file

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If file not found or has syntax errors
        """
        if not fname.exists():
            self.log.critical("Config file not found! Please create %s", fname)
            raise ConfigError(f"Config file not found: {fname}")

        self.log.info("Loading %s", fname)
        try:
            with fname.open("rb") as f:
                return tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            self.log.critical("Problem reading %s: %s", fname, e)
            raise ConfigError(f"Problem reading {fname}: {e}") from e
        except OSError as e:
            self.log.critical("Cannot open %s: %s", fname, e)
            raise ConfigError(f"Cannot open {fname}: {e}") from e
