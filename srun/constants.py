"""Shared constants for srun."""

import os
from pathlib import Path

__all__ = [
    "COMMAND_KEY",
    "CONFIG_FILE",
    "DEFAULT_SHELL",
    "DESC_KEY",
    "HELP_FLAGS",
    "PROGRAM_NAME",
    "RESERVED_KEYS",
    "SRUN_CONFIG",
    "SRUN_SHELL",
    "SUPPORTED_SHELLS",
    "VERSION",
]

VERSION = "0.3.0"

PROGRAM_NAME = "srun"

# Config file paths - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / PROGRAM_NAME / "command.toml"

# Environment overrides
SRUN_CONFIG = os.environ.get("SRUN_CONFIG", "")
SRUN_SHELL = os.environ.get("SRUN_SHELL", "")

DEFAULT_SHELL = "sh"

# Keys of a config table which describe the node itself rather than a child
COMMAND_KEY = "command"
DESC_KEY = "desc"
RESERVED_KEYS = frozenset({COMMAND_KEY, DESC_KEY})

HELP_FLAGS = frozenset({"--help", "-h"})

# Supported shells for completion and wrapper generation
SUPPORTED_SHELLS = ("bash", "zsh", "fish")
