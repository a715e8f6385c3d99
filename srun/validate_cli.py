"""CLI validation entry point for the srun configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .commands.tree import build_command_tree, count_commands
from .config_loader import ConfigLoader
from .models import ConfigError, ExitCode, MalformedConfigError

if TYPE_CHECKING:
    import logging

__all__ = ["run_validate"]


def run_validate(log: logging.Logger, config_filename: str = "") -> int:
    """Validate the configuration file without running anything.

    Every malformed entry is reported, not only the first one.

    Args:
        log: Logger instance
        config_filename: Optional path to config file or directory

    Returns:
        The exit code
    """
    loader = ConfigLoader(log)
    try:
        raw = loader.load(config_filename)
    except ConfigError:
        # already logged by the loader
        print("Found 1 error(s)")
        return ExitCode.CONFIG_ERROR

    try:
        root = build_command_tree(raw)
    except MalformedConfigError as e:
        for problem in e.problems:
            print(f"  ERROR: {problem}")
        print()
        print(f"Found {len(e.problems)} error(s)")
        return ExitCode.CONFIG_ERROR

    print(f"Configuration is valid! ({count_commands(root)} commands)")
    return ExitCode.SUCCESS
