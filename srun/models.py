"""Errors and exit codes shared across srun."""

from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "ConfigError",
    "ExitCode",
    "MalformedConfigError",
    "MalformedNode",
    "SrunError",
    "UsageError",
]


class ExitCode(IntEnum):
    """Exit codes of the srun process.

    A resolved command run in direct mode exits with the child's own code,
    which may coincide with any of these.
    """

    SUCCESS = 0
    USAGE_ERROR = 1  # Unknown command or invalid option
    CONFIG_ERROR = 2  # Config file missing, unreadable or malformed
    PASSTHROUGH = 125  # stdout holds a command for the caller to evaluate
    SPAWN_ERROR = 126  # The shell could not be started
    INTERRUPTED = 130


class SrunError(Exception):
    """Base class for errors which already triggered logging."""


class ConfigError(SrunError):
    """The configuration could not be loaded."""


@dataclass(frozen=True)
class MalformedNode:
    """A config entry which can't be turned into a command node.

    `key` is the dotted path of the offending entry, e.g. "msg.greet.command".
    """

    key: str
    reason: str

    def __str__(self) -> str:
        return self.reason


class MalformedConfigError(ConfigError):
    """The configuration holds one or more malformed entries."""

    def __init__(self, problems: list[MalformedNode]) -> None:
        self.problems = problems
        super().__init__(f"{len(problems)} malformed entr{'y' if len(problems) == 1 else 'ies'} in the configuration")


class UsageError(SrunError):
    """The command line options are invalid."""
