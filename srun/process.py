"""Running resolved commands.

Two modes are supported:

direct:
    The command runs in a child shell sharing our standard streams, and its
    exit code becomes ours.

passthrough:
    The command is written as-is to stdout and we exit with code 125, telling
    a wrapper function to evaluate stdout in the caller's own shell (see
    `srun.shell_init`).
"""

from __future__ import annotations

import subprocess
import sys
from typing import TYPE_CHECKING, TextIO

from .ansi import error_label
from .constants import DEFAULT_SHELL, SRUN_SHELL
from .logging_setup import get_logger
from .models import ExitCode, SrunError

if TYPE_CHECKING:
    from .commands.models import Leaf

__all__ = ["dispatch", "get_shell", "passthrough", "run_command"]


def get_shell() -> str:
    """Return the shell used in direct mode ($SRUN_SHELL, else "sh")."""
    return SRUN_SHELL or DEFAULT_SHELL


def run_command(command: str, shell: str | None = None) -> int:
    """Run `command` through `shell` and wait for it, without timeout.

    Args:
        command: Shell command line
        shell: Shell binary, `get_shell()` when not set

    Returns:
        The exit code of the child, 128 + N if it was killed by signal N,
        or ExitCode.SPAWN_ERROR if the shell could not be started
    """
    log = get_logger("process")
    shell = shell or get_shell()
    log.debug("Running %r with %s", command, shell)
    try:
        returncode = subprocess.call([shell, "-c", command])  # noqa: S603
    except OSError as e:
        log.debug("Failed to spawn %s: %s", shell, e)
        print(f"{error_label()} Cannot run shell '{shell}': {e.strerror or e}", file=sys.stderr)
        return ExitCode.SPAWN_ERROR

    if returncode < 0:
        signum = -returncode
        log.debug("%r killed by signal %d", command, signum)
        return 128 + signum
    log.debug("%r exited with %d", command, returncode)
    return returncode


def passthrough(command: str, stream: TextIO | None = None) -> int:
    """Hand `command` over to the caller's shell.

    Args:
        command: Shell command line, written verbatim (no newline added)
        stream: Output stream, stdout when not set

    Returns:
        ExitCode.PASSTHROUGH
    """
    stream = stream or sys.stdout
    stream.write(command)
    stream.flush()
    return ExitCode.PASSTHROUGH


def dispatch(leaf: Leaf, passthrough_mode: bool = False, shell: str | None = None) -> int:
    """Run the command of a resolved leaf in the requested mode.

    Returns:
        The exit code srun should terminate with
    """
    command = leaf.node.command
    if command is None:
        raise SrunError(f"{' '.join(leaf.path)!r} has no command to run")
    if passthrough_mode:
        get_logger("process").debug("Passing %r through", command)
        return passthrough(command)
    return run_command(command, shell)
