"""Debug mode switch, read by the logging setup.

Enabled by the SRUN_DEBUG or DEBUG environment variables, or `--debug`.
"""

import os

__all__ = [
    "is_debug",
    "set_debug",
]


class _DebugSwitch:
    """Holds the flag so it can change without a global statement."""

    enabled: bool = bool(os.environ.get("SRUN_DEBUG") or os.environ.get("DEBUG"))


_switch = _DebugSwitch()


def is_debug() -> bool:
    """Tell if debug traces are wanted."""
    return _switch.enabled


def set_debug(value: bool) -> None:
    """Turn debug traces on or off."""
    _switch.enabled = value
