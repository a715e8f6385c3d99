"""Caller-side wrapper functions for passthrough mode.

Passthrough mode prints the resolved command instead of running it and exits
with code 125. The function generated here is sourced in the user's shell
profile: it calls srun in passthrough mode and evaluates the printed command
in the current shell, so commands like `cd` or `export` affect it.

Usage (bash): eval "$(srun --shell-init bash)"
"""

from __future__ import annotations

import re

from .constants import PROGRAM_NAME, SUPPORTED_SHELLS
from .models import ExitCode

__all__ = ["generate_shell_init"]

_POSIX_TEMPLATE = """\
# {program} wrapper: evaluates passthrough commands in the current shell
# Generated by: {program} --shell-init {shell}
{program}() {{
    local {var}_out {var}_status
    {var}_out="$(command {program} --passthrough "$@")"
    {var}_status=$?
    if [ "${var}_status" -eq {code} ]; then
        eval "${var}_out"
    else
        [ -n "${var}_out" ] && printf '%s\\n' "${var}_out"
        return "${var}_status"
    fi
}}
"""

_FISH_TEMPLATE = """\
# {program} wrapper: evaluates passthrough commands in the current shell
# Generated by: {program} --shell-init fish
function {program} --wraps {program}
    set -l {var}_out (command {program} --passthrough $argv | string collect)
    set -l {var}_status $pipestatus[1]
    if test ${var}_status -eq {code}
        eval ${var}_out
    else
        test -n "${var}_out"; and printf '%s\\n' "${var}_out"
        return ${var}_status
    end
end
"""


def generate_shell_init(shell: str, program: str = PROGRAM_NAME) -> str:
    """Generate the wrapper function of `program` for `shell`.

    Args:
        shell: One of SUPPORTED_SHELLS
        program: Program name, also the name of the function

    Returns:
        Shell code defining the function

    Raises:
        ValueError: for an unsupported shell
    """
    if shell not in SUPPORTED_SHELLS:
        msg = f"Unsupported shell: {shell}. Supported: {', '.join(SUPPORTED_SHELLS)}"
        raise ValueError(msg)
    template = _FISH_TEMPLATE if shell == "fish" else _POSIX_TEMPLATE
    var = "__" + re.sub(r"\W", "_", program)
    return template.format(program=program, shell=shell, var=var, code=int(ExitCode.PASSTHROUGH))
