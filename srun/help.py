"""Help and diagnostic text for resolved commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import PROGRAM_NAME

if TYPE_CHECKING:
    from .commands.models import NotFound, Resolution

__all__ = ["render_help", "render_not_found"]


def _invocation(program: str, path: tuple[str, ...]) -> str:
    return " ".join((program, *path))


def render_help(resolution: Resolution, program: str = PROGRAM_NAME) -> str:
    """Get the help text of the node a resolution points at.

    Example for a group:

        usage: srun msg greet [command]

        greets the user

        commands:
          casual  says sup
          kind    says hi

    Args:
        resolution: Any resolution, NotFound renders its deepest node
        program: Name the program was invoked as

    Returns:
        The help text, without trailing newline
    """
    node = resolution.node
    usage = f"usage: {_invocation(program, resolution.path)}"
    if node.has_children():
        usage += " [command]"
    lines = [usage]

    if node.description:
        lines += ["", node.description]

    if node.has_children():
        lines += ["", "commands:"]
        width = max(len(name) for name in node.children)
        for child in node.sorted_children():
            lines.append(f"  {child.name:{width}s}  {child.description or ''}".rstrip())

    return "\n".join(lines)


def render_not_found(resolution: NotFound, program: str = PROGRAM_NAME) -> str:
    """Describe an unknown command and point to the relevant help.

    Args:
        resolution: The failed resolution
        program: Name the program was invoked as

    Returns:
        A two lines message, without the "Error:" label
    """
    reached = _invocation(program, resolution.path)
    return f"Command '{resolution.token}' not found in '{reached}'\nRun '{reached} --help' for available commands."
