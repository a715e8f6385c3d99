"""Data models for the command tree and its resolutions."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["CommandNode", "Group", "Leaf", "NotFound", "Resolution"]


@dataclass(frozen=True)
class CommandNode:
    """A node in the command hierarchy.

    A node may run a command, hold subcommands, or both: a group with a
    command runs it by default and still routes to its children when one is
    named explicitly.
    """

    name: str  # The matching token, empty for the root (a child may be named "" too)
    command: str | None = None
    description: str | None = None
    children: dict[str, CommandNode] = field(default_factory=dict)

    def has_command(self) -> bool:
        """Tell if selecting this node runs something."""
        return self.command is not None

    def has_children(self) -> bool:
        """Tell if this node holds subcommands."""
        return bool(self.children)

    def sorted_children(self) -> list[CommandNode]:
        """Return the children ordered by name."""
        return [self.children[name] for name in sorted(self.children)]


@dataclass(frozen=True)
class Leaf:
    """The tokens selected a node to run."""

    node: CommandNode
    path: tuple[str, ...]


@dataclass(frozen=True)
class Group:
    """The tokens selected a node whose subcommands should be listed."""

    node: CommandNode
    path: tuple[str, ...]


@dataclass(frozen=True)
class NotFound:
    """`token` does not name any child of `node`, reached through `path`."""

    node: CommandNode
    path: tuple[str, ...]
    token: str


Resolution = Leaf | Group | NotFound
