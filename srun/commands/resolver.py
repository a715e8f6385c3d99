"""Resolution of command line tokens against the command tree."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from ..constants import HELP_FLAGS
from .models import CommandNode, Group, Leaf, NotFound, Resolution

__all__ = ["resolve"]


def resolve(root: CommandNode, tokens: Sequence[str], help_flags: Collection[str] = HELP_FLAGS) -> Resolution:
    """Walk the tree from `root`, one token per level.

    - A help flag anywhere stops the walk: the node reached so far is a Group.
    - A token naming no child is a NotFound, unless the current node is a
      command without subcommands: trailing tokens are then ignored.
    - Running out of tokens on a node with a command gives a Leaf, even when
      the node has children. Otherwise it gives a Group.

    Matching is exact and case-sensitive.

    Args:
        root: Root of the command tree
        tokens: Positional arguments typed by the user
        help_flags: Tokens requesting help

    Returns:
        A Leaf, Group or NotFound resolution
    """
    help_requested = False
    for index, token in enumerate(tokens):
        if token in help_flags:
            tokens = tokens[:index]
            help_requested = True
            break

    node = root
    path: tuple[str, ...] = ()
    for token in tokens:
        child = node.children.get(token)
        if child is not None:
            node = child
            path = (*path, token)
            continue
        if node is not root and node.has_command() and not node.has_children():
            break
        return NotFound(node, path, token)

    if not help_requested and node is not root and node.has_command():
        return Leaf(node, path)
    return Group(node, path)
