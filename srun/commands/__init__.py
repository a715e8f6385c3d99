"""Command tree handling for srun.

This package provides:
- models: Data structures (CommandNode and the Leaf, Group, NotFound resolutions)
- tree: Building the command tree from the parsed configuration
- resolver: Matching command line tokens against the tree
"""

from .models import CommandNode, Group, Leaf, NotFound, Resolution
from .resolver import resolve
from .tree import build_command_tree, count_commands, iter_nodes

__all__ = [
    "CommandNode",
    "Group",
    "Leaf",
    "NotFound",
    "Resolution",
    "build_command_tree",
    "count_commands",
    "iter_nodes",
    "resolve",
]
