"""Command tree building from the parsed configuration."""

from __future__ import annotations

import datetime
from collections.abc import Iterator, Mapping
from typing import Any

from ..constants import COMMAND_KEY, DESC_KEY, RESERVED_KEYS
from ..models import MalformedConfigError, MalformedNode
from .models import CommandNode

__all__ = ["build_command_tree", "count_commands", "iter_nodes", "toml_type_name"]


def toml_type_name(value: object) -> str:
    """Return the TOML name of the type of `value` (as produced by tomllib)."""
    if isinstance(value, str):
        return "String"
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, int):
        return "Integer"
    if isinstance(value, float):
        return "Float"
    if isinstance(value, datetime.date | datetime.time):
        return "Datetime"
    if isinstance(value, list):
        return "Array"
    if isinstance(value, Mapping):
        return "Table"
    return type(value).__name__


def _dotted(path: tuple[str, ...], key: str) -> str:
    return ".".join((*path, key))


def _build_node(
    name: str,
    table: Mapping[str, Any],
    path: tuple[str, ...],
    problems: list[MalformedNode],
) -> CommandNode:
    """Build the node for `table`, found at `path`, recording problems."""
    fields: dict[str, str | None] = {COMMAND_KEY: None, DESC_KEY: None}
    for key in fields:
        if key not in table:
            continue
        value = table[key]
        if isinstance(value, str):
            fields[key] = value
        else:
            problems.append(
                MalformedNode(
                    _dotted(path, key),
                    f"Expected key '{_dotted(path, key)}' to be String but got {toml_type_name(value)}",
                )
            )

    children: dict[str, CommandNode] = {}
    for key, value in table.items():
        if key in RESERVED_KEYS:
            continue
        if isinstance(value, Mapping):
            children[key] = _build_node(key, value, (*path, key), problems)
        else:
            problems.append(
                MalformedNode(
                    _dotted(path, key),
                    f"Expected key '{_dotted(path, key)}' to be Table but got {toml_type_name(value)}",
                )
            )

    return CommandNode(
        name=name,
        command=fields[COMMAND_KEY],
        description=fields[DESC_KEY],
        children=children,
    )


def build_command_tree(raw: Mapping[str, Any]) -> CommandNode:
    """Build the command tree from a parsed configuration.

    In every table, "command" and "desc" describe the node itself and must be
    strings; every other key is a subcommand and must be a table.
    The top level may hold a "desc" (shown in the main help) but no "command".

    Args:
        raw: The configuration, as loaded from TOML

    Returns:
        The root node (nameless, without command)

    Raises:
        MalformedConfigError: listing every malformed entry of the tree
    """
    problems: list[MalformedNode] = []
    if COMMAND_KEY in raw:
        problems.append(MalformedNode(COMMAND_KEY, f"Key '{COMMAND_KEY}' is not allowed at the top level"))
        raw = {key: value for key, value in raw.items() if key != COMMAND_KEY}

    root = _build_node("", raw, (), problems)
    if problems:
        raise MalformedConfigError(problems)
    return root


def iter_nodes(root: CommandNode) -> Iterator[tuple[tuple[str, ...], CommandNode]]:
    """Walk the tree depth first, children in name order.

    Yields:
        (path, node) pairs, starting with the root and its empty path
    """
    stack: list[tuple[tuple[str, ...], CommandNode]] = [((), root)]
    while stack:
        path, node = stack.pop()
        yield path, node
        stack.extend(((*path, child.name), child) for child in reversed(node.sorted_children()))


def count_commands(root: CommandNode) -> int:
    """Return the number of runnable nodes in the tree."""
    return sum(1 for _, node in iter_nodes(root) if node.has_command())
