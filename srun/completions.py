"""Shell completion generators for srun.

Generates completions from the command tree: at every level the names of the
subcommands are offered, with their description where the shell shows one.
Leading options are skipped when working out the level being completed.
"""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .commands.tree import iter_nodes
from .constants import PROGRAM_NAME, SUPPORTED_SHELLS

if TYPE_CHECKING:
    from collections.abc import Callable

    from .commands.models import CommandNode

__all__ = ["GENERATORS", "CompletionLevel", "generate_completions", "get_completion_levels"]

# Options consuming the next word
_OPTIONS_WITH_VALUE = ("-c", "--config", "--debug")


@dataclass
class CompletionLevel:
    """Subcommands offered once `path` has been typed."""

    path: tuple[str, ...]
    choices: list[tuple[str, str]] = field(default_factory=list)  # (name, description)

    @property
    def key(self) -> str:
        """Typed words joined by spaces, as matched by the scripts."""
        return " ".join(self.path)


def get_completion_levels(root: CommandNode) -> list[CompletionLevel]:
    """List every node having subcommands, in tree order.

    Args:
        root: Root of the command tree

    Returns:
        One CompletionLevel per group node
    """
    return [
        CompletionLevel(path=path, choices=[(child.name, child.description or "") for child in node.sorted_children()])
        for path, node in iter_nodes(root)
        if node.has_children()
    ]


def _function_name(program: str) -> str:
    return "_" + re.sub(r"\W", "_", program)


def _generate_bash_content(levels: list[CompletionLevel], program: str) -> str:
    """Generate bash completion script content.

    Args:
        levels: Completion levels of the tree
        program: Program name to complete

    Returns:
        The bash completion script content
    """
    func = _function_name(program)
    case_statements = [
        f'        {shlex.quote(level.key)}) COMPREPLY=($(compgen -W {shlex.quote(" ".join(name for name, _ in level.choices))} -- "$cur"));;'
        for level in levels
    ]
    case_block = "\n".join(case_statements) if case_statements else "        *) ;;"
    options = "|".join(_OPTIONS_WITH_VALUE)

    return f"""# Bash completion for {program}
# Generated by: {program} --completions bash

{func}() {{
    local cur="${{COMP_WORDS[COMP_CWORD]}}"
    local typed="" word i
    for ((i = 1; i < COMP_CWORD; i++)); do
        word="${{COMP_WORDS[i]}}"
        case "$word" in
            {options}) ((i++)); continue;;
            -*) continue;;
        esac
        typed="${{typed:+$typed }}$word"
    done

    case "$typed" in
{case_block}
    esac
}}

complete -F {func} {program}
"""


def _zsh_quote(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"


def _generate_zsh_content(levels: list[CompletionLevel], program: str) -> str:
    """Generate zsh completion script content.

    Args:
        levels: Completion levels of the tree
        program: Program name to complete

    Returns:
        The zsh completion script content
    """
    func = _function_name(program)
    case_statements: list[str] = []
    for level in levels:
        entries: list[str] = []
        for name, desc in level.choices:
            escaped = name.replace(":", "\\:")
            entries.append("                " + _zsh_quote(f"{escaped}:{desc}" if desc else escaped))
        descs = "\n".join(entries)
        case_statements.append(f"""        {_zsh_quote(level.key)})
            subcommands=(
{descs}
            )
            ;;""")
    case_block = "\n".join(case_statements) if case_statements else "        *) ;;"
    options = "|".join(_OPTIONS_WITH_VALUE)

    return f"""#compdef {program}
# Zsh completion for {program}
# Generated by: {program} --completions zsh

{func}() {{
    local -a typed subcommands
    local word i
    for ((i = 2; i < CURRENT; i++)); do
        word="${{words[i]}}"
        case "$word" in
            {options}) ((i++)); continue;;
            -*) continue;;
        esac
        typed+=("$word")
    done

    case "${{(j: :)typed}}" in
{case_block}
    esac

    (( ${{#subcommands}} )) && _describe 'command' subcommands
}}

{func} "$@"
"""


def _fish_single_quote(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _fish_double_quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$") + '"'


def _generate_fish_content(levels: list[CompletionLevel], program: str) -> str:
    """Generate fish completion script content.

    Args:
        levels: Completion levels of the tree
        program: Program name to complete

    Returns:
        The fish completion script content
    """
    func = f"_{_function_name(program)}_typed_is"
    options = " ".join(_OPTIONS_WITH_VALUE)
    lines = [
        f"# Fish completion for {program}",
        f"# Generated by: {program} --completions fish",
        "",
        f"# Disable default file completions for {program}",
        f"complete -c {program} -f",
        "",
        "# Tell if the subcommands typed so far are exactly $argv[1]",
        f"function {func}",
        "    set -l words (commandline -opc)",
        "    set -e words[1]",
        "    set -l typed",
        "    set -l skip 0",
        "    for word in $words",
        "        if test $skip -eq 1",
        "            set skip 0",
        "            continue",
        "        end",
        "        switch $word",
        f"            case {options}",
        "                set skip 1",
        "            case '-*'",
        "                continue",
        "            case '*'",
        "                set -a typed $word",
        "        end",
        "    end",
        "    set -l joined (string join ' ' -- $typed)",
        '    test "$joined" = "$argv[1]"',
        "end",
        "",
        "# Subcommands",
    ]

    for level in levels:
        condition = _fish_single_quote(f"{func} {_fish_double_quote(level.key)}")
        for name, desc in level.choices:
            line = f"complete -c {program} -n {condition} -a {_fish_single_quote(name)}"
            if desc:
                line += f" -d {_fish_single_quote(desc)}"
            lines.append(line)

    return "\n".join(lines) + "\n"


GENERATORS: dict[str, Callable[[list[CompletionLevel], str], str]] = {
    "bash": _generate_bash_content,
    "zsh": _generate_zsh_content,
    "fish": _generate_fish_content,
}


def generate_completions(root: CommandNode, shell: str, program: str = PROGRAM_NAME) -> str:
    """Generate the completion script of `program` for `shell`.

    Args:
        root: Root of the command tree
        shell: One of SUPPORTED_SHELLS
        program: Program name to complete

    Returns:
        The completion script content

    Raises:
        ValueError: for an unsupported shell
    """
    if shell not in GENERATORS:
        msg = f"Unsupported shell: {shell}. Supported: {', '.join(SUPPORTED_SHELLS)}"
        raise ValueError(msg)
    return GENERATORS[shell](get_completion_levels(root), program)
