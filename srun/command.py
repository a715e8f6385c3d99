"""srun - run nested shell commands declared in a TOML file (cli entry point)."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass

from .ansi import error_label
from .commands.models import CommandNode, Leaf, NotFound
from .commands.resolver import resolve
from .commands.tree import build_command_tree
from .completions import generate_completions
from .config_loader import ConfigLoader
from .constants import HELP_FLAGS, PROGRAM_NAME, VERSION
from .help import render_help, render_not_found
from .logging_setup import get_logger, init_logger
from .models import ConfigError, ExitCode, MalformedConfigError, UsageError
from .process import dispatch
from .shell_init import generate_shell_init
from .validate_cli import run_validate

__all__ = ["Options", "main", "parse_options", "run"]

# option -> attribute of Options
_FLAG_OPTIONS = {
    "-p": "passthrough",
    "--passthrough": "passthrough",
    "-V": "version",
    "--version": "version",
    "--validate": "validate",
}
_VALUE_OPTIONS = {
    "-c": "config",
    "--config": "config",
    "--debug": "debug_file",
    "--completions": "completions",
    "--shell-init": "shell_init",
}


@dataclass
class Options:
    """Options given before the command words."""

    passthrough: bool = False
    version: bool = False
    validate: bool = False
    config: str = ""
    debug_file: str = ""
    completions: str = ""
    shell_init: str = ""


def parse_options(args: Sequence[str]) -> tuple[Options, list[str]]:
    """Split leading options from the command words.

    Options are only read until the first word not starting with "-", or a
    literal "--". Help flags are left in the command words: the resolver gives
    them their meaning.

    Args:
        args: Command line arguments, without the program name

    Returns:
        The options and the remaining command words

    Raises:
        UsageError: on unknown options or missing option values
    """
    options = Options()
    remaining = list(args)
    while remaining:
        arg = remaining[0]
        if arg == "--":
            remaining.pop(0)
            break
        if not arg.startswith("-") or arg in HELP_FLAGS:
            break
        remaining.pop(0)

        name, has_value, value = arg.partition("=")
        if name in _FLAG_OPTIONS and not has_value:
            setattr(options, _FLAG_OPTIONS[name], True)
        elif name in _VALUE_OPTIONS:
            if not has_value:
                if not remaining:
                    msg = f"Option {name} requires a value"
                    raise UsageError(msg)
                value = remaining.pop(0)
            setattr(options, _VALUE_OPTIONS[name], value)
        else:
            msg = f"Unknown option: {arg}"
            raise UsageError(msg)
    return options, remaining


def _report_error(message: str) -> None:
    print(f"{error_label()} {message}", file=sys.stderr)


def _load_tree(options: Options) -> CommandNode:
    """Load the configuration and build the command tree.

    Raises:
        ConfigError: if the configuration can't be loaded or is malformed
    """
    log = get_logger()
    raw = ConfigLoader(log).load(options.config)
    root = build_command_tree(raw)
    log.debug("Command tree loaded: %d top level entries", len(root.children))
    return root


def run(args: Sequence[str], program: str = PROGRAM_NAME) -> int:
    """Run srun with the given arguments.

    Args:
        args: Command line arguments, without the program name
        program: Name used in help and error messages

    Returns:
        The exit code
    """
    try:
        options, words = parse_options(args)
    except UsageError as e:
        _report_error(str(e))
        return ExitCode.USAGE_ERROR

    if options.debug_file:
        init_logger(filename=options.debug_file, force_debug=True)
    else:
        init_logger()
    log = get_logger()

    if options.version:
        print(VERSION)
        return ExitCode.SUCCESS

    if options.shell_init:
        try:
            print(generate_shell_init(options.shell_init, program), end="")
        except ValueError as e:
            _report_error(str(e))
            return ExitCode.USAGE_ERROR
        return ExitCode.SUCCESS

    if options.validate:
        return run_validate(log, options.config)

    try:
        root = _load_tree(options)
    except MalformedConfigError as e:
        for problem in e.problems:
            _report_error(f"Command content invalid - {problem}")
        return ExitCode.CONFIG_ERROR
    except ConfigError:
        # already logged by the loader
        return ExitCode.CONFIG_ERROR

    if options.completions:
        try:
            print(generate_completions(root, options.completions, program), end="")
        except ValueError as e:
            _report_error(str(e))
            return ExitCode.USAGE_ERROR
        return ExitCode.SUCCESS

    resolution = resolve(root, words)
    log.debug("%s resolved as %s at %s", words, type(resolution).__name__, resolution.path)

    if isinstance(resolution, NotFound):
        _report_error(render_not_found(resolution, program))
        return ExitCode.USAGE_ERROR
    if isinstance(resolution, Leaf):
        return dispatch(resolution, passthrough_mode=options.passthrough)
    print(render_help(resolution, program))
    return ExitCode.SUCCESS


def main() -> None:
    """Run the command."""
    try:
        code = run(sys.argv[1:])
    except KeyboardInterrupt:
        code = ExitCode.INTERRUPTED
    sys.exit(int(code))


if __name__ == "__main__":
    main()
