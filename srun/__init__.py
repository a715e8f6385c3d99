"""srun - run nested, named shell commands declared in a TOML file.

The configuration describes a tree of commands and subcommand groups.
Tokens typed on the command line walk that tree down to a command, which is
then run through the shell (or printed for the caller's shell to evaluate),
or to a group whose subcommands are listed as help.
"""
