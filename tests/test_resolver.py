"""Tests for command line tokens resolution."""

import pytest

from srun.commands.models import Group, Leaf, NotFound
from srun.commands.resolver import resolve
from srun.commands.tree import build_command_tree


class TestLeaf:
    """Tokens selecting a command to run."""

    def test_exact_chain(self, sample_tree):
        """Test a full path to a command."""
        resolution = resolve(sample_tree, ["msg", "greet", "kind"])
        assert isinstance(resolution, Leaf)
        assert resolution.node.command == "echo hi"
        assert resolution.path == ("msg", "greet", "kind")

    def test_group_default_command(self, sample_tree):
        """Test that a group with a command runs it when selected exactly."""
        resolution = resolve(sample_tree, ["msg", "greet"])
        assert isinstance(resolution, Leaf)
        assert resolution.node.command == "xrun msg greet kind"
        assert resolution.path == ("msg", "greet")

    def test_trailing_tokens_ignored(self, sample_tree):
        """Test that extra words after a command without subcommands are ignored."""
        resolution = resolve(sample_tree, ["s", "c1", "extra", "words"])
        assert isinstance(resolution, Leaf)
        assert resolution.node.command == "echo c1 ran"
        assert resolution.path == ("s", "c1")

    def test_empty_named_command(self):
        """Test that a child named by an empty key is not mistaken for the root."""
        root = build_command_tree({"": {"command": "echo empty"}})
        resolution = resolve(root, [""])
        assert isinstance(resolution, Leaf)
        assert resolution.node.command == "echo empty"
        assert resolution.path == ("",)

        resolution = resolve(root, ["", "extra"])
        assert isinstance(resolution, Leaf)
        assert resolution.path == ("",)


class TestGroup:
    """Tokens asking for help."""

    def test_no_tokens(self, sample_tree):
        """Test that the bare program shows the top level."""
        resolution = resolve(sample_tree, [])
        assert resolution == Group(sample_tree, ())

    def test_group_without_command(self, sample_tree):
        """Test running out of tokens on a pure group."""
        resolution = resolve(sample_tree, ["msg"])
        assert isinstance(resolution, Group)
        assert resolution.path == ("msg",)

    def test_empty_group(self):
        """Test a group without command nor children."""
        root = build_command_tree({"baz": {}})
        resolution = resolve(root, ["baz"])
        assert isinstance(resolution, Group)
        assert resolution.path == ("baz",)

    def test_help_flag_on_group_with_command(self, sample_tree):
        """Test that --help wins over the default command."""
        resolution = resolve(sample_tree, ["msg", "greet", "--help"])
        assert isinstance(resolution, Group)
        assert resolution.node.description == "greets the user"
        assert resolution.path == ("msg", "greet")

    @pytest.mark.parametrize("flag", ["--help", "-h"])
    def test_help_flag_truncates(self, sample_tree, flag):
        """Test that tokens after a help flag are not considered."""
        resolution = resolve(sample_tree, ["msg", flag, "greet", "dne"])
        assert isinstance(resolution, Group)
        assert resolution.path == ("msg",)

    def test_help_flag_first(self, sample_tree):
        """Test help requested for the top level."""
        assert resolve(sample_tree, ["--help", "msg"]) == Group(sample_tree, ())

    def test_help_flag_on_leaf(self, sample_tree):
        """Test help requested for a command without subcommands."""
        resolution = resolve(sample_tree, ["s", "c1", "--help"])
        assert isinstance(resolution, Group)
        assert resolution.node.command == "echo c1 ran"

    def test_help_flag_after_trailing_tokens(self, sample_tree):
        """Test that help still applies after ignored words."""
        resolution = resolve(sample_tree, ["s", "c1", "extra", "--help"])
        assert isinstance(resolution, Group)
        assert resolution.path == ("s", "c1")


class TestNotFound:
    """Tokens naming no command."""

    def test_unknown_top_level(self, sample_tree):
        """Test an unknown first word."""
        resolution = resolve(sample_tree, ["dne", "c1"])
        assert resolution == NotFound(sample_tree, (), "dne")

    def test_unknown_subcommand(self, sample_tree):
        """Test an unknown word under a valid group."""
        resolution = resolve(sample_tree, ["s", "dne"])
        assert isinstance(resolution, NotFound)
        assert resolution.token == "dne"
        assert resolution.path == ("s",)

    def test_first_unmatched_token_only(self, sample_tree):
        """Test that words after the first unknown one are never considered."""
        resolution = resolve(sample_tree, ["msg", "baz", "qux", "quux"])
        assert isinstance(resolution, NotFound)
        assert resolution.token == "baz"
        assert resolution.path == ("msg",)

    def test_unknown_under_group_with_command(self, sample_tree):
        """Test that a group with a command does not swallow unknown words."""
        resolution = resolve(sample_tree, ["msg", "greet", "rude"])
        assert isinstance(resolution, NotFound)
        assert resolution.path == ("msg", "greet")

    def test_unknown_before_help(self, sample_tree):
        """Test that an unknown word before --help is still reported."""
        resolution = resolve(sample_tree, ["dne", "--help"])
        assert isinstance(resolution, NotFound)
        assert resolution.token == "dne"

    @pytest.mark.parametrize("token", ["Msg", "ms", "msg ", "m*"])
    def test_exact_matching(self, sample_tree, token):
        """Test that no prefix, case folding or pattern matching happens."""
        resolution = resolve(sample_tree, [token])
        assert isinstance(resolution, NotFound)
        assert resolution.token == token


def test_custom_help_flags(sample_tree):
    resolution = resolve(sample_tree, ["msg", "greet", "?"], help_flags={"?"})
    assert isinstance(resolution, Group)
    assert isinstance(resolve(sample_tree, ["msg", "greet", "--help"], help_flags={"?"}), NotFound)


def test_idempotent(sample_tree):
    for tokens in (["msg", "greet"], ["msg"], ["nope"], ["s", "c2", "--help"]):
        assert resolve(sample_tree, tokens) == resolve(sample_tree, tokens)


def test_tokens_not_modified(sample_tree):
    tokens = ["msg", "--help", "greet"]
    resolve(sample_tree, tokens)
    assert tokens == ["msg", "--help", "greet"]
