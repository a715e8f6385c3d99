"""Tests for running resolved commands."""

import io
from unittest.mock import patch

import pytest

from srun.commands.models import CommandNode, Leaf
from srun.commands.resolver import resolve
from srun.models import ExitCode, SrunError
from srun.process import dispatch, get_shell, passthrough, run_command


class TestRunCommand:
    """Tests for direct mode."""

    def test_output_is_inherited(self, capfd):
        """Test that the child writes to our own stdout."""
        assert run_command("echo c1 ran") == 0
        assert capfd.readouterr().out == "c1 ran\n"

    def test_exit_code_propagated(self):
        """Test that the child exit code becomes ours."""
        assert run_command("exit 3") == 3

    def test_exit_code_125_propagated(self):
        """Test that a child exiting with 125 is not mistaken for passthrough."""
        assert run_command("exit 125") == 125

    def test_killed_by_signal(self):
        """Test the shell convention for children killed by a signal."""
        assert run_command("kill -TERM $$") == 128 + 15

    def test_shell_invocation(self):
        """Test that the command is handed to the shell with -c."""
        with patch("subprocess.call", return_value=0) as call:
            run_command("cat", shell="bash")
        call.assert_called_once_with(["bash", "-c", "cat"])

    def test_missing_shell(self, capsys):
        """Test spawn failure when the shell binary does not exist."""
        code = run_command("echo hi", shell="/nonexistent/shell")
        assert code == ExitCode.SPAWN_ERROR
        err = capsys.readouterr().err
        assert "Cannot run shell '/nonexistent/shell'" in err
        assert code != ExitCode.PASSTHROUGH

    def test_shell_not_executable(self, tmp_path, capsys):
        """Test spawn failure when the shell can't be executed."""
        fake_shell = tmp_path / "shell"
        fake_shell.write_text("not a program")
        fake_shell.chmod(0o644)
        assert run_command("echo hi", shell=str(fake_shell)) == ExitCode.SPAWN_ERROR


def test_default_shell(monkeypatch):
    monkeypatch.setattr("srun.process.SRUN_SHELL", "")
    assert get_shell() == "sh"
    monkeypatch.setattr("srun.process.SRUN_SHELL", "/bin/bash")
    assert get_shell() == "/bin/bash"


@pytest.mark.parametrize(
    "command",
    [
        "echo hi",
        "cd /tmp && ls -la | grep 'x y'",
        "printf '%s\\n' \"$HOME\"",
        "",
        "multi\nline",
    ],
)
def test_passthrough_writes_command_verbatim(command):
    stream = io.StringIO()
    assert passthrough(command, stream) == 125
    assert stream.getvalue() == command


def test_passthrough_default_stream(capsys):
    assert passthrough("cd /tmp") == ExitCode.PASSTHROUGH
    assert capsys.readouterr().out == "cd /tmp"


class TestDispatch:
    """Tests for mode selection."""

    def test_passthrough_does_not_spawn(self, sample_tree, capsys):
        """Test passthrough mode for the worked example."""
        leaf = resolve(sample_tree, ["msg", "greet", "kind"])
        with patch("subprocess.call") as call:
            assert dispatch(leaf, passthrough_mode=True) == 125
        call.assert_not_called()
        assert capsys.readouterr().out == "echo hi"

    def test_direct(self, sample_tree, capfd):
        """Test direct mode for a resolved leaf."""
        leaf = resolve(sample_tree, ["s", "c2"])
        assert dispatch(leaf) == 0
        assert capfd.readouterr().out == "c2 ran\n"

    def test_direct_failure(self, sample_tree):
        """Test that a failing child exit code is propagated."""
        assert dispatch(resolve(sample_tree, ["tools", "fail"])) == 3

    def test_direct_custom_shell(self, sample_tree):
        with patch("subprocess.call", return_value=7) as call:
            assert dispatch(resolve(sample_tree, ["s", "c1"]), shell="zsh") == 7
        call.assert_called_once_with(["zsh", "-c", "echo c1 ran"])

    def test_leaf_without_command(self):
        """Test that a hand-built leaf lacking a command is refused."""
        leaf = Leaf(CommandNode("empty"), ("empty",))
        with patch("subprocess.call") as call, pytest.raises(SrunError, match="no command"):
            dispatch(leaf)
        call.assert_not_called()
