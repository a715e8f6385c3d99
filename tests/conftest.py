" generic fixtures "
import tomllib
from pathlib import Path

import pytest

from srun.commands.tree import build_command_tree
from srun.debug import set_debug

SAMPLE_CONFIG_FILE = Path(__file__).parent / "sample_config.toml"

with SAMPLE_CONFIG_FILE.open("rb") as _f:
    CONFIG_1 = tomllib.load(_f)


def pytest_configure():
    "Runs once before all"
    from srun.logging_setup import init_logger

    init_logger("/dev/null")


@pytest.fixture(autouse=True)
def quiet_terminal(monkeypatch):
    "No debug traces nor colors in captured output"
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    set_debug(False)
    yield
    set_debug(False)


@pytest.fixture
def sample_tree():
    "The command tree of sample_config.toml"
    return build_command_tree(CONFIG_1)


@pytest.fixture
def config_file(tmp_path):
    "Writes a config file, returns its path"

    def _write(content: str, name: str = "command.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
