import os
import shutil
import subprocess

import pytest

from board_configure.lib import external_tools
from board_configure.settings import Settings


def write(path, text="", mode=None):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    if mode is not None:
        os.chmod(path, mode)
    return path


def add_board(topdir, board, config, defconfig="CONFIG_ARCH=\"sim\"\n", family="fam", vendor="vendor"):
    config_dir = topdir / "boards" / family / vendor / board / "configs" / config
    write(config_dir / "defconfig", defconfig)
    return config_dir


@pytest.fixture
def workspace(tmp_path):
    """A build root with one in-tree board (boardx:nsh) and ../apps next to it."""
    topdir = tmp_path / "nuttx"
    add_board(topdir, "boardx", "nsh", defconfig="CONFIG_ARCH=\"sim\"\nCONFIG_NSH_LIBRARY=y\n")
    write(topdir / "boards" / "fam" / "vendor" / "boardx" / "scripts" / "Make.defs", "include $(TOPDIR)/.config\n")
    (tmp_path / "apps").mkdir()
    return topdir


@pytest.fixture
def settings(workspace, monkeypatch):
    monkeypatch.setenv("TOPDIR", str(workspace))
    for name in ("KCONFIG_CONFIG", "MAKE", "CONFIGURE_TOOLS_DIR"):
        monkeypatch.delenv(name, raising=False)
    return Settings.from_environ()


@pytest.fixture
def collaborators(monkeypatch):
    """Replace the external helpers by in-process fakes and record every command line."""
    calls = []

    def fake_run(command, **kwargs):
        command = [str(x) for x in command]
        calls.append(command)
        name = os.path.basename(command[0])
        if name == "process_config.sh":
            shutil.copyfile(command[-1], command[command.index("-o") + 1])
        elif "distclean" in command:
            topdir = command[command.index("-C") + 1]
            for generated in (".config", ".config.orig", "defconfig", "Make.defs"):
                path = os.path.join(topdir, generated)
                if os.path.lexists(path):
                    os.remove(path)
        return subprocess.CompletedProcess(command, 0)

    monkeypatch.setattr(external_tools, "run", fake_run)
    return calls
