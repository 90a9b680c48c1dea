import pytest

from board_configure.appsdir import patch_config, resolve_appdir, save_original_config
from board_configure.lib.dotconfig import DotConfig
from board_configure.lib.error import AppsDirNotFound

from conftest import write


def resolve(workspace, defconfig_lines=(), **kwargs):
    return resolve_appdir(str(workspace), DotConfig(defconfig_lines), str(workspace / ".version"), **kwargs)


def test_conventional_apps_dir(workspace):
    assert resolve(workspace) == ("../apps", False, "n")


def test_explicit_appdir_overrides_defconfig(workspace, tmp_path):
    (tmp_path / "other").mkdir()
    (tmp_path / "custom").mkdir()
    result = resolve(workspace, ['CONFIG_APPS_DIR="../other"'], appdir="../custom", winnative="n")
    assert result == ("../custom", False, "n")


def test_absolute_explicit_appdir(workspace, tmp_path):
    custom = tmp_path / "custom" / "path"
    custom.mkdir(parents=True)
    assert resolve(workspace, ['CONFIG_APPS_DIR="../apps"'], appdir=str(custom))[0] == str(custom)


def test_defconfig_appdir_used_when_host_unchanged(workspace, tmp_path):
    (tmp_path / "other").mkdir()
    assert resolve(workspace, ['CONFIG_APPS_DIR="../other"']) == ("../other", True, "n")
    assert resolve(workspace, ['CONFIG_APPS_DIR="../other"'], winnative="n") == ("../other", True, "n")


def test_windows_defconfig_appdir_is_checked_in_posix_form(workspace, tmp_path):
    (tmp_path / "other").mkdir()
    lines = ["CONFIG_WINDOWS_NATIVE=y", 'CONFIG_APPS_DIR="..\\\\other"']
    assert resolve(workspace, lines) == ("..\\other", True, "y")


def test_host_change_invalidates_defconfig_appdir(workspace, tmp_path):
    (tmp_path / "other").mkdir()
    lines = ["CONFIG_WINDOWS_NATIVE=y", 'CONFIG_APPS_DIR="..\\\\other"']
    assert resolve(workspace, lines, winnative="n") == ("../apps", False, "n")
    assert resolve(workspace, ['CONFIG_APPS_DIR="../other"'], winnative="y") == ("../apps", False, "y")


def test_discovery_order(workspace, tmp_path):
    (tmp_path / "apps").rmdir()
    (tmp_path / "nuttx-apps.git").mkdir()
    assert resolve(workspace)[0] == "../nuttx-apps.git"
    (tmp_path / "nuttx-apps").mkdir()
    assert resolve(workspace)[0] == "../nuttx-apps"


def test_versioned_apps_dir(workspace, tmp_path):
    (tmp_path / "apps").rmdir()
    (tmp_path / "apps-12.4.0").mkdir()
    version = write(workspace / ".version", '#!/bin/bash\nCONFIG_VERSION_STRING="12.4.0"\nCONFIG_VERSION_MAJOR=12\n')

    with pytest.raises(AppsDirNotFound):
        resolve(workspace)

    version.chmod(0o755)
    assert resolve(workspace)[0] == "../apps-12.4.0"


def test_missing_apps_dir(workspace, tmp_path):
    (tmp_path / "apps").rmdir()
    with pytest.raises(AppsDirNotFound) as excinfo:
        resolve(workspace)
    assert excinfo.value.exit_code == 7


def test_nonexistent_explicit_appdir(workspace):
    with pytest.raises(AppsDirNotFound):
        resolve(workspace, appdir="../nowhere")


def test_patch_posix_appdir(tmp_path):
    dest = write(tmp_path / ".config", 'CONFIG_APPS_DIR="../old"\nCONFIG_ARCH="sim"\nCONFIG_BASE_DEFCONFIG="old:nsh"\n')
    patch_config(str(dest), "boardx\\nsh", "..\\apps", False, "n")
    assert dest.read_text().splitlines() == [
        'CONFIG_ARCH="sim"',
        'CONFIG_APPS_DIR="../apps"',
        'CONFIG_BASE_DEFCONFIG="boardx/nsh"',
    ]


def test_patch_windows_appdir(tmp_path):
    dest = write(tmp_path / ".config", 'CONFIG_ARCH="sim"\n')
    patch_config(str(dest), "boardx:nsh", "../apps", False, "y")
    assert dest.read_text().splitlines() == [
        'CONFIG_ARCH="sim"',
        'CONFIG_APPS_DIR="..\\\\apps"',
        'CONFIG_BASE_DEFCONFIG="boardx:nsh"',
    ]


def test_patch_keeps_appdir_from_defconfig(tmp_path):
    dest = write(tmp_path / ".config", 'CONFIG_APPS_DIR="../other"\nCONFIG_ARCH="sim"\n')
    patch_config(str(dest), "boardx:nsh", "../other", True, "n")
    assert dest.read_text().splitlines() == [
        'CONFIG_APPS_DIR="../other"',
        'CONFIG_ARCH="sim"',
        'CONFIG_BASE_DEFCONFIG="boardx:nsh"',
    ]


def test_save_original_config(tmp_path):
    dest = write(tmp_path / ".config", 'CONFIG_ARCH="sim"\nCONFIG_BASE_DEFCONFIG="boardx:nsh"\n')
    save_original_config(str(dest), str(tmp_path / ".config.orig"))
    assert (tmp_path / ".config.orig").read_text() == 'CONFIG_ARCH="sim"\n'
