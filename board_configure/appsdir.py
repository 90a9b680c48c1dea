#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import os
import logging

from .lib import external_tools
from .lib.dotconfig import DotConfig
from .lib.error import AppsDirNotFound
from .lib.paths import first_existing, posix_path, windows_path
from .pipeline import PipelineStage
from .settings import APPS_DIR_CANDIDATES

APPS_DIR_KEY = "CONFIG_APPS_DIR"
WINDOWS_NATIVE_KEY = "CONFIG_WINDOWS_NATIVE"
BASE_DEFCONFIG_KEY = "CONFIG_BASE_DEFCONFIG"
VERSION_STRING_KEY = "CONFIG_VERSION_STRING"

def read_version_string(version_file):
    """Return CONFIG_VERSION_STRING from the executable version file, or None."""
    if not (os.path.isfile(version_file) and os.access(version_file, os.X_OK)):
        return None
    return DotConfig.load(version_file).get_string(VERSION_STRING_KEY) or None

def discover_appdir(topdir, version_file):
    def candidates():
        yield from APPS_DIR_CANDIDATES
        version = read_version_string(version_file)
        if version:
            yield f"../apps-{version}"

    appdir = first_existing(candidates, lambda p: os.path.isdir(os.path.join(topdir, p)))
    if appdir is None:
        raise AppsDirNotFound("Could not find the path to the appdir")
    return appdir

def resolve_appdir(topdir, defconfig, version_file, appdir=None, winnative=None):
    """
    Work out where the apps/ directory is.

    Returns a tuple (appdir, from_defconfig, winnative). An explicit appdir always wins. The CONFIG_APPS_DIR of the
    defconfig comes next, unless the host is switched to or from native Windows, in which case the recorded path is
    not usable anyway. Otherwise the conventional locations next to topdir are probed.
    """
    oldnative = defconfig.get(WINDOWS_NATIVE_KEY) or "n"
    if winnative is None:
        winnative = oldnative

    from_defconfig = False
    if not appdir and oldnative == winnative:
        appdir = defconfig.get_string(APPS_DIR_KEY)
        from_defconfig = bool(appdir)

    if not appdir:
        appdir = discover_appdir(topdir, version_file)

    if not os.path.isdir(os.path.join(topdir, posix_path(appdir))):
        raise AppsDirNotFound(f"Directory \"{os.path.join(topdir, posix_path(appdir))}\" does not exist")

    return (appdir, from_defconfig, winnative)

def patch_config(dest_config, board_selection, appdir, from_defconfig, winnative):
    config = DotConfig.load(dest_config)
    if not from_defconfig:
        if winnative == "y":
            config.set_string(APPS_DIR_KEY, windows_path(appdir))
        else:
            config.set_string(APPS_DIR_KEY, posix_path(appdir))
    config.set_string(BASE_DEFCONFIG_KEY, posix_path(board_selection))
    config.write(dest_config)

def save_original_config(dest_config, original_config):
    DotConfig.load(dest_config).without(BASE_DEFCONFIG_KEY).write(original_config)

class AppsDirResolvingStage(PipelineStage):
    uses = {"settings", "args", "src_config"}
    provides = {"appdir", "appdir_from_defconfig", "winnative"}
    description = "Resolving apps directory"

    def run(self, obj):
        settings = obj.get("settings")
        args = obj.get("args")

        defconfig = DotConfig.load(obj.get("src_config"))
        appdir, from_defconfig, winnative = resolve_appdir(settings.topdir, defconfig, settings.version_file,
                                                           appdir=args.appdir, winnative=args.winnative)
        logging.debug(f"Apps directory: {appdir}{' (from defconfig)' if from_defconfig else ''}")
        obj.set("appdir", appdir)
        obj.set("appdir_from_defconfig", from_defconfig)
        obj.set("winnative", winnative)

class ConfigPatchingStage(PipelineStage):
    consumes = {"appdir", "appdir_from_defconfig", "winnative"}
    uses = {"settings", "args", "board_selection", "dest_config"}
    description = "Updating configuration"

    def run(self, obj):
        settings = obj.get("settings")
        args = obj.get("args")
        dest_config = obj.get("dest_config")

        patch_config(dest_config, obj.get("board_selection"), obj.get("appdir"), obj.get("appdir_from_defconfig"),
                     obj.get("winnative"))

        # The saved defconfig files are all in compressed format and must be reconstituted before they can be used.
        external_tools.sethost(settings, args.host, args.make_opts)

        # Keep the configuration without CONFIG_BASE_DEFCONFIG for later comparison
        save_original_config(dest_config, settings.original_config)
