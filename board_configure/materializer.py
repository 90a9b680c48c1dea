#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import os
import shutil
import filecmp
import logging

from .lib import external_tools
from .lib.error import AlreadyConfigured, ConfigurationUnchanged, LinkError, CopyError
from .pipeline import PipelineStage
from .settings import OPTFILES

def is_unchanged(src_config, backup_config):
    return os.path.isfile(backup_config) and filecmp.cmp(src_config, backup_config, shallow=False)

def check_existing_config(settings, src_config, make, enforce_distclean=False, distclean=False):
    """
    Decide what to do with a configuration already installed in the build root.

    Nothing is touched when the installed configuration is kept: ConfigurationUnchanged is raised if the selected
    defconfig equals the backed-up one, and AlreadyConfigured if it differs and no distclean was requested.
    """
    if not os.access(settings.dest_config, os.R_OK):
        return

    if enforce_distclean:
        external_tools.distclean(settings, make)
        return

    if is_unchanged(src_config, settings.backup_config):
        raise ConfigurationUnchanged("No configuration change.")

    if distclean:
        external_tools.distclean(settings, make)
    else:
        raise AlreadyConfigured("Already configured!\nPlease 'make distclean' and try again.")

def update_tmpdir(settings, keep):
    if keep:
        if not os.path.isdir(settings.tmpdir):
            os.makedirs(settings.tmpdir, exist_ok=True)
            logging.info(f"Folder {settings.tmpdir} created.")
    elif os.path.isdir(settings.tmpdir):
        shutil.rmtree(settings.tmpdir)
        logging.info(f"Folder {settings.tmpdir} clean.")

def link_makedefs(src_makedefs, dest_makedefs):
    try:
        if os.path.lexists(dest_makedefs):
            os.remove(dest_makedefs)
        os.symlink(src_makedefs, dest_makedefs)
    except OSError as e:
        raise LinkError(f"Failed to symlink {src_makedefs}: {e}") from e

def include_dirs(config_dir):
    return [
        os.path.join(config_dir, "..", "..", "common", "configs"),
        os.path.join(config_dir, "..", "common"),
        config_dir,
    ]

def backup_defconfig(src_config, backup_config):
    try:
        shutil.copyfile(src_config, backup_config)
        os.chmod(backup_config, 0o644)
    except OSError as e:
        raise CopyError(f"Failed to backup {src_config}: {e}") from e

def install_optfiles(config_dir, topdir):
    installed = []
    for opt in OPTFILES:
        src = os.path.join(config_dir, opt)
        if not os.path.isfile(src):
            continue
        try:
            shutil.copy(src, os.path.join(topdir, opt))
        except OSError as e:
            raise CopyError(f"Failed to install {src}: {e}") from e
        installed.append(opt)
    return installed

def materialize(settings, config_dir, src_makedefs, src_config):
    logging.info("Copy files")
    link_makedefs(src_makedefs, settings.dest_makedefs)
    external_tools.process_config(settings, include_dirs(config_dir), settings.dest_config, src_config)
    backup_defconfig(src_config, settings.backup_config)
    for opt in install_optfiles(config_dir, settings.topdir):
        logging.debug(f"Installed {opt}")

class MaterializingStage(PipelineStage):
    consumes = "src_makedefs"
    uses = {"settings", "args", "config_dir", "src_config"}
    provides = {"dest_config"}
    description = "Installing configuration"

    def run(self, obj):
        settings = obj.get("settings")
        args = obj.get("args")

        check_existing_config(settings, obj.get("src_config"), settings.make_command(args.bsd_host),
                              enforce_distclean=args.enforce_distclean, distclean=args.distclean)
        update_tmpdir(settings, args.store_tmpdir)
        materialize(settings, obj.get("config_dir"), obj.get("src_makedefs"), obj.get("src_config"))
        obj.set("dest_config", settings.dest_config)
