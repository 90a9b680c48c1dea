#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import os

# Kconfiglib: Copyright (c) 2011-2018, Ulf Magnusson
# SPDX-License-Identifier: ISC
import kconfiglib

# Optional IDE and debugger files installed along with the configuration
OPTFILES = [".gdbinit", ".cproject", ".project"]

# Conventional locations of the apps/ directory, relative to TOPDIR
APPS_DIR_CANDIDATES = ["../apps", "../nuttx-apps", "../nuttx-apps.git"]

MAKEDEFS_NAME = "Make.defs"
DEFCONFIG_NAME = "defconfig"
VERSION_FILE_NAME = ".version"
TMPDIR_NAME = "nxtmpdir"

class Settings:
    def __init__(self, topdir, make=None, config_name=".config", tools_dir=None):
        self.topdir = os.path.abspath(topdir)
        self.make = make
        self.config_name = config_name
        self.tools_dir = tools_dir if tools_dir else os.path.join(self.topdir, "tools")

    @classmethod
    def from_environ(cls):
        """Build the settings from TOPDIR, MAKE, KCONFIG_CONFIG and CONFIGURE_TOOLS_DIR."""
        return cls(os.environ.get("TOPDIR", os.getcwd()),
                   make=os.environ.get("MAKE"),
                   config_name=kconfiglib.standard_config_filename(),
                   tools_dir=os.environ.get("CONFIGURE_TOOLS_DIR"))

    def make_command(self, bsd_host=False):
        if self.make:
            return self.make
        return "gmake" if bsd_host else "make"

    @property
    def workspace(self):
        return os.path.realpath(os.path.join(self.topdir, ".."))

    @property
    def dest_config(self):
        return os.path.join(self.topdir, self.config_name)

    @property
    def original_config(self):
        return self.dest_config + ".orig"

    @property
    def backup_config(self):
        return os.path.join(self.topdir, DEFCONFIG_NAME)

    @property
    def dest_makedefs(self):
        return os.path.join(self.topdir, MAKEDEFS_NAME)

    @property
    def version_file(self):
        return os.path.join(self.topdir, VERSION_FILE_NAME)

    @property
    def tmpdir(self):
        return os.path.join(self.workspace, TMPDIR_NAME)

    @property
    def process_config(self):
        return os.path.join(self.tools_dir, "process_config.sh")

    @property
    def sethost(self):
        return os.path.join(self.tools_dir, "sethost.sh")
