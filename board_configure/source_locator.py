#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import os
import glob
import logging

from .lib.error import MakeDefsNotFound, DefconfigNotFound
from .lib.paths import first_existing, glob_unique, is_readable_file
from .board_resolver import in_tree_pattern
from .pipeline import PipelineStage
from .settings import MAKEDEFS_NAME, DEFCONFIG_NAME

def makedefs_candidates(topdir, board, config, config_dir):
    # A Make.defs specific to this configuration, then one shared by all configurations of the board
    yield glob_unique(in_tree_pattern(topdir, board, "configs", glob.escape(config), MAKEDEFS_NAME))
    yield glob_unique(in_tree_pattern(topdir, board, "scripts", MAKEDEFS_NAME))
    # Out-of-tree layouts, relative to the configuration directory
    yield os.path.join(config_dir, MAKEDEFS_NAME)
    yield os.path.join(config_dir, "..", "..", "scripts", MAKEDEFS_NAME)
    yield os.path.join(config_dir, "..", "..", "..", "common", "scripts", MAKEDEFS_NAME)

def locate_makedefs(topdir, board, config, config_dir):
    src_makedefs = first_existing(makedefs_candidates(topdir, board, config, config_dir), is_readable_file)
    if src_makedefs is None:
        raise MakeDefsNotFound(f"File {MAKEDEFS_NAME} could not be found")
    return src_makedefs

def locate_defconfig(config_dir):
    src_config = os.path.join(config_dir, DEFCONFIG_NAME)
    if not is_readable_file(src_config):
        raise DefconfigNotFound(f"File {src_config} does not exist")
    return src_config

class SourceLocatingStage(PipelineStage):
    uses = {"settings", "board_name", "config_name", "config_dir"}
    provides = {"src_makedefs", "src_config"}
    description = "Locating sources"

    def run(self, obj):
        src_makedefs = locate_makedefs(obj.get("settings").topdir, obj.get("board_name"), obj.get("config_name"),
                                       obj.get("config_dir"))
        src_config = locate_defconfig(obj.get("config_dir"))
        logging.debug(f"Using {src_makedefs} and {src_config}")
        obj.set("src_makedefs", src_makedefs)
        obj.set("src_config", src_config)
