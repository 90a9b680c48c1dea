#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import os
import glob
import logging

from .lib.error import BoardNotFound
from .lib.paths import first_existing, glob_unique
from .pipeline import PipelineStage
from .settings import DEFCONFIG_NAME

def split_board_selection(selection):
    """
    Split a board selection into its board and configuration names
    :param selection: either <board>:<config> or <board>/<config>
    """
    if ":" in selection:
        fields = selection.split(":")
    else:
        fields = selection.split("/")
    board = fields[0]
    config = fields[1] if len(fields) > 1 else fields[0]
    return (board, config)

def in_tree_pattern(topdir, board, *parts):
    return os.path.join(topdir, "boards", "*", "*", glob.escape(board), *parts)

def resolve_config_dir(topdir, selection):
    board, config = split_board_selection(selection)

    def candidates():
        yield glob_unique(in_tree_pattern(topdir, board, "configs", glob.escape(config)))
        # Direct paths, used with out-of-tree custom configurations
        yield os.path.join(topdir, selection)
        yield selection

    config_dir = first_existing(candidates, os.path.isdir)
    if config_dir is None:
        raise BoardNotFound(f"Directory for {selection} does not exist.\n\n"
                            f"Run configure -L to list available configurations.")

    logging.debug(f"Board selection {selection} resolved to {config_dir}")
    return (board, config, config_dir)

def find_boards(topdir, partial_name):
    """Return the board directories (boards/<arch>/<chip>/<board>) whose name contains partial_name."""
    boards = []
    for board_dir in glob.glob(os.path.join(topdir, "boards", "*", "*", "*")):
        if os.path.isdir(board_dir) and partial_name in os.path.basename(board_dir):
            boards.append(board_dir)
    return sorted(boards)

def list_configs(topdir, partial_name=None):
    """
    Enumerate the in-tree board configurations as "<board>:<config>" strings
    :param topdir: the root of the build tree
    :param partial_name: only list boards whose directory name contains this string, or all boards if it is empty
    """
    boards_root = os.path.join(topdir, "boards")
    if partial_name:
        search_roots = find_boards(topdir, partial_name)
    else:
        search_roots = [boards_root]

    configs = []
    for search_root in search_roots:
        for dirpath, dirnames, filenames in os.walk(search_root):
            if DEFCONFIG_NAME not in filenames:
                continue
            fields = os.path.relpath(dirpath, boards_root).split(os.sep)
            # <arch>/<chip>/<board>/configs/<config>
            if len(fields) < 5:
                continue
            configs.append(f"{fields[2]}:{fields[4]}")
    return sorted(configs)

class BoardResolvingStage(PipelineStage):
    uses = {"settings", "board_selection"}
    provides = {"board_name", "config_name", "config_dir"}
    description = "Resolving board"

    def run(self, obj):
        board, config, config_dir = resolve_config_dir(obj.get("settings").topdir, obj.get("board_selection"))
        obj.set("board_name", board)
        obj.set("config_name", config)
        obj.set("config_dir", config_dir)
