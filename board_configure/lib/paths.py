#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import os
import glob

def is_readable_file(path):
    return os.path.isfile(path) and os.access(path, os.R_OK)

def first_existing(candidates, predicate=os.path.exists):
    """
    Return the first candidate accepted by predicate, or None
    :param candidates: an iterable (or a callable returning one) of paths, tried in order
    :param predicate: the check a path must pass, e.g. os.path.isdir
    """
    if callable(candidates):
        candidates = candidates()
    for candidate in candidates:
        if candidate is not None and predicate(candidate):
            return candidate
    return None

def glob_unique(pattern):
    """Expand a shell wildcard pattern and return the single match, or None if there is none or several."""
    matches = sorted(glob.glob(pattern))
    if len(matches) == 1:
        return matches[0]
    return None

def posix_path(path):
    return path.replace("\\", "/")

def windows_path(path):
    return path.replace("/", "\\")
