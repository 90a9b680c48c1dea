#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import os
import re

# Kconfiglib: Copyright (c) 2011-2018, Ulf Magnusson
# SPDX-License-Identifier: ISC
import kconfiglib

ASSIGNMENT = re.compile(r"^([A-Za-z0-9_]+)=(.*)$")

class DotConfig:
    """
    A flat KEY=value configuration file kept as an ordered list of lines.

    Edits never rewrite a line in place: a key is removed wherever it occurs and the new assignment is appended, so
    the file never holds duplicate keys and new values always follow the pre-existing ones. Lines which are not
    assignments (comments, "is not set" markers, blank lines) are kept verbatim.
    """

    def __init__(self, lines=None):
        self.lines = list(lines) if lines else []

    @classmethod
    def load(cls, path):
        with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
            return cls(f.read().splitlines())

    def write(self, path):
        tmp_path = f"{path}-temp"
        with open(tmp_path, "w", encoding="utf-8", errors="surrogateescape") as f:
            for line in self.lines:
                f.write(line + "\n")
        os.replace(tmp_path, path)

    def keys(self):
        return [m.group(1) for m in map(ASSIGNMENT.match, self.lines) if m]

    def get(self, key, default=None):
        """Return the raw value of the first assignment to key, or default."""
        for line in self.lines:
            m = ASSIGNMENT.match(line)
            if m and m.group(1) == key:
                return m.group(2)
        return default

    def get_string(self, key, default=None):
        """Return the value of key with the Kconfig string quoting removed."""
        value = self.get(key)
        if value is None:
            return default
        value = value.strip()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            return kconfiglib.unescape(value[1:-1])
        return value

    def remove(self, key):
        self.lines = [line for line in self.lines if not self._assigns(line, key)]

    def append(self, key, value):
        self.lines.append(f"{key}={value}")

    def set(self, key, value):
        self.remove(key)
        self.append(key, value)

    def set_string(self, key, value):
        self.set(key, f'"{kconfiglib.escape(value)}"')

    def without(self, text):
        """Return a copy dropping every line that mentions text."""
        return DotConfig(line for line in self.lines if text not in line)

    @staticmethod
    def _assigns(line, key):
        m = ASSIGNMENT.match(line)
        return m is not None and m.group(1) == key
