# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

import os
import shutil
import logging
import subprocess # nosec

class ExecutableNotFound(ValueError):
    pass

def detect_tool(name):
    """Return the full path of a tool given either as a path or as a command searched in PATH."""
    if os.path.dirname(name):
        if os.path.isfile(name) and os.access(name, os.X_OK):
            return name
        return None
    return shutil.which(name)

def run(command, **kwargs):
    """Run the given command list to completion, raising CalledProcessError if it fails."""
    full_path = detect_tool(command[0])
    if full_path is None:
        raise ExecutableNotFound(f"'{command[0]}' cannot be found or is not executable.")

    logging.debug(f"$ {' '.join(str(x) for x in command)}")
    kwargs.setdefault("check", True)
    return subprocess.run([full_path] + [str(x) for x in command[1:]], **kwargs) # nosec

def distclean(settings, make):
    run([make, "-C", settings.topdir, "distclean"])

def process_config(settings, include_dirs, dest_config, src_config):
    command = [settings.process_config]
    for include_dir in include_dirs:
        command += ["-I", include_dir]
    command += ["-o", dest_config, src_config]
    run(command)

def sethost(settings, host_options, make_opts):
    run([settings.sethost] + list(host_options) + list(make_opts), cwd=settings.topdir)
