#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

class ConfigureError(Exception):
    """Base of all errors that terminate a configure run"""
    exit_code = 1
    show_usage = False

class MissingBoardSelection(ConfigureError):
    """Raise this error when no board selection is given on the command line"""
    exit_code = 2
    show_usage = True

class BoardNotFound(ConfigureError):
    """Raise this error when a board selection resolves to no configuration directory"""
    exit_code = 3
    show_usage = True

class MakeDefsNotFound(ConfigureError):
    """Raise this error when no Make.defs exists along the lookup chain"""
    exit_code = 4

class DefconfigNotFound(ConfigureError):
    """Raise this error when the configuration directory has no readable defconfig"""
    exit_code = 5

class AlreadyConfigured(ConfigureError):
    """Raise this error when a different configuration is already installed"""
    exit_code = 6

class AppsDirNotFound(ConfigureError):
    """Raise this error when the apps directory cannot be found"""
    exit_code = 7

class LinkError(ConfigureError):
    """Raise this error when Make.defs cannot be linked into the build root"""
    exit_code = 8

class CopyError(ConfigureError):
    """Raise this error when the defconfig backup or an optional file cannot be installed"""
    exit_code = 10

class ConfigurationUnchanged(Exception):
    """Raise this when the selected defconfig is identical to the installed one"""
